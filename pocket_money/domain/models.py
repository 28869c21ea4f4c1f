"""Domain models - pure Python dataclasses representing budgeting entities"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Tuple


class SettlementAction(str, Enum):
    """How the user disposes of a day's surplus or deficit"""

    SAVE = "save"  # surplus -> savings pot
    SPREAD = "spread"  # surplus -> rest of month
    FIX_WEEK = "week"  # deficit -> recovered this week
    SPREAD_LOSS = "month"  # deficit -> rest of month

    @property
    def is_surplus(self) -> bool:
        return self in (SettlementAction.SAVE, SettlementAction.SPREAD)


SURPLUS_ACTIONS: Tuple[SettlementAction, ...] = (SettlementAction.SPREAD, SettlementAction.SAVE)
DEFICIT_ACTIONS: Tuple[SettlementAction, ...] = (SettlementAction.FIX_WEEK, SettlementAction.SPREAD_LOSS)


@dataclass
class BudgetSettings:
    """Per-month configuration, replaced wholesale on re-onboarding"""

    monthly_allowance: Decimal
    weekend_multiplier: Decimal
    currency: str


@dataclass
class HistoryEntry:
    """One settled day"""

    date: datetime
    spent: Decimal
    action: SettlementAction
    diff: Decimal  # surplus if >= 0, deficit if < 0


@dataclass
class TemporaryDeduction:
    """Daily subtraction from the budget while end_date is in the future"""

    daily_amount: Decimal
    end_date: datetime

    def is_active(self, now: datetime) -> bool:
        return self.end_date > now


@dataclass
class BudgetState:
    """Running totals mutated by settlement and deduction pruning"""

    total_remaining: Decimal
    savings_pot: Decimal
    last_updated: datetime
    daily_history: List[HistoryEntry] = field(default_factory=list)
    temporary_deductions: List[TemporaryDeduction] = field(default_factory=list)

    @property
    def available_budget(self) -> Decimal:
        """Funds not yet spent and not set aside as savings"""
        return self.total_remaining - self.savings_pot


@dataclass
class BudgetSnapshot:
    """Read-only view handed to the presentation layer"""

    daily_budget: Decimal
    total_remaining: Decimal
    savings_pot: Decimal
    currency: str


@dataclass
class DayReview:
    """Outcome of a day before it is settled"""

    daily_budget: Decimal
    spent: Decimal
    diff: Decimal
    amount: Decimal
    surplus: bool
    options: Tuple[SettlementAction, ...]
