"""Budget engine arithmetic - daily limit computation and settlement transitions"""

from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import List, Tuple

from pocket_money.domain.models import (
    BudgetSettings,
    BudgetState,
    DayReview,
    HistoryEntry,
    SettlementAction,
    TemporaryDeduction,
    SURPLUS_ACTIONS,
    DEFICIT_ACTIONS,
)
from pocket_money.utils.date_utils import is_weekend, month_dates
from pocket_money.utils.money import truncate_cents

ZERO = Decimal("0")


def weighted_day_count(year: int, month: int, weekend_multiplier: Decimal) -> Decimal:
    """
    Weekdays count 1, weekend days count weekend_multiplier, over the whole month.

    Example:
        October 2025 (31 days, 8 weekend days), multiplier 2 -> 23 + 16 = 39
    """
    days = month_dates(year, month)
    weekend_days = sum(1 for day in days if is_weekend(day))
    weekday_days = len(days) - weekend_days
    return weekday_days + weekend_days * weekend_multiplier


def base_daily_rate(settings: BudgetSettings, now: datetime) -> Decimal:
    """
    Allowance per weighted day, normalized over the full month.

    The rate does not depend on how many days have elapsed, so day 1 and day 28
    of the same month share it. Returns 0 when the weighted count is not positive.
    """
    weighted_days = weighted_day_count(now.year, now.month, settings.weekend_multiplier)
    if weighted_days <= 0:
        return ZERO
    return settings.monthly_allowance / weighted_days


def split_deductions(
    deductions: List[TemporaryDeduction], now: datetime
) -> Tuple[List[TemporaryDeduction], List[TemporaryDeduction]]:
    """Partition deductions into (active, expired); active iff end_date > now"""
    active = [d for d in deductions if d.is_active(now)]
    expired = [d for d in deductions if not d.is_active(now)]
    return active, expired


def calculate_daily_budget(settings: BudgetSettings, state: BudgetState, now: datetime) -> Decimal:
    """
    Today's spending limit.

    Steps:
    - Base rate from the full-month weighted day count
    - Weekend days get base rate x weekend_multiplier
    - Minus every active temporary deduction
    - Capped at total_remaining - savings_pot
    - Floored at 0, truncated to cents

    Expired deductions are ignored here; pruning them from State is the caller's job.
    """
    base_rate = base_daily_rate(settings, now)
    budget = base_rate * settings.weekend_multiplier if is_weekend(now.date()) else base_rate

    active, _ = split_deductions(state.temporary_deductions, now)
    budget -= sum((d.daily_amount for d in active), ZERO)

    # Never report more than is actually uncommitted
    budget = min(budget, state.available_budget)

    return truncate_cents(max(budget, ZERO))


def apply_settlement(
    state: BudgetState,
    spent: Decimal,
    action: SettlementAction,
    amount: Decimal,
    now: datetime,
) -> BudgetState:
    """
    Close the day: deduct spend, apply the chosen disposition, append history.

    Only SAVE moves money (into the savings pot). SPREAD, FIX_WEEK and SPREAD_LOSS
    record intent; the daily rate reacts to total_remaining alone.

    The history diff carries the sign of the originating day: +amount for a surplus
    action, -amount for a deficit action.
    """
    savings_pot = state.savings_pot
    if action is SettlementAction.SAVE:
        savings_pot += amount

    entry = HistoryEntry(
        date=now,
        spent=spent,
        action=action,
        diff=amount if action.is_surplus else -amount,
    )

    return replace(
        state,
        total_remaining=state.total_remaining - spent,
        savings_pot=savings_pot,
        last_updated=now,
        daily_history=[*state.daily_history, entry],
    )


def start_month(
    monthly_allowance: Decimal,
    weekend_multiplier: Decimal,
    currency: str,
    now: datetime,
) -> Tuple[BudgetSettings, BudgetState]:
    """Fresh Settings and State for a new budgeting period"""
    budget_settings = BudgetSettings(
        monthly_allowance=monthly_allowance,
        weekend_multiplier=weekend_multiplier,
        currency=currency,
    )
    state = BudgetState(
        total_remaining=monthly_allowance,
        savings_pot=ZERO,
        last_updated=now,
        daily_history=[],
        temporary_deductions=[],
    )
    return budget_settings, state


def review_day(daily_budget: Decimal, spent: Decimal) -> DayReview:
    """
    Compare spend to the day's limit and pick the action menu.

    A non-negative difference is a surplus (spread or save); a negative one is a
    deficit (fix this week or spread the loss). amount is what settlement expects.
    """
    diff = daily_budget - spent
    surplus = diff >= 0
    return DayReview(
        daily_budget=daily_budget,
        spent=spent,
        diff=diff,
        amount=abs(diff),
        surplus=surplus,
        options=SURPLUS_ACTIONS if surplus else DEFICIT_ACTIONS,
    )
