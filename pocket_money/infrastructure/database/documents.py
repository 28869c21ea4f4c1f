"""Pydantic schemas for the persisted Settings/State JSON documents"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from pocket_money.domain.models import (
    BudgetSettings,
    BudgetState,
    HistoryEntry,
    SettlementAction,
    TemporaryDeduction,
)
from pocket_money.utils.date_utils import from_epoch_millis, to_epoch_millis


def _decimal(value: float) -> Decimal:
    return Decimal(str(value))


class Document(BaseModel):
    """Base for stored documents: camelCase keys on disk, snake_case in Python"""

    model_config = ConfigDict(populate_by_name=True)

    def dump(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class HistoryEntryDocument(Document):
    date: datetime
    spent: float
    action: SettlementAction
    diff: float

    @classmethod
    def from_domain(cls, entry: HistoryEntry) -> "HistoryEntryDocument":
        return cls(date=entry.date, spent=float(entry.spent), action=entry.action, diff=float(entry.diff))

    def to_domain(self) -> HistoryEntry:
        return HistoryEntry(
            date=self.date,
            spent=_decimal(self.spent),
            action=self.action,
            diff=_decimal(self.diff),
        )


class TemporaryDeductionDocument(Document):
    daily_amount: float = Field(alias="dailyAmount")
    end_date: int = Field(alias="endDate")  # epoch millis

    @classmethod
    def from_domain(cls, deduction: TemporaryDeduction) -> "TemporaryDeductionDocument":
        return cls(daily_amount=float(deduction.daily_amount), end_date=to_epoch_millis(deduction.end_date))

    def to_domain(self) -> TemporaryDeduction:
        return TemporaryDeduction(
            daily_amount=_decimal(self.daily_amount),
            end_date=from_epoch_millis(self.end_date),
        )


class SettingsDocument(Document):
    monthly_allowance: float = Field(alias="monthlyAllowance")
    weekend_multiplier: float = Field(default=1.0, alias="weekendMultiplier")
    currency: Optional[str] = None

    @classmethod
    def from_domain(cls, budget_settings: BudgetSettings) -> "SettingsDocument":
        return cls(
            monthly_allowance=float(budget_settings.monthly_allowance),
            weekend_multiplier=float(budget_settings.weekend_multiplier),
            currency=budget_settings.currency,
        )

    def to_domain(self, default_currency: str) -> BudgetSettings:
        return BudgetSettings(
            monthly_allowance=_decimal(self.monthly_allowance),
            weekend_multiplier=_decimal(self.weekend_multiplier),
            currency=self.currency or default_currency,
        )


class StateDocument(Document):
    total_remaining: float = Field(alias="totalRemaining")
    savings_pot: float = Field(default=0.0, alias="savingsPot")
    last_updated: Optional[datetime] = Field(default=None, alias="lastUpdated")
    daily_history: List[HistoryEntryDocument] = Field(default_factory=list, alias="dailyHistory")
    temporary_deductions: List[TemporaryDeductionDocument] = Field(
        default_factory=list, alias="temporaryDeductions"
    )

    @classmethod
    def from_domain(cls, state: BudgetState) -> "StateDocument":
        return cls(
            total_remaining=float(state.total_remaining),
            savings_pot=float(state.savings_pot),
            last_updated=state.last_updated,
            daily_history=[HistoryEntryDocument.from_domain(e) for e in state.daily_history],
            temporary_deductions=[TemporaryDeductionDocument.from_domain(d) for d in state.temporary_deductions],
        )

    def is_complete(self) -> bool:
        """True when every field was present in the stored JSON"""
        return self.model_fields_set >= set(type(self).model_fields) and self.last_updated is not None

    def to_domain(self, now: datetime) -> BudgetState:
        return BudgetState(
            total_remaining=_decimal(self.total_remaining),
            savings_pot=_decimal(self.savings_pot),
            last_updated=self.last_updated or now,
            daily_history=[e.to_domain() for e in self.daily_history],
            temporary_deductions=[d.to_domain() for d in self.temporary_deductions],
        )


def migrate_state(
    raw_state: Dict[str, Any],
    legacy_history: Optional[List[Dict[str, Any]]],
    now: datetime,
) -> tuple[BudgetState, bool]:
    """
    Parse a stored State document, filling fields added after it was written.

    - savingsPot -> 0, temporaryDeductions -> [], lastUpdated -> now
    - dailyHistory -> the standalone legacy history document if there is one, else []

    Returns (state, migrated) where migrated means the document must be written back.
    """
    document = StateDocument.model_validate(raw_state)
    migrated = not document.is_complete()

    if "daily_history" not in document.model_fields_set and legacy_history:
        document.daily_history = [HistoryEntryDocument.model_validate(e) for e in legacy_history]

    return document.to_domain(now), migrated
