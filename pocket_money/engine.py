"""Budget engine - daily limit queries and end-of-day settlement over an injected store"""

import threading
from contextlib import AbstractContextManager
from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable, List, Optional, Tuple
from zoneinfo import ZoneInfo

from pocket_money.config import settings
from pocket_money.domain.budget import (
    ZERO,
    apply_settlement,
    calculate_daily_budget,
    review_day,
    split_deductions,
    start_month,
)
from pocket_money.domain.exceptions import InvalidInputError, NotOnboardedError
from pocket_money.domain.models import (
    BudgetSettings,
    BudgetSnapshot,
    BudgetState,
    DayReview,
    HistoryEntry,
    SettlementAction,
    TemporaryDeduction,
)
from pocket_money.infrastructure.database.repositories import BudgetRepository, PersistenceStore
from pocket_money.infrastructure.observability.logging import (
    log_deduction_added,
    log_deductions_pruned,
    log_month_initialized,
    log_settlement,
)
from pocket_money.infrastructure.observability.metrics import (
    daily_budget_gauge,
    deductions_pruned_counter,
    month_initialized_counter,
    record_settlement,
)
from pocket_money.utils.money import to_decimal, to_money

Clock = Callable[[], datetime]

# Serializes every read-modify-write of State within the process
_state_lock = threading.RLock()


def default_clock() -> datetime:
    tz = timezone.utc if settings.timezone.upper() == "UTC" else ZoneInfo(settings.timezone)
    return datetime.now(tz)


def parse_action(action: SettlementAction | str) -> SettlementAction:
    try:
        return SettlementAction(action)
    except ValueError as e:
        allowed = ", ".join(a.value for a in SettlementAction)
        raise InvalidInputError(f"action must be one of {allowed}, got {action!r}") from e


def _non_negative(
    value: object, name: str, convert: Callable[[object, str], Decimal] = to_money
) -> Decimal:
    amount = convert(value, name)
    if amount < 0:
        raise InvalidInputError(f"{name} must be >= 0, got {amount}")
    return amount


def _positive(value: object, name: str) -> Decimal:
    amount = to_money(value, name)
    if amount <= 0:
        raise InvalidInputError(f"{name} must be > 0, got {amount}")
    return amount


class BudgetEngine:
    """
    Computes the daily spending limit and settles days against persisted State.

    The engine keeps no budget data between calls: every operation loads Settings
    and State from the store, works on them, and writes State back when it changed.
    """

    def __init__(
        self,
        store: PersistenceStore,
        clock: Clock | None = None,
        default_currency: str | None = None,
        lock: Optional[AbstractContextManager] = None,
    ):
        self.repository = BudgetRepository(store, default_currency=default_currency)
        self.clock = clock or default_clock
        self.default_currency = default_currency or settings.default_currency
        self.lock = lock or _state_lock

    def is_onboarded(self) -> bool:
        with self.lock:
            budget_settings, state = self.repository.load(self.clock())
            return budget_settings is not None and state is not None

    def compute_daily_budget(self) -> Decimal:
        """
        Today's spending limit, or 0 when no period has been initialized.

        Side effect: expired temporary deductions are removed and State is persisted
        if anything was removed.
        """
        with self.lock:
            now = self.clock()
            budget_settings, state = self.repository.load(now)
            if budget_settings is None or state is None:
                return ZERO
            budget, _ = self._daily_budget(budget_settings, state, now)
            return budget

    def get_snapshot(self) -> BudgetSnapshot:
        """
        Raises:
            NotOnboardedError: If Settings or State is missing
        """
        with self.lock:
            now = self.clock()
            budget_settings, state = self._require_loaded(now)
            budget, state = self._daily_budget(budget_settings, state, now)
            return BudgetSnapshot(
                daily_budget=budget,
                total_remaining=state.total_remaining,
                savings_pot=state.savings_pot,
                currency=budget_settings.currency,
            )

    def review_day(self, spent: object) -> DayReview:
        """Compare spend against today's limit and return the action menu for settlement"""
        spent_amount = _non_negative(spent, "spent")
        with self.lock:
            now = self.clock()
            budget_settings, state = self._require_loaded(now)
            budget, _ = self._daily_budget(budget_settings, state, now)
            return review_day(budget, spent_amount)

    def settle_day(self, spent: object, action: SettlementAction | str, amount: object) -> HistoryEntry:
        """
        Apply the day's outcome to State and persist it.

        Args:
            spent: Amount spent today (>= 0)
            action: Disposition of the surplus or deficit
            amount: Absolute surplus/deficit the action applies to (>= 0)

        Returns:
            The history entry appended for this day

        Raises:
            InvalidInputError: On negative or non-numeric amounts or an unknown action
            NotOnboardedError: If State is missing
        """
        spent_amount = _non_negative(spent, "spent")
        settlement_action = parse_action(action)
        action_amount = _non_negative(amount, "amount")

        with self.lock:
            now = self.clock()
            state = self.repository.load_state(now)
            if state is None:
                raise NotOnboardedError("No budgeting period to settle")

            state = apply_settlement(state, spent_amount, settlement_action, action_amount, now)
            self.repository.save_state(state)

        entry = state.daily_history[-1]
        record_settlement(settlement_action.value, spent_amount)
        log_settlement(settlement_action.value, spent_amount, entry.diff, state.total_remaining, state.savings_pot)
        return entry

    def initialize_month(self, monthly_allowance: object, weekend_multiplier: object) -> None:
        """Destructively replace Settings and State with a fresh period"""
        allowance = _positive(monthly_allowance, "monthly_allowance")
        multiplier = _non_negative(weekend_multiplier, "weekend_multiplier", convert=to_decimal)

        with self.lock:
            budget_settings, state = start_month(allowance, multiplier, self.default_currency, self.clock())
            self.repository.save_state(state)
            self.repository.save_settings(budget_settings)

        month_initialized_counter.inc()
        log_month_initialized(allowance, multiplier)

    def add_temporary_deduction(self, daily_amount: object, end_date: datetime) -> TemporaryDeduction:
        """
        Subtract daily_amount from every day's budget until end_date.

        Naive end dates are read in the engine's calendar timezone.
        """
        amount = _positive(daily_amount, "daily_amount")
        if not isinstance(end_date, datetime):
            raise InvalidInputError(f"end_date must be a datetime, got {end_date!r}")

        with self.lock:
            now = self.clock()
            if end_date.tzinfo is None:
                end_date = end_date.replace(tzinfo=now.tzinfo)
            if end_date <= now:
                raise InvalidInputError("end_date must be in the future")

            state = self.repository.load_state(now)
            if state is None:
                raise NotOnboardedError("No budgeting period to attach a deduction to")

            deduction = TemporaryDeduction(daily_amount=amount, end_date=end_date)
            state = replace(
                state,
                temporary_deductions=[*state.temporary_deductions, deduction],
                last_updated=now,
            )
            self.repository.save_state(state)

        log_deduction_added(amount, end_date)
        return deduction

    def list_temporary_deductions(self) -> List[TemporaryDeduction]:
        """Active deductions, after pruning the expired ones"""
        with self.lock:
            now = self.clock()
            state = self.repository.load_state(now)
            if state is None:
                raise NotOnboardedError("No budgeting period initialized")
            return self._prune(state, now).temporary_deductions

    def get_history(self, limit: Optional[int] = None) -> List[HistoryEntry]:
        """Settled days, newest first"""
        if limit is not None and limit <= 0:
            raise InvalidInputError(f"limit must be > 0, got {limit}")

        with self.lock:
            state = self.repository.load_state(self.clock())
            if state is None:
                raise NotOnboardedError("No budgeting period initialized")

        entries = list(reversed(state.daily_history))
        return entries[:limit] if limit is not None else entries

    def _require_loaded(self, now: datetime) -> Tuple[BudgetSettings, BudgetState]:
        budget_settings, state = self.repository.load(now)
        if budget_settings is None or state is None:
            raise NotOnboardedError("No budgeting period initialized")
        return budget_settings, state

    def _daily_budget(
        self, budget_settings: BudgetSettings, state: BudgetState, now: datetime
    ) -> Tuple[Decimal, BudgetState]:
        state = self._prune(state, now)
        budget = calculate_daily_budget(budget_settings, state, now)
        daily_budget_gauge.set(float(budget))
        return budget, state

    def _prune(self, state: BudgetState, now: datetime) -> BudgetState:
        active, expired = split_deductions(state.temporary_deductions, now)
        if not expired:
            return state

        state = replace(state, temporary_deductions=active, last_updated=now)
        self.repository.save_state(state)
        deductions_pruned_counter.inc(len(expired))
        log_deductions_pruned(len(expired), len(active))
        return state
