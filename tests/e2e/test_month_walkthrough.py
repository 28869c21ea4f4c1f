"""
E2E tests walking whole months through the engine.

Personas:
- saver: stays under budget on weekdays, banks every surplus
- overspender: blows the weekend budget and spreads the loss
- late starter: onboards mid-month
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pocket_money.domain.models import SettlementAction
from pocket_money.engine import BudgetEngine
from pocket_money.infrastructure.database.repositories import InMemoryStore


class SteppingClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def walk_month(engine: BudgetEngine, clock: SteppingClock, days: int, spend_for, choose):
    """Review and settle one day at a time, tracking expected totals independently"""
    expected_spent = Decimal("0")
    expected_saved = Decimal("0")

    for _ in range(days):
        before = engine.get_snapshot()
        assert before.daily_budget <= max(Decimal("0"), before.total_remaining - before.savings_pot)

        spent = spend_for(clock.now)
        review = engine.review_day(spent)
        action = choose(review)
        assert action in review.options

        engine.settle_day(spent, action, review.amount)

        expected_spent += Decimal(str(spent))
        if action is SettlementAction.SAVE:
            expected_saved += review.amount

        clock.now += timedelta(days=1)

    return expected_spent, expected_saved


def test_saver_month():
    """
    saver: 2800 over February 2026 (28 days, flat weekends) = 100/day
    Expected: every surplus lands in the pot, totals conserve
    """
    clock = SteppingClock(datetime(2026, 2, 1, 20, 0, tzinfo=timezone.utc))
    engine = BudgetEngine(InMemoryStore(), clock=clock)
    engine.initialize_month(2800, 1)

    assert engine.compute_daily_budget() == Decimal("100.00")

    spent_total, saved_total = walk_month(
        engine,
        clock,
        days=28,
        spend_for=lambda now: 60,
        choose=lambda review: SettlementAction.SAVE if review.surplus else SettlementAction.SPREAD_LOSS,
    )

    snapshot = engine.get_snapshot()
    assert snapshot.total_remaining == Decimal("2800") - spent_total
    assert snapshot.savings_pot == saved_total
    assert snapshot.savings_pot > 0
    assert len(engine.get_history()) == 28


def test_overspender_month():
    """
    overspender: 3100 in October 2025 with 2x weekends, spends 250 every weekend day
    Expected: deficits recorded negative, pot untouched, budget floors at 0 once funds run out
    """
    clock = SteppingClock(datetime(2025, 10, 1, 20, 0, tzinfo=timezone.utc))
    engine = BudgetEngine(InMemoryStore(), clock=clock)
    engine.initialize_month(3100, 2)

    spent_total, saved_total = walk_month(
        engine,
        clock,
        days=31,
        spend_for=lambda now: 250 if now.weekday() >= 5 else 90,
        choose=lambda review: SettlementAction.SPREAD if review.surplus else SettlementAction.FIX_WEEK,
    )

    snapshot = engine.get_snapshot()
    assert saved_total == 0
    assert snapshot.savings_pot == 0
    assert snapshot.total_remaining == Decimal("3100") - spent_total
    assert snapshot.total_remaining < 0
    assert snapshot.daily_budget == Decimal("0.00")

    history = engine.get_history()
    assert all(entry.diff < 0 for entry in history if entry.action is SettlementAction.FIX_WEEK)


def test_late_starter_keeps_full_month_rate():
    """
    late starter: onboards on 27 October 2025 with 3100, 2x weekends
    Expected: Monday budget equals the full-month rate, capped only by funds
    """
    clock = SteppingClock(datetime(2025, 10, 27, 8, 0, tzinfo=timezone.utc))
    engine = BudgetEngine(InMemoryStore(), clock=clock)
    engine.initialize_month(3100, 2)

    assert engine.get_snapshot().daily_budget == Decimal("79.48")
