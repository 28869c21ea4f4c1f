"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal
from typing import List

from pocket_money.domain.models import (
    BudgetSnapshot,
    DayReview,
    HistoryEntry,
    SettlementAction,
    TemporaryDeduction,
)


class MonthRequest(BaseModel):
    """Request body for POST /v1/month"""

    monthly_allowance: Decimal = Field(..., gt=0, description="Funds for the whole month")
    weekend_multiplier: Decimal = Field(
        Decimal("1"), ge=0, description="Weekend-day budget relative to a weekday"
    )


class SettleRequest(BaseModel):
    """Request body for POST /v1/day/settle"""

    spent: Decimal = Field(..., ge=0, description="Amount spent today")
    action: SettlementAction
    amount: Decimal = Field(..., ge=0, description="Absolute surplus or deficit")


class DeductionRequest(BaseModel):
    """Request body for POST /v1/deductions"""

    daily_amount: Decimal = Field(..., gt=0)
    end_date: datetime


class OnboardingResponse(BaseModel):
    onboarded: bool


class SnapshotResponse(BaseModel):
    """Response for GET /v1/budget"""

    daily_budget: float
    total_remaining: float
    savings_pot: float
    currency: str

    @classmethod
    def from_domain(cls, snapshot: BudgetSnapshot) -> "SnapshotResponse":
        return cls(
            daily_budget=float(snapshot.daily_budget),
            total_remaining=float(snapshot.total_remaining),
            savings_pot=float(snapshot.savings_pot),
            currency=snapshot.currency,
        )


class ReviewResponse(BaseModel):
    """Response for GET /v1/day/review"""

    daily_budget: float
    spent: float
    diff: float
    amount: float
    surplus: bool
    options: List[SettlementAction]

    @classmethod
    def from_domain(cls, review: DayReview) -> "ReviewResponse":
        return cls(
            daily_budget=float(review.daily_budget),
            spent=float(review.spent),
            diff=float(review.diff),
            amount=float(review.amount),
            surplus=review.surplus,
            options=list(review.options),
        )


class HistoryItem(BaseModel):
    """Single settled day"""

    date: datetime
    spent: float
    action: SettlementAction
    diff: float

    @classmethod
    def from_domain(cls, entry: HistoryEntry) -> "HistoryItem":
        return cls(date=entry.date, spent=float(entry.spent), action=entry.action, diff=float(entry.diff))


class HistoryResponse(BaseModel):
    """Response for GET /v1/history"""

    entries: List[HistoryItem]


class DeductionItem(BaseModel):
    daily_amount: float
    end_date: datetime

    @classmethod
    def from_domain(cls, deduction: TemporaryDeduction) -> "DeductionItem":
        return cls(daily_amount=float(deduction.daily_amount), end_date=deduction.end_date)


class DeductionsResponse(BaseModel):
    """Response for GET /v1/deductions"""

    deductions: List[DeductionItem]
