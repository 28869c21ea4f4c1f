"""Budget period endpoints - onboarding status, month initialization, snapshot"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from pocket_money.api.v1.schemas import MonthRequest, OnboardingResponse, SnapshotResponse
from pocket_money.api.dependencies import get_engine, get_request_id
from pocket_money.domain.exceptions import InvalidInputError, NotOnboardedError
from pocket_money.engine import BudgetEngine

router = APIRouter()


@router.get("/onboarding", response_model=OnboardingResponse)
def get_onboarding_status(engine: BudgetEngine = Depends(get_engine)):
    """Whether a budgeting period exists; presentation shows onboarding when it does not"""
    return OnboardingResponse(onboarded=engine.is_onboarded())


@router.post("/month", response_model=SnapshotResponse, status_code=201)
def initialize_month(
    request_body: MonthRequest,
    request: Request,
    engine: BudgetEngine = Depends(get_engine),
):
    """
    Start a new budgeting period.

    Replaces any existing Settings and State; history and savings are reset.
    """
    request_id = get_request_id(request)
    try:
        engine.initialize_month(request_body.monthly_allowance, request_body.weekend_multiplier)
        return SnapshotResponse.from_domain(engine.get_snapshot())
    except InvalidInputError as e:
        logging.warning(f"Invalid month input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))


@router.get("/budget", response_model=SnapshotResponse)
def get_budget(request: Request, engine: BudgetEngine = Depends(get_engine)):
    """Today's budget with running totals"""
    try:
        return SnapshotResponse.from_domain(engine.get_snapshot())
    except NotOnboardedError as e:
        logging.info(f"Budget requested before onboarding: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=404, detail=str(e))
