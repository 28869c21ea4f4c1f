"""End-of-day endpoints - review spend, then settle"""

import logging
from decimal import Decimal
from fastapi import APIRouter, Depends, HTTPException, Query, Request

from pocket_money.api.v1.schemas import ReviewResponse, SettleRequest, SnapshotResponse
from pocket_money.api.dependencies import get_engine, get_request_id
from pocket_money.domain.exceptions import InvalidInputError, NotOnboardedError
from pocket_money.engine import BudgetEngine

router = APIRouter()


@router.get("/day/review", response_model=ReviewResponse)
def review_day(
    request: Request,
    spent: Decimal = Query(..., ge=0, description="Amount spent today"),
    engine: BudgetEngine = Depends(get_engine),
):
    """
    Compare today's spend with the daily budget.

    Returns the surplus/deficit and the two actions to offer:
    spread/save for a surplus, week/month for a deficit.
    """
    try:
        return ReviewResponse.from_domain(engine.review_day(spent))
    except NotOnboardedError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidInputError as e:
        logging.warning(f"Invalid review input: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/day/settle", response_model=SnapshotResponse)
def settle_day(
    request_body: SettleRequest,
    request: Request,
    engine: BudgetEngine = Depends(get_engine),
):
    """
    Close the day.

    Flow:
    1. Deduct spent from the remaining total
    2. Apply the action (save moves amount into the savings pot)
    3. Append a history entry
    4. Return the refreshed snapshot
    """
    request_id = get_request_id(request)
    try:
        engine.settle_day(request_body.spent, request_body.action, request_body.amount)
        return SnapshotResponse.from_domain(engine.get_snapshot())

    except NotOnboardedError as e:
        logging.warning(f"Settlement before onboarding: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail=str(e))

    except InvalidInputError as e:
        logging.warning(f"Invalid settlement: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))
