"""Temporary deduction endpoints"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from pocket_money.api.v1.schemas import DeductionItem, DeductionRequest, DeductionsResponse
from pocket_money.api.dependencies import get_engine, get_request_id
from pocket_money.domain.exceptions import InvalidInputError, NotOnboardedError
from pocket_money.engine import BudgetEngine

router = APIRouter()


@router.get("/deductions", response_model=DeductionsResponse)
def list_deductions(engine: BudgetEngine = Depends(get_engine)):
    """Active deductions; expired ones are pruned as a side effect"""
    try:
        deductions = engine.list_temporary_deductions()
    except NotOnboardedError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return DeductionsResponse(deductions=[DeductionItem.from_domain(d) for d in deductions])


@router.post("/deductions", response_model=DeductionItem, status_code=201)
def add_deduction(
    request_body: DeductionRequest,
    request: Request,
    engine: BudgetEngine = Depends(get_engine),
):
    """Subtract daily_amount from every day's budget until end_date"""
    try:
        deduction = engine.add_temporary_deduction(request_body.daily_amount, request_body.end_date)
    except NotOnboardedError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidInputError as e:
        logging.warning(f"Invalid deduction: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=422, detail=str(e))

    return DeductionItem.from_domain(deduction)
