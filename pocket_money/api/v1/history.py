"""GET /v1/history - Settled days, newest first"""

from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from pocket_money.api.v1.schemas import HistoryResponse, HistoryItem
from pocket_money.api.dependencies import get_engine
from pocket_money.domain.exceptions import NotOnboardedError
from pocket_money.engine import BudgetEngine

router = APIRouter()


@router.get("/history", response_model=HistoryResponse)
def get_history(
    limit: Optional[int] = Query(None, gt=0, description="Maximum number of entries"),
    engine: BudgetEngine = Depends(get_engine),
):
    """
    Retrieve settled days for the current period.

    Returns:
        Entries in reverse chronological order; diff >= 0 was saved, diff < 0 was over
    """
    try:
        entries = engine.get_history(limit=limit)
    except NotOnboardedError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return HistoryResponse(entries=[HistoryItem.from_domain(entry) for entry in entries])
