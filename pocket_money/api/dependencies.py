"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from pocket_money.engine import BudgetEngine, Clock, default_clock
from pocket_money.infrastructure.database.repositories import SqlDocumentStore
from pocket_money.infrastructure.database.session import get_db


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_clock() -> Clock:
    """Clock used for "today"; overridden in tests"""
    return default_clock


def get_engine(db: Session = Depends(get_db), clock: Clock = Depends(get_clock)) -> BudgetEngine:
    """Provide a budget engine bound to the request's database session"""
    return BudgetEngine(SqlDocumentStore(db), clock=clock)
