"""Pytest fixtures for testing"""

import pytest
from datetime import datetime, timedelta, timezone
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from pocket_money.api.main import create_app
from pocket_money.api.dependencies import get_clock
from pocket_money.engine import BudgetEngine
from pocket_money.infrastructure.database.models import Base
from pocket_money.infrastructure.database.repositories import InMemoryStore
from pocket_money.infrastructure.database.session import get_db


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FixedClock:
    """Callable clock frozen at `now` until moved explicitly"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FixedClock:
    """Monday 6 October 2025, noon UTC (October 2025: 31 days, 8 weekend days)"""
    return FixedClock(datetime(2025, 10, 6, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def budget_engine(store: InMemoryStore, clock: FixedClock) -> BudgetEngine:
    """Engine over an in-memory store with a frozen clock"""
    return BudgetEngine(store, clock=clock, default_currency="$")


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session, clock: FixedClock) -> TestClient:
    """Create FastAPI test client with test database and frozen clock"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    return TestClient(app)
