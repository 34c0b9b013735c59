"""Pytest fixtures for testing"""

import os

# Point the service at the test database before its engine is created
TEST_DATABASE_URL = "sqlite:///./test.db"
os.environ["DATABASE_URL"] = TEST_DATABASE_URL

import pytest
from datetime import date
from typing import Callable, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from condo_compliance.api.main import create_app
from condo_compliance.api.dependencies import get_today
from condo_compliance.config import Settings
from condo_compliance.infrastructure.database.models import Base, LedgerTransaction
from condo_compliance.infrastructure.database.session import get_db


engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TODAY = date(2025, 11, 20)
ADMIN = {"X-User-Role": "admin"}
UNITS = ["Casa 101", "Casa 102", "Casa 103"]


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
def test_settings() -> Settings:
    """Default configuration, isolated from any local .env file"""
    return Settings(_env_file=None, database_url=TEST_DATABASE_URL, units=UNITS)


@pytest.fixture
def client(db: Session, test_settings: Settings) -> TestClient:
    """Create FastAPI test client with test database and a fixed clock"""
    app = create_app(test_settings)

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_today] = lambda: TODAY
    return TestClient(app)


@pytest.fixture
def add_ledger_row(db: Session) -> Callable[..., LedgerTransaction]:
    """Insert a raw row into the ledger table"""

    def _add(id, date, type, desc, amount=850.0, category=""):
        row = LedgerTransaction(id=id, date=date, type=type, description=desc, amount=amount, category=category)
        db.add(row)
        db.commit()
        return row

    return _add
