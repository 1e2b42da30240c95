# backend/tests/conftest.py
"""
Pytest configuration and fixtures.

This module provides shared fixtures for all tests:
- Test environment (in-memory SQLite, set before the app is imported)
- Database session fixtures
- TestClient with the database dependency overridden
- Sample record factories for the pure calculators
"""

import os

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("APP_NAME", "Test App")

from datetime import date
from decimal import Decimal
from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from wealthvault.database import get_db
from wealthvault.main import app
from wealthvault.models import AssetCategory, Base, TransactionType
from wealthvault.services.ledger import LedgerService
from wealthvault.services.valuation.types import AssetRecord, GoalRecord, TransactionRecord


# =============================================================================
# DATABASE FIXTURES
# =============================================================================

@pytest.fixture(scope="function")
def db_engine():
    """Create an in-memory SQLite database engine for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)


@pytest.fixture(scope="function")
def db(db_engine) -> Iterator[Session]:
    """Create a database session for testing."""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def ledger() -> LedgerService:
    """Ledger with the oversell guard enabled."""
    return LedgerService(reject_oversell=True)


@pytest.fixture(scope="function")
def client(db: Session) -> Iterator[TestClient]:
    """Create TestClient with database dependency override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


# =============================================================================
# SAMPLE RECORD FACTORIES
# =============================================================================

def make_asset(
        asset_id: int = 1,
        name: str = "Test Asset",
        category: AssetCategory = AssetCategory.STOCK,
        price: str = "0",
        target: str = "0",
) -> AssetRecord:
    """Factory function for AssetRecord test data."""
    return AssetRecord(
        id=asset_id,
        name=name,
        category=category,
        current_price=Decimal(price),
        target_allocation=Decimal(target),
    )


def make_txn(
        txn_type: TransactionType,
        quantity: str,
        price: str,
        fees: str = "0",
        txn_date: date = date(2024, 1, 1),
        asset_id: int = 1,
        txn_id: int | None = None,
) -> TransactionRecord:
    """Factory function for TransactionRecord test data."""
    return TransactionRecord(
        id=txn_id,
        asset_id=asset_id,
        transaction_type=txn_type,
        date=txn_date,
        quantity=Decimal(quantity),
        price=Decimal(price),
        fees=Decimal(fees),
    )


def make_goal(
        goal_id: int = 1,
        name: str = "Goal",
        target: str = "1000",
        linked: tuple[int, ...] = (),
) -> GoalRecord:
    """Factory function for GoalRecord test data."""
    return GoalRecord(
        id=goal_id,
        name=name,
        target_amount=Decimal(target),
        linked_asset_ids=linked,
    )


def buy(quantity: str, price: str, fees: str = "0", **kwargs) -> TransactionRecord:
    return make_txn(TransactionType.BUY, quantity, price, fees, **kwargs)


def sell(quantity: str, price: str, fees: str = "0", **kwargs) -> TransactionRecord:
    return make_txn(TransactionType.SELL, quantity, price, fees, **kwargs)


def dividend(amount: str, **kwargs) -> TransactionRecord:
    return make_txn(TransactionType.DIVIDEND, "1", amount, **kwargs)
