# backend/wealthvault/services/store.py
"""
Record store: the persistence collaborator of the calculation engine.

Exposes create / read / update / delete / clear per named collection
("assets", "transactions", "goals") on top of a SQLAlchemy session.
Reads return engine records (frozen dataclasses), never ORM rows, so
nothing downstream depends on the database layer.

The store flushes but never commits: the caller owns the unit of work,
which lets the ledger and the backup restore group several writes into
one atomic commit.

Usage:
    store = RecordStore(db)
    assets = store.get_all("assets")
    transactions = store.get_all("transactions")
"""

import logging
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from wealthvault.models import Asset, AssetCategory, Goal, Transaction, TransactionType
from wealthvault.services.constants import COLLECTIONS
from wealthvault.services.exceptions import (
    AssetNotFoundError,
    GoalNotFoundError,
    NotFoundError,
    TransactionNotFoundError,
    ValidationError,
)
from wealthvault.services.valuation.types import AssetRecord, GoalRecord, TransactionRecord

logger = logging.getLogger(__name__)

_MODELS: dict[str, type] = {
    "assets": Asset,
    "transactions": Transaction,
    "goals": Goal,
}

_NOT_FOUND: dict[str, type[NotFoundError]] = {
    "assets": AssetNotFoundError,
    "transactions": TransactionNotFoundError,
    "goals": GoalNotFoundError,
}


# =============================================================================
# ORM → RECORD MAPPERS
# =============================================================================

def to_asset_record(asset: Asset) -> AssetRecord:
    return AssetRecord(
        id=asset.id,
        name=asset.name,
        category=AssetCategory(asset.category),
        current_price=asset.current_price,
        target_allocation=asset.target_allocation,
        ticker=asset.ticker,
    )


def to_transaction_record(txn: Transaction) -> TransactionRecord:
    return TransactionRecord(
        id=txn.id,
        asset_id=txn.asset_id,
        transaction_type=TransactionType(txn.transaction_type),
        date=txn.date,
        quantity=txn.quantity,
        price=txn.price,
        fees=txn.fees,
    )


def to_goal_record(goal: Goal) -> GoalRecord:
    return GoalRecord(
        id=goal.id,
        name=goal.name,
        target_amount=goal.target_amount,
        linked_asset_ids=tuple(goal.linked_asset_ids or ()),
    )


_MAPPERS = {
    "assets": to_asset_record,
    "transactions": to_transaction_record,
    "goals": to_goal_record,
}


# =============================================================================
# RECORD STORE
# =============================================================================

class RecordStore:
    """
    Key-value record store over the assets/transactions/goals tables.

    Raises:
        ValidationError: Unknown collection name
        NotFoundError: Subclass matching the collection, for a missing id
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    @property
    def session(self) -> Session:
        return self._db

    def get_all(self, kind: str) -> list[Any]:
        """All records of a collection, ordered by id."""
        model = self._model(kind)
        rows = self._db.scalars(select(model).order_by(model.id)).all()
        mapper = _MAPPERS[kind]
        return [mapper(row) for row in rows]

    def get(self, kind: str, record_id: int) -> Any:
        """A single record by id."""
        return _MAPPERS[kind](self._get_row(kind, record_id))

    def find(self, kind: str, record_id: int) -> Any | None:
        """A single record by id, or None when it does not exist."""
        row = self._db.get(self._model(kind), record_id)
        return _MAPPERS[kind](row) if row is not None else None

    def create(self, kind: str, values: dict[str, Any]) -> Any:
        """Insert a record and return it with its assigned id."""
        row = self._model(kind)(**values)
        self._db.add(row)
        self._db.flush()
        logger.debug(f"Created {kind} record {row.id}")
        return _MAPPERS[kind](row)

    def update(self, kind: str, record_id: int, values: dict[str, Any]) -> Any:
        """Apply a partial update and return the updated record."""
        row = self._get_row(kind, record_id)
        for key, value in values.items():
            setattr(row, key, value)
        self._db.flush()
        return _MAPPERS[kind](row)

    def delete(self, kind: str, record_id: int) -> None:
        """Delete a record by id."""
        row = self._get_row(kind, record_id)
        self._db.delete(row)
        self._db.flush()

    def clear(self, kind: str) -> int:
        """
        Delete every record in a collection.

        Returns:
            Number of rows deleted
        """
        result = self._db.execute(delete(self._model(kind)))
        self._db.flush()
        return result.rowcount or 0

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _model(self, kind: str) -> type:
        if kind not in _MODELS:
            raise ValidationError(
                f"Unknown collection '{kind}'. Valid collections: {', '.join(COLLECTIONS)}",
                field="kind",
            )
        return _MODELS[kind]

    def _get_row(self, kind: str, record_id: int) -> Any:
        row = self._db.get(self._model(kind), record_id)
        if row is None:
            raise _NOT_FOUND[kind](record_id)
        return row
