# backend/wealthvault/services/ledger.py
"""
Ledger Service - the write side of WealthVault.

Every mutation of assets, transactions and goals goes through here:
- Numeric input is checked before it is stored (finite, non-negative
  prices and fees, positive quantities and targets)
- A SELL that would leave an asset short at any point in its history
  is rejected (REJECT_OVERSELL, default on)
- Deleting an asset deletes its transactions and unlinks it from goals
  in the same database transaction

Each public write is one unit of work: commit on success, rollback on
any error, so a rejected write leaves nothing behind.

Usage:
    ledger = LedgerService()
    asset = ledger.create_asset(db, {"name": "Index Fund", "category": AssetCategory.ETF})
    ledger.record_transaction(db, {...})
"""

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, TypeVar

from sqlalchemy.orm import Session

from wealthvault.config import settings
from wealthvault.models import TransactionType
from wealthvault.services.constants import UNKNOWN_ASSET_NAME, ZERO
from wealthvault.services.exceptions import (
    AssetNotFoundError,
    OversellError,
    ValidationError,
)
from wealthvault.services.store import RecordStore
from wealthvault.services.valuation.calculators import CostBasisAccumulator
from wealthvault.services.valuation.types import AssetRecord, GoalRecord, TransactionRecord

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class LedgerEntry:
    """A transaction joined with the name of its asset ("Unknown" when dangling)."""
    transaction: TransactionRecord
    asset_name: str


# =============================================================================
# INPUT CHECKS
# =============================================================================

def _require_finite(values: dict[str, Any], field: str) -> Decimal | None:
    if field not in values or values[field] is None:
        return None
    try:
        value = Decimal(str(values[field]))
    except ArithmeticError:
        raise ValidationError(f"{field} must be a number", field=field)
    if not value.is_finite():
        raise ValidationError(f"{field} must be a finite number", field=field)
    values[field] = value
    return value


def _require_non_negative(values: dict[str, Any], field: str) -> None:
    value = _require_finite(values, field)
    if value is not None and value < ZERO:
        raise ValidationError(f"{field} cannot be negative", field=field)


def _require_positive(values: dict[str, Any], field: str) -> None:
    value = _require_finite(values, field)
    if value is not None and value <= ZERO:
        raise ValidationError(f"{field} must be greater than zero", field=field)


def _require_name(values: dict[str, Any]) -> None:
    if "name" in values and not (values["name"] or "").strip():
        raise ValidationError("name cannot be empty", field="name")


# =============================================================================
# LEDGER SERVICE
# =============================================================================

class LedgerService:
    """
    Validated, atomic writes to the record store.

    Args:
        reject_oversell: Override for settings.reject_oversell
    """

    def __init__(self, reject_oversell: bool | None = None) -> None:
        self._reject_oversell = (
            settings.reject_oversell if reject_oversell is None else reject_oversell
        )

    # =========================================================================
    # ASSETS
    # =========================================================================

    def create_asset(self, db: Session, values: dict[str, Any]) -> AssetRecord:
        values = dict(values)
        _require_name(values)
        _require_non_negative(values, "current_price")
        _require_non_negative(values, "target_allocation")

        asset = self._in_unit_of_work(db, lambda store: store.create("assets", values))
        logger.info(f"Created asset {asset.id} '{asset.name}' ({asset.category.value})")
        return asset

    def update_asset(self, db: Session, asset_id: int, values: dict[str, Any]) -> AssetRecord:
        values = dict(values)
        _require_name(values)
        _require_non_negative(values, "current_price")
        _require_non_negative(values, "target_allocation")

        asset = self._in_unit_of_work(db, lambda store: store.update("assets", asset_id, values))
        logger.info(f"Updated asset {asset_id}: {sorted(values)}")
        return asset

    def update_price(self, db: Session, asset_id: int, price: Decimal) -> AssetRecord:
        """Set the manually entered current price of an asset."""
        values = {"current_price": price}
        _require_non_negative(values, "current_price")

        asset = self._in_unit_of_work(db, lambda store: store.update("assets", asset_id, values))
        logger.info(f"Price of asset {asset_id} set to {asset.current_price}")
        return asset

    def delete_asset(self, db: Session, asset_id: int) -> int:
        """
        Delete an asset, its transactions, and its links from goals.

        Returns:
            Number of transactions deleted with the asset
        """
        def cascade(store: RecordStore) -> int:
            store.get("assets", asset_id)

            owned = [t for t in store.get_all("transactions") if t.asset_id == asset_id]
            for txn in owned:
                store.delete("transactions", txn.id)

            for goal in store.get_all("goals"):
                if asset_id in goal.linked_asset_ids:
                    remaining = [i for i in goal.linked_asset_ids if i != asset_id]
                    store.update("goals", goal.id, {"linked_asset_ids": remaining})

            store.delete("assets", asset_id)
            return len(owned)

        removed = self._in_unit_of_work(db, cascade)
        logger.info(f"Deleted asset {asset_id} and {removed} transactions")
        return removed

    # =========================================================================
    # TRANSACTIONS
    # =========================================================================

    def record_transaction(self, db: Session, values: dict[str, Any]) -> TransactionRecord:
        """
        Store a BUY / SELL / DIVIDEND entry.

        Raises:
            AssetNotFoundError: The asset does not exist
            ValidationError: Non-finite or out-of-range numbers
            OversellError: The SELL exceeds the units held on its date
        """
        values = dict(values)
        _require_positive(values, "quantity")
        _require_non_negative(values, "price")
        _require_non_negative(values, "fees")
        if values.get("fees") is None:
            values["fees"] = ZERO

        def record(store: RecordStore) -> TransactionRecord:
            store.get("assets", values["asset_id"])
            txn = store.create("transactions", values)
            if txn.transaction_type == TransactionType.SELL:
                self._check_oversell(store, txn.asset_id)
            return txn

        txn = self._in_unit_of_work(db, record)
        logger.info(
            f"Recorded {txn.transaction_type.value} of {txn.quantity} "
            f"@ {txn.price} for asset {txn.asset_id} on {txn.date}"
        )
        return txn

    def delete_transaction(self, db: Session, transaction_id: int) -> None:
        """
        Delete a transaction.

        Removing a BUY that a later SELL depends on is rejected as an
        oversell, like recording that SELL in the first place.
        """
        def remove(store: RecordStore) -> TransactionRecord:
            txn = store.get("transactions", transaction_id)
            store.delete("transactions", transaction_id)
            if txn.transaction_type == TransactionType.BUY:
                self._check_oversell(store, txn.asset_id)
            return txn

        txn = self._in_unit_of_work(db, remove)
        logger.info(f"Deleted transaction {transaction_id} (asset {txn.asset_id})")

    def list_transactions(self, db: Session, asset_id: int | None = None) -> list[LedgerEntry]:
        """
        Ledger entries, newest first.

        Entries whose asset no longer exists are kept and labelled "Unknown".
        """
        store = RecordStore(db)
        names = {asset.id: asset.name for asset in store.get_all("assets")}
        transactions = store.get_all("transactions")
        if asset_id is not None:
            transactions = [t for t in transactions if t.asset_id == asset_id]

        # ids break same-day ties so the latest entry comes first
        ordered = sorted(transactions, key=lambda t: (t.date, t.id or 0), reverse=True)
        return [
            LedgerEntry(transaction=t, asset_name=names.get(t.asset_id, UNKNOWN_ASSET_NAME))
            for t in ordered
        ]

    def get_transaction(self, db: Session, transaction_id: int) -> LedgerEntry:
        store = RecordStore(db)
        txn = store.get("transactions", transaction_id)
        asset = store.find("assets", txn.asset_id)
        return LedgerEntry(
            transaction=txn,
            asset_name=asset.name if asset is not None else UNKNOWN_ASSET_NAME,
        )

    # =========================================================================
    # GOALS
    # =========================================================================

    def create_goal(self, db: Session, values: dict[str, Any]) -> GoalRecord:
        values = dict(values)
        _require_name(values)
        _require_positive(values, "target_amount")
        values["linked_asset_ids"] = list(values.get("linked_asset_ids") or [])

        def create(store: RecordStore) -> GoalRecord:
            self._check_linked_assets(store, values["linked_asset_ids"])
            return store.create("goals", values)

        goal = self._in_unit_of_work(db, create)
        logger.info(f"Created goal {goal.id} '{goal.name}' (target {goal.target_amount})")
        return goal

    def update_goal(self, db: Session, goal_id: int, values: dict[str, Any]) -> GoalRecord:
        values = dict(values)
        _require_name(values)
        _require_positive(values, "target_amount")
        if "linked_asset_ids" in values:
            values["linked_asset_ids"] = list(values["linked_asset_ids"] or [])

        def update(store: RecordStore) -> GoalRecord:
            if "linked_asset_ids" in values:
                self._check_linked_assets(store, values["linked_asset_ids"])
            return store.update("goals", goal_id, values)

        goal = self._in_unit_of_work(db, update)
        logger.info(f"Updated goal {goal_id}: {sorted(values)}")
        return goal

    def delete_goal(self, db: Session, goal_id: int) -> None:
        self._in_unit_of_work(db, lambda store: store.delete("goals", goal_id))
        logger.info(f"Deleted goal {goal_id}")

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _in_unit_of_work(self, db: Session, work: Callable[[RecordStore], T]) -> T:
        with self._transaction(db) as store:
            return work(store)

    @contextmanager
    def _transaction(self, db: Session) -> Iterator[RecordStore]:
        try:
            yield RecordStore(db)
            db.commit()
        except Exception:
            db.rollback()
            raise

    def _check_oversell(self, store: RecordStore, asset_id: int) -> None:
        """Raise OversellError if units go negative anywhere in the asset's history."""
        if not self._reject_oversell:
            return

        history = [t for t in store.get_all("transactions") if t.asset_id == asset_id]
        held = ZERO
        for txn, units_after in CostBasisAccumulator.running_units(history):
            if units_after < ZERO:
                logger.warning(
                    f"Rejected oversell on asset {asset_id}: "
                    f"{txn.quantity} units requested, {held} held on {txn.date}"
                )
                raise OversellError(
                    asset_id=asset_id,
                    requested=txn.quantity,
                    available=held,
                    on_date=txn.date,
                )
            held = units_after

    def _check_linked_assets(self, store: RecordStore, asset_ids: list[int]) -> None:
        for asset_id in asset_ids:
            if store.find("assets", asset_id) is None:
                raise AssetNotFoundError(asset_id)

