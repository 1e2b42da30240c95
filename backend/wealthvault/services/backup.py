# backend/wealthvault/services/backup.py
"""
Backup Service - export, restore and wipe of the record store.

Export produces one JSON-serializable document with every collection
and a timestamp. Import validates the whole document first, then
replaces all collections inside a single database transaction: if
anything fails, the previous data is left untouched.

Usage:
    service = BackupService()
    document = service.export(db)
    counts = service.import_document(db, raw_json)
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any

import pydantic
from sqlalchemy.orm import Session

from wealthvault.schemas.backup import (
    BackupAsset,
    BackupDocument,
    BackupGoal,
    BackupTransaction,
)
from wealthvault.services.constants import COLLECTIONS
from wealthvault.services.exceptions import InvalidBackupError
from wealthvault.services.store import RecordStore

logger = logging.getLogger(__name__)

REQUIRED_COLLECTIONS = ("assets", "transactions")


class BackupService:
    """Whole-store export / import / wipe."""

    # =========================================================================
    # EXPORT
    # =========================================================================

    def export(self, db: Session) -> BackupDocument:
        store = RecordStore(db)

        document = BackupDocument(
            assets=[
                BackupAsset(
                    id=a.id,
                    name=a.name,
                    ticker=a.ticker,
                    category=a.category,
                    current_price=a.current_price,
                    target_allocation=a.target_allocation,
                )
                for a in store.get_all("assets")
            ],
            transactions=[
                BackupTransaction(
                    id=t.id,
                    asset_id=t.asset_id,
                    transaction_type=t.transaction_type,
                    date=t.date,
                    quantity=t.quantity,
                    price=t.price,
                    fees=t.fees,
                )
                for t in store.get_all("transactions")
            ],
            goals=[
                BackupGoal(
                    id=g.id,
                    name=g.name,
                    target_amount=g.target_amount,
                    linked_asset_ids=list(g.linked_asset_ids),
                )
                for g in store.get_all("goals")
            ],
            date=datetime.now(timezone.utc),
        )

        logger.info(
            f"Exported backup: {len(document.assets)} assets, "
            f"{len(document.transactions)} transactions, {len(document.goals)} goals"
        )
        return document

    # =========================================================================
    # IMPORT
    # =========================================================================

    def parse(self, raw: str | bytes | dict[str, Any]) -> BackupDocument:
        """
        Validate a backup document without touching the database.

        Raises:
            InvalidBackupError: Not JSON, missing collections, or invalid records
        """
        if isinstance(raw, (str, bytes)):
            try:
                raw = json.loads(raw)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                raise InvalidBackupError(f"not valid JSON ({e})")

        if not isinstance(raw, dict):
            raise InvalidBackupError("expected a JSON object")

        missing = [name for name in REQUIRED_COLLECTIONS if raw.get(name) is None]
        if missing:
            raise InvalidBackupError(f"missing {', '.join(missing)}")

        try:
            return BackupDocument.model_validate(raw)
        except pydantic.ValidationError as e:
            first = e.errors()[0]
            location = ".".join(str(part) for part in first["loc"])
            raise InvalidBackupError(
                f"{e.error_count()} invalid field(s), first at {location}: {first['msg']}"
            )

    def import_document(self, db: Session, raw: str | bytes | dict[str, Any]) -> dict[str, int]:
        """
        Replace every collection with the contents of a backup.

        Returns:
            Number of restored records per collection
        """
        document = self.parse(raw)
        store = RecordStore(db)

        try:
            for name in COLLECTIONS:
                store.clear(name)

            for asset in document.assets:
                store.create("assets", asset.model_dump())
            for txn in document.transactions:
                store.create("transactions", txn.model_dump())
            for goal in document.goals:
                store.create("goals", goal.model_dump())

            db.commit()
        except Exception:
            db.rollback()
            logger.error("Backup import failed, previous data kept", exc_info=True)
            raise

        counts = {
            "assets": len(document.assets),
            "transactions": len(document.transactions),
            "goals": len(document.goals),
        }
        logger.info(f"Imported backup from {document.date or 'unknown date'}: {counts}")
        return counts

    # =========================================================================
    # WIPE
    # =========================================================================

    def wipe(self, db: Session) -> dict[str, int]:
        """
        Delete every record in every collection.

        Returns:
            Number of deleted records per collection
        """
        store = RecordStore(db)
        try:
            counts = {name: store.clear(name) for name in COLLECTIONS}
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(f"Wiped all data: {counts}")
        return counts
