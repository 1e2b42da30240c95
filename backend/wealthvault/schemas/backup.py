# backend/wealthvault/schemas/backup.py
"""
Pydantic schemas for the backup document.

Format:
    {
        "assets": [...],
        "transactions": [...],
        "goals": [...],          # optional on import
        "date": "2024-06-01T12:00:00+00:00"
    }

Records carry their ids so that transaction and goal references survive
a round trip. Every record is validated with the same field rules as
the API create schemas.

Exports from the earlier browser app (camelCase keys such as assetId,
qty, currentPrice, targetAmount, linkedAssets, and `type` for both the
asset category and the transaction type) are accepted on import.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, model_validator

from wealthvault.schemas.assets import AssetBase
from wealthvault.schemas.goals import GoalBase
from wealthvault.schemas.transactions import TransactionBase


def _rename_legacy_keys(
        data: Any,
        renames: dict[str, str],
        defaulted: tuple[str, ...] = (),
) -> Any:
    """
    Map camelCase keys of browser-era exports onto the current field names.

    A current key always wins over its legacy spelling. Legacy keys and
    `defaulted` fields holding null (the old client stored NaN for empty
    inputs, which JSON writes as null) are dropped so the field default applies.
    """
    if not isinstance(data, dict):
        return data

    data = dict(data)
    for legacy, current in renames.items():
        if legacy not in data:
            continue
        value = data.pop(legacy)
        if current not in data and value is not None:
            data[current] = value
    for key in defaulted:
        if key in data and data[key] is None:
            del data[key]
    return data


class BackupAsset(AssetBase):
    id: int = Field(..., gt=0)

    @model_validator(mode="before")
    @classmethod
    def accept_legacy_keys(cls, data: Any) -> Any:
        return _rename_legacy_keys(data, {
            "type": "category",
            "currentPrice": "current_price",
            "targetAllocation": "target_allocation",
        })


class BackupTransaction(TransactionBase):
    id: int = Field(..., gt=0)

    @model_validator(mode="before")
    @classmethod
    def accept_legacy_keys(cls, data: Any) -> Any:
        return _rename_legacy_keys(data, {
            "assetId": "asset_id",
            "type": "transaction_type",
            "qty": "quantity",
        }, defaulted=("fees",))


class BackupGoal(GoalBase):
    id: int = Field(..., gt=0)

    @model_validator(mode="before")
    @classmethod
    def accept_legacy_keys(cls, data: Any) -> Any:
        return _rename_legacy_keys(data, {
            "targetAmount": "target_amount",
            "linkedAssets": "linked_asset_ids",
        })


class BackupDocument(BaseModel):
    """
    Complete export of the record store.

    Transactions and goal links may reference assets missing from the
    document; those references are kept as-is (dangling references are
    tolerated everywhere).
    """

    assets: list[BackupAsset]
    transactions: list[BackupTransaction]
    goals: list[BackupGoal] = Field(default_factory=list)
    date: datetime | None = Field(
        default=None,
        description="When the backup was exported (ISO-8601)"
    )

    @model_validator(mode="after")
    def check_unique_ids(self) -> "BackupDocument":
        for name in ("assets", "transactions", "goals"):
            ids = [record.id for record in getattr(self, name)]
            if len(ids) != len(set(ids)):
                raise ValueError(f"Duplicate ids in {name}")
        return self


class BackupImportResponse(BaseModel):
    """Number of records restored per collection."""

    assets: int
    transactions: int
    goals: int


class WipeResponse(BaseModel):
    """Number of records deleted per collection."""

    assets: int
    transactions: int
    goals: int
