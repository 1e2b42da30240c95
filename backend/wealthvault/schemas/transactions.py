# backend/wealthvault/schemas/transactions.py
"""
Pydantic schemas for Transaction validation.

These schemas define:
- What data clients must send (Create)
- What data the API returns (Response)

Validation layers:
- Field constraints: type, numeric limits (no NaN/inf)
- Field validators: date bounds
- LedgerService: asset existence, oversell check

IMPORTANT: All financial values use Decimal for precision.
Never use float for money!
"""

from datetime import date as date_type
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from wealthvault.models import TransactionType
from wealthvault.schemas.validators import validate_transaction_date


# =============================================================================
# BASE SCHEMA
# =============================================================================

class TransactionBase(BaseModel):
    """
    Base schema with fields common to Create and Response.

    For DIVIDEND entries, quantity x price is the cash received
    (e.g. quantity 1, price 12.50).
    """

    asset_id: int = Field(..., gt=0, description="Asset the entry belongs to")

    transaction_type: TransactionType = Field(
        ...,
        description="BUY, SELL or DIVIDEND",
        examples=[TransactionType.BUY]
    )

    date: date_type = Field(
        ...,
        description="Trade date",
        examples=["2024-01-15"]
    )

    quantity: Decimal = Field(
        ...,
        gt=0,
        max_digits=18,
        decimal_places=8,
        allow_inf_nan=False,
        description="Units traded (must be positive)",
        examples=["10", "0.5"]
    )

    price: Decimal = Field(
        ...,
        ge=0,
        max_digits=18,
        decimal_places=8,
        allow_inf_nan=False,
        description="Price per unit",
        examples=["100", "0.00001234"]
    )

    fees: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        max_digits=18,
        decimal_places=8,
        allow_inf_nan=False,
        description="Fees or commission (0 or positive)",
        examples=["0", "4.95"]
    )

    @field_validator('date')
    @classmethod
    def check_date(cls, v: date_type) -> date_type:
        return validate_transaction_date(v)


# =============================================================================
# CREATE SCHEMA
# =============================================================================

class TransactionCreate(TransactionBase):
    """
    Schema for recording a transaction.

    Example:
        {"asset_id": 1, "transaction_type": "BUY", "date": "2024-01-15",
         "quantity": "10", "price": "100", "fees": "5"}
    """
    pass


# =============================================================================
# RESPONSE SCHEMA
# =============================================================================

class TransactionResponse(TransactionBase):
    """
    Schema for a ledger entry in API responses.

    asset_name is "Unknown" when the asset no longer exists.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Unique transaction ID")
    asset_name: str = Field(..., description="Name of the asset, or 'Unknown'")

    @classmethod
    def from_entry(cls, entry) -> "TransactionResponse":
        """Build from a LedgerEntry (transaction record + asset name)."""
        txn = entry.transaction
        return cls(
            id=txn.id,
            asset_id=txn.asset_id,
            transaction_type=txn.transaction_type,
            date=txn.date,
            quantity=txn.quantity,
            price=txn.price,
            fees=txn.fees,
            asset_name=entry.asset_name,
        )
