# backend/wealthvault/schemas/assets.py
"""
Pydantic schemas for Asset validation.

These schemas define:
- What data clients must send (Create)
- What data clients can update (Update)
- What data the API returns (Response)

Validation layers:
- Field constraints: type, length, numeric limits (no NaN/inf)
- Field validators: normalization (uppercase, trim)
- LedgerService: existence checks
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from wealthvault.models import AssetCategory
from wealthvault.schemas.validators import normalize_name, normalize_ticker


# =============================================================================
# BASE SCHEMA
# =============================================================================

class AssetBase(BaseModel):
    """
    Base schema with fields common to Create and Response.

    A DEBT asset is a liability: its value is subtracted from net wealth.
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        examples=["Global Index Fund", "Emergency Savings", "Mortgage"],
        description="Display name of the asset or liability"
    )

    ticker: str | None = Field(
        default=None,
        max_length=20,
        examples=["VWCE", "BTC-USD"],
        description="Optional trading symbol"
    )

    category: AssetCategory = Field(
        ...,
        description="Asset category",
        examples=[AssetCategory.ETF, AssetCategory.CASH, AssetCategory.DEBT]
    )

    current_price: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        max_digits=18,
        decimal_places=8,
        allow_inf_nan=False,
        description="Latest price per unit, entered manually",
        examples=["101.25", "1"]
    )

    target_allocation: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        le=100,
        max_digits=9,
        decimal_places=4,
        allow_inf_nan=False,
        description="Desired share of the portfolio in percent",
        examples=["60", "5.5"]
    )

    # =========================================================================
    # FIELD VALIDATORS (Normalization)
    # =========================================================================

    @field_validator('name')
    @classmethod
    def normalize_name(cls, v: str) -> str:
        """Normalize name: trim and collapse whitespace."""
        return normalize_name(v)

    @field_validator('ticker')
    @classmethod
    def normalize_ticker(cls, v: str | None) -> str | None:
        """Normalize ticker: trim whitespace and uppercase."""
        return normalize_ticker(v)


# =============================================================================
# CREATE SCHEMA
# =============================================================================

class AssetCreate(AssetBase):
    """
    Schema for creating a new asset.

    Example:
        {"name": "Global Index Fund", "ticker": "vwce", "category": "ETF",
         "current_price": "101.25", "target_allocation": "60"}
    """
    pass


# =============================================================================
# UPDATE SCHEMA
# =============================================================================

class AssetUpdate(BaseModel):
    """
    Schema for updating an asset.

    All fields optional - only provided fields are updated.
    """

    name: str | None = Field(default=None, min_length=1, max_length=255)
    ticker: str | None = Field(default=None, max_length=20)
    category: AssetCategory | None = None
    current_price: Decimal | None = Field(
        default=None, ge=0, max_digits=18, decimal_places=8, allow_inf_nan=False
    )
    target_allocation: Decimal | None = Field(
        default=None, ge=0, le=100, max_digits=9, decimal_places=4, allow_inf_nan=False
    )

    @field_validator('name')
    @classmethod
    def normalize_name(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return normalize_name(v)

    @field_validator('ticker')
    @classmethod
    def normalize_ticker(cls, v: str | None) -> str | None:
        return normalize_ticker(v)


class PriceUpdate(BaseModel):
    """Schema for a manual price update."""

    current_price: Decimal = Field(
        ...,
        ge=0,
        max_digits=18,
        decimal_places=8,
        allow_inf_nan=False,
        description="New price per unit",
        examples=["104.80"]
    )


# =============================================================================
# RESPONSE SCHEMA
# =============================================================================

class AssetResponse(AssetBase):
    """
    Schema for asset in API responses.

    Built from the record store's AssetRecord.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Unique asset ID")
    is_liability: bool = Field(..., description="True for DEBT assets")


class AssetDeleteResponse(BaseModel):
    """Result of deleting an asset together with its transactions."""

    asset_id: int
    deleted_transactions: int = Field(
        ...,
        description="Number of transactions removed with the asset"
    )
