# backend/wealthvault/schemas/portfolio.py
"""
Pydantic schemas for portfolio read models.

These mirror the valuation dataclasses for JSON output:
- SnapshotLineResponse: one valued asset
- PortfolioResponse: all lines plus totals
- PortfolioSummaryResponse: dashboard headline figures
- HistoryPointResponse: monthly invested capital
- AllocationResponse: category breakdown and target drift
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from wealthvault.models import AssetCategory


# =============================================================================
# SNAPSHOT
# =============================================================================

class SnapshotLineResponse(BaseModel):
    """Valuation of a single asset or liability."""

    model_config = ConfigDict(from_attributes=True)

    asset_id: int
    name: str
    category: AssetCategory
    units: Decimal = Field(..., description="Units held")
    avg_cost_per_unit: Decimal = Field(..., description="Average cost basis per unit")
    current_price: Decimal
    current_value: Decimal = Field(..., description="units x current_price")
    total_cost: Decimal = Field(..., description="Remaining cost basis incl. purchase fees")
    total_income: Decimal = Field(..., description="Dividends received")
    absolute_return: Decimal = Field(..., description="current_value - total_cost")
    return_pct: Decimal = Field(..., description="Return in percent (0 when cost is 0)")
    is_liability: bool
    weight_pct: Decimal = Field(
        default=Decimal("0"),
        description="Share of total asset value in percent (0 when there are no assets)"
    )


class PortfolioResponse(BaseModel):
    """Full snapshot with totals."""

    lines: list[SnapshotLineResponse]
    total_assets: Decimal
    total_liabilities: Decimal
    net_wealth: Decimal
    total_cost: Decimal
    total_income: Decimal

    @classmethod
    def from_snapshot(cls, snapshot) -> "PortfolioResponse":
        return cls(
            lines=[
                SnapshotLineResponse.model_validate(line).model_copy(
                    update={"weight_pct": snapshot.weight_of(line)}
                )
                for line in snapshot.lines
            ],
            total_assets=snapshot.total_asset_value,
            total_liabilities=snapshot.total_liability_value,
            net_wealth=snapshot.net_wealth,
            total_cost=snapshot.total_cost,
            total_income=snapshot.total_income,
        )


# =============================================================================
# DASHBOARD
# =============================================================================

class PortfolioSummaryResponse(BaseModel):
    """Dashboard headline figures."""

    model_config = ConfigDict(from_attributes=True)

    net_wealth: Decimal
    total_assets: Decimal
    total_liabilities: Decimal
    total_cost: Decimal
    total_pnl: Decimal = Field(..., description="Total asset value - total cost")
    total_pnl_pct: Decimal
    total_income: Decimal
    xirr_pct: Decimal = Field(..., description="Money-weighted annual return in percent")
    health_score: float = Field(..., ge=0, le=100)
    asset_count: int
    as_of: date


# =============================================================================
# HISTORY / ALLOCATION
# =============================================================================

class HistoryPointResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    period: str = Field(..., description="Month as YYYY-MM", examples=["2024-01"])
    value: Decimal = Field(..., description="Cumulative invested capital")


class AllocationSliceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    category: AssetCategory
    value: Decimal
    share_pct: Decimal


class AllocationDriftResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    asset_id: int
    name: str
    actual_pct: Decimal
    target_pct: Decimal
    drift_pct: Decimal


class AllocationResponse(BaseModel):
    categories: list[AllocationSliceResponse]
    drift: list[AllocationDriftResponse]
