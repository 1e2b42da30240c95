# backend/wealthvault/schemas/analytics.py
"""
Pydantic schemas for analytics responses.

The analytics dataclasses are converted with from_attributes; enum
fields serialize as their string values.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from wealthvault.services.analytics.types import HealthRating, HealthRule


class XirrResponse(BaseModel):
    xirr_pct: Decimal = Field(
        ...,
        description="Money-weighted annual return in percent (0 when it cannot be computed)"
    )
    net_wealth: Decimal
    as_of: date


class HealthPenaltyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    rule: HealthRule
    points: int
    ratio: Decimal
    message: str


class HealthReportResponse(BaseModel):
    """
    Health score with the rules that reduced it.

    rating: "good" above 70, "fair" above 40, otherwise "poor".
    """

    model_config = ConfigDict(from_attributes=True)

    score: float = Field(..., ge=0, le=100)
    rating: HealthRating
    penalties: list[HealthPenaltyResponse]


class ProjectionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    years: int
    annual_rate_pct: Decimal
    starting_value: Decimal
    projected_value: Decimal


class AnalysisReportResponse(BaseModel):
    """Analysis findings; projection is null when the portfolio is too small."""

    model_config = ConfigDict(from_attributes=True)

    net_wealth: Decimal
    xirr_pct: Decimal
    health: HealthReportResponse
    is_too_small: bool
    findings: list[str]
    projection: ProjectionResponse | None = None
