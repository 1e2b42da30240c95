# backend/wealthvault/routers/portfolio.py
"""
Portfolio read endpoints.

All figures are recomputed from the ledger on every request:
- GET /portfolio/             Valued lines plus totals
- GET /portfolio/summary      Dashboard headline figures
- GET /portfolio/history      Monthly cumulative invested capital
- GET /portfolio/allocation   Category breakdown and target drift
"""

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from wealthvault.database import get_db
from wealthvault.dependencies import get_analytics_service, get_valuation_service
from wealthvault.schemas.portfolio import (
    AllocationDriftResponse,
    AllocationResponse,
    AllocationSliceResponse,
    HistoryPointResponse,
    PortfolioResponse,
    PortfolioSummaryResponse,
)
from wealthvault.services.analytics.service import AnalyticsService
from wealthvault.services.valuation.service import ValuationService

router = APIRouter(
    prefix="/portfolio",
    tags=["Portfolio"],
)


@router.get(
    "/",
    response_model=PortfolioResponse,
    summary="Current portfolio valuation",
)
def get_portfolio(
        db: Session = Depends(get_db),
        service: ValuationService = Depends(get_valuation_service),
) -> PortfolioResponse:
    """
    One line per asset, in creation order, with liabilities interleaved.

    Liability lines keep a positive current_value; net_wealth subtracts them.
    """
    return PortfolioResponse.from_snapshot(service.get_snapshot(db))


@router.get(
    "/summary",
    response_model=PortfolioSummaryResponse,
    summary="Dashboard summary",
)
def get_summary(
        as_of: date | None = Query(default=None, description="Valuation date for XIRR (default today)"),
        db: Session = Depends(get_db),
        service: AnalyticsService = Depends(get_analytics_service),
) -> PortfolioSummaryResponse:
    return PortfolioSummaryResponse.model_validate(service.get_summary(db, as_of))


@router.get(
    "/history",
    response_model=list[HistoryPointResponse],
    summary="Monthly invested capital",
)
def get_history(
        db: Session = Depends(get_db),
        service: ValuationService = Depends(get_valuation_service),
) -> list[HistoryPointResponse]:
    """
    Cumulative BUY minus SELL amounts, one point per month with activity.

    This approximates the wealth chart: there is no historical price data.
    """
    return [HistoryPointResponse.model_validate(p) for p in service.get_history(db)]


@router.get(
    "/allocation",
    response_model=AllocationResponse,
    summary="Allocation by category and drift from target",
)
def get_allocation(
        include_liabilities: bool = Query(default=False, description="Include DEBT in the breakdown"),
        db: Session = Depends(get_db),
        service: ValuationService = Depends(get_valuation_service),
) -> AllocationResponse:
    slices, drift = service.get_allocation(db, include_liabilities=include_liabilities)
    return AllocationResponse(
        categories=[AllocationSliceResponse.model_validate(s) for s in slices],
        drift=[AllocationDriftResponse.model_validate(d) for d in drift],
    )
