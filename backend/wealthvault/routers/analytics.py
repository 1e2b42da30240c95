# backend/wealthvault/routers/analytics.py
"""
Analytics endpoints.

- GET /analytics/xirr     Money-weighted annual return (percent)
- GET /analytics/health   Health score with triggered rules
- GET /analytics/goals    Progress of every savings goal
- GET /analytics/report   Findings and wealth projection
"""

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from wealthvault.database import get_db
from wealthvault.dependencies import get_analytics_service
from wealthvault.schemas.analytics import (
    AnalysisReportResponse,
    HealthReportResponse,
    XirrResponse,
)
from wealthvault.schemas.goals import GoalProgressResponse
from wealthvault.services.analytics.service import AnalyticsService

router = APIRouter(
    prefix="/analytics",
    tags=["Analytics"],
)


@router.get("/xirr", response_model=XirrResponse, summary="Portfolio XIRR")
def get_xirr(
        as_of: date | None = Query(default=None, description="Valuation date (default today)"),
        db: Session = Depends(get_db),
        service: AnalyticsService = Depends(get_analytics_service),
) -> XirrResponse:
    """
    XIRR over every ledger entry plus current net wealth as the final flow.

    Returns 0 when there is not enough data or the solver does not converge.
    """
    as_of = as_of or date.today()
    summary = service.get_summary(db, as_of)
    return XirrResponse(xirr_pct=summary.xirr_pct, net_wealth=summary.net_wealth, as_of=as_of)


@router.get("/health", response_model=HealthReportResponse, summary="Portfolio health score")
def get_health(
        db: Session = Depends(get_db),
        service: AnalyticsService = Depends(get_analytics_service),
) -> HealthReportResponse:
    return HealthReportResponse.model_validate(service.get_health(db))


@router.get("/goals", response_model=list[GoalProgressResponse], summary="Goal progress")
def get_goal_progress(
        db: Session = Depends(get_db),
        service: AnalyticsService = Depends(get_analytics_service),
) -> list[GoalProgressResponse]:
    return [GoalProgressResponse.model_validate(g) for g in service.get_goal_progress(db)]


@router.get("/report", response_model=AnalysisReportResponse, summary="Analysis report")
def get_report(
        as_of: date | None = Query(default=None, description="Valuation date (default today)"),
        db: Session = Depends(get_db),
        service: AnalyticsService = Depends(get_analytics_service),
) -> AnalysisReportResponse:
    """
    Health findings plus a projection of net wealth at the current XIRR.

    Portfolios below MIN_ANALYSIS_WEALTH get is_too_small=true and no projection.
    """
    return AnalysisReportResponse.model_validate(service.get_report(db, as_of))
