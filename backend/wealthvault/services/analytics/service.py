# backend/wealthvault/services/analytics/service.py
"""
Analytics Service orchestrator.

This is the main entry point for portfolio analytics. It:
1. Gets a PortfolioSnapshot from ValuationService
2. Builds cash flows from the ledger
3. Delegates to the XIRR solver, health scorer and goal calculator
4. Aggregates results into reports and the dashboard summary

Nothing is cached: every call re-reads the ledger once and recomputes;
the snapshot and the XIRR cash flows come from that same read.

Architecture:
    AnalyticsService
        ├── uses → ValuationService (snapshot)
        ├── uses → returns.py (XIRR, projection)
        ├── uses → HealthScorer
        └── uses → GoalProgressCalculator

Usage:
    from wealthvault.services.analytics import AnalyticsService

    service = AnalyticsService()
    summary = service.get_summary(db)
    report = service.get_report(db)
"""

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from wealthvault.config import settings
from wealthvault.services.analytics.goals import GoalProgressCalculator
from wealthvault.services.analytics.health import HealthScorer
from wealthvault.services.analytics.returns import (
    calculate_portfolio_xirr,
    project_future_value,
)
from wealthvault.services.analytics.types import (
    AnalysisReport,
    DashboardSummary,
    GoalProgress,
    HealthReport,
    Projection,
)
from wealthvault.services.protocols import ValuationServiceProtocol
from wealthvault.services.store import RecordStore
from wealthvault.services.valuation.types import PortfolioSnapshot, TransactionRecord

logger = logging.getLogger(__name__)

ALL_CHECKS_PASSED = "All health checks passed"


class AnalyticsService:
    """
    Portfolio analytics over the current ledger.

    Args:
        valuation_service: Snapshot provider (default: ValuationService)
        projection_years: Horizon of the report projection
        min_analysis_wealth: Net wealth below which the report is skipped
    """

    def __init__(
            self,
            valuation_service: ValuationServiceProtocol | None = None,
            projection_years: int | None = None,
            min_analysis_wealth: float | None = None,
    ) -> None:
        if valuation_service is None:
            from wealthvault.services.valuation.service import ValuationService
            valuation_service = ValuationService()

        self._valuation_service = valuation_service
        self._health_scorer = HealthScorer()
        self._goal_calc = GoalProgressCalculator()
        self._projection_years = (
            projection_years if projection_years is not None else settings.projection_years
        )
        self._min_analysis_wealth = Decimal(str(
            min_analysis_wealth if min_analysis_wealth is not None else settings.min_analysis_wealth
        ))

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def get_xirr(self, db: Session, as_of: date | None = None) -> Decimal:
        """Portfolio XIRR as a percentage (0 when it cannot be computed)."""
        snapshot, transactions = self._valuation_service.get_snapshot_with_transactions(db)
        return calculate_portfolio_xirr(transactions, snapshot.net_wealth, as_of)

    def get_health(self, db: Session) -> HealthReport:
        snapshot = self._valuation_service.get_snapshot(db)
        return self._health_scorer.calculate(snapshot)

    def get_goal_progress(self, db: Session) -> list[GoalProgress]:
        snapshot = self._valuation_service.get_snapshot(db)
        goals = RecordStore(db).get_all("goals")
        return self._goal_calc.calculate(goals, snapshot)

    def get_report(self, db: Session, as_of: date | None = None) -> AnalysisReport:
        snapshot, transactions = self._valuation_service.get_snapshot_with_transactions(db)
        return self.build_report(snapshot, transactions, as_of)

    def get_summary(self, db: Session, as_of: date | None = None) -> DashboardSummary:
        snapshot, transactions = self._valuation_service.get_snapshot_with_transactions(db)
        return self.build_summary(snapshot, transactions, as_of)

    # =========================================================================
    # PURE BUILDERS (no database access)
    # =========================================================================

    def build_report(
            self,
            snapshot: PortfolioSnapshot,
            transactions: list[TransactionRecord],
            as_of: date | None = None,
    ) -> AnalysisReport:
        """
        Analysis findings and projection for a snapshot.

        Portfolios below min_analysis_wealth get a "too small" report
        with no findings and no projection.
        """
        net_wealth = snapshot.net_wealth
        xirr_pct = calculate_portfolio_xirr(transactions, net_wealth, as_of)
        health = self._health_scorer.calculate(snapshot)

        if net_wealth < self._min_analysis_wealth:
            logger.info(
                f"Net wealth {net_wealth} below {self._min_analysis_wealth}, "
                f"skipping deep analysis"
            )
            return AnalysisReport(
                net_wealth=net_wealth,
                xirr_pct=xirr_pct,
                health=health,
                is_too_small=True,
            )

        findings = tuple(p.message for p in health.penalties) or (ALL_CHECKS_PASSED,)

        projection = Projection(
            years=self._projection_years,
            annual_rate_pct=xirr_pct,
            starting_value=net_wealth,
            projected_value=project_future_value(net_wealth, xirr_pct, self._projection_years),
        )

        return AnalysisReport(
            net_wealth=net_wealth,
            xirr_pct=xirr_pct,
            health=health,
            findings=findings,
            projection=projection,
        )

    def build_summary(
            self,
            snapshot: PortfolioSnapshot,
            transactions: list[TransactionRecord],
            as_of: date | None = None,
    ) -> DashboardSummary:
        as_of = as_of or date.today()
        health = self._health_scorer.calculate(snapshot)

        return DashboardSummary(
            net_wealth=snapshot.net_wealth,
            total_assets=snapshot.total_asset_value,
            total_liabilities=snapshot.total_liability_value,
            total_cost=snapshot.total_cost,
            total_pnl=snapshot.total_pnl,
            total_pnl_pct=snapshot.total_pnl_pct,
            total_income=snapshot.total_income,
            xirr_pct=calculate_portfolio_xirr(transactions, snapshot.net_wealth, as_of),
            health_score=health.score,
            asset_count=len(snapshot.lines),
            as_of=as_of,
        )
