# backend/wealthvault/services/analytics/__init__.py
"""
Analytics Service Package.

This package provides portfolio analytics:
- Money-weighted return (XIRR) and wealth projection
- Rule-based portfolio health score
- Savings goal progress
- Analysis report and dashboard summary

Architecture:
    analytics/
    ├── __init__.py              # This file - package exports
    ├── types.py                 # Data classes for results
    ├── returns.py               # Cash flows, XIRR solver, projection
    ├── health.py                # HealthScorer
    ├── goals.py                 # GoalProgressCalculator
    └── service.py               # AnalyticsService (orchestrator)

Usage:
    from wealthvault.services.analytics import AnalyticsService

    service = AnalyticsService()
    summary = service.get_summary(db)
    print(f"XIRR: {summary.xirr_pct}%  Health: {summary.health_score}")

Data Flow:
    ValuationService.get_snapshot()
        ↓
    PortfolioSnapshot
        ↓
    ┌─────────────────────────────────────────┐
    │           AnalyticsService              │
    │  • XIRR (ledger + net wealth)           │
    │  • HealthScorer (snapshot)              │
    │  • GoalProgressCalculator (goals)       │
    └─────────────────────────────────────────┘
        ↓
    AnalysisReport / DashboardSummary
"""

from wealthvault.services.analytics.goals import GoalProgressCalculator
from wealthvault.services.analytics.health import HealthScorer, rating_for
from wealthvault.services.analytics.returns import (
    build_cash_flows,
    calculate_portfolio_xirr,
    calculate_xirr,
    project_future_value,
)
from wealthvault.services.analytics.service import AnalyticsService
from wealthvault.services.analytics.types import (
    AnalysisReport,
    CashFlow,
    DashboardSummary,
    GoalProgress,
    HealthPenalty,
    HealthRating,
    HealthReport,
    HealthRule,
    Projection,
)

__all__ = [
    # Service
    "AnalyticsService",

    # Calculators
    "HealthScorer",
    "GoalProgressCalculator",

    # Functions
    "build_cash_flows",
    "calculate_xirr",
    "calculate_portfolio_xirr",
    "project_future_value",
    "rating_for",

    # Types
    "CashFlow",
    "HealthRule",
    "HealthRating",
    "HealthPenalty",
    "HealthReport",
    "GoalProgress",
    "Projection",
    "AnalysisReport",
    "DashboardSummary",
]
