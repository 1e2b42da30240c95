# backend/wealthvault/services/analytics/types.py
"""
Data types for the Analytics Service.

All types use Decimal for financial values, except the solver's
internal float arithmetic which never leaves returns.py.

Architecture:
    - CashFlow: Money in/out of the portfolio, dated
    - HealthPenalty: One triggered health-score rule
    - HealthReport: Score, penalties and rating band
    - GoalProgress: Progress of one savings goal
    - Projection: Future value at the current money-weighted return
    - AnalysisReport: Findings plus projection (or "too small")
    - DashboardSummary: Headline figures for the dashboard
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum


class HealthRating(str, Enum):
    """Rating band derived from the health score."""
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class HealthRule(str, Enum):
    """Identifies the rule that produced a penalty."""
    CONCENTRATION = "concentration"
    CONCENTRATION_CRITICAL = "concentration_critical"
    DIVERSIFICATION = "diversification"
    LOW_CASH = "low_cash"
    HIGH_CASH = "high_cash"
    DEBT = "debt"
    DEBT_CRITICAL = "debt_critical"
    VOLATILITY = "volatility"


# =============================================================================
# INPUT TYPES
# =============================================================================

@dataclass(frozen=True)
class CashFlow:
    """
    A dated cash flow for XIRR.

    Attributes:
        date: When the cash flow occurred
        amount: Negative = money invested, Positive = money returned

    Note:
        The current net wealth is appended as a final positive flow,
        as if the portfolio were liquidated on the valuation date.
    """
    date: date
    amount: Decimal


# =============================================================================
# HEALTH SCORE
# =============================================================================

@dataclass(frozen=True)
class HealthPenalty:
    """
    A triggered health rule.

    Attributes:
        rule: Which rule fired
        points: Points deducted from the score
        ratio: The observed ratio (or category count for diversification)
        message: Human-readable explanation
    """
    rule: HealthRule
    points: int
    ratio: Decimal
    message: str


@dataclass(frozen=True)
class HealthReport:
    score: float
    rating: HealthRating
    penalties: tuple[HealthPenalty, ...] = ()

    @property
    def total_penalty(self) -> int:
        return sum(p.points for p in self.penalties)


# =============================================================================
# GOALS
# =============================================================================

@dataclass(frozen=True)
class GoalProgress:
    """
    Progress of a savings goal against the current snapshot.

    Attributes:
        goal_id: Goal identifier
        name: Goal name
        target_amount: Amount to reach
        current_amount: Linked asset value, or net wealth when unlinked
        progress_pct: current / target x 100, capped at 100
        remaining_amount: target - current (negative once exceeded)
        linked_asset_ids: Asset ids that count towards the goal
    """
    goal_id: int
    name: str
    target_amount: Decimal
    current_amount: Decimal
    progress_pct: Decimal
    remaining_amount: Decimal
    linked_asset_ids: tuple[int, ...] = ()

    @property
    def is_complete(self) -> bool:
        return self.current_amount >= self.target_amount > 0


# =============================================================================
# REPORTS
# =============================================================================

@dataclass(frozen=True)
class Projection:
    """Net wealth compounded at the current XIRR."""
    years: int
    annual_rate_pct: Decimal
    starting_value: Decimal
    projected_value: Decimal


@dataclass(frozen=True)
class AnalysisReport:
    """
    Portfolio analysis.

    When is_too_small is set the portfolio is below the analysis
    threshold and findings/projection are empty.
    """
    net_wealth: Decimal
    xirr_pct: Decimal
    health: HealthReport
    is_too_small: bool = False
    findings: tuple[str, ...] = ()
    projection: Projection | None = None


@dataclass(frozen=True)
class DashboardSummary:
    """Headline figures, all derived from one snapshot."""
    net_wealth: Decimal
    total_assets: Decimal
    total_liabilities: Decimal
    total_cost: Decimal
    total_pnl: Decimal
    total_pnl_pct: Decimal
    total_income: Decimal
    xirr_pct: Decimal
    health_score: float
    asset_count: int = 0
    as_of: date = field(default_factory=date.today)
