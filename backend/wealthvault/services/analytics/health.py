# backend/wealthvault/services/analytics/health.py
"""
Portfolio health score.

Starts at 100 and deducts points for each rule that fires:

    Rule              Ratio                          Threshold     Points
    ----------------  -----------------------------  ------------  ------
    Concentration     largest asset / total assets   > 0.5, > 0.8  20 + 20
    Diversification   distinct asset categories      < 3           15
    Cash buffer       CASH value / total assets      < 0.05        10
                                                     > 0.40        10
    Debt load         liabilities / total assets     > 0.5, > 0.8  20 + 20
    Volatility        CRYPTO value / total assets    > 0.25        5

The score is clamped at 0, and is 0 outright when total asset value is 0.
"""

import logging
from decimal import Decimal

from wealthvault.models import AssetCategory
from wealthvault.services.analytics.types import (
    HealthPenalty,
    HealthRating,
    HealthReport,
    HealthRule,
)
from wealthvault.services.constants import (
    CASH_MAX_RATIO,
    CASH_MIN_RATIO,
    CASH_PENALTY,
    CONCENTRATION_CRITICAL_RATIO,
    CONCENTRATION_PENALTY,
    CONCENTRATION_WARNING_RATIO,
    CRYPTO_MAX_RATIO,
    CRYPTO_PENALTY,
    DEBT_CRITICAL_RATIO,
    DEBT_PENALTY,
    DEBT_WARNING_RATIO,
    DIVERSIFICATION_PENALTY,
    HEALTH_FAIR_THRESHOLD,
    HEALTH_GOOD_THRESHOLD,
    HEALTH_MAX_SCORE,
    MIN_DISTINCT_CATEGORIES,
    ZERO,
)
from wealthvault.services.valuation.types import PortfolioSnapshot

logger = logging.getLogger(__name__)


def rating_for(score: float) -> HealthRating:
    if score > HEALTH_GOOD_THRESHOLD:
        return HealthRating.GOOD
    if score > HEALTH_FAIR_THRESHOLD:
        return HealthRating.FAIR
    return HealthRating.POOR


class HealthScorer:
    """
    Rule-based health score over a PortfolioSnapshot.

    Stateless; every call evaluates the snapshot from scratch.
    """

    def calculate(self, snapshot: PortfolioSnapshot) -> HealthReport:
        total_assets = snapshot.total_asset_value

        if total_assets <= ZERO:
            return HealthReport(score=0.0, rating=HealthRating.POOR)

        penalties: list[HealthPenalty] = []
        penalties.extend(self._concentration(snapshot, total_assets))
        penalties.extend(self._diversification(snapshot))
        penalties.extend(self._cash_buffer(snapshot, total_assets))
        penalties.extend(self._debt_load(snapshot, total_assets))
        penalties.extend(self._volatility(snapshot, total_assets))

        score = float(max(0, HEALTH_MAX_SCORE - sum(p.points for p in penalties)))

        logger.debug(f"Health score {score} with {len(penalties)} penalties")

        return HealthReport(
            score=score,
            rating=rating_for(score),
            penalties=tuple(penalties),
        )

    # =========================================================================
    # RULES
    # =========================================================================

    def _concentration(self, snapshot: PortfolioSnapshot, total_assets: Decimal) -> list[HealthPenalty]:
        largest = max(line.current_value for line in snapshot.asset_lines)
        ratio = largest / total_assets

        penalties = []
        if ratio > CONCENTRATION_WARNING_RATIO:
            penalties.append(HealthPenalty(
                rule=HealthRule.CONCENTRATION,
                points=CONCENTRATION_PENALTY,
                ratio=ratio,
                message=f"Largest holding is {ratio:.0%} of assets",
            ))
        if ratio > CONCENTRATION_CRITICAL_RATIO:
            penalties.append(HealthPenalty(
                rule=HealthRule.CONCENTRATION_CRITICAL,
                points=CONCENTRATION_PENALTY,
                ratio=ratio,
                message="Portfolio is dominated by a single holding",
            ))
        return penalties

    def _diversification(self, snapshot: PortfolioSnapshot) -> list[HealthPenalty]:
        categories = {line.category for line in snapshot.asset_lines}
        if len(categories) >= MIN_DISTINCT_CATEGORIES:
            return []
        return [HealthPenalty(
            rule=HealthRule.DIVERSIFICATION,
            points=DIVERSIFICATION_PENALTY,
            ratio=Decimal(len(categories)),
            message=f"Only {len(categories)} asset categories held (fewer than {MIN_DISTINCT_CATEGORIES})",
        )]

    def _cash_buffer(self, snapshot: PortfolioSnapshot, total_assets: Decimal) -> list[HealthPenalty]:
        # All CASH holdings count towards the buffer, not just the first one
        cash = sum(
            (line.current_value for line in snapshot.asset_lines if line.category == AssetCategory.CASH),
            ZERO,
        )
        ratio = cash / total_assets

        if ratio < CASH_MIN_RATIO:
            return [HealthPenalty(
                rule=HealthRule.LOW_CASH,
                points=CASH_PENALTY,
                ratio=ratio,
                message=f"Cash is {ratio:.1%} of assets; emergency buffer is thin",
            )]
        if ratio > CASH_MAX_RATIO:
            return [HealthPenalty(
                rule=HealthRule.HIGH_CASH,
                points=CASH_PENALTY,
                ratio=ratio,
                message=f"Cash is {ratio:.1%} of assets; idle cash drags returns",
            )]
        return []

    def _debt_load(self, snapshot: PortfolioSnapshot, total_assets: Decimal) -> list[HealthPenalty]:
        ratio = snapshot.total_liability_value / total_assets

        penalties = []
        if ratio > DEBT_WARNING_RATIO:
            penalties.append(HealthPenalty(
                rule=HealthRule.DEBT,
                points=DEBT_PENALTY,
                ratio=ratio,
                message=f"Debt is {ratio:.0%} of assets",
            ))
        if ratio > DEBT_CRITICAL_RATIO:
            penalties.append(HealthPenalty(
                rule=HealthRule.DEBT_CRITICAL,
                points=DEBT_PENALTY,
                ratio=ratio,
                message="Debt is close to exceeding assets",
            ))
        return penalties

    def _volatility(self, snapshot: PortfolioSnapshot, total_assets: Decimal) -> list[HealthPenalty]:
        crypto = sum(
            (line.current_value for line in snapshot.asset_lines if line.category == AssetCategory.CRYPTO),
            ZERO,
        )
        ratio = crypto / total_assets
        if ratio <= CRYPTO_MAX_RATIO:
            return []
        return [HealthPenalty(
            rule=HealthRule.VOLATILITY,
            points=CRYPTO_PENALTY,
            ratio=ratio,
            message=f"Crypto is {ratio:.0%} of assets",
        )]
