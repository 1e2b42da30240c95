# backend/wealthvault/services/analytics/goals.py
"""
Goal progress against a PortfolioSnapshot.

A goal with linked assets tracks the summed current value of those
assets; a goal without links tracks total net wealth. Linked ids that
no longer exist in the snapshot are skipped.
"""

import logging
from collections.abc import Iterable

from wealthvault.services.analytics.types import GoalProgress
from wealthvault.services.constants import GOAL_MAX_PROGRESS, HUNDRED, ZERO
from wealthvault.services.valuation.types import GoalRecord, PortfolioSnapshot

logger = logging.getLogger(__name__)


class GoalProgressCalculator:

    def calculate(
            self,
            goals: Iterable[GoalRecord],
            snapshot: PortfolioSnapshot,
    ) -> list[GoalProgress]:
        """Progress for every goal, in input order."""
        return [self.progress_of(goal, snapshot) for goal in goals]

    def progress_of(self, goal: GoalRecord, snapshot: PortfolioSnapshot) -> GoalProgress:
        if goal.linked_asset_ids:
            current = ZERO
            for asset_id in goal.linked_asset_ids:
                line = snapshot.get_line(asset_id)
                if line is None:
                    logger.debug(f"Goal {goal.id} links missing asset {asset_id}, skipping")
                    continue
                current += line.current_value
        else:
            current = snapshot.net_wealth

        if goal.target_amount <= ZERO:
            logger.warning(f"Goal {goal.id} has non-positive target {goal.target_amount}")
            progress = ZERO
        else:
            progress = min(GOAL_MAX_PROGRESS, current / goal.target_amount * HUNDRED)

        return GoalProgress(
            goal_id=goal.id,
            name=goal.name,
            target_amount=goal.target_amount,
            current_amount=current,
            progress_pct=progress,
            remaining_amount=goal.target_amount - current,
            linked_asset_ids=goal.linked_asset_ids,
        )
