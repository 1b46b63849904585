"""Milestone domain service."""

import logging
from datetime import datetime, UTC
from decimal import Decimal
from typing import Optional, Sequence

from savetrack.database.base import Database
from savetrack.domain.entities import GoalMilestone
from savetrack.utils.money import HUNDRED

logger = logging.getLogger(__name__)


def milestone_target_amount(target_amount: Decimal, percentage: int) -> Decimal:
    """Amount a milestone stands for: percentage of the goal target."""
    return target_amount * percentage / HUNDRED


class MilestoneService:
    """Service for creating and evaluating goal milestones."""

    def __init__(self, db: Database):
        """Initialize milestone service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_milestones(
        self, goal_id: int, user_id: str, target_amount: Decimal, percentages: Sequence[int]
    ) -> list[int]:
        """Create one milestone per percentage. Returns milestone IDs."""
        return [
            self.db.create_milestone(
                goal_id=goal_id,
                user_id=user_id,
                percentage=percentage,
                target_amount=milestone_target_amount(target_amount, percentage),
            )
            for percentage in sorted(percentages)
        ]

    def rewrite_target_amounts(self, goal_id: int, target_amount: Decimal) -> None:
        """Recompute milestone amounts after the goal target changed.

        Achievement flags and achieved amounts are left as they are.
        """
        for milestone in self.db.list_milestones(goal_id):
            self.db.update_milestone_target_amount(
                goal_id, milestone.percentage, milestone_target_amount(target_amount, milestone.percentage)
            )

    def check_milestone_achievements(
        self, goal_id: int, current_amount: Decimal, target_amount: Decimal
    ) -> Optional[int]:
        """Flag the lowest unachieved milestone that current_amount has crossed.

        Only one milestone is flagged per call, even when a single jump
        crosses several thresholds; calling again flags the next one.

        Args:
            goal_id: Goal ID
            current_amount: Current goal amount
            target_amount: Goal target amount

        Returns:
            Percentage of the milestone just achieved, or None
        """
        if target_amount <= 0:
            return None

        current_progress = current_amount / target_amount * HUNDRED
        crossed = [
            m
            for m in self.db.list_milestones(goal_id, achieved=False)
            if m.percentage <= current_progress
        ]
        if not crossed:
            return None

        milestone = crossed[0]
        self.db.mark_milestone_achieved(
            milestone.id, achieved_amount=current_amount, achieved_at=datetime.now(UTC)
        )
        logger.info("Goal %s reached its %s%% milestone", goal_id, milestone.percentage)
        return milestone.percentage

    def next_milestone(self, goal_id: int) -> Optional[GoalMilestone]:
        """Lowest milestone of the goal that is not yet achieved."""
        pending = self.db.list_milestones(goal_id, achieved=False)
        return pending[0] if pending else None

    @staticmethod
    def celebration_message(percentage: int) -> str:
        """User-facing message for a newly achieved milestone."""
        return f"Congratulations! You've reached {percentage}% of your goal!"
