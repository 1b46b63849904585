"""Portfolio analytics across a user's savings goals."""

import logging
from collections import Counter
from datetime import date
from typing import Optional

from savetrack.config import DEFAULT_SETTINGS, EngineSettings
from savetrack.database.base import Database
from savetrack.domain.entities import GoalAnalytics, GoalStatus, GoalTrackStatus
from savetrack.domain.rates import SavingsRateService
from savetrack.domain.tracking import classify_goal
from savetrack.utils.money import HUNDRED, ZERO, to_money

logger = logging.getLogger(__name__)

MILESTONE_LIST_LIMIT = 5


class AnalyticsService:
    """Service that rolls up all of a user's goals."""

    def __init__(self, db: Database, settings: EngineSettings = DEFAULT_SETTINGS):
        """Initialize analytics service.

        Args:
            db: Database instance
            settings: Engine settings
        """
        self.db = db
        self.settings = settings
        self.rates = SavingsRateService(db, settings)

    def get_goal_analytics(self, user_id: str, today: Optional[date] = None) -> GoalAnalytics:
        """Summarize a user's goals.

        Counts and totals cover every goal; the on-track/behind/ahead split
        covers active goals only. Upcoming milestones are the lowest
        unachieved percentages across all goals, not the closest in amount
        or time.

        Args:
            user_id: User to summarize
            today: Reference date, defaults to today

        Returns:
            GoalAnalytics rollup
        """
        today = today or date.today()
        goals = self.db.list_goals(user_id)

        total_target_amount = sum((g.target_amount for g in goals), ZERO)
        total_current_amount = sum((g.current_amount for g in goals), ZERO)
        if total_target_amount > 0:
            average_progress = total_current_amount / total_target_amount * HUNDRED
        else:
            average_progress = ZERO

        track_counts: Counter[GoalTrackStatus] = Counter()
        for goal in goals:
            if not goal.is_active:
                continue
            savings_rate = self.rates.calculate_savings_rate(goal.id)
            track_counts[
                classify_goal(
                    goal.current_amount,
                    goal.target_amount,
                    goal.target_date,
                    savings_rate.daily_rate,
                    self.settings,
                    today,
                )
            ] += 1

        logger.debug("Computed analytics for user %s over %d goals", user_id, len(goals))
        return GoalAnalytics(
            total_goals=len(goals),
            active_goals=sum(1 for g in goals if g.status == GoalStatus.ACTIVE),
            completed_goals=sum(1 for g in goals if g.status == GoalStatus.COMPLETED),
            total_target_amount=to_money(total_target_amount),
            total_current_amount=to_money(total_current_amount),
            average_progress=to_money(average_progress),
            on_track_goals=track_counts[GoalTrackStatus.ON_TRACK],
            behind_goals=track_counts[GoalTrackStatus.BEHIND],
            ahead_goals=track_counts[GoalTrackStatus.AHEAD],
            upcoming_milestones=tuple(
                self.db.list_user_milestones(user_id, achieved=False, limit=MILESTONE_LIST_LIMIT)
            ),
            recent_achievements=tuple(
                self.db.list_user_milestones(user_id, achieved=True, limit=MILESTONE_LIST_LIMIT)
            ),
        )
