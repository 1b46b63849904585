"""Timeline projection of savings goals."""

from datetime import date, timedelta
from decimal import Decimal
from typing import Optional

from savetrack.config import (
    BASE_CONFIDENCE,
    CONSISTENCY_WEIGHT,
    DAYS_PER_MONTH,
    DECREASING_CONFIDENCE_PENALTY,
    DEFAULT_SETTINGS,
    INCREASING_CONFIDENCE_BONUS,
    EngineSettings,
)
from savetrack.database.base import Database
from savetrack.domain.entities import (
    ProjectionPoint,
    SavingsGoal,
    SavingsRate,
    TimelineProjection,
    TrendDirection,
)
from savetrack.domain.errors import NotFoundError, goal_not_found
from savetrack.domain.rates import SavingsRateService
from savetrack.domain.tracking import days_to_complete, required_daily_savings
from savetrack.utils.date_parser import days_between
from savetrack.utils.money import HUNDRED, ZERO, clamp, to_money

ONE = Decimal("1")


def calculate_confidence_level(savings_rate: SavingsRate) -> Decimal:
    """Heuristic 0-100 score for how reliable a projection is.

    Starts at 50, moves with the trend, then rewards a daily rate that
    agrees with the per-entry average rate.
    """
    confidence = BASE_CONFIDENCE
    if savings_rate.trend_direction == TrendDirection.INCREASING:
        confidence += INCREASING_CONFIDENCE_BONUS
    elif savings_rate.trend_direction == TrendDirection.DECREASING:
        confidence -= DECREASING_CONFIDENCE_PENALTY

    consistency = abs(savings_rate.daily_rate - savings_rate.average_rate) / max(
        savings_rate.average_rate, ONE
    )
    confidence += (ONE - consistency) * CONSISTENCY_WEIGHT

    return to_money(clamp(confidence, ZERO, HUNDRED))


def build_projection_data(
    current_amount: Decimal,
    target_amount: Decimal,
    target_date: date,
    daily_rate: Decimal,
    step_days: int,
    today: date,
) -> tuple[ProjectionPoint, ...]:
    """Projected balance every step_days from today through the target date.

    Each point carries a straight-line target for comparison. A target date
    of today or earlier yields a single point for today.
    """
    days_to_target = days_between(today, target_date)
    if days_to_target <= 0:
        return (
            ProjectionPoint(
                date=today,
                projected_amount=to_money(min(current_amount, target_amount)),
                monthly_target=to_money(target_amount),
            ),
        )

    steps = -(-days_to_target // step_days)
    points = []
    for index in range(steps + 1):
        projected_amount = min(current_amount + daily_rate * step_days * index, target_amount)
        points.append(
            ProjectionPoint(
                date=today + timedelta(days=step_days * index),
                projected_amount=to_money(projected_amount),
                monthly_target=to_money(target_amount / steps * (index + 1)),
            )
        )
    return tuple(points)


def project_timeline(
    goal: SavingsGoal,
    savings_rate: SavingsRate,
    settings: EngineSettings = DEFAULT_SETTINGS,
    today: Optional[date] = None,
) -> TimelineProjection:
    """Extrapolate a goal's savings rate to a completion date.

    Without a positive daily rate there is no completion date and the goal
    is not on track, even when nothing is left to save.
    """
    today = today or date.today()
    remaining_amount = goal.target_amount - goal.current_amount

    days_needed = None
    if savings_rate.daily_rate > 0:
        days_needed = days_to_complete(remaining_amount, savings_rate.daily_rate)
        if days_needed > (date.max - today).days:
            days_needed = None

    if days_needed is None:
        projected_completion_date = None
        variance_in_days = None
        is_on_track = False
    else:
        projected_completion_date = today + timedelta(days=days_needed)
        variance_in_days = days_between(goal.target_date, projected_completion_date)
        is_on_track = variance_in_days <= 0

    required_daily = required_daily_savings(
        goal.current_amount, goal.target_amount, goal.target_date, today
    )

    return TimelineProjection(
        goal_id=goal.id,
        current_amount=goal.current_amount,
        target_amount=goal.target_amount,
        target_date=goal.target_date,
        projected_completion_date=projected_completion_date,
        days_to_complete=days_needed,
        average_monthly_savings=to_money(savings_rate.monthly_rate),
        required_monthly_savings=to_money(required_daily * DAYS_PER_MONTH),
        is_on_track=is_on_track,
        variance_in_days=variance_in_days,
        confidence_level=calculate_confidence_level(savings_rate),
        trend_direction=savings_rate.trend_direction,
        projection_data=build_projection_data(
            goal.current_amount,
            goal.target_amount,
            goal.target_date,
            savings_rate.daily_rate,
            settings.projection_step_days,
            today,
        ),
    )


class ProjectionService:
    """Service producing timeline projections for stored goals."""

    def __init__(self, db: Database, settings: EngineSettings = DEFAULT_SETTINGS):
        """Initialize projection service.

        Args:
            db: Database instance
            settings: Engine settings
        """
        self.db = db
        self.settings = settings
        self.rates = SavingsRateService(db, settings)

    def get_timeline_projection(
        self, goal_id: int, user_id: str, today: Optional[date] = None
    ) -> TimelineProjection:
        """Project when a goal completes at its estimated savings rate.

        Raises:
            NotFoundError: If the goal does not exist for this user
        """
        goal = self.db.get_goal(goal_id, user_id)
        if goal is None:
            raise NotFoundError(goal_not_found(goal_id))

        savings_rate = self.rates.calculate_savings_rate(goal_id)
        return project_timeline(goal, savings_rate, self.settings, today)
