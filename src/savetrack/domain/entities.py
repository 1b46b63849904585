"""Domain model entities for savetrack.

These are pure data classes representing business concepts, independent of
database schema. Monetary fields are always Decimal.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class GoalStatus(str, Enum):
    """Lifecycle status of a savings goal."""

    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TrendDirection(str, Enum):
    """Direction of recent savings velocity compared to older samples."""

    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


class GoalTrackStatus(str, Enum):
    """Schedule classification of an active goal."""

    ON_TRACK = "on_track"
    BEHIND = "behind"
    AHEAD = "ahead"


@dataclass(frozen=True)
class Account:
    """Financial account that a goal mirrors."""

    id: int
    user_id: str
    name: str
    balance: Decimal
    created_at: datetime


@dataclass(frozen=True)
class SavingsGoal:
    """Savings goal domain entity."""

    id: int
    user_id: str
    account_id: int
    name: str
    target_amount: Decimal
    current_amount: Decimal
    initial_balance: Decimal
    target_date: date
    priority: int
    status: GoalStatus
    created_at: datetime
    updated_at: datetime
    description: Optional[str] = None
    category_id: Optional[int] = None

    @property
    def saved_amount(self) -> Decimal:
        """Amount saved since the goal was created."""
        return self.current_amount - self.initial_balance

    @property
    def is_active(self) -> bool:
        return self.status == GoalStatus.ACTIVE


@dataclass(frozen=True)
class GoalMilestone:
    """Percentage checkpoint of a goal's target."""

    id: int
    goal_id: int
    user_id: str
    percentage: int
    target_amount: Decimal
    is_achieved: bool
    notified: bool
    achieved_amount: Optional[Decimal] = None
    achieved_at: Optional[datetime] = None


@dataclass(frozen=True)
class GoalProgressHistory:
    """Immutable ledger entry written on each progress recalculation."""

    id: int
    goal_id: int
    user_id: str
    previous_amount: Decimal
    new_amount: Decimal
    change_amount: Decimal
    account_balance: Decimal
    progress_percentage: Decimal
    recorded_at: datetime
    transaction_id: Optional[str] = None


@dataclass(frozen=True)
class ProgressCalculation:
    """Outcome of a single progress recalculation."""

    goal_id: int
    previous_amount: Decimal
    new_amount: Decimal
    change_amount: Decimal
    progress_percentage: Decimal
    milestone_triggered: Optional[int] = None


@dataclass(frozen=True)
class SavingsRate:
    """Estimated savings velocity.

    Rates are kept at full Decimal precision; callers round for display.
    """

    daily_rate: Decimal
    weekly_rate: Decimal
    monthly_rate: Decimal
    average_rate: Decimal
    trend_direction: TrendDirection
    sample_size: int = 0


@dataclass(frozen=True)
class ProjectionPoint:
    """One 30-day step of a projected savings curve."""

    date: date
    projected_amount: Decimal
    monthly_target: Decimal


@dataclass(frozen=True)
class TimelineProjection:
    """Projected completion of a goal at its current velocity.

    projected_completion_date, days_to_complete and variance_in_days are None
    when the goal never completes at the current velocity.
    """

    goal_id: int
    current_amount: Decimal
    target_amount: Decimal
    target_date: date
    projected_completion_date: Optional[date]
    days_to_complete: Optional[int]
    average_monthly_savings: Decimal
    required_monthly_savings: Decimal
    is_on_track: bool
    variance_in_days: Optional[int]
    confidence_level: Decimal
    trend_direction: TrendDirection
    projection_data: tuple[ProjectionPoint, ...] = ()


@dataclass(frozen=True)
class GoalWithProgress:
    """Goal enriched with derived progress figures for dashboards."""

    goal: SavingsGoal
    account_name: str
    progress_percentage: Decimal
    remaining_amount: Decimal
    days_remaining: int
    is_on_track: bool
    track_status: GoalTrackStatus
    required_daily_savings: Decimal
    actual_daily_savings: Decimal
    milestones: tuple[GoalMilestone, ...] = ()


@dataclass(frozen=True)
class GoalProgressPoint:
    """History entry reduced to what a progress chart needs."""

    recorded_at: datetime
    amount: Decimal
    progress_percentage: Decimal
    change_amount: Decimal


@dataclass(frozen=True)
class GoalProgressReport:
    """Goal detail view: progress, history and projection."""

    goal: GoalWithProgress
    history: tuple[GoalProgressPoint, ...]
    projection: TimelineProjection


@dataclass(frozen=True)
class GoalAnalytics:
    """Portfolio-level rollup of a user's goals."""

    total_goals: int
    active_goals: int
    completed_goals: int
    total_target_amount: Decimal
    total_current_amount: Decimal
    average_progress: Decimal
    on_track_goals: int
    behind_goals: int
    ahead_goals: int
    upcoming_milestones: tuple[GoalMilestone, ...] = field(default_factory=tuple)
    recent_achievements: tuple[GoalMilestone, ...] = field(default_factory=tuple)
