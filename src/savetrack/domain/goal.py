"""Savings goal domain service."""

import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from savetrack.config import (
    DEFAULT_PRIORITY,
    DEFAULT_SETTINGS,
    MAX_GOAL_NAME_LENGTH,
    MAX_PRIORITY,
    MIN_PRIORITY,
    EngineSettings,
)
from savetrack.database.base import UPDATABLE_GOAL_FIELDS, Database
from savetrack.domain.entities import (
    GoalMilestone,
    GoalProgressHistory,
    GoalProgressPoint,
    GoalProgressReport,
    GoalStatus,
    GoalTrackStatus,
    GoalWithProgress,
    SavingsGoal,
    SavingsRate,
)
from savetrack.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    goal_not_found,
    milestone_not_found,
    unknown_goal_fields,
)
from savetrack.domain.milestone import MilestoneService
from savetrack.domain.projection import project_timeline
from savetrack.domain.rates import SavingsRateService
from savetrack.domain.tracking import classify_goal, required_daily_savings
from savetrack.utils.date_parser import days_between
from savetrack.utils.money import progress_percentage, to_money

logger = logging.getLogger(__name__)


def _validate_name(name: Any) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Goal name is required")
    name = name.strip()
    if len(name) > MAX_GOAL_NAME_LENGTH:
        raise ValidationError(f"Goal name must be under {MAX_GOAL_NAME_LENGTH} characters")
    return name


def _validate_target_amount(value: Any) -> Decimal:
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(f"Invalid target amount '{value}'")
    if not amount.is_finite() or amount <= 0:
        raise ValidationError("Target amount must be greater than 0")
    return amount


def _validate_target_date(value: Any, today: date) -> date:
    if not isinstance(value, date):
        raise ValidationError(f"Invalid target date '{value}'")
    if value <= today:
        raise ValidationError("Target date must be in the future")
    return value


def _validate_priority(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"Invalid priority '{value}'")
    if not MIN_PRIORITY <= value <= MAX_PRIORITY:
        raise ValidationError(f"Priority must be between {MIN_PRIORITY} and {MAX_PRIORITY}")
    return value


def _validate_status(value: Any) -> GoalStatus:
    try:
        return GoalStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in GoalStatus)
        raise ValidationError(f"Invalid status '{value}'. Expected one of: {allowed}")


class GoalService:
    """Service for managing savings goals and reading their progress."""

    def __init__(self, db: Database, settings: EngineSettings = DEFAULT_SETTINGS):
        """Initialize goal service.

        Args:
            db: Database instance
            settings: Engine settings
        """
        self.db = db
        self.settings = settings
        self.milestones = MilestoneService(db)
        self.rates = SavingsRateService(db, settings)

    def create_goal(
        self,
        user_id: str,
        account_id: int,
        name: str,
        target_amount: Decimal,
        target_date: date,
        description: Optional[str] = None,
        category_id: Optional[int] = None,
        priority: int = DEFAULT_PRIORITY,
    ) -> SavingsGoal:
        """Create a goal linked to one of the user's accounts.

        The account's current balance becomes both the goal's current amount
        and its initial balance. The standard milestones are created with the
        goal in the same transaction.

        Args:
            user_id: Owning user
            account_id: Linked account
            name: Goal name
            target_amount: Amount to reach, greater than 0
            target_date: Date to reach it by, in the future
            description: Optional description
            category_id: Optional category
            priority: 1 (lowest) to 10 (highest)

        Returns:
            The created goal

        Raises:
            ValidationError: If any field is invalid
            NotFoundError: If the account is not the user's
        """
        name = _validate_name(name)
        target_amount = _validate_target_amount(target_amount)
        target_date = _validate_target_date(target_date, date.today())
        priority = _validate_priority(priority)

        balance = self.db.get_account_balance(account_id, user_id)
        if balance is None:
            raise NotFoundError(account_not_found(account_id))

        with self.db.unit_of_work():
            goal_id = self.db.create_goal(
                user_id=user_id,
                account_id=account_id,
                name=name,
                description=description,
                category_id=category_id,
                target_amount=target_amount,
                current_amount=balance,
                initial_balance=balance,
                target_date=target_date,
                priority=priority,
                status=GoalStatus.ACTIVE.value,
            )
            self.milestones.create_milestones(
                goal_id, user_id, target_amount, self.settings.milestone_percentages
            )

        logger.info("Created goal %s '%s' for user %s", goal_id, name, user_id)
        return self.get_goal(user_id, goal_id)

    def update_goal(self, user_id: str, goal_id: int, **updates: Any) -> SavingsGoal:
        """Apply a partial update to a goal.

        Updatable fields: name, description, target_amount, target_date,
        category_id, priority, status. Changing target_amount rewrites the
        milestone amounts but leaves their achievement state alone; a
        milestone that a lower target has already crossed is only flagged by
        the next progress recalculation.

        Raises:
            ValidationError: If a field is unknown or invalid
            NotFoundError: If the goal is not the user's
        """
        unknown = [key for key in updates if key not in UPDATABLE_GOAL_FIELDS]
        if unknown:
            raise ValidationError(unknown_goal_fields(unknown))

        fields: dict[str, Any] = dict(updates)
        if "name" in fields:
            fields["name"] = _validate_name(fields["name"])
        if "target_amount" in fields:
            fields["target_amount"] = _validate_target_amount(fields["target_amount"])
        if "target_date" in fields:
            fields["target_date"] = _validate_target_date(fields["target_date"], date.today())
        if "priority" in fields:
            fields["priority"] = _validate_priority(fields["priority"])
        if "status" in fields:
            fields["status"] = _validate_status(fields["status"]).value

        with self.db.unit_of_work(goal_id):
            if not self.db.update_goal(goal_id, user_id, fields):
                raise NotFoundError(goal_not_found(goal_id))
            if "target_amount" in fields:
                self.milestones.rewrite_target_amounts(goal_id, fields["target_amount"])

        logger.info("Updated goal %s: %s", goal_id, ", ".join(sorted(fields)))
        return self.get_goal(user_id, goal_id)

    def delete_goal(self, user_id: str, goal_id: int) -> None:
        """Delete a goal together with its milestones and history.

        Raises:
            NotFoundError: If the goal is not the user's
        """
        if not self.db.delete_goal(goal_id, user_id):
            raise NotFoundError(goal_not_found(goal_id))
        logger.info("Deleted goal %s", goal_id)

    def get_goal(self, user_id: str, goal_id: int) -> SavingsGoal:
        """Get a goal.

        Raises:
            NotFoundError: If the goal is not the user's
        """
        goal = self.db.get_goal(goal_id, user_id)
        if goal is None:
            raise NotFoundError(goal_not_found(goal_id))
        return goal

    def list_milestones(self, user_id: str, goal_id: int) -> list[GoalMilestone]:
        """A goal's milestones, lowest percentage first."""
        self.get_goal(user_id, goal_id)
        return self.db.list_milestones(goal_id)

    def get_progress_history(
        self, user_id: str, goal_id: int, limit: Optional[int] = None
    ) -> list[GoalProgressHistory]:
        """A goal's progress history, newest first."""
        self.get_goal(user_id, goal_id)
        return self.db.list_progress_history(goal_id, limit=limit)

    def mark_milestone_notified(self, user_id: str, milestone_id: int) -> GoalMilestone:
        """Acknowledge that the achievement alert for a milestone was sent.

        Raises:
            NotFoundError: If the milestone is not the user's
        """
        milestone = self.db.get_milestone(milestone_id, user_id)
        if milestone is None:
            raise NotFoundError(milestone_not_found(milestone_id))
        if not milestone.notified:
            self.db.mark_milestone_notified(milestone_id)
        return self.db.get_milestone(milestone_id, user_id)

    def get_user_goals(self, user_id: str, today: Optional[date] = None) -> list[GoalWithProgress]:
        """All of a user's goals with derived progress, highest priority first."""
        today = today or date.today()
        account_names = {acc.id: acc.name for acc in self.db.list_accounts(user_id)}
        return [
            self._with_progress(
                goal,
                account_names.get(goal.account_id, ""),
                self.rates.calculate_savings_rate(goal.id),
                today,
            )
            for goal in self.db.list_goals(user_id)
        ]

    def get_goal_progress(
        self, user_id: str, goal_id: int, today: Optional[date] = None
    ) -> GoalProgressReport:
        """Detail view of one goal: derived progress, history and projection.

        History points are ordered oldest first for charting.
        """
        today = today or date.today()
        goal = self.get_goal(user_id, goal_id)
        account = self.db.get_account(goal.account_id, user_id)
        savings_rate = self.rates.calculate_savings_rate(goal_id)

        history = tuple(
            GoalProgressPoint(
                recorded_at=entry.recorded_at,
                amount=entry.new_amount,
                progress_percentage=entry.progress_percentage,
                change_amount=entry.change_amount,
            )
            for entry in reversed(self.db.list_progress_history(goal_id))
        )
        return GoalProgressReport(
            goal=self._with_progress(goal, account.name if account else "", savings_rate, today),
            history=history,
            projection=project_timeline(goal, savings_rate, self.settings, today),
        )

    def _with_progress(
        self, goal: SavingsGoal, account_name: str, savings_rate: SavingsRate, today: date
    ) -> GoalWithProgress:
        track_status = classify_goal(
            goal.current_amount,
            goal.target_amount,
            goal.target_date,
            savings_rate.daily_rate,
            self.settings,
            today,
        )
        return GoalWithProgress(
            goal=goal,
            account_name=account_name,
            progress_percentage=to_money(progress_percentage(goal.current_amount, goal.target_amount)),
            remaining_amount=goal.target_amount - goal.current_amount,
            days_remaining=days_between(today, goal.target_date),
            is_on_track=track_status != GoalTrackStatus.BEHIND,
            track_status=track_status,
            required_daily_savings=to_money(
                required_daily_savings(goal.current_amount, goal.target_amount, goal.target_date, today)
            ),
            actual_daily_savings=to_money(savings_rate.daily_rate),
            milestones=tuple(self.db.list_milestones(goal.id)),
        )
