"""Progress recording for savings goals."""

import logging
from typing import Optional

from savetrack.config import DEFAULT_SETTINGS, EngineSettings
from savetrack.database.base import Database
from savetrack.domain.account import AccountService
from savetrack.domain.entities import GoalStatus, ProgressCalculation
from savetrack.domain.errors import NotFoundError, account_not_found, goal_not_found
from savetrack.domain.milestone import MilestoneService
from savetrack.utils.money import progress_percentage, to_money

logger = logging.getLogger(__name__)


class ProgressService:
    """Service that syncs goals with their linked account balance."""

    def __init__(self, db: Database, settings: EngineSettings = DEFAULT_SETTINGS):
        """Initialize progress service.

        Args:
            db: Database instance
            settings: Engine settings
        """
        self.db = db
        self.settings = settings
        self.accounts = AccountService(db)
        self.milestones = MilestoneService(db)

    def update_goal_progress(
        self, goal_id: int, user_id: str, transaction_id: Optional[str] = None
    ) -> ProgressCalculation:
        """Recalculate a goal from its linked account's current balance.

        The balance write, the history entry and the milestone check happen
        in one unit of work keyed by goal_id: either all of them are stored
        or none are.

        Args:
            goal_id: Goal ID
            user_id: Owning user
            transaction_id: Optional ID of the transaction that triggered this

        Returns:
            ProgressCalculation with the amounts and any milestone reached

        Raises:
            NotFoundError: If the goal or its account is not the user's
        """
        with self.db.unit_of_work(goal_id):
            goal = self.db.get_goal(goal_id, user_id)
            if goal is None:
                raise NotFoundError(goal_not_found(goal_id))

            previous_amount = goal.current_amount
            new_amount = self.accounts.get_balance(goal.account_id, user_id)
            change_amount = new_amount - previous_amount

            self.db.update_goal_current_amount(goal_id, new_amount)

            percentage = to_money(progress_percentage(new_amount, goal.target_amount))
            self.db.create_progress_entry(
                goal_id=goal_id,
                user_id=user_id,
                previous_amount=previous_amount,
                new_amount=new_amount,
                change_amount=change_amount,
                account_balance=new_amount,
                progress_percentage=percentage,
                transaction_id=transaction_id,
            )

            milestone_triggered = self.milestones.check_milestone_achievements(
                goal_id, new_amount, goal.target_amount
            )

        logger.info(
            "Recorded progress for goal %s: %s -> %s (%s%%)",
            goal_id,
            previous_amount,
            new_amount,
            percentage,
        )
        return ProgressCalculation(
            goal_id=goal_id,
            previous_amount=previous_amount,
            new_amount=new_amount,
            change_amount=change_amount,
            progress_percentage=percentage,
            milestone_triggered=milestone_triggered,
        )

    def sync_account_goals(
        self, account_id: int, user_id: str, transaction_id: Optional[str] = None
    ) -> list[ProgressCalculation]:
        """Recalculate every active goal linked to an account.

        This is the entry point for transaction events: after a balance
        change, call it with the ID of the transaction that caused it.

        Raises:
            NotFoundError: If the account is not the user's
        """
        if self.db.get_account(account_id, user_id) is None:
            raise NotFoundError(account_not_found(account_id))

        goals = self.db.list_goals(user_id, account_id=account_id, status=GoalStatus.ACTIVE.value)
        return [self.update_goal_progress(goal.id, user_id, transaction_id) for goal in goals]
