"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Optional, Any
from datetime import date, datetime
from decimal import Decimal

from savetrack.domain.entities import (
    Account,
    SavingsGoal,
    GoalMilestone,
    GoalProgressHistory,
)

# Goal columns that update_goal may change
UPDATABLE_GOAL_FIELDS = frozenset(
    {"name", "description", "target_amount", "target_date", "category_id", "priority", "status"}
)


class Database(ABC):
    """Abstract goal store for savetrack.

    Every query that returns user data is scoped by user_id. Write methods
    commit immediately unless called inside unit_of_work(), in which case
    they join the surrounding transaction.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def unit_of_work(self, goal_id: Optional[int] = None) -> AbstractContextManager[None]:
        """Group writes into one transaction.

        Commits when the block exits normally. Rolls back and re-raises when
        the block raises. Nested blocks join the outermost transaction.
        Units run one at a time across threads, and a rollback discards only
        the writes made inside its own unit.
        """
        pass

    # Account operations
    @abstractmethod
    def create_account(self, user_id: str, name: str, balance: Decimal) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int, user_id: str) -> Optional[Account]:
        """Get account by ID if it belongs to user_id."""
        pass

    @abstractmethod
    def list_accounts(self, user_id: str) -> list[Account]:
        """List a user's accounts."""
        pass

    @abstractmethod
    def get_account_balance(self, account_id: int, user_id: str) -> Optional[Decimal]:
        """Current balance of a user's account, or None if not found."""
        pass

    @abstractmethod
    def update_account_balance(self, account_id: int, user_id: str, balance: Decimal) -> None:
        """Set the balance of a user's account."""
        pass

    # Goal operations
    @abstractmethod
    def create_goal(
        self,
        user_id: str,
        account_id: int,
        name: str,
        target_amount: Decimal,
        current_amount: Decimal,
        initial_balance: Decimal,
        target_date: date,
        priority: int,
        status: str,
        description: Optional[str] = None,
        category_id: Optional[int] = None,
    ) -> int:
        """Create a savings goal. Returns goal ID."""
        pass

    @abstractmethod
    def get_goal(self, goal_id: int, user_id: str) -> Optional[SavingsGoal]:
        """Get goal by ID if it belongs to user_id."""
        pass

    @abstractmethod
    def list_goals(
        self,
        user_id: str,
        account_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> list[SavingsGoal]:
        """List a user's goals, highest priority first, then newest first."""
        pass

    @abstractmethod
    def update_goal(self, goal_id: int, user_id: str, fields: dict[str, Any]) -> bool:
        """Apply a partial update. Returns False if no goal matched."""
        pass

    @abstractmethod
    def update_goal_current_amount(self, goal_id: int, current_amount: Decimal) -> None:
        """Set the mirrored account balance of a goal."""
        pass

    @abstractmethod
    def delete_goal(self, goal_id: int, user_id: str) -> bool:
        """Delete a goal with its milestones and history. Returns False if missing."""
        pass

    # Milestone operations
    @abstractmethod
    def create_milestone(
        self, goal_id: int, user_id: str, percentage: int, target_amount: Decimal
    ) -> int:
        """Create a milestone. Returns milestone ID."""
        pass

    @abstractmethod
    def get_milestone(self, milestone_id: int, user_id: str) -> Optional[GoalMilestone]:
        """Get milestone by ID if it belongs to user_id."""
        pass

    @abstractmethod
    def list_milestones(self, goal_id: int, achieved: Optional[bool] = None) -> list[GoalMilestone]:
        """List a goal's milestones ordered by percentage ascending."""
        pass

    @abstractmethod
    def list_user_milestones(
        self, user_id: str, achieved: bool, limit: Optional[int] = None
    ) -> list[GoalMilestone]:
        """List milestones across all of a user's goals.

        Unachieved milestones are ordered by percentage ascending, achieved
        milestones by achieved_at descending.
        """
        pass

    @abstractmethod
    def update_milestone_target_amount(
        self, goal_id: int, percentage: int, target_amount: Decimal
    ) -> None:
        """Rewrite the target amount of a goal's milestone."""
        pass

    @abstractmethod
    def mark_milestone_achieved(
        self, milestone_id: int, achieved_amount: Decimal, achieved_at: datetime
    ) -> None:
        """Flag a milestone achieved."""
        pass

    @abstractmethod
    def mark_milestone_notified(self, milestone_id: int) -> None:
        """Flag a milestone's achievement alert as delivered."""
        pass

    # Progress history operations
    @abstractmethod
    def create_progress_entry(
        self,
        goal_id: int,
        user_id: str,
        previous_amount: Decimal,
        new_amount: Decimal,
        change_amount: Decimal,
        account_balance: Decimal,
        progress_percentage: Decimal,
        transaction_id: Optional[str] = None,
        recorded_at: Optional[datetime] = None,
    ) -> int:
        """Append a progress history entry. Returns entry ID."""
        pass

    @abstractmethod
    def list_progress_history(
        self, goal_id: int, limit: Optional[int] = None
    ) -> list[GoalProgressHistory]:
        """List a goal's history, newest first."""
        pass
