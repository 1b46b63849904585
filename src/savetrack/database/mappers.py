"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the domain never sees ORM rows.
"""

from savetrack.domain import entities as domain
from savetrack.database.models import (
    Account as ORMAccount,
    SavingsGoal as ORMSavingsGoal,
    GoalMilestone as ORMGoalMilestone,
    GoalProgressHistory as ORMGoalProgressHistory,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        user_id=orm_account.user_id,
        name=orm_account.name,
        balance=orm_account.balance,
        created_at=orm_account.created_at,
    )


def goal_to_domain(orm_goal: ORMSavingsGoal) -> domain.SavingsGoal:
    """Convert SQLAlchemy SavingsGoal model to domain SavingsGoal entity."""
    return domain.SavingsGoal(
        id=orm_goal.id,
        user_id=orm_goal.user_id,
        account_id=orm_goal.account_id,
        category_id=orm_goal.category_id,
        name=orm_goal.name,
        description=orm_goal.description,
        target_amount=orm_goal.target_amount,
        current_amount=orm_goal.current_amount,
        initial_balance=orm_goal.initial_balance,
        target_date=orm_goal.target_date,
        priority=orm_goal.priority,
        status=domain.GoalStatus(orm_goal.status),
        created_at=orm_goal.created_at,
        updated_at=orm_goal.updated_at,
    )


def milestone_to_domain(orm_milestone: ORMGoalMilestone) -> domain.GoalMilestone:
    """Convert SQLAlchemy GoalMilestone model to domain GoalMilestone entity."""
    return domain.GoalMilestone(
        id=orm_milestone.id,
        goal_id=orm_milestone.goal_id,
        user_id=orm_milestone.user_id,
        percentage=orm_milestone.percentage,
        target_amount=orm_milestone.target_amount,
        achieved_amount=orm_milestone.achieved_amount,
        achieved_at=orm_milestone.achieved_at,
        is_achieved=orm_milestone.is_achieved,
        notified=orm_milestone.notified,
    )


def history_to_domain(orm_entry: ORMGoalProgressHistory) -> domain.GoalProgressHistory:
    """Convert SQLAlchemy GoalProgressHistory model to domain entity."""
    return domain.GoalProgressHistory(
        id=orm_entry.id,
        goal_id=orm_entry.goal_id,
        user_id=orm_entry.user_id,
        previous_amount=orm_entry.previous_amount,
        new_amount=orm_entry.new_amount,
        change_amount=orm_entry.change_amount,
        account_balance=orm_entry.account_balance,
        progress_percentage=orm_entry.progress_percentage,
        recorded_at=orm_entry.recorded_at,
        transaction_id=orm_entry.transaction_id,
    )
