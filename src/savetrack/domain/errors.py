"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested entity does not exist or belongs to another user."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def goal_not_found(goal_id: int) -> str:
    """Return message for missing goal."""
    return f"Goal {goal_id} not found"


def milestone_not_found(milestone_id: int) -> str:
    """Return message for missing milestone."""
    return f"Milestone {milestone_id} not found"


def unknown_goal_fields(fields: list[str]) -> str:
    """Return message for update fields that cannot be changed."""
    return f"Cannot update goal field{'s' if len(fields) != 1 else ''}: {', '.join(sorted(fields))}"
