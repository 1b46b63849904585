"""Utility for resolving account names to IDs."""

from savetrack.domain.account import AccountService
from savetrack.domain.errors import NotFoundError


def resolve_account(account_service: AccountService, user_id: str, account: str | int) -> int:
    """Resolve one of a user's accounts by name or ID.

    Args:
        account_service: AccountService instance
        user_id: Owning user
        account: Account name, or ID as int or numeric string

    Returns:
        Account ID

    Raises:
        NotFoundError: If the user has no such account
    """
    account_id = None
    if isinstance(account, int):
        account_id = account
    elif account.strip().isdigit():
        account_id = int(account.strip())

    if account_id is not None:
        if account_service.get_account(account_id, user_id) is None:
            raise NotFoundError(f"Account ID {account_id} not found")
        return account_id

    for acc in account_service.list_accounts(user_id):
        if acc.name == account:
            return acc.id

    raise NotFoundError(f"Account '{account}' not found")
