"""Account domain service.

Acts as the balance provider for the savings engine: goals snapshot and
mirror the balance of the account they are linked to.
"""

from decimal import Decimal
from typing import Optional
from savetrack.database.base import Database
from savetrack.domain.entities import Account as AccountEntity
from savetrack.domain.errors import NotFoundError, ValidationError, account_not_found


class AccountService:
    """Service for managing accounts and reading balances."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(self, user_id: str, name: str, balance: Decimal = Decimal("0.00")) -> int:
        """Create a new account.

        Args:
            user_id: Owning user
            name: Account name, unique per user
            balance: Opening balance

        Returns:
            Account ID

        Raises:
            ValidationError: If the name is empty or already used by this user
        """
        name = name.strip()
        if not name:
            raise ValidationError("Account name is required")

        for acc in self.db.list_accounts(user_id):
            if acc.name == name:
                raise ValidationError(f"Account with name '{name}' already exists")

        return self.db.create_account(user_id=user_id, name=name, balance=balance)

    def get_account(self, account_id: int, user_id: str) -> Optional[AccountEntity]:
        """Get account by ID.

        Returns:
            Account entity or None if not found for this user
        """
        return self.db.get_account(account_id, user_id)

    def list_accounts(self, user_id: str) -> list[AccountEntity]:
        """List all accounts of a user."""
        return self.db.list_accounts(user_id)

    def get_balance(self, account_id: int, user_id: str) -> Decimal:
        """Current balance of a user's account.

        Raises:
            NotFoundError: If the account does not exist or is not the user's
        """
        balance = self.db.get_account_balance(account_id, user_id)
        if balance is None:
            raise NotFoundError(account_not_found(account_id))
        return balance

    def set_balance(self, account_id: int, user_id: str, balance: Decimal) -> None:
        """Record a new balance for an account.

        Goals linked to the account are not touched; callers trigger a
        progress recalculation afterwards.

        Raises:
            NotFoundError: If the account does not exist or is not the user's
        """
        if self.db.get_account(account_id, user_id) is None:
            raise NotFoundError(account_not_found(account_id))
        self.db.update_account_balance(account_id, user_id, balance)
