"""
Transaction Store Port Interface
Defines the contract for the remote finance backend
"""

from abc import ABC, abstractmethod
from typing import Optional

from domain.entities.reference_data import Account, Category
from domain.entities.transaction import TransactionDraft


class ITransactionStore(ABC):
    """
    Port interface for the finance backend
    Following Hexagonal Architecture - this is the application layer port
    """

    @abstractmethod
    async def count_matching(self, date: str, amount: float, account_id: str) -> int:
        """
        Count non-deleted transactions with the same date, amount and account

        Args:
            date: ISO date (YYYY-MM-DD)
            amount: Transaction amount
            account_id: Account identifier

        Returns:
            int: Number of matching transactions
        """
        pass

    @abstractmethod
    async def create_transaction(self, user_id: str, draft: TransactionDraft) -> Optional[str]:
        """
        Create a transaction; balance bookkeeping is done by the backend

        Args:
            user_id: Owner of the transaction
            draft: Confirmed transaction fields

        Returns:
            Created transaction ID, or None if the backend refused it
        """
        pass

    @abstractmethod
    async def list_accounts(self, user_id: str) -> list[Account]:
        """
        Get the user's active accounts in display order

        Args:
            user_id: User identifier

        Returns:
            List of accounts
        """
        pass

    @abstractmethod
    async def list_categories(self, user_id: str) -> list[Category]:
        """
        Get the user's categories

        Args:
            user_id: User identifier

        Returns:
            List of categories
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check backend connection health

        Returns:
            bool: True if the backend is reachable
        """
        pass

    @abstractmethod
    async def close(self):
        """
        Close connections and cleanup resources
        """
        pass
