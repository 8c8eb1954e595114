"""
Application Service: Duplicate Guard
Checks whether a transaction with the same date, amount and account already exists
"""

import logging

from application.ports.transaction_store import ITransactionStore

logger = logging.getLogger(__name__)


class DuplicateGuard:
    """Duplicate lookup against the finance backend"""

    def __init__(self, store: ITransactionStore):
        self.store = store

    async def is_duplicate(self, date: str, amount: float, account_id: str) -> bool:
        """
        Check for an existing non-deleted transaction

        Args:
            date: ISO date (YYYY-MM-DD)
            amount: Transaction amount
            account_id: Account identifier

        Returns:
            True if at least one match exists. A failed lookup returns False,
            so an unreachable backend never blocks an import.
        """
        try:
            count = await self.store.count_matching(date, amount, account_id)
        except Exception as e:
            logger.warning(
                f"[DUPLICATE] Lookup failed for {date} / {amount} / {account_id}, "
                f"treating as new: {e}"
            )
            return False

        return bool(count) and count > 0
