"""
PostgreSQL Transaction Store
Implements ITransactionStore port using asyncpg

The finance backend owns the schema. Balance bookkeeping lives in the
record_expense / record_income procedures, so transactions are never
inserted directly.
"""

import logging
from datetime import date as date_type
from typing import Optional

import asyncpg
from asyncpg.pool import Pool

from application.ports.transaction_store import ITransactionStore
from domain.entities.reference_data import Account, Category
from domain.entities.transaction import TransactionDraft
from domain.enums import TransactionType

logger = logging.getLogger(__name__)


class PostgresTransactionStore(ITransactionStore):
    """
    PostgreSQL adapter implementing ITransactionStore port
    Uses asyncpg for async database operations
    """

    def __init__(self, connection_string: str, min_pool_size: int = 1, max_pool_size: int = 10):
        """
        Initialize PostgreSQL adapter

        Args:
            connection_string: PostgreSQL connection string
            min_pool_size: Minimum connection pool size
            max_pool_size: Maximum connection pool size
        """
        self.connection_string = connection_string
        self.min_pool_size = min_pool_size
        self.max_pool_size = max_pool_size
        self.pool: Optional[Pool] = None

    async def connect(self):
        """
        Establish database connection pool
        Must be called before using the adapter
        """
        if self.pool is None:
            self.pool = await asyncpg.create_pool(
                self.connection_string,
                min_size=self.min_pool_size,
                max_size=self.max_pool_size,
                command_timeout=60
            )

    def _require_pool(self) -> Pool:
        if self.pool is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self.pool

    async def count_matching(self, date: str, amount: float, account_id: str) -> int:
        """
        Count non-deleted transactions with the same date, amount and account
        """
        pool = self._require_pool()

        query = """
            SELECT COUNT(*)
            FROM transactions
            WHERE date = $1
              AND amount = $2
              AND account_id = $3
              AND is_deleted = false
        """

        async with pool.acquire() as conn:
            count = await conn.fetchval(query, date_type.fromisoformat(date), amount, account_id)

        return int(count or 0)

    async def create_transaction(self, user_id: str, draft: TransactionDraft) -> Optional[str]:
        """
        Create a transaction through the balance-aware stored procedure
        """
        pool = self._require_pool()
        tx_date = date_type.fromisoformat(draft.date)

        async with pool.acquire() as conn:
            if draft.type == TransactionType.INCOME:
                transaction_id = await conn.fetchval(
                    """
                    SELECT record_income(
                        p_user_id => $1, p_account_id => $2, p_category_id => $3,
                        p_amount => $4, p_date => $5, p_description => $6,
                        p_income_type => $7
                    )
                    """,
                    user_id,
                    draft.account_id,
                    draft.category_id,
                    draft.amount,
                    tx_date,
                    draft.description,
                    draft.income_type.value if draft.income_type else None
                )
            else:
                transaction_id = await conn.fetchval(
                    """
                    SELECT record_expense(
                        p_user_id => $1, p_account_id => $2, p_category_id => $3,
                        p_amount => $4, p_date => $5, p_description => $6,
                        p_item => $7, p_receipt_url => $8
                    )
                    """,
                    user_id,
                    draft.account_id,
                    draft.category_id,
                    draft.amount,
                    tx_date,
                    draft.description,
                    draft.item,
                    draft.receipt_url
                )

        if transaction_id is None:
            logger.warning(f"[STORE] Backend refused {draft.type.value} of {draft.amount} on {draft.date}")
            return None

        return str(transaction_id)

    async def list_accounts(self, user_id: str) -> list[Account]:
        """
        Get the user's active accounts in display order
        """
        pool = self._require_pool()

        query = """
            SELECT id, name, type
            FROM accounts
            WHERE user_id = $1
              AND is_active = true
            ORDER BY sort_order, name
        """

        async with pool.acquire() as conn:
            rows = await conn.fetch(query, user_id)

        return [Account(id=str(row["id"]), name=row["name"], type=row["type"]) for row in rows]

    async def list_categories(self, user_id: str) -> list[Category]:
        """
        Get the user's categories
        """
        pool = self._require_pool()

        query = """
            SELECT id, name, type
            FROM categories
            WHERE user_id = $1
            ORDER BY name
        """

        async with pool.acquire() as conn:
            rows = await conn.fetch(query, user_id)

        categories = []
        for row in rows:
            try:
                tx_type = TransactionType(row["type"])
            except ValueError:
                logger.debug(f"[STORE] Skipping category {row['id']} with type {row['type']!r}")
                continue
            categories.append(Category(id=str(row["id"]), name=row["name"], type=tx_type))

        return categories

    async def health_check(self) -> bool:
        """
        Check database connection health
        """
        if self.pool is None:
            return False

        try:
            async with self.pool.acquire() as conn:
                await conn.fetchval("SELECT 1")
            return True
        except Exception as e:
            logger.warning(f"[STORE] Health check failed: {e}")
            return False

    async def close(self):
        """
        Close database connection pool
        """
        if self.pool is not None:
            await self.pool.close()
            self.pool = None
