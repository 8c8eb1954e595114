"""Transaction Type Enumeration"""

from enum import Enum


class TransactionType(str, Enum):
    """Direction of money for a single transaction"""

    INCOME = "income"
    EXPENSE = "expense"

    def __str__(self) -> str:
        return self.value
