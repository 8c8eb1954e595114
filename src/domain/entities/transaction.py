"""
Domain Entity: Transaction Draft
A confirmed transaction handed to the finance backend for persistence
"""

from dataclasses import dataclass
from typing import Optional

from ..enums import IncomeType, TransactionType


@dataclass
class TransactionDraft:
    """Transaction ready to be created by the remote store"""

    type: TransactionType
    amount: float
    account_id: str
    category_id: str
    date: str  # ISO date (YYYY-MM-DD)
    description: str
    item: Optional[str] = None
    income_type: Optional[IncomeType] = None
    receipt_url: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return {
            "type": self.type.value,
            "amount": self.amount,
            "account_id": self.account_id,
            "category_id": self.category_id,
            "date": self.date,
            "description": self.description,
            "item": self.item,
            "income_type": self.income_type.value if self.income_type else None,
            "receipt_url": self.receipt_url,
        }
