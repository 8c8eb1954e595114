"""
Domain Entities: Accounts and Categories
Reference lists read from the finance backend during scanning and import
"""

from dataclasses import dataclass
from typing import Optional

from ..enums import TransactionType


@dataclass(frozen=True)
class Account:
    """Financial account (bank, e-wallet, cash)"""

    id: str
    name: str
    type: Optional[str] = None

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "type": self.type}


@dataclass(frozen=True)
class Category:
    """Transaction category owned by a user"""

    id: str
    name: str
    type: TransactionType

    def matches(self, name: str, tx_type: TransactionType) -> bool:
        """Case-insensitive name match within the same transaction type"""
        return self.type == tx_type and self.name.lower() == name.lower()
