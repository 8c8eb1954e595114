"""
Domain enumerations
"""
from .income_type import IncomeType
from .transaction_type import TransactionType

__all__ = [
    'IncomeType',
    'TransactionType',
]
