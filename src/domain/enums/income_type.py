"""Income Type Enumeration

Defines the income sub-type attached to income transactions.
"""

from enum import Enum


class IncomeType(str, Enum):
    """Income type classification

    ACTIVE: Earned by working (salary, allowance, honorarium)
    PASSIVE: Earned from assets (rent, interest, dividends)
    """

    ACTIVE = "active"
    PASSIVE = "passive"

    def __str__(self) -> str:
        return self.value
