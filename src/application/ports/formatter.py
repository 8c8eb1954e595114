"""
Port: Formatter Interface
Single formatting capability shared by every outward-facing layer
"""

from abc import ABC, abstractmethod
from typing import Any


class IFormatter(ABC):
    """Interface for display formatting"""

    @abstractmethod
    def currency(self, amount: Any, show_symbol: bool = True, show_sign: bool = False) -> str:
        """Format an amount as currency, e.g. "Rp 45.000" """
        pass

    @abstractmethod
    def compact(self, amount: Any) -> str:
        """Format an amount in short form, e.g. "1,5jt" """
        pass
