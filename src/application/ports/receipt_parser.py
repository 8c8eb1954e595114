"""
Port: Receipt Parser Interface
Defines contract for turning receipt OCR text into transaction fields
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from domain.entities.receipt import ParsedReceipt


class IReceiptParser(ABC):
    """Interface for receipt text parsing"""

    @abstractmethod
    def parse(self, raw_text: Optional[str], today: Optional[date] = None) -> ParsedReceipt:
        """
        Extract merchant, date, total, provider and line items

        Args:
            raw_text: Text recognized from a receipt image
            today: Date assumed when the receipt shows none

        Returns:
            ParsedReceipt with best-effort guesses

        Note:
            Must never raise for malformed text; missing fields stay empty
        """
        pass
