"""
Domain Entity: Parsed Receipt
Best-effort transaction fields guessed from receipt OCR text
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class LineItem:
    """Advisory item line (name + price) found on a receipt"""

    name: str
    price: float

    def to_dict(self) -> dict:
        return {"name": self.name, "price": self.price}


@dataclass
class ParsedReceipt:
    """Receipt extraction result

    Every field is a guess. Missing guesses stay None/empty and are filled in
    by the user before the transaction is saved.
    """

    raw_text: str
    merchant_guess: Optional[str] = None
    date_guess: Optional[str] = None  # ISO date (YYYY-MM-DD)
    total_amount: Optional[float] = None
    detected_provider: Optional[str] = None
    line_items: list[LineItem] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return {
            "merchant_guess": self.merchant_guess,
            "date_guess": self.date_guess,
            "total_amount": self.total_amount,
            "detected_provider": self.detected_provider,
            "line_items": [item.to_dict() for item in self.line_items],
            "raw_text": self.raw_text,
        }
