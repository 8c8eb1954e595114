"""
Domain Entities: Scan Session and Result

One session per scan attempt: image in, result out. Nothing about a scan is
kept between attempts.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from .reference_data import Account
from .receipt import ParsedReceipt


ProgressCallback = Callable[[int], None]


@dataclass(frozen=True)
class ScanSession:
    """Input of a single receipt scan"""

    image: bytes
    filename: str
    user_id: str
    on_progress: Optional[ProgressCallback] = None

    @property
    def is_pdf(self) -> bool:
        return self.filename.lower().endswith(".pdf") or self.image[:4] == b"%PDF"


@dataclass
class ScanResult:
    """Output of a single receipt scan, surfaced for user review"""

    receipt: ParsedReceipt
    confidence: float
    suggested_account: Optional[Account] = None

    def to_dict(self) -> dict:
        return {
            **self.receipt.to_dict(),
            "confidence": self.confidence,
            "suggested_account": self.suggested_account.to_dict() if self.suggested_account else None,
        }
