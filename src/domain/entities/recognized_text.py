"""
Domain Entity: Recognized Text
Raw output of one OCR pass over a receipt image
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class RecognizedText:
    """Text recognized from an image plus engine confidence (0-100)"""

    content: str
    confidence: float = 0.0

    def __post_init__(self):
        # Engines occasionally report -1 for "no words"; keep the documented range
        clamped = min(max(float(self.confidence), 0.0), 100.0)
        object.__setattr__(self, "confidence", clamped)

    @property
    def is_empty(self) -> bool:
        return not self.content.strip()
