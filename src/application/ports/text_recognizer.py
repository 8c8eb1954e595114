"""
Port: Text Recognizer Interface
Defines contract for OCR engine adapters
"""

from abc import ABC, abstractmethod
from typing import Optional

from domain.entities.recognized_text import RecognizedText
from domain.entities.scan import ProgressCallback


class ITextRecognizer(ABC):
    """Interface for optical character recognition"""

    @abstractmethod
    def recognize(
        self,
        image: bytes,
        filename: str = "",
        on_progress: Optional[ProgressCallback] = None
    ) -> RecognizedText:
        """
        Recognize text in an image

        Args:
            image: Image bytes (camera/gallery photo) or PDF bytes
            filename: Original filename, used to tell PDFs from images
            on_progress: Optional callback receiving progress 0-100

        Returns:
            RecognizedText with content and confidence

        Raises:
            RecognitionError: If the engine cannot start or processing fails

        Note:
            Only the first page of a PDF is recognized
        """
        pass
