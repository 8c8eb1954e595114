"""
Infrastructure Adapter: Tesseract Text Recognizer
Implements ITextRecognizer using pytesseract + Pillow (PyMuPDF for PDF receipts)
"""

import io
import logging
from typing import Dict, Optional

import fitz  # PyMuPDF
import pytesseract
from PIL import Image, UnidentifiedImageError

from application.ports.text_recognizer import ITextRecognizer
from domain.entities.recognized_text import RecognizedText
from domain.entities.scan import ProgressCallback
from domain.exceptions import RecognitionError

logger = logging.getLogger(__name__)


class TesseractTextRecognizer(ITextRecognizer):
    """
    OCR over a single receipt image (or the first page of a PDF receipt)
    """

    def __init__(
        self,
        language: str = "ind+eng",
        tesseract_cmd: Optional[str] = None,
        pdf_render_scale: float = 2.0,
        config: str = "--oem 3 --psm 6"
    ):
        """
        Initialize recognizer

        Args:
            language: Tesseract language codes (Indonesian + English by default)
            tesseract_cmd: Path to the tesseract binary; PATH lookup when None
            pdf_render_scale: Zoom factor used when rasterizing a PDF page
            config: Extra tesseract CLI options
        """
        self.language = language
        self.pdf_render_scale = pdf_render_scale
        self.config = config

        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

    def recognize(
        self,
        image: bytes,
        filename: str = "",
        on_progress: Optional[ProgressCallback] = None
    ) -> RecognizedText:
        """
        Recognize text; see ITextRecognizer.recognize

        One image_to_data pass yields both the words (reassembled into
        lines) and their confidences.
        """
        self._report(on_progress, 0)

        picture = self._load_image(image, filename)
        self._report(on_progress, 20)

        try:
            data = pytesseract.image_to_data(
                picture,
                lang=self.language,
                config=self.config,
                output_type=pytesseract.Output.DICT,
            )
        except pytesseract.TesseractNotFoundError as e:
            logger.error(f"[OCR] Tesseract binary not found: {e}")
            raise RecognitionError("OCR engine not available") from e
        except (pytesseract.TesseractError, RuntimeError) as e:
            logger.error(f"[OCR] Recognition failed: {e}")
            raise RecognitionError() from e
        self._report(on_progress, 70)

        content = self._assemble_text(data)
        confidence = self._mean_confidence(data.get("conf", []))
        self._report(on_progress, 100)

        logger.info(f"[OCR] Recognized {len(content)} chars, confidence={confidence:.1f}")
        return RecognizedText(content=content, confidence=confidence)

    # =========================
    # ------- INTERNAL --------
    # =========================

    def _load_image(self, image: bytes, filename: str) -> Image.Image:
        if not image:
            raise RecognitionError("empty image")

        if filename.lower().endswith(".pdf") or image[:4] == b"%PDF":
            return self._render_pdf_first_page(image)

        try:
            picture = Image.open(io.BytesIO(image))
            picture.load()
        except (UnidentifiedImageError, OSError) as e:
            logger.error(f"[OCR] Cannot decode image {filename!r}: {e}")
            raise RecognitionError() from e

        return picture.convert("RGB")

    def _render_pdf_first_page(self, content: bytes) -> Image.Image:
        try:
            doc = fitz.open(stream=content, filetype="pdf")
        except Exception as e:
            logger.error(f"[OCR] Cannot open PDF: {e}")
            raise RecognitionError() from e

        try:
            if len(doc) == 0:
                raise RecognitionError("PDF has no pages")

            if len(doc) > 1:
                logger.info(f"[OCR] PDF has {len(doc)} pages, only page 1 is recognized")

            mat = fitz.Matrix(self.pdf_render_scale, self.pdf_render_scale)
            pix = doc[0].get_pixmap(matrix=mat, alpha=False)
            return Image.frombytes("RGB", (pix.width, pix.height), pix.samples)
        finally:
            doc.close()

    @staticmethod
    def _assemble_text(data: dict) -> str:
        """Join words per (block, paragraph, line), lines in reading order"""
        words = data.get("text", [])
        blocks = data.get("block_num", [0] * len(words))
        paragraphs = data.get("par_num", [0] * len(words))
        line_numbers = data.get("line_num", [0] * len(words))

        lines: Dict[tuple, list] = {}
        for word, block, paragraph, line in zip(words, blocks, paragraphs, line_numbers):
            word = str(word or "").strip()
            if word:
                lines.setdefault((block, paragraph, line), []).append(word)

        return "\n".join(" ".join(line_words) for line_words in lines.values())

    @staticmethod
    def _mean_confidence(values) -> float:
        """Mean word confidence; tesseract reports -1 for non-word boxes"""
        scores = []
        for value in values:
            try:
                score = float(value)
            except (TypeError, ValueError):
                continue
            if score >= 0:
                scores.append(score)

        if not scores:
            return 0.0
        return sum(scores) / len(scores)

    @staticmethod
    def _report(on_progress: Optional[ProgressCallback], percent: int):
        if on_progress is None:
            return
        try:
            on_progress(percent)
        except Exception as e:
            logger.warning(f"[OCR] Progress callback failed at {percent}%: {e}")
