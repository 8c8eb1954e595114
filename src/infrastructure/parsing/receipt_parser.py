"""
Infrastructure Adapter: Receipt Text Parser
Implements IReceiptParser with layered regex / keyword heuristics

Works on raw OCR text from Indonesian receipts (Rupiah amounts, Indonesian or
English labels). Each extraction step is independent: a step that finds
nothing leaves its field empty and never stops the others.
"""

import logging
import re
from datetime import date
from typing import Optional

from application.ports.receipt_parser import IReceiptParser
from domain.entities.receipt import LineItem, ParsedReceipt
from infrastructure.parsing.amount_parser import RupiahAmountParser
from infrastructure.parsing.date_parser import IndonesianDateParser, to_iso
from infrastructure.parsing.provider_detector import ProviderDetector

logger = logging.getLogger(__name__)


class ReceiptTextParser(IReceiptParser):
    """
    Receipt OCR text -> ParsedReceipt
    """

    # ---------- REGEX / CONSTANTS ----------

    # Layered amount patterns; all matches are pooled and the largest wins
    AMOUNT_PATTERNS = [
        re.compile(
            r'(?:total|grand\s*total|jumlah|bayar|tunai|cash|debit|kredit|subtotal)'
            r'[:\s]*(?:rp\.?)?\s*([0-9.,]+)',
            re.IGNORECASE,
        ),
        re.compile(r'\brp\.?\s*([0-9.,]+)', re.IGNORECASE),
        re.compile(r'([0-9]{1,3}(?:[.,][0-9]{3})+)'),
    ]
    MIN_AMOUNT = 100
    MAX_AMOUNT = 100_000_000

    FALLBACK_LINES = 5
    FALLBACK_MIN_AMOUNT = 1000
    NUMBER_RE = re.compile(r'[\d.,]+')

    MERCHANT_SCAN_LINES = 5
    # Checked in order before the generic first-line heuristic
    KNOWN_MERCHANTS = (
        'INDOMARET', 'ALFAMART', 'ALFAMIDI', 'CIRCLE K', 'LAWSON',
        'MCDONALD', 'KFC', 'STARBUCKS', 'TOKOPEDIA', 'SHOPEE',
        'GRAB', 'GOJEK', 'OVO', 'DANA', 'GOPAY',
    )
    NOISE_WORDS = (
        'struk', 'receipt', 'nota', 'invoice', 'kasir',
        'cashier', 'tanggal', 'date', 'waktu', 'time',
    )

    # Lines carrying these are totals/payments, not purchased items
    TOTAL_KEYWORDS = (
        'TOTAL', 'GRAND TOTAL', 'JUMLAH', 'AMOUNT', 'TTL', 'TUNAI',
        'BAYAR', 'SUBTOTAL', 'CASH', 'DEBIT', 'KREDIT', 'KEMBALI',
    )
    ITEM_RE = re.compile(r'^(.+?)\s+([\d.,]+)$')

    def __init__(self, provider_detector: Optional[ProviderDetector] = None):
        self.provider_detector = provider_detector or ProviderDetector()

    # =========================
    # -------- PUBLIC ---------
    # =========================

    def parse(self, raw_text: Optional[str], today: Optional[date] = None) -> ParsedReceipt:
        """
        Extract transaction fields from receipt text.

        Args:
            raw_text: OCR output
            today: Date to assume when the receipt shows none (defaults to today)

        Returns:
            ParsedReceipt; fields that could not be guessed are None/empty
        """
        text = raw_text or ""
        lines = self._split_lines(text)

        total = self.extract_total(text, lines)
        found_date = IndonesianDateParser.search_receipt_date(text)

        receipt = ParsedReceipt(
            raw_text=text,
            merchant_guess=self.extract_merchant(lines),
            date_guess=to_iso(found_date or today or date.today()),
            total_amount=total,
            detected_provider=self.provider_detector.detect(text),
            line_items=self.extract_line_items(lines, total),
        )

        logger.debug(
            f"[RECEIPT_PARSE] lines={len(lines)} total={receipt.total_amount} "
            f"date={receipt.date_guess} merchant={receipt.merchant_guess!r} "
            f"provider={receipt.detected_provider} items={len(receipt.line_items)}"
        )
        return receipt

    def extract_total(self, text: str, lines: Optional[list[str]] = None) -> Optional[float]:
        """
        Guess the receipt total.

        All numbers captured by the keyword, "Rp" and thousands-separator
        patterns form one pool; the largest one within [100, 100_000_000)
        is the total. With an empty pool the largest number >= 1000 in the
        last 5 lines is used instead.
        """
        candidates = []
        for pattern in self.AMOUNT_PATTERNS:
            for match in pattern.finditer(text):
                value = RupiahAmountParser.parse_receipt_number(match.group(1))
                if value is not None and self.MIN_AMOUNT <= value < self.MAX_AMOUNT:
                    candidates.append(value)

        if candidates:
            return max(candidates)

        if lines is None:
            lines = self._split_lines(text)
        return self._largest_in_last_lines(lines)

    def extract_merchant(self, lines: list[str]) -> Optional[str]:
        """
        Guess the merchant from the first lines of the receipt.

        Known merchant names win; otherwise the first line that is not a
        header/noise line, not only digits and 3-50 characters long.
        """
        head = lines[:self.MERCHANT_SCAN_LINES]

        for line in head:
            upper_line = line.upper()
            for merchant in self.KNOWN_MERCHANTS:
                if merchant in upper_line:
                    return merchant

        for line in head:
            lower_line = line.lower()
            if any(word in lower_line for word in self.NOISE_WORDS):
                continue
            if re.sub(r'\s', '', line).isdigit():
                continue
            if 3 <= len(line) <= 50:
                return line

        return None

    def extract_line_items(self, lines: list[str], total: Optional[float]) -> list[LineItem]:
        """
        Collect "<name> <price>" lines priced below the detected total.
        """
        items = []
        limit = total if total else float("inf")

        for line in lines:
            upper_line = line.upper()
            if any(keyword in upper_line for keyword in self.TOTAL_KEYWORDS):
                continue
            if any(word.upper() in upper_line for word in self.NOISE_WORDS):
                continue

            match = self.ITEM_RE.match(line)
            if not match:
                continue

            name = match.group(1).strip()
            price = RupiahAmountParser.parse_receipt_number(match.group(2))
            if len(name) > 2 and price is not None and 0 < price < limit:
                items.append(LineItem(name=name, price=price))

        return items

    # =========================
    # ------- INTERNAL --------
    # =========================

    @staticmethod
    def _split_lines(text: str) -> list[str]:
        return [line.strip() for line in text.split("\n") if line.strip()]

    def _largest_in_last_lines(self, lines: list[str]) -> Optional[float]:
        largest = 0.0
        for line in lines[-self.FALLBACK_LINES:]:
            for number_str in self.NUMBER_RE.findall(line):
                value = RupiahAmountParser.parse_receipt_number(number_str)
                if value is not None and value >= self.FALLBACK_MIN_AMOUNT and value > largest:
                    largest = value
        return largest if largest > 0 else None
