"""
Indonesian date parsing utilities
Handles DD/MM/YYYY statements and receipts with Indonesian/English month names
"""
import re
from datetime import date, datetime
from typing import Any, Optional

from dateutil import parser as dateutil_parser


class IndonesianDateParser:
    """
    Parser for dates found on Indonesian receipts and bank statements.
    """

    # Month abbreviations (Indonesian and English)
    MONTHS_ABBR = {
        "JAN": 1, "FEB": 2, "MAR": 3, "APR": 4,
        "MEI": 5, "MAY": 5, "JUN": 6, "JUL": 7,
        "AGU": 8, "AGT": 8, "AUG": 8, "SEP": 9,
        "OKT": 10, "OCT": 10, "NOV": 11, "DES": 12, "DEC": 12,
    }

    # Receipt patterns, tried in order; every occurrence in the text is a candidate
    RECEIPT_PATTERNS = [
        # DD/MM/YYYY or DD-MM-YYYY (two-digit years allowed)
        re.compile(r'(?<!\d)(\d{1,2})[/\-](\d{1,2})[/\-](\d{4}|\d{2})(?!\d)'),
        # D MMM YYYY, e.g. "9 Mei 2025", "09 MAY 2025", "9 Agustus 2025"
        re.compile(
            r'(?<!\d)(\d{1,2})\s*(' + '|'.join(MONTHS_ABBR) + r')[a-z]*\.?\s*(\d{4}|\d{2})(?!\d)',
            re.IGNORECASE,
        ),
    ]

    # Statement cell patterns, anchored at the start of the cell
    STATEMENT_PATTERNS = [
        # YYYY-MM-DD
        (re.compile(r'^(\d{4})-(\d{2})-(\d{2})'), "ymd"),
        # DD/MM/YYYY or DD-MM-YYYY
        (re.compile(r'^(\d{2})[/\-](\d{2})[/\-](\d{4})'), "dmy"),
        # DD/MM/YY
        (re.compile(r'^(\d{2})[/\-](\d{2})[/\-](\d{2})$'), "dmy"),
    ]

    @staticmethod
    def normalize_year(year: int) -> int:
        """Two-digit years are taken to be in the 2000s"""
        if year < 100:
            return 2000 + year
        return year

    @classmethod
    def build_date(cls, year: int, month: Optional[int], day: int) -> Optional[date]:
        """
        Build a calendar date, rejecting impossible combinations.

        Returns:
            date object or None if day/month/year do not form a real date
        """
        if month is None or not 1 <= month <= 12 or not 1 <= day <= 31:
            return None
        try:
            return date(cls.normalize_year(year), month, day)
        except ValueError:
            return None

    @classmethod
    def search_receipt_date(cls, text: str) -> Optional[date]:
        """
        Find the first valid date anywhere in receipt text.

        Numeric DD/MM/YYYY dates are preferred over month-name dates. Invalid
        matches are skipped and the search continues.

        Args:
            text: Raw OCR text

        Returns:
            date object or None if nothing valid was found
        """
        if not text:
            return None

        numeric, named = cls.RECEIPT_PATTERNS

        for match in numeric.finditer(text):
            day, month, year = (int(g) for g in match.groups())
            found = cls.build_date(year, month, day)
            if found:
                return found

        for match in named.finditer(text):
            month = cls.MONTHS_ABBR.get(match.group(2).upper()[:3])
            found = cls.build_date(int(match.group(3)), month, int(match.group(1)))
            if found:
                return found

        return None

    @classmethod
    def parse_statement_date(cls, value: Any) -> Optional[date]:
        """
        Parse a statement date cell.

        Accepts native date cells, YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY and
        DD/MM/YY strings, then falls back to dateutil (day first).

        Args:
            value: Cell value as read from the spreadsheet

        Returns:
            date object or None if the cell is not a usable date
        """
        if value is None or value == "":
            return None

        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value

        date_str = str(value).strip()
        if not date_str:
            return None

        for pattern, order in cls.STATEMENT_PATTERNS:
            match = pattern.match(date_str)
            if not match:
                continue
            first, second, third = (int(g) for g in match.groups())
            if order == "ymd":
                found = cls.build_date(first, second, third)
            else:
                found = cls.build_date(third, second, first)
            if found:
                return found

        # Bare numbers like "5" would otherwise become a day of the current month
        if len(date_str) < 6 or not re.search(r'\d', date_str):
            return None

        try:
            return dateutil_parser.parse(date_str, dayfirst=True).date()
        except (ValueError, OverflowError):
            return None


def to_iso(value: Optional[date]) -> Optional[str]:
    """Format a date as YYYY-MM-DD, passing None through"""
    return value.isoformat() if value else None
