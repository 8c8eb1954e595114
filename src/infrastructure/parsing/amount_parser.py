"""
Rupiah amount parsing utilities

Indonesian formatting uses "." for thousands and "," for decimals
(Rp 1.250.000,50).
"""
import math
import re
from typing import Any, Optional


class RupiahAmountParser:
    """
    Utility class for turning Rupiah text into numbers.
    """

    _LEADING_NUMBER = re.compile(r'-?\d+(?:\.\d+)?')
    # A final group of 1-2 digits after "." or "," is the fractional part
    _FRACTION_TAIL = re.compile(r'^(.*\d)[.,](\d{1,2})$')

    @classmethod
    def parse_receipt_number(cls, number_str: str) -> Optional[float]:
        """
        Parse a number printed on a receipt, whatever separator style it uses.

        "45.000,00" -> 45000.0, "1,250,000" -> 1250000.0, "12,500" -> 12500.0,
        "3.500" -> 3500.0, "7.50" -> 7.5

        Args:
            number_str: Digits with optional "." / "," separators

        Returns:
            Float value or None if there are no digits
        """
        cleaned = (number_str or "").strip('.,')
        match = cls._FRACTION_TAIL.match(cleaned)
        whole, fraction = match.groups() if match else (cleaned, "")

        digits = re.sub(r'[.,]', '', whole)
        if not digits.isdigit():
            return None
        return float(f"{digits}.{fraction}" if fraction else digits)

    @classmethod
    def parse_decimal(cls, number_str: str) -> Optional[float]:
        """
        Parse a number written with "." thousands and "," decimals.

        "1.500.000,50" -> 1500000.5. Like a lenient float parse, trailing
        garbage after the leading number is ignored.

        Args:
            number_str: Number text

        Returns:
            Float value or None if no leading number is present
        """
        cleaned = (number_str or "").replace('.', '').replace(',', '.', 1)
        match = cls._LEADING_NUMBER.match(cleaned)
        if not match:
            return None
        return float(match.group(0))

    @classmethod
    def parse_statement_amount(cls, value: Any) -> float:
        """
        Normalize a statement amount cell to a non-negative float.

        Args:
            value: Cell value (number or text like "1.500.000,00 CR")

        Returns:
            Absolute amount, 0.0 when the cell holds no usable number
        """
        if value is None or value == "" or isinstance(value, bool):
            return 0.0

        if isinstance(value, (int, float)):
            if isinstance(value, float) and math.isnan(value):
                return 0.0
            return abs(float(value))

        amount_str = re.sub(r'[^\d.,\-]', '', str(value))
        parsed = cls.parse_decimal(amount_str)
        return abs(parsed) if parsed else 0.0
