"""
Infrastructure Adapter: Indonesian Formatter
Implements IFormatter for Rupiah amounts
"""

from typing import Any

from application.ports.formatter import IFormatter


class IndonesianFormatter(IFormatter):
    """
    Rupiah display formatting

    currency(45000)                  -> "Rp 45.000"
    currency(45000, show_sign=True)  -> "+Rp 45.000"
    compact(1500000)                 -> "1,5jt"
    compact(500000)                  -> "500rb"
    """

    SYMBOL = "Rp"

    # (threshold, suffix), largest first
    COMPACT_UNITS = (
        (1_000_000_000_000, "T"),
        (1_000_000_000, "M"),
        (1_000_000, "jt"),
        (1_000, "rb"),
    )

    def currency(self, amount: Any, show_symbol: bool = True, show_sign: bool = False) -> str:
        value = self._to_number(amount)
        digits = f"{round(abs(value)):,}".replace(",", ".")

        text = f"{self.SYMBOL} {digits}" if show_symbol else digits

        if show_sign:
            return f"{'+' if value >= 0 else '-'}{text}"
        if value < 0:
            return f"-{text}"
        return text

    def compact(self, amount: Any) -> str:
        value = self._to_number(amount)
        sign = "-" if value < 0 else ""
        magnitude = abs(value)

        for threshold, suffix in self.COMPACT_UNITS:
            if magnitude >= threshold:
                scaled = magnitude / threshold
                # One decimal, trailing ",0" dropped
                shown = f"{scaled:.1f}".rstrip("0").rstrip(".").replace(".", ",")
                return f"{sign}{shown}{suffix}"

        return f"{sign}{round(magnitude)}"

    @staticmethod
    def _to_number(amount: Any) -> float:
        try:
            value = float(amount)
        except (TypeError, ValueError):
            return 0.0
        if value != value:  # NaN
            return 0.0
        return value
