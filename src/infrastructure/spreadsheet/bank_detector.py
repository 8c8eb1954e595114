"""
Bank Statement Issuer Detector

Detects which bank exported a statement spreadsheet from its cell content
"""

import logging
from datetime import date, datetime
from typing import Sequence

from domain.entities.statement import StatementRow

logger = logging.getLogger(__name__)


UNKNOWN_BANK = "UNKNOWN"

# Checked in order; first bank with a keyword anywhere in the file wins
STATEMENT_BANK_CATALOG: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("BCA", ("BCA", "BANK CENTRAL ASIA", "KLIKBCA", "M-BCA")),
    ("MANDIRI", ("MANDIRI", "BANK MANDIRI", "LIVIN")),
    ("BRI", ("BRI", "BANK RAKYAT INDONESIA", "BRIMO")),
    ("BNI", ("BNI", "BANK NEGARA INDONESIA")),
    ("CIMB", ("CIMB", "CIMB NIAGA", "OCTO")),
    ("DANAMON", ("DANAMON", "D-BANK")),
    ("BSI", ("BSI", "BANK SYARIAH INDONESIA")),
    ("PERMATA", ("PERMATA", "PERMATABANK")),
)


class StatementBankDetector:
    """Detect bank from statement spreadsheet content"""

    @staticmethod
    def detect_bank(rows: Sequence[StatementRow]) -> str:
        """
        Detect bank from all cell values of the file

        Returns:
            "BCA" | "MANDIRI" | "BRI" | "BNI" | "CIMB" | "DANAMON" | "BSI" | "PERMATA" | "UNKNOWN"
        """
        content = " ".join(
            _cell_text(cell) for row in rows for cell in row
        ).upper()

        for bank, keywords in STATEMENT_BANK_CATALOG:
            if any(keyword in content for keyword in keywords):
                return bank

        logger.info(f"[BANK_DETECT] Could not detect bank. Sample (first 200 chars): {content[:200]!r}")
        return UNKNOWN_BANK


def _cell_text(cell) -> str:
    if isinstance(cell, (date, datetime)):
        return cell.isoformat()
    return str(cell)
