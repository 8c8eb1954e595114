"""
Statement Column Detector

Finds the header row of a statement export and maps its heterogeneous
column names onto date / description / debit / credit / amount.
"""

import logging
from typing import Optional, Sequence

from domain.entities.statement import StatementColumns, StatementRow

logger = logging.getLogger(__name__)


HEADER_SCAN_ROWS = 10
HEADER_KEYWORDS = ('TANGGAL', 'DATE', 'TGL', 'KETERANGAN', 'DESCRIPTION', 'DEBIT', 'KREDIT', 'CREDIT')

# Header name fragments per field; the first header containing a fragment wins
DATE_HEADERS = ('TANGGAL', 'DATE', 'TGL')
DESCRIPTION_HEADERS = ('KETERANGAN', 'DESCRIPTION', 'URAIAN')
DEBIT_HEADERS = ('DEBIT', 'KELUAR', 'WITHDRAWAL')
CREDIT_HEADERS = ('KREDIT', 'CREDIT', 'MASUK', 'DEPOSIT')
AMOUNT_HEADERS = ('MUTASI', 'AMOUNT', 'JUMLAH')


def find_header_row(rows: Sequence[StatementRow]) -> int:
    """
    Index of the first of the first 10 rows containing a header keyword.

    Falls back to row 0 when no row looks like a header.
    """
    for index, row in enumerate(rows[:HEADER_SCAN_ROWS]):
        row_text = " ".join(str(cell) for cell in row).upper()
        if any(keyword in row_text for keyword in HEADER_KEYWORDS):
            return index

    logger.debug("[COLUMNS] No header keyword in first rows, assuming row 0")
    return 0


def _find_column(headers: list[str], fragments: Sequence[str]) -> Optional[int]:
    for index, header in enumerate(headers):
        if any(fragment in header for fragment in fragments):
            return index
    return None


def detect_columns(rows: Sequence[StatementRow]) -> StatementColumns:
    """
    Resolve column indices from the header row.

    Args:
        rows: All rows of the sheet

    Returns:
        StatementColumns; columns that were not found stay None
    """
    if not rows:
        return StatementColumns()

    header_index = find_header_row(rows)
    headers = [str(cell).upper().strip() for cell in rows[header_index]]

    columns = StatementColumns(
        header_row_index=header_index,
        date_index=_find_column(headers, DATE_HEADERS),
        description_index=_find_column(headers, DESCRIPTION_HEADERS),
        debit_index=_find_column(headers, DEBIT_HEADERS),
        credit_index=_find_column(headers, CREDIT_HEADERS),
        amount_index=_find_column(headers, AMOUNT_HEADERS),
    )

    logger.debug(f"[COLUMNS] Resolved {columns.to_dict()}")
    return columns
