"""
Infrastructure Adapter: Pandas Spreadsheet Reader
Implements ISpreadsheetReader using pandas (openpyxl engine for xlsx)
"""

import io
import logging
import math
from datetime import datetime
from pathlib import Path

import pandas as pd

from application.ports.spreadsheet_reader import ISpreadsheetReader
from domain.entities.statement import Cell, StatementRow
from domain.exceptions import UnreadableStatementError

logger = logging.getLogger(__name__)


class PandasSpreadsheetReader(ISpreadsheetReader):
    """
    Statement export loader. Only the first sheet of a workbook is read.
    """

    EXCEL_SUFFIXES = {'.xlsx', '.xlsm'}
    CSV_SUFFIXES = {'.csv', '.txt'}
    CSV_SEPARATORS = (',', ';', '\t')
    CSV_ENCODINGS = ('utf-8-sig', 'latin-1')

    def read(self, content: bytes, filename: str) -> list[StatementRow]:
        """
        Load the first sheet as rows of cells

        Raises:
            UnreadableStatementError: If the file is empty, corrupt or not a supported spreadsheet
        """
        if not content:
            raise UnreadableStatementError("File is empty")

        suffix = Path(filename or "").suffix.lower()

        if suffix in self.EXCEL_SUFFIXES:
            frame = self._read_excel(content)
        elif suffix in self.CSV_SUFFIXES:
            frame = self._read_csv(content)
        else:
            raise UnreadableStatementError(
                f"Unsupported file type: {suffix or filename!r}. Use .xlsx or .csv"
            )

        rows = [
            [self._to_cell(value) for value in record]
            for record in frame.itertuples(index=False, name=None)
        ]
        logger.info(f"[SPREADSHEET] {filename}: {len(rows)} rows, {frame.shape[1]} columns")
        return rows

    # =========================
    # ------- INTERNAL --------
    # =========================

    def _read_excel(self, content: bytes) -> pd.DataFrame:
        try:
            return pd.read_excel(
                io.BytesIO(content),
                sheet_name=0,
                header=None,
                dtype=object,
                engine="openpyxl",
            )
        except Exception as e:
            logger.error(f"[SPREADSHEET] Excel read failed: {e}")
            raise UnreadableStatementError(f"Gagal membaca file Excel: {e}") from e

    def _read_csv(self, content: bytes) -> pd.DataFrame:
        best = None
        last_error = None

        for encoding in self.CSV_ENCODINGS:
            for sep in self.CSV_SEPARATORS:
                try:
                    frame = pd.read_csv(
                        io.BytesIO(content),
                        encoding=encoding,
                        sep=sep,
                        header=None,
                        dtype=str,
                        keep_default_na=False,
                        engine="python",
                    )
                except Exception as e:
                    last_error = e
                    continue

                if frame.shape[1] >= 2:
                    return frame
                if best is None:
                    best = frame

        if best is not None:
            return best

        logger.error(f"[SPREADSHEET] CSV read failed: {last_error}")
        raise UnreadableStatementError(f"Gagal membaca file CSV: {last_error}")

    @staticmethod
    def _to_cell(value) -> Cell:
        """Convert a pandas value into a plain cell ("" for empty)"""
        if value is None or value is pd.NaT:
            return ""

        if isinstance(value, pd.Timestamp):
            return value.to_pydatetime() if not pd.isna(value) else ""

        # numpy scalars -> python scalars
        if hasattr(value, "item") and not isinstance(value, (str, bytes, datetime)):
            value = value.item()

        if isinstance(value, float):
            if math.isnan(value):
                return ""
            if value.is_integer():
                return int(value)
        return value
