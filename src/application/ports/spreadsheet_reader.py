"""
Port: Spreadsheet Reader Interface
Defines contract for loading bank statement exports
"""

from abc import ABC, abstractmethod

from domain.entities.statement import StatementRow


class ISpreadsheetReader(ABC):
    """Interface for spreadsheet loading"""

    @abstractmethod
    def read(self, content: bytes, filename: str) -> list[StatementRow]:
        """
        Load the first sheet as a 2-D array of cells

        Args:
            content: File bytes (xlsx, xls or csv)
            filename: Original filename, used to pick the format

        Returns:
            Rows of cells; empty cells are "" and date cells stay dates

        Raises:
            UnreadableStatementError: If the file is corrupt or unsupported
        """
        pass
