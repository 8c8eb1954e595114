"""
Domain Entity: Statement
Represents an imported bank statement spreadsheet and the candidate
transactions classified from it
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Union

from ..enums import TransactionType


# A single spreadsheet cell after reading; empty cells are ""
Cell = Union[str, int, float, date, datetime]
StatementRow = list[Cell]


@dataclass(frozen=True)
class StatementColumns:
    """Column indices resolved once per file from the header row

    None means the column was not found and the field is unavailable.
    """

    header_row_index: int = 0
    date_index: Optional[int] = None
    description_index: Optional[int] = None
    debit_index: Optional[int] = None
    credit_index: Optional[int] = None
    amount_index: Optional[int] = None

    @property
    def has_split_amounts(self) -> bool:
        """Debit and credit live in separate columns"""
        return self.debit_index is not None and self.credit_index is not None

    def to_dict(self) -> dict:
        return {
            "header_row_index": self.header_row_index,
            "date": self.date_index,
            "description": self.description_index,
            "debit": self.debit_index,
            "credit": self.credit_index,
            "amount": self.amount_index,
        }


@dataclass
class ImportCandidate:
    """Transaction candidate classified from one statement row

    Invariant: amount > 0, date is a valid ISO calendar date and description
    is non-empty. Rows failing any of these are never turned into candidates.
    """

    date: str
    description: str
    amount: float
    type: TransactionType
    suggested_category: str
    original_row: StatementRow = field(default_factory=list)

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return {
            "date": self.date,
            "description": self.description,
            "amount": self.amount,
            "type": self.type.value,
            "suggested_category": self.suggested_category,
            "original_row": [
                cell.isoformat() if isinstance(cell, (date, datetime)) else cell
                for cell in self.original_row
            ],
        }


@dataclass
class StatementPreview:
    """Everything the user reviews before confirming a statement import"""

    source_file: str
    bank: str
    columns: StatementColumns
    total_rows: int
    candidates: list[ImportCandidate] = field(default_factory=list)
    duplicate_flags: list[bool] = field(default_factory=list)

    @property
    def income_candidates(self) -> list[ImportCandidate]:
        return [c for c in self.candidates if c.is_income]

    @property
    def expense_candidates(self) -> list[ImportCandidate]:
        return [c for c in self.candidates if not c.is_income]


@dataclass
class ImportSummary:
    """Aggregate outcome of one batch import"""

    total: int = 0
    imported: int = 0
    skipped: int = 0
    errors: int = 0

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "imported": self.imported,
            "skipped": self.skipped,
            "errors": self.errors,
        }
