"""
Infrastructure Adapter: Statement Classifier
Implements IStatementClassifier for Indonesian bank statement exports

Per row: date -> amount/type -> description -> category suggestion.
A row that fails date, amount or description is dropped silently.
"""

import logging
from typing import Optional, Sequence

from application.ports.statement_classifier import IStatementClassifier
from domain.entities.statement import (
    Cell,
    ImportCandidate,
    StatementColumns,
    StatementRow,
)
from domain.enums import TransactionType
from infrastructure.parsing.amount_parser import RupiahAmountParser
from infrastructure.parsing.date_parser import IndonesianDateParser

logger = logging.getLogger(__name__)


# Ordered (keywords, category) rules; first rule with a keyword in the
# uppercased description wins
INCOME_CATEGORY_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (('GAJI', 'SALARY', 'PAYROLL'), 'Gaji'),
    (('TRANSFER', 'TRF', 'TRSF'), 'Transfer Masuk'),
    (('BUNGA', 'INTEREST'), 'Bunga'),
)
EXPENSE_CATEGORY_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (('ALFAMART', 'INDOMARET', 'SUPERINDO'), 'Belanja'),
    (('GRAB', 'GOJEK', 'UBER'), 'Transport'),
    (('PLN', 'LISTRIK'), 'Listrik'),
    (('TELKOM', 'INDIHOME', 'WIFI'), 'Internet'),
    (('MCDONALD', 'KFC', 'STARBUCKS', 'RESTORAN'), 'Makan'),
    (('TOKOPEDIA', 'SHOPEE', 'LAZADA', 'BUKALAPAK'), 'Belanja Online'),
    (('ATM', 'TARIK TUNAI', 'WITHDRAWAL'), 'Tarik Tunai'),
    (('TRANSFER', 'TRF'), 'Transfer Keluar'),
    (('ANGSURAN', 'CICILAN', 'KREDIT'), 'Cicilan'),
)
DEFAULT_INCOME_CATEGORY = 'Pemasukan Lainnya'
DEFAULT_EXPENSE_CATEGORY = 'Lainnya'

CREDIT_MARKER = 'CR'


def suggest_category(description: str, tx_type: TransactionType) -> str:
    """
    Suggest a category name from description keywords

    Args:
        description: Transaction description
        tx_type: Income or expense

    Returns:
        Category name; the type's default when no keyword matches
    """
    desc = (description or "").upper()

    if tx_type == TransactionType.INCOME:
        rules, default = INCOME_CATEGORY_RULES, DEFAULT_INCOME_CATEGORY
    else:
        rules, default = EXPENSE_CATEGORY_RULES, DEFAULT_EXPENSE_CATEGORY

    for keywords, category in rules:
        if any(keyword in desc for keyword in keywords):
            return category
    return default


class StatementClassifier(IStatementClassifier):
    """
    Statement rows -> ImportCandidate list. Stateless; safe to call repeatedly.
    """

    def classify(
        self,
        rows: Sequence[StatementRow],
        columns: StatementColumns
    ) -> list[ImportCandidate]:
        """
        Classify every row below the header row

        Returns:
            Candidates in row order
        """
        candidates = []
        dropped = 0

        for row in rows[columns.header_row_index + 1:]:
            if not row or not "".join(str(cell) for cell in row).strip():
                continue

            candidate = self.classify_row(row, columns)
            if candidate is None:
                dropped += 1
                logger.debug(f"[CLASSIFY] Dropped row: {row!r}")
                continue
            candidates.append(candidate)

        logger.info(f"[CLASSIFY] candidates={len(candidates)} dropped={dropped}")
        return candidates

    def classify_row(self, row: StatementRow, columns: StatementColumns) -> Optional[ImportCandidate]:
        """
        Classify a single row

        Returns:
            ImportCandidate, or None when date, amount or description is unusable
        """
        found_date = IndonesianDateParser.parse_statement_date(_cell(row, columns.date_index))
        if found_date is None:
            return None

        amount, tx_type = self.resolve_amount(row, columns)
        if amount <= 0:
            return None

        description = str(_cell(row, columns.description_index)).strip()
        if not description:
            return None

        return ImportCandidate(
            date=found_date.isoformat(),
            description=description,
            amount=amount,
            type=tx_type,
            suggested_category=suggest_category(description, tx_type),
            original_row=list(row),
        )

    @staticmethod
    def resolve_amount(row: StatementRow, columns: StatementColumns) -> tuple[float, TransactionType]:
        """
        Resolve amount and direction, by column layout priority:

        1. Separate debit and credit columns: non-zero debit is an expense,
           non-zero credit is income (credit wins if both are filled).
        2. Single mutation/amount column: "CR" in the cell means income,
           anything else is an expense.
        3. Only one of debit/credit present: that side decides.

        Returns:
            (absolute amount, transaction type); amount 0.0 when nothing usable
        """
        if columns.has_split_amounts:
            amount, tx_type = 0.0, TransactionType.EXPENSE
            debit = RupiahAmountParser.parse_statement_amount(_cell(row, columns.debit_index))
            credit = RupiahAmountParser.parse_statement_amount(_cell(row, columns.credit_index))
            if debit > 0:
                amount, tx_type = debit, TransactionType.EXPENSE
            if credit > 0:
                amount, tx_type = credit, TransactionType.INCOME
            return amount, tx_type

        if columns.amount_index is not None:
            raw = _cell(row, columns.amount_index)
            amount = RupiahAmountParser.parse_statement_amount(raw)
            if CREDIT_MARKER in str(raw).upper():
                return amount, TransactionType.INCOME
            return amount, TransactionType.EXPENSE

        if columns.debit_index is not None:
            return (
                RupiahAmountParser.parse_statement_amount(_cell(row, columns.debit_index)),
                TransactionType.EXPENSE,
            )
        if columns.credit_index is not None:
            return (
                RupiahAmountParser.parse_statement_amount(_cell(row, columns.credit_index)),
                TransactionType.INCOME,
            )

        return 0.0, TransactionType.EXPENSE


def _cell(row: StatementRow, index: Optional[int]) -> Cell:
    """Cell at index, "" when the column is unset or the row is short"""
    if index is None or index >= len(row):
        return ""
    return row[index]
