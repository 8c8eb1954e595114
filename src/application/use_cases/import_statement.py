"""
Application Use Case: Import Statement
Turn a bank statement export into reviewed candidates, then save them in one batch
"""

import asyncio
import logging
from typing import Optional, Sequence

from application.ports.spreadsheet_reader import ISpreadsheetReader
from application.ports.statement_classifier import IStatementClassifier
from application.ports.transaction_store import ITransactionStore
from application.services.duplicate_guard import DuplicateGuard
from domain.entities.reference_data import Category
from domain.entities.statement import ImportCandidate, ImportSummary, StatementPreview
from domain.entities.transaction import TransactionDraft
from domain.enums import IncomeType
from infrastructure.spreadsheet.bank_detector import StatementBankDetector
from infrastructure.spreadsheet.column_detector import detect_columns

logger = logging.getLogger(__name__)


class ImportStatementUseCase:
    """Use case for importing bank statement spreadsheets"""

    def __init__(
        self,
        spreadsheet_reader: ISpreadsheetReader,
        classifier: IStatementClassifier,
        store: Optional[ITransactionStore] = None
    ):
        """Initialize use case with dependencies"""

        self.spreadsheet_reader = spreadsheet_reader
        self.classifier = classifier
        self.store = store
        self.duplicate_guard = DuplicateGuard(store) if store is not None else None

    async def preview(
        self,
        content: bytes,
        filename: str,
        account_id: Optional[str] = None
    ) -> StatementPreview:
        """
        Read and classify a statement file

        Args:
            content: Uploaded file bytes
            filename: Original filename (decides xlsx vs csv)
            account_id: Target account; enables duplicate flags when given

        Returns:
            StatementPreview for user review

        Raises:
            UnreadableStatementError: If the file cannot be read
        """
        rows = await asyncio.to_thread(self.spreadsheet_reader.read, content, filename)

        bank = StatementBankDetector.detect_bank(rows)
        columns = detect_columns(rows)
        candidates = self.classifier.classify(rows, columns)

        duplicate_flags = [False] * len(candidates)
        if account_id and self.duplicate_guard is not None:
            duplicate_flags = [
                await self.duplicate_guard.is_duplicate(c.date, c.amount, account_id)
                for c in candidates
            ]

        logger.info(
            f"[IMPORT] Preview {filename}: bank={bank} header_row={columns.header_row_index} "
            f"candidates={len(candidates)} duplicates={sum(duplicate_flags)}"
        )

        return StatementPreview(
            source_file=filename,
            bank=bank,
            columns=columns,
            total_rows=len(rows),
            candidates=candidates,
            duplicate_flags=duplicate_flags,
        )

    async def execute_import(
        self,
        user_id: str,
        account_id: str,
        candidates: Sequence[ImportCandidate]
    ) -> ImportSummary:
        """
        Save candidates one by one

        A row is skipped when no category fits or it already exists, and
        counted as an error when the backend refuses or fails it. Rows never
        abort the batch.

        Returns:
            ImportSummary with total / imported / skipped / errors
        """
        if self.store is None:
            raise RuntimeError("Transaction store not configured")

        summary = ImportSummary(total=len(candidates))
        categories = await self.store.list_categories(user_id)

        for candidate in candidates:
            category = self.resolve_category(candidate, categories)
            if category is None:
                logger.debug(f"[IMPORT] No {candidate.type.value} category for {candidate.description!r}")
                summary.skipped += 1
                continue

            if await self.duplicate_guard.is_duplicate(candidate.date, candidate.amount, account_id):
                summary.skipped += 1
                continue

            draft = TransactionDraft(
                type=candidate.type,
                amount=candidate.amount,
                account_id=account_id,
                category_id=category.id,
                date=candidate.date,
                description=candidate.description,
                income_type=IncomeType.ACTIVE if candidate.is_income else None,
            )

            try:
                transaction_id = await self.store.create_transaction(user_id, draft)
            except Exception as e:
                logger.error(f"[IMPORT] Create failed for {candidate.date} {candidate.description!r}: {e}")
                summary.errors += 1
                continue

            if transaction_id:
                summary.imported += 1
            else:
                summary.errors += 1

        logger.info(f"[IMPORT] {user_id}: {summary.to_dict()}")
        return summary

    @staticmethod
    def resolve_category(candidate: ImportCandidate, categories: Sequence[Category]) -> Optional[Category]:
        """
        Suggested category by name within the candidate's type, else the first
        category of that type
        """
        same_type = [c for c in categories if c.type == candidate.type]

        for category in same_type:
            if category.matches(candidate.suggested_category, candidate.type):
                return category

        return same_type[0] if same_type else None

