"""
API Routes: Statement Import
"""

import logging
from typing import Optional

from fastapi import APIRouter, UploadFile, File, Form, HTTPException, Depends

from api.v1.schemas import (
    CandidateSchema,
    ColumnsSchema,
    ImportRequest,
    ImportSummaryResponse,
    StatementPreviewResponse,
)
from api.v1.dependencies import get_import_use_case, get_formatter
from application.ports.formatter import IFormatter
from application.use_cases.import_statement import ImportStatementUseCase
from domain.entities.statement import ImportCandidate
from domain.enums import TransactionType
from domain.exceptions import UnreadableStatementError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/statements/preview", response_model=StatementPreviewResponse)
async def preview_statement(
    file: UploadFile = File(..., description="Bank statement export (.xlsx or .csv)"),
    account_id: Optional[str] = Form(None, description="Target account, enables duplicate flags"),
    use_case: ImportStatementUseCase = Depends(get_import_use_case),
    formatter: IFormatter = Depends(get_formatter)
):
    """
    Read a statement export and classify its rows

    Rows with an unusable date, amount or description are left out.
    """
    content = await file.read()

    try:
        preview = await use_case.preview(content, file.filename or "", account_id=account_id)
    except UnreadableStatementError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception(f"[IMPORT] Preview failed for {file.filename!r}")
        raise HTTPException(status_code=500, detail=f"Preview failed: {str(e)}")

    candidates = [
        CandidateSchema(
            **candidate.to_dict(),
            formatted_amount=formatter.currency(
                candidate.amount if candidate.is_income else -candidate.amount,
                show_sign=True
            ),
            is_duplicate=is_duplicate
        )
        for candidate, is_duplicate in zip(preview.candidates, preview.duplicate_flags)
    ]

    income_total = sum(c.amount for c in preview.income_candidates)
    expense_total = sum(c.amount for c in preview.expense_candidates)

    return StatementPreviewResponse(
        source_file=preview.source_file,
        bank=preview.bank,
        columns=ColumnsSchema(**preview.columns.to_dict()),
        total_rows=preview.total_rows,
        income_count=len(preview.income_candidates),
        expense_count=len(preview.expense_candidates),
        income_total=income_total,
        expense_total=expense_total,
        income_total_compact=formatter.compact(income_total),
        expense_total_compact=formatter.compact(expense_total),
        candidates=candidates
    )


@router.post("/statements/import", response_model=ImportSummaryResponse)
async def import_statement(
    request: ImportRequest,
    use_case: ImportStatementUseCase = Depends(get_import_use_case)
):
    """
    Save reviewed candidates sequentially

    Duplicates and rows without a fitting category are skipped; rows the
    backend refuses are counted as errors.
    """
    if use_case.store is None:
        raise HTTPException(status_code=503, detail="Database unavailable")

    candidates = [
        ImportCandidate(
            date=item.date,
            description=item.description,
            amount=item.amount,
            type=TransactionType(item.type),
            suggested_category=item.suggested_category
        )
        for item in request.candidates
    ]

    try:
        summary = await use_case.execute_import(request.user_id, request.account_id, candidates)
    except Exception as e:
        logger.exception(f"[IMPORT] Batch import failed for {request.user_id}")
        raise HTTPException(status_code=500, detail=f"Import failed: {str(e)}")

    return ImportSummaryResponse(**summary.to_dict())
