"""
API Routes: Receipt Scanning
"""

import base64
import binascii
import logging

from fastapi import APIRouter, UploadFile, File, Form, HTTPException, Depends

from api.v1.schemas import (
    ScanResponse,
    ConfirmReceiptRequest,
    ConfirmReceiptResponse,
)
from api.v1.dependencies import get_scan_use_case, get_formatter
from application.ports.formatter import IFormatter
from application.use_cases.scan_receipt import ScanReceiptUseCase
from domain.entities.scan import ScanSession
from domain.exceptions import RecognitionError

logger = logging.getLogger(__name__)

router = APIRouter()

RECOGNITION_FAILED_MESSAGE = "Gagal memproses gambar"


@router.post("/receipts/scan", response_model=ScanResponse)
async def scan_receipt(
    file: UploadFile = File(..., description="Receipt photo (JPEG/PNG) or PDF"),
    user_id: str = Form(..., description="User identifier"),
    use_case: ScanReceiptUseCase = Depends(get_scan_use_case),
    formatter: IFormatter = Depends(get_formatter)
):
    """
    Scan a receipt and return best-effort transaction fields

    Workflow:
    1. Recognize text (Tesseract, first PDF page only)
    2. Guess merchant, date, total, provider and line items
    3. Suggest the user's account for the detected provider

    Every guess may be empty; the user reviews and confirms before saving.
    """
    filename = file.filename or ""
    content_type = file.content_type or ""

    if not (content_type.startswith("image/") or filename.lower().endswith(".pdf")
            or content_type == "application/pdf"):
        raise HTTPException(status_code=400, detail="File must be an image or a PDF")

    content = await file.read()
    if not content:
        raise HTTPException(status_code=400, detail="File is empty")

    session = ScanSession(image=content, filename=filename, user_id=user_id)

    try:
        result = await use_case.execute(session)
    except RecognitionError as e:
        logger.error(f"[SCAN] Recognition failed for {filename!r}: {e}")
        raise HTTPException(status_code=422, detail=RECOGNITION_FAILED_MESSAGE)
    except Exception as e:
        logger.exception(f"[SCAN] Unexpected failure for {filename!r}")
        raise HTTPException(status_code=500, detail=f"Scan failed: {str(e)}")

    payload = result.to_dict()
    total = result.receipt.total_amount
    payload["formatted_total"] = formatter.currency(total) if total is not None else None

    return ScanResponse(**payload)


@router.post("/receipts/confirm", response_model=ConfirmReceiptResponse)
async def confirm_receipt(
    request: ConfirmReceiptRequest,
    use_case: ScanReceiptUseCase = Depends(get_scan_use_case),
    formatter: IFormatter = Depends(get_formatter)
):
    """
    Save a reviewed receipt as an expense

    The optional image is compressed and uploaded; when the upload fails it
    is kept inline as a data URI.
    """
    if use_case.store is None:
        raise HTTPException(status_code=503, detail="Database unavailable")

    image = None
    if request.image_base64:
        encoded = request.image_base64
        if encoded.startswith("data:") and "," in encoded:
            encoded = encoded.split(",", 1)[1]
        try:
            image = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError):
            raise HTTPException(status_code=400, detail="image_base64 is not valid base64")

    try:
        transaction_id = await use_case.confirm(
            user_id=request.user_id,
            account_id=request.account_id,
            category_id=request.category_id,
            amount=request.amount,
            date=request.date,
            merchant=request.merchant,
            item=request.item,
            image=image
        )
    except Exception as e:
        logger.exception("[SCAN] Saving receipt failed")
        raise HTTPException(status_code=500, detail=f"Save failed: {str(e)}")

    if not transaction_id:
        return ConfirmReceiptResponse(
            success=False,
            message="Transaksi gagal disimpan"
        )

    return ConfirmReceiptResponse(
        success=True,
        transaction_id=transaction_id,
        message=f"Pengeluaran {formatter.currency(request.amount)} tersimpan"
    )
