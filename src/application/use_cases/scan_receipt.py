"""
Application Use Case: Scan Receipt
Recognize a receipt image, guess its transaction fields and save the confirmed expense
"""

import asyncio
import base64
import logging
import time
from datetime import date
from typing import Optional

from application.ports.image_compressor import IImageCompressor
from application.ports.provider_detector import IProviderDetector
from application.ports.receipt_parser import IReceiptParser
from application.ports.storage import IStorage
from application.ports.text_recognizer import ITextRecognizer
from application.ports.transaction_store import ITransactionStore
from domain.entities.scan import ScanResult, ScanSession
from domain.entities.transaction import TransactionDraft
from domain.enums import TransactionType

logger = logging.getLogger(__name__)


DEFAULT_DESCRIPTION = "Scan struk"


class ScanReceiptUseCase:
    """Use case for scanning receipts into expense transactions"""

    def __init__(
        self,
        text_recognizer: ITextRecognizer,
        receipt_parser: IReceiptParser,
        provider_detector: IProviderDetector,
        store: Optional[ITransactionStore] = None,
        storage: Optional[IStorage] = None,
        image_compressor: Optional[IImageCompressor] = None
    ):
        """Initialize use case with dependencies"""

        self.text_recognizer = text_recognizer
        self.receipt_parser = receipt_parser
        self.provider_detector = provider_detector
        self.store = store
        self.storage = storage
        self.image_compressor = image_compressor

    async def execute(self, session: ScanSession, today: Optional[date] = None) -> ScanResult:
        """
        Run one scan: recognize -> parse -> suggest account

        Raises:
            RecognitionError: If the OCR engine fails; the scan is aborted
        """
        # OCR is CPU bound and blocking
        recognized = await asyncio.to_thread(
            self.text_recognizer.recognize,
            session.image,
            session.filename,
            session.on_progress,
        )

        receipt = self.receipt_parser.parse(recognized.content, today=today)

        suggested_account = None
        if receipt.detected_provider and self.store is not None:
            try:
                accounts = await self.store.list_accounts(session.user_id)
            except Exception as e:
                logger.warning(f"[SCAN] Could not load accounts for {session.user_id}: {e}")
                accounts = []
            suggested_account = self.provider_detector.suggest_account(
                receipt.detected_provider, accounts
            )

        logger.info(
            f"[SCAN] {session.filename or 'image'}: total={receipt.total_amount} "
            f"provider={receipt.detected_provider} confidence={recognized.confidence:.1f}"
        )

        return ScanResult(
            receipt=receipt,
            confidence=recognized.confidence,
            suggested_account=suggested_account,
        )

    async def confirm(
        self,
        user_id: str,
        account_id: str,
        category_id: str,
        amount: float,
        date: str,
        merchant: Optional[str] = None,
        item: Optional[str] = None,
        image: Optional[bytes] = None
    ) -> Optional[str]:
        """
        Save a user-confirmed receipt as an expense

        Args:
            user_id: Owner of the transaction
            account_id: Account the expense is paid from
            category_id: Expense category
            amount: Confirmed total
            date: Confirmed ISO date
            merchant: Confirmed merchant; used as description
            item: Optional item note
            image: Original receipt image to attach

        Returns:
            Created transaction ID, or None if the backend refused it
        """
        if self.store is None:
            raise RuntimeError("Transaction store not configured")

        receipt_url = None
        if image:
            receipt_url = await asyncio.to_thread(self.save_receipt_image, user_id, image)

        draft = TransactionDraft(
            type=TransactionType.EXPENSE,
            amount=amount,
            account_id=account_id,
            category_id=category_id,
            date=date,
            description=(merchant or "").strip() or DEFAULT_DESCRIPTION,
            item=item,
            receipt_url=receipt_url,
        )

        transaction_id = await self.store.create_transaction(user_id, draft)
        logger.info(f"[SCAN] Saved expense {transaction_id} for {user_id}: {amount} on {date}")
        return transaction_id

    def save_receipt_image(self, user_id: str, image: bytes) -> Optional[str]:
        """
        Compress and upload a receipt image

        Returns:
            Storage URL; a base64 data URI of the compressed image when the
            upload fails; None when no image is given
        """
        if not image:
            return None

        compressed = self.image_compressor.compress(image) if self.image_compressor else image

        if self.storage is not None:
            remote_key = f"receipts/{user_id}/{int(time.time() * 1000)}.jpg"
            try:
                return self.storage.upload_bytes(
                    compressed,
                    remote_key,
                    content_type="image/jpeg",
                    metadata={"user_id": user_id},
                )
            except Exception as e:
                logger.warning(f"[SCAN] Receipt upload failed, keeping inline image: {e}")

        encoded = base64.b64encode(compressed).decode("ascii")
        return f"data:image/jpeg;base64,{encoded}"
