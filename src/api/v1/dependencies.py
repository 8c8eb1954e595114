"""
API Dependencies: Dependency Injection Container
"""

import logging
from functools import lru_cache
from typing import Optional

from fastapi import Depends

from application.ports.formatter import IFormatter
from application.ports.image_compressor import IImageCompressor
from application.ports.provider_detector import IProviderDetector
from application.ports.receipt_parser import IReceiptParser
from application.ports.spreadsheet_reader import ISpreadsheetReader
from application.ports.statement_classifier import IStatementClassifier
from application.ports.storage import IStorage
from application.ports.text_recognizer import ITextRecognizer
from application.ports.transaction_store import ITransactionStore
from application.use_cases.import_statement import ImportStatementUseCase
from application.use_cases.scan_receipt import ScanReceiptUseCase
from infrastructure.database.postgres_store import PostgresTransactionStore
from infrastructure.formatting.indonesian_formatter import IndonesianFormatter
from infrastructure.imaging.pillow_compressor import PillowImageCompressor
from infrastructure.ocr.tesseract_recognizer import TesseractTextRecognizer
from infrastructure.parsing.provider_detector import ProviderDetector
from infrastructure.parsing.receipt_parser import ReceiptTextParser
from infrastructure.parsing.statement_classifier import StatementClassifier
from infrastructure.spreadsheet.pandas_reader import PandasSpreadsheetReader
from infrastructure.storage.s3_storage import S3Storage, LocalStorage
from config import settings

logger = logging.getLogger(__name__)


# Global store instance for connection pooling
_store_instance: PostgresTransactionStore | None = None


async def get_store() -> ITransactionStore:
    """Get transaction store implementation with connection pooling"""
    global _store_instance

    if _store_instance is None:
        store = PostgresTransactionStore(
            connection_string=settings.DATABASE_URL,
            min_pool_size=settings.DATABASE_MIN_SIZE,
            max_pool_size=settings.DATABASE_MAX_SIZE
        )
        await store.connect()
        _store_instance = store

    return _store_instance


async def get_optional_store() -> Optional[ITransactionStore]:
    """Store for endpoints that still work without the backend (None when unreachable)"""
    try:
        return await get_store()
    except Exception as e:
        logger.warning(f"Transaction store unavailable: {e}")
        return None


async def close_store():
    """Close store connection pool"""
    global _store_instance

    if _store_instance is not None:
        await _store_instance.close()
        _store_instance = None


@lru_cache()
def get_text_recognizer() -> ITextRecognizer:
    """Get OCR implementation"""
    return TesseractTextRecognizer(
        language=settings.OCR_LANGUAGE,
        tesseract_cmd=settings.TESSERACT_CMD,
        pdf_render_scale=settings.PDF_RENDER_SCALE
    )


@lru_cache()
def get_provider_detector() -> IProviderDetector:
    """Get bank / e-wallet detector"""
    return ProviderDetector()


@lru_cache()
def get_receipt_parser() -> IReceiptParser:
    """Get receipt text parser"""
    return ReceiptTextParser(provider_detector=get_provider_detector())


@lru_cache()
def get_spreadsheet_reader() -> ISpreadsheetReader:
    """Get statement spreadsheet reader"""
    return PandasSpreadsheetReader()


@lru_cache()
def get_statement_classifier() -> IStatementClassifier:
    """Get statement row classifier"""
    return StatementClassifier()


@lru_cache()
def get_image_compressor() -> IImageCompressor:
    """Get receipt image compressor"""
    return PillowImageCompressor(
        max_width=settings.RECEIPT_MAX_WIDTH,
        quality=settings.RECEIPT_JPEG_QUALITY
    )


@lru_cache()
def get_formatter() -> IFormatter:
    """Get display formatter"""
    return IndonesianFormatter()


@lru_cache()
def get_storage() -> IStorage:
    """Get storage implementation (S3 or Local fallback)"""

    # Try S3 if credentials available
    if settings.AWS_ACCESS_KEY_ID and settings.AWS_SECRET_ACCESS_KEY:
        try:
            return S3Storage(
                bucket_name=settings.S3_BUCKET_NAME,
                aws_access_key=settings.AWS_ACCESS_KEY_ID,
                aws_secret_key=settings.AWS_SECRET_ACCESS_KEY,
                region=settings.AWS_REGION,
                url_expiration=settings.S3_PRESIGNED_URL_EXPIRATION,
                endpoint_url=settings.S3_ENDPOINT_URL
            )
        except Exception as e:
            logger.warning(f"S3 initialization failed, using local storage: {e}")

    # Fallback to local storage
    return LocalStorage(base_path=settings.LOCAL_STORAGE_PATH)


def get_scan_use_case(
    store: Optional[ITransactionStore] = Depends(get_optional_store)
) -> ScanReceiptUseCase:
    """Get scan receipt use case with injected dependencies"""

    return ScanReceiptUseCase(
        text_recognizer=get_text_recognizer(),
        receipt_parser=get_receipt_parser(),
        provider_detector=get_provider_detector(),
        store=store,
        storage=get_storage(),
        image_compressor=get_image_compressor()
    )


def get_import_use_case(
    store: Optional[ITransactionStore] = Depends(get_optional_store)
) -> ImportStatementUseCase:
    """Get import statement use case with injected dependencies"""

    return ImportStatementUseCase(
        spreadsheet_reader=get_spreadsheet_reader(),
        classifier=get_statement_classifier(),
        store=store
    )
