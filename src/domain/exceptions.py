"""
Domain Exceptions

Only the boundary adapters (text recognition, spreadsheet reading) raise
these. Parsers degrade to empty fields or dropped rows instead.
"""


class ExtractionError(Exception):
    """Base class for extraction pipeline failures"""


class RecognitionError(ExtractionError):
    """OCR engine could not be initialized or failed while processing"""

    def __init__(self, message: str = "processing failed"):
        super().__init__(message)


class UnreadableStatementError(ExtractionError):
    """Statement file is corrupt or in an unsupported format"""
