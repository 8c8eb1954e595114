"""
Tests for OCR, imaging, formatting and storage adapters
"""
import io
from unittest.mock import MagicMock, patch

import fitz
import pytest
import pytesseract
from botocore.exceptions import ClientError
from PIL import Image

from domain.exceptions import RecognitionError
from infrastructure.formatting.indonesian_formatter import IndonesianFormatter
from infrastructure.imaging.pillow_compressor import PillowImageCompressor
from infrastructure.ocr.tesseract_recognizer import TesseractTextRecognizer
from infrastructure.storage.s3_storage import LocalStorage, S3Storage


def make_image(width: int = 200, height: int = 100, fmt: str = "PNG") -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color="white").save(buffer, format=fmt)
    return buffer.getvalue()


def make_pdf(pages: int = 2) -> bytes:
    doc = fitz.open()
    for _ in range(pages):
        page = doc.new_page()
        page.insert_text((72, 72), "TOTAL Rp 45.000")
    data = doc.tobytes()
    doc.close()
    return data


OCR_DATA = {
    "text": ["", "INDOMARET", "TOTAL", "45.000"],
    "conf": ["-1", "90", "80", "85"],
    "block_num": [1, 1, 1, 1],
    "par_num": [1, 1, 1, 1],
    "line_num": [0, 1, 2, 2],
}
DATA_PATH = "infrastructure.ocr.tesseract_recognizer.pytesseract.image_to_data"


class TestTesseractTextRecognizer:
    """OCR adapter with the engine patched out."""

    @pytest.fixture
    def recognizer(self):
        return TesseractTextRecognizer()

    @patch(DATA_PATH, return_value=OCR_DATA)
    def test_recognize_image(self, mock_data, recognizer):
        progress = []
        result = recognizer.recognize(make_image(), "struk.png", progress.append)

        assert result.content == "INDOMARET\nTOTAL 45.000"
        assert result.confidence == pytest.approx(85.0)
        assert progress == [0, 20, 70, 100]
        assert mock_data.call_args.kwargs["lang"] == "ind+eng"

    @patch(DATA_PATH, return_value=OCR_DATA)
    def test_engine_runs_once_per_scan(self, mock_data, recognizer):
        recognizer.recognize(make_image(), "struk.png")
        assert mock_data.call_count == 1

    @patch(DATA_PATH, return_value={
        "text": ["Kopi", "18.000", "Roti", "7.000"],
        "conf": ["91", "88", "90", "87"],
        "block_num": [1, 1, 2, 2],
        "par_num": [1, 1, 1, 1],
        "line_num": [1, 1, 1, 1],
    })
    def test_lines_split_across_blocks(self, mock_data, recognizer):
        result = recognizer.recognize(make_image(), "struk.png")
        assert result.content == "Kopi 18.000\nRoti 7.000"

    @patch(DATA_PATH, return_value=OCR_DATA)
    def test_only_first_pdf_page(self, mock_data, recognizer):
        result = recognizer.recognize(make_pdf(pages=3), "struk.pdf")

        assert result.content == "INDOMARET\nTOTAL 45.000"
        assert mock_data.call_count == 1
        rendered = mock_data.call_args.args[0]
        # A4-ish page rasterized at scale 2
        assert rendered.width > 1000

    @patch(DATA_PATH, return_value={"text": [], "conf": []})
    def test_failing_progress_callback_is_ignored(self, mock_data, recognizer):
        def broken(_):
            raise ValueError("ui closed")

        result = recognizer.recognize(make_image(), "struk.png", broken)
        assert result.is_empty
        assert result.confidence == 0.0

    @patch(DATA_PATH, side_effect=pytesseract.TesseractNotFoundError())
    def test_engine_missing(self, mock_data, recognizer):
        with pytest.raises(RecognitionError):
            recognizer.recognize(make_image(), "struk.png")

    @patch(DATA_PATH, side_effect=RuntimeError("timeout"))
    def test_engine_failure(self, mock_data, recognizer):
        with pytest.raises(RecognitionError, match="processing failed"):
            recognizer.recognize(make_image(), "struk.png")

    def test_undecodable_image(self, recognizer):
        with pytest.raises(RecognitionError):
            recognizer.recognize(b"not an image", "struk.jpg")

    def test_empty_image(self, recognizer):
        with pytest.raises(RecognitionError):
            recognizer.recognize(b"", "struk.jpg")


class TestPillowImageCompressor:
    """Receipt photo compression before upload."""

    def test_downscale_to_max_width(self):
        compressed = PillowImageCompressor(max_width=800, quality=60).compress(make_image(1600, 1200))
        picture = Image.open(io.BytesIO(compressed))

        assert picture.format == "JPEG"
        assert picture.size == (800, 600)

    def test_small_image_keeps_size(self):
        compressed = PillowImageCompressor().compress(make_image(400, 300))
        assert Image.open(io.BytesIO(compressed)).size == (400, 300)

    def test_undecodable_returns_original(self):
        assert PillowImageCompressor().compress(b"garbage") == b"garbage"


class TestIndonesianFormatter:
    """Rupiah formatting."""

    @pytest.fixture
    def formatter(self):
        return IndonesianFormatter()

    def test_currency(self, formatter):
        assert formatter.currency(45000) == "Rp 45.000"
        assert formatter.currency(1500000.4) == "Rp 1.500.000"
        assert formatter.currency(-45000) == "-Rp 45.000"
        assert formatter.currency("abc") == "Rp 0"

    def test_currency_variants(self, formatter):
        assert formatter.currency(45000, show_symbol=False) == "45.000"
        assert formatter.currency(45000, show_sign=True) == "+Rp 45.000"
        assert formatter.currency(-45000, show_sign=True) == "-Rp 45.000"

    @pytest.mark.parametrize("amount,expected", [
        (1500000, "1,5jt"),
        (500000, "500rb"),
        (1000000, "1jt"),
        (2500000000, "2,5M"),
        (750, "750"),
        (-1500000, "-1,5jt"),
    ])
    def test_compact(self, formatter, amount, expected):
        assert formatter.compact(amount) == expected


class TestStorage:
    """Receipt image storage."""

    def test_local_upload(self, tmp_path):
        storage = LocalStorage(base_path=str(tmp_path))
        url = storage.upload_bytes(b"jpeg", "receipts/u1/1.jpg", "image/jpeg", {"user_id": "u1"})

        assert url.startswith("file://")
        assert (tmp_path / "receipts" / "u1" / "1.jpg").read_bytes() == b"jpeg"
        assert (tmp_path / "receipts" / "u1" / "1.jpg.meta.json").exists()

    @patch("infrastructure.storage.s3_storage.boto3.client")
    def test_s3_upload(self, mock_client):
        client = MagicMock()
        client.generate_presigned_url.return_value = "https://s3/receipts/u1/1.jpg?sig"
        mock_client.return_value = client

        storage = S3Storage(bucket_name="receipts", url_expiration=600)
        url = storage.upload_bytes(b"jpeg", "receipts/u1/1.jpg", "image/jpeg")

        assert url == "https://s3/receipts/u1/1.jpg?sig"
        client.put_object.assert_called_once_with(
            Bucket="receipts", Key="receipts/u1/1.jpg", Body=b"jpeg", ContentType="image/jpeg"
        )
        assert client.generate_presigned_url.call_args.kwargs["ExpiresIn"] == 600

    @patch("infrastructure.storage.s3_storage.boto3.client")
    def test_s3_upload_failure(self, mock_client):
        client = MagicMock()
        client.put_object.side_effect = ClientError(
            {"Error": {"Code": "500", "Message": "boom"}}, "PutObject"
        )
        mock_client.return_value = client

        storage = S3Storage(bucket_name="receipts")
        with pytest.raises(Exception, match="S3 upload failed"):
            storage.upload_bytes(b"jpeg", "receipts/u1/1.jpg")
