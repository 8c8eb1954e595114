"""
Tests for bank / e-wallet provider detection
"""
import pytest

from domain.entities.reference_data import Account
from infrastructure.parsing.provider_detector import PROVIDER_CATALOG, ProviderDetector


@pytest.fixture
def detector():
    return ProviderDetector()


class TestDetect:
    """First catalog match wins."""

    @pytest.mark.parametrize("text,expected", [
        ("Bayar pakai OVO", "OVO"),
        ("QRIS ShopeePay", "ShopeePay"),
        ("Transfer BCA Syariah", "BCA Syariah"),
        ("Top up blu by BCA", "blu by BCA Digital"),
        ("Debit Card Danamon", "Danamon"),
        ("BRImo transfer", "BRI"),
        ("Livin by Mandiri", "Mandiri"),
        ("bank jago", "Bank Jago"),
    ])
    def test_known_providers(self, detector, text, expected):
        assert detector.detect(text) == expected

    def test_ewallet_precedes_bank(self, detector):
        """Both GoPay and BCA match; GoPay is listed first."""
        assert detector.detect("Transfer via GoPay ke BCA") == "GoPay"

    def test_order_sensitivity(self):
        """Moving BCA in front of GoPay flips the answer for the same text."""
        bca = next(p for p in PROVIDER_CATALOG if p.display_name == "BCA")
        reordered = ProviderDetector([bca] + [p for p in PROVIDER_CATALOG if p is not bca])
        assert reordered.detect("Transfer via GoPay ke BCA") == "BCA"

    def test_word_boundaries(self, detector):
        """DANA must not fire inside DANAMON, BCA not inside ABCABC."""
        assert detector.detect("DANAMON") == "Danamon"
        assert detector.detect("ABCABC") is None

    @pytest.mark.parametrize("text", ["Indomaret", "", None, "TOTAL 45.000"])
    def test_no_provider(self, detector, text):
        assert detector.detect(text) is None

    def test_catalog_size(self):
        assert len(PROVIDER_CATALOG) >= 20


class TestSuggestAccount:
    """Mapping a provider onto the user's accounts."""

    def test_keyword_match(self, detector, sample_accounts):
        assert detector.suggest_account("GoPay", sample_accounts).id == "acc-gopay"
        assert detector.suggest_account("BCA", sample_accounts).id == "acc-bca"

    def test_first_account_wins(self, detector):
        accounts = [Account(id="a", name="BCA Utama"), Account(id="b", name="BCA Bisnis")]
        assert detector.suggest_account("BCA", accounts).id == "a"

    def test_provider_name_substring(self, detector):
        """Providers outside the catalog still match by name."""
        accounts = [Account(id="cash", name="Dompet"), Account(id="flip", name="Flip Wallet")]
        assert detector.suggest_account("Flip", accounts).id == "flip"

    def test_no_match(self, detector, sample_accounts):
        assert detector.suggest_account("Mandiri", sample_accounts) is None

    def test_no_provider(self, detector, sample_accounts):
        assert detector.suggest_account(None, sample_accounts) is None
        assert detector.suggest_account("BCA", []) is None
