"""
Pytest configuration and shared fixtures.
"""
import sys
from pathlib import Path
from typing import List

import pytest

# Add src to path
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from domain.entities.reference_data import Account, Category  # noqa: E402
from domain.enums import TransactionType  # noqa: E402


@pytest.fixture
def sample_receipt_text() -> str:
    """Typical minimarket receipt as OCR returns it."""
    return (
        "INDOMARET\n"
        "Jl. Sudirman No. 12 Jakarta\n"
        "12/05/2025 10:15\n"
        "Indomie Goreng 3.500\n"
        "Aqua 600ml 4.000\n"
        "TOTAL Rp 7.500\n"
        "TUNAI 10.000\n"
        "KEMBALI 2.500\n"
    )


@pytest.fixture
def sample_accounts() -> List[Account]:
    """User accounts in display order."""
    return [
        Account(id="acc-cash", name="Dompet", type="cash"),
        Account(id="acc-bca", name="BCA Tahapan", type="bank"),
        Account(id="acc-gopay", name="Saldo GoPay", type="ewallet"),
        Account(id="acc-ovo", name="OVO Cash", type="ewallet"),
    ]


@pytest.fixture
def sample_categories() -> List[Category]:
    """User categories for both transaction types."""
    return [
        Category(id="cat-gaji", name="Gaji", type=TransactionType.INCOME),
        Category(id="cat-income-other", name="Pemasukan Lainnya", type=TransactionType.INCOME),
        Category(id="cat-belanja", name="Belanja", type=TransactionType.EXPENSE),
        Category(id="cat-lainnya", name="Lainnya", type=TransactionType.EXPENSE),
    ]


@pytest.fixture
def statement_rows() -> list:
    """BCA-style export: preamble, header row, data rows."""
    return [
        ["Laporan Mutasi Rekening", "", "", "", ""],
        ["BCA - Bank Central Asia", "", "", "", ""],
        ["Tanggal", "Keterangan", "Debit", "Kredit", "Saldo"],
        ["09/05/2025", "Belanja harian", "500000", "", "1500000"],
        ["10/05/2025", "GAJI PT MAJU JAYA", "", "8.000.000,00", "9500000"],
        ["11/05/2025", "INDOMARET SUDIRMAN", "125.000", "", "9375000"],
        ["", "", "", "", ""],
        ["bukan tanggal", "Baris rusak", "1000", "", ""],
    ]
