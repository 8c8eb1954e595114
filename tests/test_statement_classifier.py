"""
Tests for statement column detection and row classification
"""
import pytest

from domain.entities.statement import StatementColumns
from domain.enums import TransactionType
from infrastructure.parsing.statement_classifier import StatementClassifier, suggest_category
from infrastructure.spreadsheet.bank_detector import StatementBankDetector, UNKNOWN_BANK
from infrastructure.spreadsheet.column_detector import detect_columns, find_header_row


SPLIT_COLUMNS = StatementColumns(
    header_row_index=0,
    date_index=0,
    description_index=1,
    debit_index=2,
    credit_index=3,
)
HEADER = ["Tanggal", "Keterangan", "Debit", "Kredit"]


@pytest.fixture
def classifier():
    return StatementClassifier()


class TestColumnDetection:
    """Header row and column index resolution."""

    def test_header_after_preamble(self, statement_rows):
        assert find_header_row(statement_rows) == 2

    def test_split_columns(self, statement_rows):
        columns = detect_columns(statement_rows)
        assert columns == StatementColumns(
            header_row_index=2,
            date_index=0,
            description_index=1,
            debit_index=2,
            credit_index=3,
            amount_index=None,
        )
        assert columns.has_split_amounts

    def test_combined_amount_column(self):
        rows = [["Tgl", "Uraian", "Mutasi", "Saldo"], ["01/05/2025", "x", "100", "100"]]
        columns = detect_columns(rows)
        assert columns.date_index == 0
        assert columns.description_index == 1
        assert columns.amount_index == 2
        assert not columns.has_split_amounts

    def test_no_header_defaults_to_first_row(self):
        rows = [["a", "b"], ["c", "d"]]
        assert find_header_row(rows) == 0

    def test_empty_sheet(self):
        assert detect_columns([]) == StatementColumns()


class TestBankDetection:
    """Issuer detection from file content."""

    def test_bca(self, statement_rows):
        assert StatementBankDetector.detect_bank(statement_rows) == "BCA"

    def test_mandiri(self):
        rows = [["Rekening Koran Bank Mandiri"], ["Tanggal", "Keterangan"]]
        assert StatementBankDetector.detect_bank(rows) == "MANDIRI"

    def test_unknown(self):
        assert StatementBankDetector.detect_bank([["Tanggal", "Keterangan"]]) == UNKNOWN_BANK


class TestClassify:
    """Row to candidate classification."""

    def test_reference_row(self, classifier):
        rows = [HEADER, ["09/05/2025", "Belanja harian", "500000", ""]]
        candidates = classifier.classify(rows, SPLIT_COLUMNS)

        assert len(candidates) == 1
        candidate = candidates[0]
        assert candidate.date == "2025-05-09"
        assert candidate.description == "Belanja harian"
        assert candidate.amount == 500000
        assert candidate.type == TransactionType.EXPENSE
        assert candidate.suggested_category == "Lainnya"
        assert candidate.original_row == ["09/05/2025", "Belanja harian", "500000", ""]

    def test_debit_only_is_expense(self, classifier):
        rows = [HEADER, ["01/06/2025", "Bayar listrik PLN", "-250.000", "0"]]
        [candidate] = classifier.classify(rows, SPLIT_COLUMNS)
        assert candidate.type == TransactionType.EXPENSE
        assert candidate.amount == 250000
        assert candidate.suggested_category == "Listrik"

    def test_credit_only_is_income(self, classifier):
        rows = [HEADER, ["01/06/2025", "PAYROLL JUNI", "", "8.000.000,00"]]
        [candidate] = classifier.classify(rows, SPLIT_COLUMNS)
        assert candidate.type == TransactionType.INCOME
        assert candidate.amount == 8000000
        assert candidate.suggested_category == "Gaji"

    def test_credit_wins_when_both_filled(self, classifier):
        rows = [HEADER, ["01/06/2025", "Koreksi", 1000, 2500]]
        [candidate] = classifier.classify(rows, SPLIT_COLUMNS)
        assert candidate.type == TransactionType.INCOME
        assert candidate.amount == 2500

    def test_combined_column_with_cr_marker(self, classifier):
        columns = StatementColumns(header_row_index=0, date_index=0, description_index=1, amount_index=2)
        rows = [
            ["Tanggal", "Keterangan", "Mutasi"],
            ["02/05/2025", "TRSF E-BANKING CR", "1.500.000,00 CR"],
            ["03/05/2025", "TARIK TUNAI ATM", "50.000,00 DB"],
        ]
        income, expense = classifier.classify(rows, columns)

        assert income.type == TransactionType.INCOME
        assert income.amount == 1500000
        assert income.suggested_category == "Transfer Masuk"
        assert expense.type == TransactionType.EXPENSE
        assert expense.amount == 50000
        assert expense.suggested_category == "Tarik Tunai"

    def test_single_credit_column(self, classifier):
        columns = StatementColumns(header_row_index=0, date_index=0, description_index=1, credit_index=2)
        rows = [["Tanggal", "Keterangan", "Kredit"], ["02/05/2025", "Bunga tabungan", "1.250,50"]]
        [candidate] = classifier.classify(rows, columns)
        assert candidate.type == TransactionType.INCOME
        assert candidate.amount == 1250.5
        assert candidate.suggested_category == "Bunga"

    def test_native_date_and_numbers(self, classifier):
        from datetime import datetime
        rows = [HEADER, [datetime(2025, 5, 9), "Grab ride", 35000, ""]]
        [candidate] = classifier.classify(rows, SPLIT_COLUMNS)
        assert candidate.date == "2025-05-09"
        assert candidate.suggested_category == "Transport"

    def test_header_and_preamble_skipped(self, classifier, statement_rows):
        candidates = classifier.classify(statement_rows, detect_columns(statement_rows))
        assert [c.description for c in candidates] == [
            "Belanja harian",
            "GAJI PT MAJU JAYA",
            "INDOMARET SUDIRMAN",
        ]
        assert [c.suggested_category for c in candidates] == ["Lainnya", "Gaji", "Belanja"]


class TestDroppedRows:
    """Each rejection condition on its own."""

    def test_unparseable_date(self, classifier):
        rows = [HEADER, ["kemarin", "Belanja", "1000", ""]]
        assert classifier.classify(rows, SPLIT_COLUMNS) == []

    @pytest.mark.parametrize("debit,credit", [("0", ""), ("", ""), ("0", "0"), ("-", "abc")])
    def test_non_positive_amount(self, classifier, debit, credit):
        rows = [HEADER, ["09/05/2025", "Belanja", debit, credit]]
        assert classifier.classify(rows, SPLIT_COLUMNS) == []

    def test_empty_description(self, classifier):
        rows = [HEADER, ["09/05/2025", "   ", "1000", ""]]
        assert classifier.classify(rows, SPLIT_COLUMNS) == []

    def test_blank_and_short_rows(self, classifier):
        rows = [HEADER, ["", " ", "", ""], [], ["09/05/2025"]]
        assert classifier.classify(rows, SPLIT_COLUMNS) == []


class TestIdempotence:
    """No hidden state between calls."""

    def test_same_output_twice(self, classifier, statement_rows):
        columns = detect_columns(statement_rows)
        first = classifier.classify(statement_rows, columns)
        second = classifier.classify(statement_rows, columns)
        assert first == second
        assert len(first) == 3


class TestSuggestCategory:
    """Ordered keyword rules."""

    @pytest.mark.parametrize("description,expected", [
        ("ALFAMART CIKINI", "Belanja"),
        ("GOJEK*GORIDE", "Transport"),
        ("INDIHOME 1234", "Internet"),
        ("KFC SARINAH", "Makan"),
        ("TOKOPEDIA ORDER", "Belanja Online"),
        ("TRF KE ANDI", "Transfer Keluar"),
        ("ANGSURAN MOTOR", "Cicilan"),
        ("Belanja harian", "Lainnya"),
    ])
    def test_expense_rules(self, description, expected):
        assert suggest_category(description, TransactionType.EXPENSE) == expected

    @pytest.mark.parametrize("description,expected", [
        ("SALARY MAY", "Gaji"),
        ("TRSF DARI BUDI", "Transfer Masuk"),
        ("INTEREST", "Bunga"),
        ("REFUND", "Pemasukan Lainnya"),
    ])
    def test_income_rules(self, description, expected):
        assert suggest_category(description, TransactionType.INCOME) == expected

    def test_rule_order(self):
        """ATM withdrawal rule precedes transfer rule."""
        assert suggest_category("TRANSFER ATM", TransactionType.EXPENSE) == "Tarik Tunai"
