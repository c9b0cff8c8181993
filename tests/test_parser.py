"""
Tests for the tab separated statement parser
"""
import io
from decimal import Decimal

import pytest

from nordea_expenses.errors import AmountError, HeaderError, ParseError
from nordea_expenses.parser import parse_amount, parse_file, parse_lines

HEADER = ["Tilinumero\tFI1234567890123456\n", "\n", "Kirjauspäivä\tArvopäivä\n", "\n"]


def row(date: str, amount: str, beneficiary: str = "Shop", extra: int = 0) -> str:
    fields = [date, date, date, amount, beneficiary, "", "", "Card purchase", "", "", "msg", "", ""]
    return "\t".join(fields + [""] * extra) + "\n"


class TestParseAmount:
    """Test amount normalisation."""

    def test_comma_decimal(self):
        assert parse_amount("-8,46") == Decimal("-8.46")
        assert parse_amount("200,00") == Decimal("200.00")
        assert parse_amount("+1,5") == Decimal("1.5")
        assert parse_amount("5,") == Decimal("5")
        assert parse_amount("-,5") == Decimal("-0.5")

    def test_invalid(self):
        assert parse_amount("abc") is None
        assert parse_amount("") is None
        assert parse_amount("NaN") is None
        assert parse_amount("Infinity") is None
        assert parse_amount("1_000,00") is None
        assert parse_amount(" 5,00 ") is None
        assert parse_amount("5,00 ") is None
        assert parse_amount("1e3") is None
        assert parse_amount("1.000,00") is None


class TestParseLines:
    """Test line level parsing rules."""

    def test_progress_line_written_first(self):
        out = io.StringIO()
        parse_lines(HEADER, "statement.txt", out)
        assert out.getvalue() == "Reading file statement.txt\n"

    def test_account_number_from_first_line(self):
        account = parse_lines(HEADER, "x", io.StringIO())
        assert account.number == "FI1234567890123456"
        assert account.transactions == ()

    def test_no_lines_gives_unknown_account(self):
        account = parse_lines([], "x", io.StringIO())
        assert account.number == "Unknown"

    def test_missing_account_number(self):
        out = io.StringIO()
        with pytest.raises(HeaderError) as excinfo:
            parse_lines(["Tilinumero\n"], "broken.txt", out)
        assert excinfo.value.line_no == 1
        assert excinfo.value.label == "broken.txt"
        assert out.getvalue() == "Reading file broken.txt\n"

    def test_header_lines_are_skipped(self):
        lines = ["Tilinumero\tFI1\n", row("01.01.2020", "-1,00"), row("02.01.2020", "-2,00"), "\n"]
        account = parse_lines(lines, "x", io.StringIO())
        assert account.transactions == ()

    def test_short_rows_are_skipped(self):
        lines = HEADER + [row("01.05.2018", "-1,00"), "footer\tline\n", "\n", row("02.05.2018", "-2,00")]
        account = parse_lines(lines, "x", io.StringIO())
        assert [t.entry_date for t in account.transactions] == ["01.05.2018", "02.05.2018"]

    def test_file_order_is_kept(self):
        lines = HEADER + [row("23.05.2018", "5,00"), row("02.05.2018", "-1,00")]
        account = parse_lines(lines, "x", io.StringIO())
        assert [t.entry_date for t in account.transactions] == ["23.05.2018", "02.05.2018"]

    def test_field_mapping(self):
        fields = [
            "02.05.2018", "03.05.2018", "04.05.2018", "-8,46", "TWILIO", "FI00", "NDEAFIHH",
            "Card purchase", "RF123", "ORIG", "USD 10,01", "4921", "Ei",
        ]
        account = parse_lines(HEADER + ["\t".join(fields) + "\r\n"], "x", io.StringIO())
        (t,) = account.transactions
        assert t.entry_date == "02.05.2018"
        assert t.month == "05.2018"
        assert t.value_date == "03.05.2018"
        assert t.payment_date == "04.05.2018"
        assert t.amount == Decimal("-8.46")
        assert t.beneficiary == "TWILIO"
        assert t.account_number == "FI00"
        assert t.bic == "NDEAFIHH"
        assert t.transaction == "Card purchase"
        assert t.reference_number == "RF123"
        assert t.originator_reference == "ORIG"
        assert t.message == "USD 10,01"
        assert t.card_number == "4921"
        assert t.receipt == "Ei"

    def test_extra_fields_ignored(self):
        account = parse_lines(HEADER + [row("01.05.2018", "-1,00", extra=3)], "x", io.StringIO())
        assert len(account.transactions) == 1

    def test_bad_amount_is_fatal(self):
        lines = HEADER + [row("01.05.2018", "-1,00"), row("02.05.2018", "12,3x")]
        with pytest.raises(AmountError) as excinfo:
            parse_lines(lines, "bad.txt", io.StringIO())
        err = excinfo.value
        assert isinstance(err, ParseError)
        assert err.line_no == 6
        assert err.raw == "12,3x"
        assert "bad.txt:6" in str(err)

    def test_grouped_amount_is_fatal(self):
        lines = HEADER + [row("01.05.2018", "1_000,00")]
        with pytest.raises(AmountError) as excinfo:
            parse_lines(lines, "bad.txt", io.StringIO())
        assert excinfo.value.raw == "1_000,00"


class TestParseFile:
    """Test parsing statement files from disk."""

    def test_one_month_file(self, data_dir):
        path = str(data_dir / "one_month_one_account.txt")
        out = io.StringIO()
        account = parse_file(path, out)
        assert out.getvalue() == f"Reading file {path}\n"
        assert account.number == "FI1234567890123456"
        assert len(account.transactions) == 6
        assert account.transactions[0].message == "USD          10,01 8778894546 KURSSI: 1,1832"

    def test_bad_amount_file(self, data_dir):
        with pytest.raises(AmountError) as excinfo:
            parse_file(data_dir / "bad_amount.txt", io.StringIO())
        assert excinfo.value.line_no == 6
        assert excinfo.value.raw == "abc"

    def test_missing_file_reports_progress_first(self, tmp_path):
        path = tmp_path / "missing.txt"
        out = io.StringIO()
        with pytest.raises(OSError):
            parse_file(path, out)
        assert out.getvalue() == f"Reading file {path}\n"

    def test_latin1_file(self, tmp_path):
        path = tmp_path / "latin1.txt"
        lines = HEADER + [row("01.05.2018", "-1,00", beneficiary="Kahvila Sävy")]
        path.write_bytes("".join(lines).encode("latin-1"))
        account = parse_file(path, io.StringIO(), encoding="latin-1")
        assert account.transactions[0].beneficiary == "Kahvila Sävy"

    def test_carriage_return_inside_field(self, tmp_path):
        path = tmp_path / "cr.txt"
        line = row("01.05.2018", "-1,00").replace("\tmsg\t", "\ta\rb\t")
        path.write_bytes("".join(HEADER + [line]).encode("utf-8"))
        account = parse_file(path, io.StringIO())
        assert len(account.transactions) == 1
        assert account.transactions[0].message == "a\rb"

    def test_crlf_file(self, tmp_path):
        path = tmp_path / "crlf.txt"
        lines = HEADER + [row("01.05.2018", "-1,00"), row("02.05.2018", "3,00")]
        path.write_bytes("".join(lines).replace("\n", "\r\n").encode("utf-8"))
        account = parse_file(path, io.StringIO())
        assert account.number == "FI1234567890123456"
        assert [t.receipt for t in account.transactions] == ["", ""]
        assert [t.amount for t in account.transactions] == [Decimal("-1.00"), Decimal("3.00")]
