"""Tests for parsing utilities."""

from datetime import date, datetime
from decimal import Decimal
from pathlib import Path

import pytest

from bucketwise.utils import parse_amount, parse_date, read_file


class TestParseDate:
    """Tests for parse_date function."""

    def test_iso_format(self) -> None:
        """Test YYYY-MM-DD format."""
        assert parse_date("2024-03-10") == date(2024, 3, 10)

    def test_slash_format(self) -> None:
        """Test YYYY/MM/DD format."""
        assert parse_date("2024/03/10") == date(2024, 3, 10)

    def test_iso_datetime_drops_time(self) -> None:
        """Test an ISO datetime keeps only its calendar date."""
        assert parse_date("2024-03-10T23:30:00") == date(2024, 3, 10)

    def test_date_and_datetime_values(self) -> None:
        """Test date-like objects pass through."""
        assert parse_date(date(2024, 3, 10)) == date(2024, 3, 10)
        assert parse_date(datetime(2024, 3, 10, 8, 0)) == date(2024, 3, 10)

    def test_with_whitespace_and_quotes(self) -> None:
        """Test handling of whitespace and quotes."""
        assert parse_date('  "2024-03-10"  ') == date(2024, 3, 10)

    def test_invalid_values(self) -> None:
        """Test invalid inputs return None."""
        assert parse_date("") is None
        assert parse_date("not a date") is None
        assert parse_date("2024-13-45") is None
        assert parse_date(None) is None
        assert parse_date(20240310) is None


class TestParseAmount:
    """Tests for parse_amount function."""

    def test_positive_amount(self) -> None:
        """Test positive amount."""
        assert parse_amount("123.45") == Decimal("123.45")

    def test_negative_amount(self) -> None:
        """Test negative amount with minus sign."""
        assert parse_amount("-123.45") == Decimal("-123.45")

    def test_parentheses_negative(self) -> None:
        """Test negative amount in parentheses."""
        assert parse_amount("(123.45)") == Decimal("-123.45")

    def test_with_commas_and_currency(self) -> None:
        """Test amount with thousands separators and a dollar sign."""
        assert parse_amount("$1,234.56") == Decimal("1234.56")

    def test_numbers(self) -> None:
        """Test int, float and Decimal values."""
        assert parse_amount(10) == Decimal("10")
        assert parse_amount(9.99) == Decimal("9.99")
        assert parse_amount(Decimal("1.5")) == Decimal("1.5")

    def test_rejects_partial_numbers(self) -> None:
        """Test trailing garbage is not silently dropped."""
        assert parse_amount("12abc") is None

    def test_invalid_values(self) -> None:
        """Test invalid inputs return None."""
        assert parse_amount("") is None
        assert parse_amount("abc") is None
        assert parse_amount(None) is None
        assert parse_amount(True) is None
        assert parse_amount("NaN") is None
        assert parse_amount(float("inf")) is None
        assert parse_amount([1]) is None


class TestReadFile:
    """Tests for read_file function."""

    def test_reads_utf8(self, tmp_path: Path) -> None:
        """Test reading a UTF-8 file."""
        path = tmp_path / "data.json"
        path.write_text('{"name": "Café"}', encoding="utf-8")
        assert read_file(path) == '{"name": "Café"}'

    def test_strips_bom(self, tmp_path: Path) -> None:
        """Test a UTF-8 byte order mark is dropped."""
        path = tmp_path / "bom.json"
        path.write_bytes(b"\xef\xbb\xbf{}")
        assert read_file(path) == "{}"

    def test_latin1_fallback(self, tmp_path: Path) -> None:
        """Test non-UTF-8 bytes fall back to latin-1."""
        path = tmp_path / "latin.txt"
        path.write_bytes("Caf\xe9".encode("latin-1"))
        assert read_file(path) == "Café"

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file raises ValueError."""
        with pytest.raises(ValueError, match="File not found"):
            read_file(tmp_path / "missing.json")
