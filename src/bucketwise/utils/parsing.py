"""Parsing utilities for amounts, calendar dates and input files."""

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any


def parse_date(value: Any) -> date | None:
    """
    Parse a calendar date from a date, datetime or string.

    Supported string formats:
    - YYYY-MM-DD (2024-03-10)
    - ISO datetimes (2024-03-10T15:00:00), time part dropped
    - YYYY/MM/DD (2024/03/10)

    Args:
        value: Date-like value to parse

    Returns:
        date object if successful, None otherwise
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    date_str = value.strip().strip('"').strip()

    if not date_str:
        return None

    formats = [
        "%Y-%m-%d",  # 2024-03-10
        "%Y/%m/%d",  # 2024/03/10
    ]

    for fmt in formats:
        try:
            return datetime.strptime(date_str, fmt).date()
        except ValueError:
            continue

    try:
        return datetime.fromisoformat(date_str).date()
    except ValueError:
        return None


def parse_amount(value: Any) -> Decimal | None:
    """
    Parse a number to Decimal.

    Handles:
    - Decimal and int values as-is
    - floats via their shortest string form
    - Currency symbols ($) and thousands separators (commas)
    - Negative values (both -123 and (123))

    Non-finite results (NaN, Infinity) are rejected.

    Args:
        value: Amount to parse

    Returns:
        Decimal if successful, None otherwise
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float)):
        result = Decimal(str(value))
    elif isinstance(value, str):
        result = _parse_amount_str(value)
    else:
        return None

    if result is None or not result.is_finite():
        return None
    return result


def _parse_amount_str(amount_str: str) -> Decimal | None:
    amount_str = amount_str.strip().strip('"').strip()

    if not amount_str:
        return None

    # Check for parentheses (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    amount_str = re.sub(r"[$\s]", "", amount_str)
    amount_str = amount_str.replace(",", "")

    if amount_str.startswith("-"):
        is_negative = not is_negative
        amount_str = amount_str[1:]

    try:
        value = Decimal(amount_str)
    except InvalidOperation:
        return None
    return -value if is_negative else value


def read_file(filepath: Path) -> str:
    """
    Read a text file, trying common encodings.

    Args:
        filepath: Path to the file

    Returns:
        File content as string

    Raises:
        ValueError: If file cannot be read
    """
    if not filepath.exists():
        raise ValueError(f"File not found: {filepath}")

    encodings = ["utf-8-sig", "utf-8", "latin-1"]

    for encoding in encodings:
        try:
            with open(filepath, encoding=encoding) as f:
                return f.read()
        except UnicodeDecodeError:
            continue

    raise ValueError(f"Could not decode file {filepath} with any known encoding")
