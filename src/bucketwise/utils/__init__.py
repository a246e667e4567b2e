"""Utility functions for bucketwise."""

from bucketwise.utils.parsing import (
    parse_amount,
    parse_date,
    read_file,
)

__all__ = ["parse_date", "parse_amount", "read_file"]
