"""Helpers for year-scoped invoice numbers of the form ``INV-2025-0001``."""

from __future__ import annotations

DEFAULT_PREFIX = "INV"
DEFAULT_WIDTH = 4


def invoice_number_prefix(year: int, prefix: str = DEFAULT_PREFIX) -> str:
    """Return the year prefix, e.g. ``invoice_number_prefix(2025) == "INV-2025-"``."""
    return f"{prefix}-{year}-"


def format_invoice_number(year_prefix: str, sequence: int, width: int = DEFAULT_WIDTH) -> str:
    """Format a sequence under a year prefix, zero-padded to ``width``.

    Sequences wider than ``width`` are not truncated: 10000 formats as
    ``INV-2025-10000``.
    """
    return f"{year_prefix}{sequence:0{width}d}"


def parse_sequence(invoice_number: str, year_prefix: str) -> int:
    """Return the numeric suffix of ``invoice_number`` under ``year_prefix``.

    Numbers with another prefix, and suffixes that are not plain digits,
    count as 0 rather than raising.
    """
    if not invoice_number.startswith(year_prefix):
        return 0
    suffix = invoice_number[len(year_prefix) :]
    if not (suffix.isascii() and suffix.isdigit()):
        return 0
    return int(suffix)
