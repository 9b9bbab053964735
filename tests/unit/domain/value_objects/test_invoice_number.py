"""Tests for invoice number formatting and parsing helpers."""

import pytest

from invoicing_core.domain.value_objects.invoice_number import (
    format_invoice_number,
    invoice_number_prefix,
    parse_sequence,
)


def test_prefix() -> None:
    assert invoice_number_prefix(2025) == "INV-2025-"
    assert invoice_number_prefix(2025, "BILL") == "BILL-2025-"


class TestFormatInvoiceNumber:
    def test_zero_padded_to_four_digits(self) -> None:
        assert format_invoice_number("INV-2025-", 1) == "INV-2025-0001"

    def test_sequence_beyond_width_grows(self) -> None:
        assert format_invoice_number("INV-2025-", 10000) == "INV-2025-10000"

    def test_custom_width(self) -> None:
        assert format_invoice_number("INV-2025-", 7, width=6) == "INV-2025-000007"


class TestParseSequence:
    @pytest.mark.parametrize(
        ("number", "expected"),
        [
            ("INV-2025-0001", 1),
            ("INV-2025-0042", 42),
            ("INV-2025-10000", 10000),
            ("INV-2025-ABCD", 0),
            ("INV-2025-", 0),
            ("INV-2025-12a", 0),
            ("INV-2024-0099", 0),
        ],
    )
    def test_parse(self, number: str, expected: int) -> None:
        assert parse_sequence(number, "INV-2025-") == expected

    def test_non_ascii_digits_count_as_zero(self) -> None:
        assert parse_sequence("INV-2025-٣", "INV-2025-") == 0
