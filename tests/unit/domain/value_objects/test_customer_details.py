"""Tests for customer detail value objects."""

import pytest

from invoicing_core.domain.exceptions import ErrorCode, ValidationError
from invoicing_core.domain.value_objects import (
    Address,
    CustomerName,
    EmailAddress,
    PhoneNumber,
    TaxIdentifier,
)


class TestCustomerName:
    def test_valid_name(self) -> None:
        name = CustomerName.of(" Mary-Jane ", "O'Brien")

        assert name.first_name == "Mary-Jane"
        assert name.last_name == "O'Brien"
        assert name.full_name == "Mary-Jane O'Brien"

    @pytest.mark.parametrize("first_name", ["A", "x" * 51, "R2D2", ""])
    def test_invalid_first_name_raises(self, first_name: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            CustomerName.of(first_name, "Smith")

        assert exc_info.value.code == ErrorCode.INVALID_CUSTOMER_DETAILS
        assert exc_info.value.context["field"] == "first_name"


class TestEmailAddress:
    def test_is_normalized(self) -> None:
        assert EmailAddress.of("  Ada@Example.COM ").value == "ada@example.com"

    def test_equal_after_normalization(self) -> None:
        assert EmailAddress.of("ADA@example.com") == EmailAddress.of("ada@example.com")

    @pytest.mark.parametrize("value", ["", "ada", "ada@", "@example.com", "ada@example"])
    def test_invalid_email_raises(self, value: str) -> None:
        with pytest.raises(ValidationError):
            EmailAddress.of(value)


class TestPhoneNumber:
    def test_e164_is_accepted(self) -> None:
        assert str(PhoneNumber.of("+14155550123")) == "+14155550123"

    @pytest.mark.parametrize("value", ["4155550123", "+0123456", "+1", "+1415555012345678"])
    def test_non_e164_raises(self, value: str) -> None:
        with pytest.raises(ValidationError):
            PhoneNumber.of(value)


class TestAddress:
    def test_fields_are_trimmed(self) -> None:
        address = Address.of(" 1 Main St ", "Springfield ", " IL", "62701", " US ")

        assert address == Address("1 Main St", "Springfield", "IL", "62701", "US")

    def test_missing_field_raises(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            Address.of("1 Main St", "  ", "IL", "62701", "US")

        assert exc_info.value.context["field"] == "city"


class TestTaxIdentifier:
    def test_is_uppercased(self) -> None:
        assert TaxIdentifier.of("us-1234567").value == "US-1234567"

    @pytest.mark.parametrize("value", ["US1234567", "USA-1234567", "US-123456", "12-1234567"])
    def test_invalid_format_raises(self, value: str) -> None:
        with pytest.raises(ValidationError):
            TaxIdentifier.of(value)
