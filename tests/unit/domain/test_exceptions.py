"""Tests for the closed error taxonomy."""

import pytest

from invoicing_core.domain.exceptions import (
    ConflictError,
    DomainException,
    ErrorCode,
    ErrorKind,
    IntegrityViolationError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)

KIND_CLASSES = {
    ErrorKind.NOT_FOUND: NotFoundError,
    ErrorKind.INVALID_STATE: InvalidStateError,
    ErrorKind.CONFLICT: ConflictError,
    ErrorKind.VALIDATION: ValidationError,
    ErrorKind.INTEGRITY_VIOLATION: IntegrityViolationError,
}


class TestErrorTaxonomy:
    def test_one_class_per_kind(self) -> None:
        assert set(KIND_CLASSES) == set(ErrorKind)
        for kind, cls in KIND_CLASSES.items():
            assert cls.kind is kind
            assert issubclass(cls, DomainException)

    @pytest.mark.parametrize("code", list(ErrorCode))
    def test_every_code_can_be_raised_under_its_kind(self, code: ErrorCode) -> None:
        error = KIND_CLASSES[code.kind](code, "message")

        assert error.code is code
        assert error.kind is code.kind

    def test_code_under_wrong_kind_is_rejected(self) -> None:
        with pytest.raises(ValueError, match="INVOICE_NOT_FOUND"):
            ConflictError(ErrorCode.INVOICE_NOT_FOUND, "wrong kind")

    def test_codes_have_unique_string_values(self) -> None:
        codes = [code.code for code in ErrorCode]

        assert len(codes) == len(set(codes))


class TestDomainExceptionFields:
    def test_message_and_context(self) -> None:
        error = NotFoundError(
            ErrorCode.INVOICE_NOT_FOUND, "Invoice not found: abc", invoice_id="abc"
        )

        assert str(error) == "Invoice not found: abc"
        assert error.message == "Invoice not found: abc"
        assert error.context == {"invoice_id": "abc"}

    def test_repr_names_code(self) -> None:
        error = ValidationError(ErrorCode.REASON_REQUIRED, "Reason is required")

        assert repr(error) == "ValidationError(REASON_REQUIRED, 'Reason is required')"

    def test_caught_as_domain_exception(self) -> None:
        with pytest.raises(DomainException):
            raise ConflictError(ErrorCode.PAYMENT_ALREADY_VOIDED, "already voided")
