"""Domain exceptions for invoicing-core.

The taxonomy is closed: every failure is one of five kinds, and each kind has
exactly one exception class. The specific failure is carried as an ErrorCode
together with structured context fields, so callers branch on ``error.kind``
or ``error.code`` instead of on a growing set of subclasses.

Exception hierarchy:
    DomainException (base)
    ├── NotFoundError            (invoice / payment / customer missing)
    ├── InvalidStateError        (wrong status for the requested transition)
    ├── ConflictError            (already voided, duplicate email, ...)
    ├── ValidationError          (blank reason, empty line items, bad amount)
    └── IntegrityViolationError  (stored data contradicts an invariant; a bug)

Usage:
    raise NotFoundError(
        ErrorCode.INVOICE_NOT_FOUND,
        f"Invoice not found: {invoice_id.value}",
        invoice_id=str(invoice_id.value),
    )
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar, final


class ErrorKind(Enum):
    """The closed set of failure kinds."""

    NOT_FOUND = "not_found"
    INVALID_STATE = "invalid_state"
    CONFLICT = "conflict"
    VALIDATION = "validation"
    INTEGRITY_VIOLATION = "integrity_violation"


class ErrorCode(Enum):
    """Specific failure codes, each bound to exactly one ErrorKind."""

    # Not found
    INVOICE_NOT_FOUND = ("invoice_not_found", ErrorKind.NOT_FOUND)
    PAYMENT_NOT_FOUND = ("payment_not_found", ErrorKind.NOT_FOUND)
    CUSTOMER_NOT_FOUND = ("customer_not_found", ErrorKind.NOT_FOUND)

    # Invalid state
    INVOICE_NOT_DRAFT = ("invoice_not_draft", ErrorKind.INVALID_STATE)
    CANNOT_CANCEL_PAID_INVOICE = ("cannot_cancel_paid_invoice", ErrorKind.INVALID_STATE)
    INVOICE_ALREADY_CANCELLED = ("invoice_already_cancelled", ErrorKind.INVALID_STATE)
    INVOICE_NOT_PAYABLE = ("invoice_not_payable", ErrorKind.INVALID_STATE)
    CUSTOMER_INACTIVE = ("customer_inactive", ErrorKind.INVALID_STATE)

    # Conflict
    PAYMENT_ALREADY_VOIDED = ("payment_already_voided", ErrorKind.CONFLICT)
    CANNOT_CANCEL_INVOICE_WITH_PAYMENTS = (
        "cannot_cancel_invoice_with_payments",
        ErrorKind.CONFLICT,
    )
    EMAIL_ALREADY_EXISTS = ("email_already_exists", ErrorKind.CONFLICT)
    CUSTOMER_HAS_ACTIVE_INVOICES = ("customer_has_active_invoices", ErrorKind.CONFLICT)

    # Validation
    INVALID_IDENTIFIER = ("invalid_identifier", ErrorKind.VALIDATION)
    INVALID_AMOUNT = ("invalid_amount", ErrorKind.VALIDATION)
    PAYMENT_EXCEEDS_BALANCE = ("payment_exceeds_balance", ErrorKind.VALIDATION)
    INVALID_LINE_ITEM = ("invalid_line_item", ErrorKind.VALIDATION)
    LINE_ITEMS_REQUIRED = ("line_items_required", ErrorKind.VALIDATION)
    INVALID_DATE = ("invalid_date", ErrorKind.VALIDATION)
    REASON_REQUIRED = ("reason_required", ErrorKind.VALIDATION)
    INVOICE_NUMBER_REQUIRED = ("invoice_number_required", ErrorKind.VALIDATION)
    INVALID_CUSTOMER_DETAILS = ("invalid_customer_details", ErrorKind.VALIDATION)
    NO_FIELDS_PROVIDED = ("no_fields_provided", ErrorKind.VALIDATION)

    # Integrity
    PAYMENT_INVOICE_MISSING = ("payment_invoice_missing", ErrorKind.INTEGRITY_VIOLATION)

    def __init__(self, code: str, kind: ErrorKind) -> None:
        self.code = code
        self.kind = kind


class DomainException(Exception):
    """Base exception for all domain-level errors.

    Not raised directly; use one of the five kind classes below.

    Attributes:
        code: The specific ErrorCode. Its kind must match the class kind.
        message: Human-readable description.
        context: Structured fields (identifiers, amounts, statuses) for
            logging and error payloads.
    """

    kind: ClassVar[ErrorKind]

    def __init__(self, code: ErrorCode, message: str, **context: Any) -> None:
        if code.kind is not self.kind:
            raise ValueError(
                f"Error code {code.name} belongs to kind {code.kind.value}, "
                f"not {self.kind.value}"
            )
        super().__init__(message)
        self.code = code
        self.message = message
        self.context = context

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code.name}, {self.message!r})"


# =============================================================================
# Error Kinds
# =============================================================================


@final
class NotFoundError(DomainException):
    """Raised when a requested invoice, payment or customer does not exist."""

    kind = ErrorKind.NOT_FOUND


@final
class InvalidStateError(DomainException):
    """Raised when the entity's status does not allow the requested transition.

    Examples:
        - cancelling a PAID invoice
        - sending an invoice that is not a DRAFT
        - recording a payment against a DRAFT invoice
    """

    kind = ErrorKind.INVALID_STATE


@final
class ConflictError(DomainException):
    """Raised when the request collides with existing state.

    Examples:
        - voiding an already VOIDED payment
        - cancelling an invoice that still has APPLIED payments
        - creating a customer with an email already in use
    """

    kind = ErrorKind.CONFLICT


@final
class ValidationError(DomainException):
    """Raised when input fails validation (blank reason, bad amount, ...)."""

    kind = ErrorKind.VALIDATION


@final
class IntegrityViolationError(DomainException):
    """Raised when stored data contradicts a domain invariant.

    This is NOT a client error. It signals a bug or corrupted data, for
    example a live payment whose owning invoice no longer exists.
    """

    kind = ErrorKind.INTEGRITY_VIOLATION
