"""Value objects describing a customer: name, contact details, address, tax ID.

Each factory normalizes its input (trim, case) before validating it, and
raises ValidationError with code INVALID_CUSTOMER_DETAILS on failure.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from invoicing_core.domain.exceptions import ErrorCode, ValidationError

_NAME_PATTERN = re.compile(r"^[a-zA-Z\s'-]+$")
_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_PHONE_PATTERN = re.compile(r"^\+[1-9]\d{1,14}$")
_TAX_ID_PATTERN = re.compile(r"^[A-Z]{2}-\d{7}$")

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50


def _invalid(message: str, **context: str) -> ValidationError:
    return ValidationError(ErrorCode.INVALID_CUSTOMER_DETAILS, message, **context)


def _required(value: str | None, field: str) -> str:
    value = (value or "").strip()
    if not value:
        raise _invalid(f"{field} is required", field=field)
    return value


@dataclass(frozen=True, slots=True)
class CustomerName:
    first_name: str
    last_name: str

    @classmethod
    def of(cls, first_name: str, last_name: str) -> CustomerName:
        return cls(
            first_name=cls._validate_part(first_name, "first_name"),
            last_name=cls._validate_part(last_name, "last_name"),
        )

    @staticmethod
    def _validate_part(value: str, field: str) -> str:
        value = _required(value, field)
        if not NAME_MIN_LENGTH <= len(value) <= NAME_MAX_LENGTH:
            raise _invalid(
                f"{field} must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters",
                field=field,
            )
        if not _NAME_PATTERN.match(value):
            raise _invalid(
                f"{field} may only contain letters, spaces, apostrophes and hyphens",
                field=field,
            )
        return value

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True, slots=True)
class EmailAddress:
    """Email address, stored lower-cased. Unique across customers."""

    value: str

    @classmethod
    def of(cls, value: str) -> EmailAddress:
        normalized = _required(value, "email").lower()
        if not _EMAIL_PATTERN.match(normalized):
            raise _invalid(f"Invalid email address: {value}", field="email")
        return cls(value=normalized)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class PhoneNumber:
    """Phone number in E.164 format, e.g. ``+14155550123``."""

    value: str

    @classmethod
    def of(cls, value: str) -> PhoneNumber:
        normalized = _required(value, "phone")
        if not _PHONE_PATTERN.match(normalized):
            raise _invalid(
                f"Phone number must be in E.164 format: {value}", field="phone"
            )
        return cls(value=normalized)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Address:
    street: str
    city: str
    state: str
    zip_code: str
    country: str

    @classmethod
    def of(
        cls,
        street: str,
        city: str,
        state: str,
        zip_code: str,
        country: str,
    ) -> Address:
        return cls(
            street=_required(street, "street"),
            city=_required(city, "city"),
            state=_required(state, "state"),
            zip_code=_required(zip_code, "zip_code"),
            country=_required(country, "country"),
        )


@dataclass(frozen=True, slots=True)
class TaxIdentifier:
    """Tax identifier such as ``US-1234567`` (two letters, dash, seven digits)."""

    value: str

    @classmethod
    def of(cls, value: str) -> TaxIdentifier:
        normalized = _required(value, "tax_id").upper()
        if not _TAX_ID_PATTERN.match(normalized):
            raise _invalid(f"Invalid tax identifier: {value}", field="tax_id")
        return cls(value=normalized)

    def __str__(self) -> str:
        return self.value
