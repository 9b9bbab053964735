"""Translate domain errors for a delivery mechanism such as an HTTP API."""

from __future__ import annotations

from http import HTTPStatus
from typing import TYPE_CHECKING, Any, assert_never

from invoicing_core.domain.exceptions import ErrorKind

if TYPE_CHECKING:
    from invoicing_core.domain.exceptions import DomainException


def http_status_for(kind: ErrorKind) -> HTTPStatus:
    """Map an error kind to its HTTP status.

    Integrity violations are server faults, not client errors.
    """
    match kind:
        case ErrorKind.NOT_FOUND:
            return HTTPStatus.NOT_FOUND
        case ErrorKind.CONFLICT:
            return HTTPStatus.CONFLICT
        case ErrorKind.VALIDATION | ErrorKind.INVALID_STATE:
            return HTTPStatus.BAD_REQUEST
        case ErrorKind.INTEGRITY_VIOLATION:
            return HTTPStatus.INTERNAL_SERVER_ERROR
        case _:
            assert_never(kind)


def error_payload(error: DomainException) -> dict[str, Any]:
    """Flat, JSON-ready error body: context fields plus kind, code and message."""
    return {
        **error.context,
        "kind": error.kind.value,
        "code": error.code.code,
        "message": error.message,
    }
