from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID, uuid4

from invoicing_core.domain.exceptions import ErrorCode, ValidationError


@dataclass(frozen=True, slots=True)
class PaymentId:
    """Value object for payment identifiers (opaque, globally unique UUID)."""

    value: UUID

    @classmethod
    def generate(cls) -> PaymentId:
        """Generate a new unique PaymentId."""
        return cls(value=uuid4())

    @classmethod
    def from_string(cls, id_str: str) -> PaymentId:
        """Parse a PaymentId from a string representation.

        Raises:
            ValidationError: If the string is not a valid UUID.
        """
        try:
            return cls(value=UUID(id_str))
        except (ValueError, AttributeError, TypeError) as e:
            raise ValidationError(
                ErrorCode.INVALID_IDENTIFIER,
                f"Invalid payment ID: {id_str}",
                payment_id=id_str,
            ) from e

    def __str__(self) -> str:
        return str(self.value)
