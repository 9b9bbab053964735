from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from invoicing_core.domain.exceptions import ErrorCode, ValidationError
from invoicing_core.domain.value_objects.money import Money

MAX_DESCRIPTION_LENGTH = 500
MAX_QUANTITY_DECIMAL_PLACES = 2


@dataclass(frozen=True, slots=True)
class LineItem:
    """A single billable line on an invoice.

    Line items are owned exclusively by their invoice and are never
    referenced from outside it. Use ``LineItem.of()`` to build a validated
    instance; the constructor performs no checks.
    """

    description: str
    quantity: Decimal
    unit_price: Money

    @classmethod
    def of(
        cls,
        description: str,
        quantity: Decimal | str | int,
        unit_price: Money,
    ) -> LineItem:
        """Create a validated line item.

        Args:
            description: Free text, trimmed; 1..500 characters.
            quantity: Positive quantity with at most 2 decimal places.
            unit_price: Non-negative unit price.

        Returns:
            A new LineItem.

        Raises:
            ValidationError: If any field is invalid (code INVALID_LINE_ITEM).
        """
        description = (description or "").strip()
        if not description:
            raise _invalid("Line item description is required")
        if len(description) > MAX_DESCRIPTION_LENGTH:
            raise _invalid(
                f"Line item description must not exceed {MAX_DESCRIPTION_LENGTH} characters",
                length=len(description),
            )

        try:
            qty = Decimal(quantity)
        except (InvalidOperation, ValueError, TypeError) as e:
            raise _invalid(f"Invalid quantity: {quantity!r}", quantity=repr(quantity)) from e

        if not qty.is_finite() or qty <= 0:
            raise _invalid("Quantity must be greater than zero", quantity=str(qty))

        exponent = qty.normalize().as_tuple().exponent
        if isinstance(exponent, int) and -exponent > MAX_QUANTITY_DECIMAL_PLACES:
            raise _invalid(
                f"Quantity must have at most {MAX_QUANTITY_DECIMAL_PLACES} decimal places",
                quantity=str(qty),
            )

        if unit_price.is_negative():
            raise _invalid("Unit price must not be negative", unit_price=str(unit_price))

        return cls(description=description, quantity=qty, unit_price=unit_price)

    @property
    def line_total(self) -> Money:
        return self.unit_price.multiply(self.quantity)


def _invalid(message: str, **context: str | int) -> ValidationError:
    return ValidationError(ErrorCode.INVALID_LINE_ITEM, message, **context)
