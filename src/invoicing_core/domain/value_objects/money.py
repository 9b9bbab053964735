"""Money value object.

Amounts are held as integer cents so that addition and subtraction are exact.
Conversion from decimal input rounds HALF_UP to two places, which is also the
rounding used for line totals.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from invoicing_core.domain.exceptions import ErrorCode, ValidationError

_CENT = Decimal("0.01")


@dataclass(frozen=True, slots=True, order=True)
class Money:
    """An amount of money in the invoicing currency, stored as cents."""

    cents: int

    @classmethod
    def zero(cls) -> Money:
        return cls(cents=0)

    @classmethod
    def of(cls, value: Decimal | str | int) -> Money:
        """Build Money from a decimal amount (``"25.00"``, ``Decimal("10.5")``, ``3``).

        Args:
            value: Amount in currency units, not cents.

        Returns:
            Money rounded HALF_UP to the cent.

        Raises:
            ValidationError: If the value is not a finite number.
        """
        if isinstance(value, bool) or isinstance(value, float):
            raise ValidationError(
                ErrorCode.INVALID_AMOUNT,
                f"Amount must be a Decimal, str or int, got {type(value).__name__}",
                amount=repr(value),
            )
        try:
            amount = Decimal(value)
        except (InvalidOperation, ValueError, TypeError) as e:
            raise ValidationError(
                ErrorCode.INVALID_AMOUNT, f"Invalid amount: {value!r}", amount=repr(value)
            ) from e

        if not amount.is_finite():
            raise ValidationError(
                ErrorCode.INVALID_AMOUNT, f"Invalid amount: {value!r}", amount=repr(value)
            )

        return cls(cents=_to_cents(amount))

    def multiply(self, quantity: Decimal) -> Money:
        """Multiply by a (possibly fractional) quantity, rounding HALF_UP to the cent."""
        return Money(cents=_to_cents(self.as_decimal() * quantity))

    def as_decimal(self) -> Decimal:
        return (Decimal(self.cents) / 100).quantize(_CENT)

    def is_positive(self) -> bool:
        return self.cents > 0

    def is_negative(self) -> bool:
        return self.cents < 0

    def is_zero(self) -> bool:
        return self.cents == 0

    def __add__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        return Money(cents=self.cents + other.cents)

    def __sub__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        return Money(cents=self.cents - other.cents)

    def __str__(self) -> str:
        return str(self.as_decimal())


def _to_cents(amount: Decimal) -> int:
    return int(amount.quantize(_CENT, rounding=ROUND_HALF_UP) * 100)
