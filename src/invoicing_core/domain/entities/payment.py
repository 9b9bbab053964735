"""Payment entity: one payment applied against one invoice."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING

from invoicing_core.domain.exceptions import ConflictError, ErrorCode, ValidationError
from invoicing_core.domain.value_objects import AuditInfo, PaymentId

if TYPE_CHECKING:
    from datetime import date, datetime

    from invoicing_core.domain.value_objects import InvoiceId, Money


class PaymentStatus(Enum):
    """Payment lifecycle states."""

    APPLIED = "applied"
    VOIDED = "voided"


class PaymentMethod(Enum):
    CASH = "cash"
    CHECK = "check"
    CREDIT_CARD = "credit_card"
    BANK_TRANSFER = "bank_transfer"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class Payment:
    """Payment entity.

    A payment references its invoice by ID only. Voiding a payment never
    touches the invoice; the void workflow reverses the invoice total in
    the same unit of work.

    State machine:
        - applied → voided (void_payment)
        - voided is terminal
    """

    id: PaymentId
    invoice_id: InvoiceId
    amount: Money
    payment_date: date
    method: PaymentMethod
    status: PaymentStatus
    audit: AuditInfo
    reference_number: str | None = None
    notes: str | None = None
    void_reason: str | None = None
    voided_by: str | None = None
    voided_at: datetime | None = None

    @classmethod
    def create(
        cls,
        invoice_id: InvoiceId,
        amount: Money,
        payment_date: date,
        method: PaymentMethod,
        created_by: str,
        now: datetime,
        reference_number: str | None = None,
        notes: str | None = None,
    ) -> Payment:
        """Create an APPLIED payment.

        Raises:
            ValidationError: If amount is not greater than zero.
        """
        if not amount.is_positive():
            raise ValidationError(
                ErrorCode.INVALID_AMOUNT,
                "Payment amount must be greater than zero",
                amount=str(amount),
            )

        return cls(
            id=PaymentId.generate(),
            invoice_id=invoice_id,
            amount=amount,
            payment_date=payment_date,
            method=method,
            status=PaymentStatus.APPLIED,
            audit=AuditInfo.create(created_by, now),
            reference_number=reference_number,
            notes=notes,
        )

    @property
    def is_applied(self) -> bool:
        return self.status == PaymentStatus.APPLIED

    def void_payment(self, reason: str, voided_by: str, now: datetime) -> Payment:
        """Void the payment.

        Args:
            reason: Why the payment is voided. Must not be blank.
            voided_by: Actor performing the void.
            now: Current timestamp (UTC).

        Returns:
            New Payment instance in VOIDED state.

        Raises:
            ConflictError: If the payment is not APPLIED.
            ValidationError: If the reason is blank.
        """
        if self.status != PaymentStatus.APPLIED:
            raise ConflictError(
                ErrorCode.PAYMENT_ALREADY_VOIDED,
                f"Payment is already voided: {self.id}",
                payment_id=str(self.id),
            )

        reason = (reason or "").strip()
        if not reason:
            raise ValidationError(
                ErrorCode.REASON_REQUIRED,
                "Void reason is required",
                payment_id=str(self.id),
            )

        return replace(
            self,
            status=PaymentStatus.VOIDED,
            void_reason=reason,
            voided_by=voided_by,
            voided_at=now,
            audit=self.audit.touch(voided_by, now),
        )
