"""Invoice aggregate with lifecycle state machine.

The invoice exclusively owns its line items. Payments are a separate
aggregate that reference the invoice by ID; ``amount_paid`` is the invoice's
projection of them and is only changed through ``apply_payment`` and
``reverse_payment``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import timedelta
from enum import Enum
from typing import TYPE_CHECKING

from invoicing_core.domain.exceptions import (
    ErrorCode,
    InvalidStateError,
    ValidationError,
)
from invoicing_core.domain.value_objects import AuditInfo, InvoiceId, Money

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import date, datetime

    from invoicing_core.domain.value_objects import CustomerId, LineItem

DEFAULT_PAYMENT_TERMS_DAYS = 30


class InvoiceStatus(Enum):
    """Invoice lifecycle states."""

    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    CANCELLED = "cancelled"


PAYABLE_STATUSES = frozenset({InvoiceStatus.SENT, InvoiceStatus.PAID})


@dataclass(frozen=True, slots=True)
class Invoice:
    """Invoice aggregate root.

    Invoice is immutable (frozen dataclass). All state-changing methods
    return a new Invoice instance.

    State machine:
        - draft → sent (mark_as_sent)
        - draft → cancelled, sent → cancelled (cancel)
        - sent → paid (apply_payment, once the balance reaches zero)
        - paid → sent (reverse_payment, once the balance is above zero again)
        - paid and cancelled reject cancel
    """

    id: InvoiceId
    customer_id: CustomerId
    line_items: tuple[LineItem, ...]
    status: InvoiceStatus
    invoice_number: str | None
    invoice_date: date
    due_date: date
    tax_amount: Money
    amount_paid: Money
    audit: AuditInfo
    notes: str | None = None
    sent_date: date | None = None
    cancellation_reason: str | None = None
    cancelled_by: str | None = None

    @classmethod
    def create(
        cls,
        customer_id: CustomerId,
        line_items: Sequence[LineItem],
        created_by: str,
        now: datetime,
        invoice_date: date | None = None,
        due_date: date | None = None,
        tax_amount: Money | None = None,
        notes: str | None = None,
        payment_terms_days: int = DEFAULT_PAYMENT_TERMS_DAYS,
    ) -> Invoice:
        """Create a new DRAFT invoice with no number and nothing paid.

        Args:
            customer_id: The billed customer.
            line_items: At least one line item.
            created_by: Actor recorded in the audit metadata.
            now: Current timestamp (UTC).
            invoice_date: Defaults to ``now.date()``.
            due_date: Defaults to invoice_date + payment_terms_days.
            tax_amount: Non-negative tax; defaults to zero.
            notes: Optional free text.
            payment_terms_days: Used only when due_date is omitted.

        Raises:
            ValidationError: Empty line items, due date before invoice
                date, or negative tax.
        """
        invoice_date = invoice_date or now.date()
        due_date = due_date or invoice_date + timedelta(days=payment_terms_days)
        tax_amount = tax_amount if tax_amount is not None else Money.zero()

        items = tuple(line_items)
        _validate_contents(items, invoice_date, due_date, tax_amount)

        return cls(
            id=InvoiceId.generate(),
            customer_id=customer_id,
            line_items=items,
            status=InvoiceStatus.DRAFT,
            invoice_number=None,
            invoice_date=invoice_date,
            due_date=due_date,
            tax_amount=tax_amount,
            amount_paid=Money.zero(),
            audit=AuditInfo.create(created_by, now),
            notes=notes,
        )

    # -------------------------------------------------------------------------
    # Derived amounts
    # -------------------------------------------------------------------------

    @property
    def subtotal(self) -> Money:
        total = Money.zero()
        for item in self.line_items:
            total = total + item.line_total
        return total

    @property
    def total_amount(self) -> Money:
        return self.subtotal + self.tax_amount

    @property
    def balance(self) -> Money:
        return self.total_amount - self.amount_paid

    def is_overdue(self, today: date) -> bool:
        """A SENT invoice still owing money after its due date."""
        return (
            self.status == InvoiceStatus.SENT
            and self.due_date < today
            and self.balance.is_positive()
        )

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def update(
        self,
        updated_by: str,
        now: datetime,
        *,
        line_items: Sequence[LineItem] | None = None,
        invoice_date: date | None = None,
        due_date: date | None = None,
        tax_amount: Money | None = None,
        notes: str | None = None,
    ) -> Invoice:
        """Replace the supplied fields of a DRAFT invoice.

        Omitted (None) fields keep their current value.

        Raises:
            InvalidStateError: If not in DRAFT state.
            ValidationError: If the resulting invoice breaks the rules of create().
        """
        self._require_draft("update")

        items = tuple(line_items) if line_items is not None else self.line_items
        new_invoice_date = invoice_date or self.invoice_date
        new_due_date = due_date or self.due_date
        new_tax = tax_amount if tax_amount is not None else self.tax_amount
        _validate_contents(items, new_invoice_date, new_due_date, new_tax)

        return replace(
            self,
            line_items=items,
            invoice_date=new_invoice_date,
            due_date=new_due_date,
            tax_amount=new_tax,
            notes=notes if notes is not None else self.notes,
            audit=self.audit.touch(updated_by, now),
        )

    def mark_as_sent(
        self,
        invoice_number: str,
        sent_date: date,
        sent_by: str,
        now: datetime,
    ) -> Invoice:
        """Transition DRAFT → SENT, fixing the invoice number and sent date.

        Raises:
            InvalidStateError: If not in DRAFT state.
            ValidationError: If the invoice has no line items or the
                number is blank.
        """
        self._require_draft("send")

        if not self.line_items:
            raise ValidationError(
                ErrorCode.LINE_ITEMS_REQUIRED,
                "Cannot send invoice without line items",
                invoice_id=str(self.id),
            )

        if not invoice_number or not invoice_number.strip():
            raise ValidationError(
                ErrorCode.INVOICE_NUMBER_REQUIRED,
                "Invoice number is required to send an invoice",
                invoice_id=str(self.id),
            )

        return replace(
            self,
            status=InvoiceStatus.SENT,
            invoice_number=invoice_number.strip(),
            sent_date=sent_date,
            audit=self.audit.touch(sent_by, now),
        )

    def apply_payment(self, amount: Money, applied_by: str, now: datetime) -> Invoice:
        """Add a payment to amount_paid; SENT becomes PAID when fully paid.

        Raises:
            InvalidStateError: If status is not SENT or PAID.
            ValidationError: If amount is not positive or exceeds the balance.
        """
        if self.status not in PAYABLE_STATUSES:
            raise InvalidStateError(
                ErrorCode.INVOICE_NOT_PAYABLE,
                f"Cannot apply payment to invoice in state {self.status.value}; "
                f"must be {InvoiceStatus.SENT.value} or {InvoiceStatus.PAID.value}",
                invoice_id=str(self.id),
                status=self.status.value,
            )

        if not amount.is_positive():
            raise ValidationError(
                ErrorCode.INVALID_AMOUNT,
                "Payment amount must be greater than zero",
                amount=str(amount),
            )

        if amount > self.balance:
            raise ValidationError(
                ErrorCode.PAYMENT_EXCEEDS_BALANCE,
                f"Payment amount {amount} exceeds invoice balance {self.balance}",
                invoice_id=str(self.id),
                amount=str(amount),
                balance=str(self.balance),
            )

        amount_paid = self.amount_paid + amount
        status = self.status
        if amount_paid == self.total_amount:
            status = InvoiceStatus.PAID

        return replace(
            self,
            amount_paid=amount_paid,
            status=status,
            audit=self.audit.touch(applied_by, now),
        )

    def reverse_payment(self, amount: Money, reversed_by: str, now: datetime) -> Invoice:
        """Subtract a voided payment from amount_paid.

        A PAID invoice that owes money again goes back to SENT, where it can
        take new payments or be cancelled once nothing is applied.

        Raises:
            ValidationError: If amount is not positive, or the reversal would
                drive amount_paid below zero.
        """
        if not amount.is_positive():
            raise ValidationError(
                ErrorCode.INVALID_AMOUNT,
                "Reversal amount must be greater than zero",
                amount=str(amount),
            )

        amount_paid = self.amount_paid - amount
        if amount_paid.is_negative():
            raise ValidationError(
                ErrorCode.INVALID_AMOUNT,
                f"Cannot reverse {amount}; only {self.amount_paid} has been paid",
                invoice_id=str(self.id),
                amount=str(amount),
                amount_paid=str(self.amount_paid),
            )

        status = self.status
        if status == InvoiceStatus.PAID and amount_paid < self.total_amount:
            status = InvoiceStatus.SENT

        return replace(
            self,
            amount_paid=amount_paid,
            status=status,
            audit=self.audit.touch(reversed_by, now),
        )

    def cancel(self, reason: str, cancelled_by: str, now: datetime) -> Invoice:
        """Transition DRAFT or SENT → CANCELLED.

        Raises:
            InvalidStateError: If the invoice is PAID or already CANCELLED.
            ValidationError: If the reason is blank.
        """
        if self.status == InvoiceStatus.PAID:
            raise InvalidStateError(
                ErrorCode.CANNOT_CANCEL_PAID_INVOICE,
                f"Cannot cancel paid invoice: {self.id}",
                invoice_id=str(self.id),
            )

        if self.status == InvoiceStatus.CANCELLED:
            raise InvalidStateError(
                ErrorCode.INVOICE_ALREADY_CANCELLED,
                f"Invoice is already cancelled: {self.id}",
                invoice_id=str(self.id),
            )

        reason = (reason or "").strip()
        if not reason:
            raise ValidationError(
                ErrorCode.REASON_REQUIRED,
                "Cancellation reason is required",
                invoice_id=str(self.id),
            )

        return replace(
            self,
            status=InvoiceStatus.CANCELLED,
            cancellation_reason=reason,
            cancelled_by=cancelled_by,
            audit=self.audit.touch(cancelled_by, now),
        )

    def _require_draft(self, action: str) -> None:
        if self.status != InvoiceStatus.DRAFT:
            raise InvalidStateError(
                ErrorCode.INVOICE_NOT_DRAFT,
                f"Cannot {action} invoice in state {self.status.value}; "
                f"must be in {InvoiceStatus.DRAFT.value} state",
                invoice_id=str(self.id),
                status=self.status.value,
            )


def _validate_contents(
    line_items: tuple[LineItem, ...],
    invoice_date: date,
    due_date: date,
    tax_amount: Money,
) -> None:
    if not line_items:
        raise ValidationError(
            ErrorCode.LINE_ITEMS_REQUIRED, "Invoice must have at least one line item"
        )
    if due_date < invoice_date:
        raise ValidationError(
            ErrorCode.INVALID_DATE,
            "Due date must be on or after invoice date",
            invoice_date=invoice_date.isoformat(),
            due_date=due_date.isoformat(),
        )
    if tax_amount.is_negative():
        raise ValidationError(
            ErrorCode.INVALID_AMOUNT, "Tax amount must not be negative", tax=str(tax_amount)
        )
