from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from invoicing_core.application.ports import invoice_lock_key
from invoicing_core.application.use_cases.loading import load_invoice
from invoicing_core.domain.entities import Payment
from invoicing_core.domain.entities.invoice import PAYABLE_STATUSES
from invoicing_core.domain.exceptions import ErrorCode, InvalidStateError, ValidationError

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import date

    from invoicing_core.application.ports import LockProvider, TimeProvider, UnitOfWork
    from invoicing_core.domain.entities import Invoice, PaymentMethod
    from invoicing_core.domain.value_objects import InvoiceId, Money

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class RecordPaymentRequest:
    """Input DTO for record payment use case."""

    invoice_id: InvoiceId
    amount: Money
    payment_date: date
    method: PaymentMethod
    recorded_by: str
    reference_number: str | None = None
    notes: str | None = None


@dataclass(frozen=True, slots=True)
class RecordPaymentResponse:
    """Output DTO for record payment use case."""

    payment: Payment
    invoice: Invoice


class RecordPaymentUseCase:
    """Records a payment against a SENT or PAID invoice.

    The new payment and the invoice's updated amount_paid are saved in one
    UnitOfWork under the invoice lock, the same lock cancel and void take.
    """

    def __init__(
        self,
        lock_provider: LockProvider,
        time_provider: TimeProvider,
        uow_factory: Callable[[], UnitOfWork],
    ) -> None:
        self._lock_provider = lock_provider
        self._time_provider = time_provider
        self._uow_factory = uow_factory

    def execute(self, request: RecordPaymentRequest) -> RecordPaymentResponse:
        """Execute the record payment workflow.

        Raises:
            NotFoundError: Invoice does not exist.
            InvalidStateError: Invoice is DRAFT or CANCELLED.
            ValidationError: Non-positive amount, amount above the balance,
                or payment date before the invoice date.
        """
        with self._lock_provider.acquire(invoice_lock_key(request.invoice_id)):
            return self._execute_within_lock(request)

    def _execute_within_lock(self, request: RecordPaymentRequest) -> RecordPaymentResponse:
        now = self._time_provider.now()

        with self._uow_factory() as uow:
            invoice = load_invoice(uow, request.invoice_id)

            if invoice.status not in PAYABLE_STATUSES:
                raise InvalidStateError(
                    ErrorCode.INVOICE_NOT_PAYABLE,
                    f"Payments can only be recorded for sent or paid invoices; "
                    f"invoice {request.invoice_id.value} is {invoice.status.value}",
                    invoice_id=str(request.invoice_id),
                    status=invoice.status.value,
                )

            if request.payment_date < invoice.invoice_date:
                raise ValidationError(
                    ErrorCode.INVALID_DATE,
                    "Payment date cannot be before invoice date",
                    payment_date=request.payment_date.isoformat(),
                    invoice_date=invoice.invoice_date.isoformat(),
                )

            payment = Payment.create(
                invoice_id=invoice.id,
                amount=request.amount,
                payment_date=request.payment_date,
                method=request.method,
                created_by=request.recorded_by,
                now=now,
                reference_number=request.reference_number,
                notes=request.notes,
            )
            updated_invoice = invoice.apply_payment(request.amount, request.recorded_by, now)

            uow.payments.save(payment)
            uow.invoices.save(updated_invoice)

        logger.info(
            "Payment recorded",
            payment_id=str(payment.id),
            invoice_id=str(updated_invoice.id),
            amount=str(payment.amount),
            balance=str(updated_invoice.balance),
            status=updated_invoice.status.value,
        )
        return RecordPaymentResponse(payment=payment, invoice=updated_invoice)
