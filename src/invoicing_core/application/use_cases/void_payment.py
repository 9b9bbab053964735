from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from invoicing_core.application.ports import invoice_lock_key
from invoicing_core.application.use_cases.loading import load_payment
from invoicing_core.domain.entities import PaymentStatus
from invoicing_core.domain.exceptions import (
    ConflictError,
    ErrorCode,
    IntegrityViolationError,
    ValidationError,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from invoicing_core.application.ports import LockProvider, TimeProvider, UnitOfWork
    from invoicing_core.domain.entities import Invoice, Payment
    from invoicing_core.domain.value_objects import InvoiceId, PaymentId

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class VoidPaymentRequest:
    """Input DTO for void payment use case."""

    payment_id: PaymentId
    reason: str
    voided_by: str


@dataclass(frozen=True, slots=True)
class VoidPaymentResponse:
    """Output DTO for void payment use case."""

    payment: Payment
    invoice: Invoice


class VoidPaymentUseCase:
    """Voids an applied payment and reverses it on the owning invoice.

    Responsibilities:
    - Resolve the owning invoice, then acquire that invoice's lock
    - Re-check the payment inside the lock (a concurrent void may have won)
    - Void the payment and reverse the same amount on the invoice in one
      UnitOfWork: both are saved or neither is

    Voiding twice is rejected with ConflictError before a second reversal
    can happen, so amount_paid is decremented once per payment.
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

    def execute(self, request: VoidPaymentRequest) -> VoidPaymentResponse:
        """Execute the void payment workflow.

        Raises:
            NotFoundError: Payment does not exist.
            ConflictError: Payment is already VOIDED.
            ValidationError: Reason is blank.
            IntegrityViolationError: The payment's invoice does not exist.
        """
        # Step 1: Find which invoice to lock. A payment's invoice never changes.
        invoice_id = self._resolve_invoice_id(request.payment_id)

        with self._lock_provider.acquire(invoice_lock_key(invoice_id)):
            return self._execute_within_lock(request)

    def _resolve_invoice_id(self, payment_id: PaymentId) -> InvoiceId:
        with self._uow_factory() as uow:
            return load_payment(uow, payment_id).invoice_id

    def _execute_within_lock(self, request: VoidPaymentRequest) -> VoidPaymentResponse:
        now = self._time_provider.now()

        with self._uow_factory() as uow:
            # Step 2: Reload inside the lock
            payment = load_payment(uow, request.payment_id)

            if payment.status != PaymentStatus.APPLIED:
                raise ConflictError(
                    ErrorCode.PAYMENT_ALREADY_VOIDED,
                    f"Payment is already voided: {request.payment_id.value}",
                    payment_id=str(request.payment_id),
                )

            # Step 3: Reason is mandatory
            if not request.reason or not request.reason.strip():
                raise ValidationError(
                    ErrorCode.REASON_REQUIRED,
                    "Void reason is required",
                    payment_id=str(request.payment_id),
                )

            # Step 4: Owning invoice must exist for a live payment
            invoice = uow.invoices.get(payment.invoice_id)
            if invoice is None:
                logger.error(
                    "Applied payment references a missing invoice",
                    payment_id=str(payment.id),
                    invoice_id=str(payment.invoice_id),
                )
                raise IntegrityViolationError(
                    ErrorCode.PAYMENT_INVOICE_MISSING,
                    f"Invoice {payment.invoice_id.value} for payment "
                    f"{payment.id.value} not found",
                    payment_id=str(payment.id),
                    invoice_id=str(payment.invoice_id),
                )

            # Step 5: Void and reverse, persisted together
            voided = payment.void_payment(request.reason, request.voided_by, now)
            reversed_invoice = invoice.reverse_payment(payment.amount, request.voided_by, now)
            uow.payments.save(voided)
            uow.invoices.save(reversed_invoice)

        logger.info(
            "Payment voided",
            payment_id=str(voided.id),
            invoice_id=str(reversed_invoice.id),
            amount=str(voided.amount),
            amount_paid=str(reversed_invoice.amount_paid),
            voided_by=request.voided_by,
        )
        return VoidPaymentResponse(payment=voided, invoice=reversed_invoice)
