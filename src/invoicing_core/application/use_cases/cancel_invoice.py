from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from invoicing_core.application.ports import invoice_lock_key
from invoicing_core.application.use_cases.loading import load_invoice
from invoicing_core.domain.entities import InvoiceStatus, PaymentStatus
from invoicing_core.domain.exceptions import ConflictError, ErrorCode, InvalidStateError

if TYPE_CHECKING:
    from collections.abc import Callable

    from invoicing_core.application.ports import LockProvider, TimeProvider, UnitOfWork
    from invoicing_core.domain.entities import Invoice
    from invoicing_core.domain.value_objects import InvoiceId

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class CancelInvoiceRequest:
    """Input DTO for cancel invoice use case."""

    invoice_id: InvoiceId
    reason: str
    cancelled_by: str


@dataclass(frozen=True, slots=True)
class CancelInvoiceResponse:
    """Output DTO for cancel invoice use case."""

    invoice: Invoice


class CancelInvoiceUseCase:
    """Cancels a DRAFT or SENT invoice that has no applied payments.

    Responsibilities:
    - Acquire the per-invoice lock (shared with record/void payment)
    - Check status and applied payments against one snapshot
    - Persist the cancelled invoice

    Because payments are recorded under the same invoice lock, no payment
    can be applied between the "no APPLIED payments" check and the save.
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

    def execute(self, request: CancelInvoiceRequest) -> CancelInvoiceResponse:
        """Execute the cancel invoice workflow.

        Raises:
            NotFoundError: Invoice does not exist.
            InvalidStateError: Invoice is PAID or already CANCELLED.
            ConflictError: Invoice has at least one APPLIED payment.
            ValidationError: Reason is blank.
        """
        with self._lock_provider.acquire(invoice_lock_key(request.invoice_id)):
            return self._execute_within_lock(request)

    def _execute_within_lock(self, request: CancelInvoiceRequest) -> CancelInvoiceResponse:
        now = self._time_provider.now()

        with self._uow_factory() as uow:
            # Step 1: Load invoice
            invoice = load_invoice(uow, request.invoice_id)

            # Step 2: Paid invoices are never cancelled
            if invoice.status == InvoiceStatus.PAID:
                raise InvalidStateError(
                    ErrorCode.CANNOT_CANCEL_PAID_INVOICE,
                    f"Cannot cancel paid invoice: {request.invoice_id.value}",
                    invoice_id=str(request.invoice_id),
                )

            # Step 3: Applied payments must be voided first
            if uow.payments.exists_by_invoice_id_and_status(
                request.invoice_id, PaymentStatus.APPLIED
            ):
                raise ConflictError(
                    ErrorCode.CANNOT_CANCEL_INVOICE_WITH_PAYMENTS,
                    f"Cannot cancel invoice with applied payments: {request.invoice_id.value}",
                    invoice_id=str(request.invoice_id),
                )

            # Step 4: Cancel (validates reason and re-cancellation) and persist
            cancelled = invoice.cancel(request.reason, request.cancelled_by, now)
            uow.invoices.save(cancelled)

        logger.info(
            "Invoice cancelled",
            invoice_id=str(cancelled.id),
            invoice_number=cancelled.invoice_number,
            cancelled_by=request.cancelled_by,
        )
        return CancelInvoiceResponse(invoice=cancelled)
