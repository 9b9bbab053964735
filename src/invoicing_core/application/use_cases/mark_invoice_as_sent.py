from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from invoicing_core.application.ports import customer_lock_key, invoice_lock_key
from invoicing_core.application.use_cases.loading import load_invoice
from invoicing_core.domain.entities import InvoiceStatus
from invoicing_core.domain.exceptions import ErrorCode, InvalidStateError, ValidationError

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import date

    from invoicing_core.application.ports import LockProvider, TimeProvider, UnitOfWork
    from invoicing_core.application.services import InvoiceNumberAllocator
    from invoicing_core.domain.entities import Invoice
    from invoicing_core.domain.value_objects import CustomerId, InvoiceId

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class MarkInvoiceAsSentRequest:
    """Input DTO for mark invoice as sent use case."""

    invoice_id: InvoiceId
    sent_by: str
    sent_date: date | None = None  # defaults to today


@dataclass(frozen=True, slots=True)
class MarkInvoiceAsSentResponse:
    """Output DTO for mark invoice as sent use case."""

    invoice: Invoice


class MarkInvoiceAsSentUseCase:
    """Sends a DRAFT invoice, assigning its permanent invoice number.

    Responsibilities:
    - Acquire the customer lock, then the per-invoice lock, so one draft is
      sent at most once and never while its customer is being deleted
    - Reject non-drafts and drafts without line items before a number is
      allocated, so validation failures never consume a number
    - Allocate the number atomically via InvoiceNumberAllocator
    """

    def __init__(
        self,
        lock_provider: LockProvider,
        time_provider: TimeProvider,
        uow_factory: Callable[[], UnitOfWork],
        allocator: InvoiceNumberAllocator,
    ) -> None:
        self._lock_provider = lock_provider
        self._time_provider = time_provider
        self._uow_factory = uow_factory
        self._allocator = allocator

    def execute(self, request: MarkInvoiceAsSentRequest) -> MarkInvoiceAsSentResponse:
        """Execute the mark as sent workflow.

        Raises:
            NotFoundError: Invoice does not exist.
            InvalidStateError: Invoice is not a DRAFT.
            ValidationError: Invoice has no line items.
        """
        # Lock order is customer, then invoice. An invoice's customer never changes.
        customer_id = self._resolve_customer_id(request.invoice_id)

        with (
            self._lock_provider.acquire(customer_lock_key(customer_id)),
            self._lock_provider.acquire(invoice_lock_key(request.invoice_id)),
        ):
            return self._execute_within_lock(request)

    def _resolve_customer_id(self, invoice_id: InvoiceId) -> CustomerId:
        with self._uow_factory() as uow:
            return load_invoice(uow, invoice_id).customer_id

    def _execute_within_lock(
        self, request: MarkInvoiceAsSentRequest
    ) -> MarkInvoiceAsSentResponse:
        now = self._time_provider.now()

        with self._uow_factory() as uow:
            # Step 1: Load invoice
            invoice = load_invoice(uow, request.invoice_id)

            # Step 2: Only drafts can be sent
            if invoice.status != InvoiceStatus.DRAFT:
                raise InvalidStateError(
                    ErrorCode.INVOICE_NOT_DRAFT,
                    f"Only draft invoices can be sent; invoice {request.invoice_id.value} "
                    f"is {invoice.status.value}",
                    invoice_id=str(request.invoice_id),
                    status=invoice.status.value,
                )

            # Step 3: Something to bill
            if not invoice.line_items:
                raise ValidationError(
                    ErrorCode.LINE_ITEMS_REQUIRED,
                    "Cannot send invoice without line items",
                    invoice_id=str(request.invoice_id),
                )

            # Step 4: Allocate number, default sent date, transition and persist
            invoice_number = self._allocator.generate(uow.invoices)
            sent_date = request.sent_date or now.date()
            sent = invoice.mark_as_sent(invoice_number, sent_date, request.sent_by, now)
            uow.invoices.save(sent)

        logger.info(
            "Invoice sent",
            invoice_id=str(sent.id),
            invoice_number=sent.invoice_number,
            sent_date=sent_date.isoformat(),
            total_amount=str(sent.total_amount),
        )
        return MarkInvoiceAsSentResponse(invoice=sent)
