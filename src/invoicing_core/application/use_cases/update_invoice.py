from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from invoicing_core.application.ports import invoice_lock_key
from invoicing_core.application.use_cases.loading import load_invoice

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import date

    from invoicing_core.application.ports import LockProvider, TimeProvider, UnitOfWork
    from invoicing_core.domain.entities import Invoice
    from invoicing_core.domain.value_objects import InvoiceId, LineItem, Money

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class UpdateInvoiceRequest:
    """Input DTO for update invoice use case. None means "leave unchanged"."""

    invoice_id: InvoiceId
    updated_by: str
    line_items: tuple[LineItem, ...] | None = None
    invoice_date: date | None = None
    due_date: date | None = None
    tax_amount: Money | None = None
    notes: str | None = None


@dataclass(frozen=True, slots=True)
class UpdateInvoiceResponse:
    invoice: Invoice


class UpdateInvoiceUseCase:
    """Partially updates a DRAFT invoice."""

    def __init__(
        self,
        lock_provider: LockProvider,
        time_provider: TimeProvider,
        uow_factory: Callable[[], UnitOfWork],
    ) -> None:
        self._lock_provider = lock_provider
        self._time_provider = time_provider
        self._uow_factory = uow_factory

    def execute(self, request: UpdateInvoiceRequest) -> UpdateInvoiceResponse:
        """Execute the update invoice workflow.

        Raises:
            NotFoundError: Invoice does not exist.
            InvalidStateError: Invoice is not a DRAFT.
            ValidationError: The updated invoice would be invalid.
        """
        with self._lock_provider.acquire(invoice_lock_key(request.invoice_id)):
            now = self._time_provider.now()
            with self._uow_factory() as uow:
                invoice = load_invoice(uow, request.invoice_id)
                updated = invoice.update(
                    request.updated_by,
                    now,
                    line_items=request.line_items,
                    invoice_date=request.invoice_date,
                    due_date=request.due_date,
                    tax_amount=request.tax_amount,
                    notes=request.notes,
                )
                uow.invoices.save(updated)

        logger.info("Invoice updated", invoice_id=str(updated.id))
        return UpdateInvoiceResponse(invoice=updated)
