from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from invoicing_core.application.use_cases.loading import load_customer
from invoicing_core.domain.entities import Invoice
from invoicing_core.domain.entities.invoice import DEFAULT_PAYMENT_TERMS_DAYS
from invoicing_core.domain.exceptions import ErrorCode, InvalidStateError, ValidationError

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import date

    from invoicing_core.application.ports import TimeProvider, UnitOfWork
    from invoicing_core.domain.value_objects import CustomerId, LineItem, Money

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class CreateInvoiceRequest:
    """Input DTO for create invoice use case."""

    customer_id: CustomerId
    line_items: tuple[LineItem, ...]
    created_by: str
    invoice_date: date | None = None
    due_date: date | None = None
    tax_amount: Money | None = None
    notes: str | None = None


@dataclass(frozen=True, slots=True)
class CreateInvoiceResponse:
    """Output DTO for create invoice use case."""

    invoice: Invoice


class CreateInvoiceUseCase:
    """Creates a DRAFT invoice for an active customer.

    A new invoice has a fresh ID, so no lock is taken: nothing else can
    reference it until this unit of work commits.
    """

    def __init__(
        self,
        time_provider: TimeProvider,
        uow_factory: Callable[[], UnitOfWork],
        payment_terms_days: int = DEFAULT_PAYMENT_TERMS_DAYS,
    ) -> None:
        self._time_provider = time_provider
        self._uow_factory = uow_factory
        self._payment_terms_days = payment_terms_days

    def execute(self, request: CreateInvoiceRequest) -> CreateInvoiceResponse:
        """Execute the create invoice workflow.

        Raises:
            NotFoundError: Customer does not exist.
            InvalidStateError: Customer is INACTIVE.
            ValidationError: Invoice date in the future, or invalid contents.
        """
        now = self._time_provider.now()

        with self._uow_factory() as uow:
            customer = load_customer(uow, request.customer_id)
            if not customer.is_active:
                raise InvalidStateError(
                    ErrorCode.CUSTOMER_INACTIVE,
                    f"Cannot create invoice for inactive customer: {request.customer_id.value}",
                    customer_id=str(request.customer_id),
                )

            if request.invoice_date is not None and request.invoice_date > now.date():
                raise ValidationError(
                    ErrorCode.INVALID_DATE,
                    "Invoice date cannot be in the future",
                    invoice_date=request.invoice_date.isoformat(),
                )

            invoice = Invoice.create(
                customer_id=request.customer_id,
                line_items=request.line_items,
                created_by=request.created_by,
                now=now,
                invoice_date=request.invoice_date,
                due_date=request.due_date,
                tax_amount=request.tax_amount,
                notes=request.notes,
                payment_terms_days=self._payment_terms_days,
            )
            uow.invoices.save(invoice)

        logger.info(
            "Invoice created",
            invoice_id=str(invoice.id),
            customer_id=str(invoice.customer_id),
            total_amount=str(invoice.total_amount),
        )
        return CreateInvoiceResponse(invoice=invoice)
