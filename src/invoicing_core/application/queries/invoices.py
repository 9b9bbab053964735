from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any, assert_never

from invoicing_core.application.dtos import InvoiceDetail, InvoicePage
from invoicing_core.application.queries.paging import (
    DEFAULT_PAGE_SIZE,
    SortDirection,
    count_pages,
    normalize_page,
    page_of,
)
from invoicing_core.application.use_cases.loading import load_invoice
from invoicing_core.domain.exceptions import ErrorCode, ValidationError

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import date

    from invoicing_core.application.ports import TimeProvider, UnitOfWork
    from invoicing_core.domain.entities import Invoice, InvoiceStatus
    from invoicing_core.domain.value_objects import CustomerId, InvoiceId


class InvoiceSortField(Enum):
    INVOICE_NUMBER = "invoice_number"
    INVOICE_DATE = "invoice_date"
    DUE_DATE = "due_date"
    TOTAL_AMOUNT = "total_amount"
    BALANCE = "balance"


@dataclass(frozen=True, slots=True)
class ListInvoicesRequest:
    """Filters, ordering and page for ListInvoicesQuery.

    Every filter is optional and they combine with AND. The date range
    applies to invoice_date and is inclusive at both ends.
    """

    customer_id: CustomerId | None = None
    status: InvoiceStatus | None = None
    from_date: date | None = None
    to_date: date | None = None
    overdue_only: bool = False
    sort_by: InvoiceSortField = InvoiceSortField.INVOICE_DATE
    direction: SortDirection = SortDirection.DESC
    page_number: int = 0
    page_size: int = DEFAULT_PAGE_SIZE


class GetInvoiceByIdQuery:
    """Fetch one invoice as a flat InvoiceDetail."""

    def __init__(
        self, uow_factory: Callable[[], UnitOfWork], time_provider: TimeProvider
    ) -> None:
        self._uow_factory = uow_factory
        self._time_provider = time_provider

    def execute(self, invoice_id: InvoiceId) -> InvoiceDetail:
        """Raises NotFoundError if the invoice does not exist."""
        with self._uow_factory() as uow:
            invoice = load_invoice(uow, invoice_id)
        return InvoiceDetail.from_entity(invoice, self._time_provider.today())


class ListInvoicesQuery:
    """Filter, sort and page invoices.

    Out-of-range paging is clamped (see normalize_page). Invoices without a
    number (drafts) sort before numbered ones when sorting by number. Ties
    keep creation order.
    """

    def __init__(
        self, uow_factory: Callable[[], UnitOfWork], time_provider: TimeProvider
    ) -> None:
        self._uow_factory = uow_factory
        self._time_provider = time_provider

    def execute(self, request: ListInvoicesRequest | None = None) -> InvoicePage:
        """Raises ValidationError if from_date is after to_date."""
        request = request or ListInvoicesRequest()
        if request.from_date and request.to_date and request.from_date > request.to_date:
            raise ValidationError(
                ErrorCode.INVALID_DATE,
                "from_date must be on or before to_date",
                from_date=request.from_date.isoformat(),
                to_date=request.to_date.isoformat(),
            )

        today = self._time_provider.today()
        with self._uow_factory() as uow:
            if request.customer_id is None:
                invoices = uow.invoices.list_all()
            else:
                invoices = uow.invoices.find_by_customer_id(request.customer_id)

        matching = [inv for inv in invoices if _matches(inv, request, today)]
        matching.sort(key=lambda inv: (inv.audit.created_at, str(inv.id)))
        matching.sort(
            key=_sort_key(request.sort_by),
            reverse=request.direction == SortDirection.DESC,
        )

        page_number, page_size = normalize_page(request.page_number, request.page_size)
        return InvoicePage(
            invoices=[
                InvoiceDetail.from_entity(inv, today)
                for inv in page_of(matching, page_number, page_size)
            ],
            total_count=len(matching),
            page_number=page_number,
            page_size=page_size,
            total_pages=count_pages(len(matching), page_size),
            total_amount_sum=sum(
                (inv.total_amount.as_decimal() for inv in matching), Decimal("0.00")
            ),
            total_balance_sum=sum(
                (inv.balance.as_decimal() for inv in matching), Decimal("0.00")
            ),
        )


def _matches(invoice: Invoice, request: ListInvoicesRequest, today: date) -> bool:
    if request.status is not None and invoice.status != request.status:
        return False
    if request.from_date is not None and invoice.invoice_date < request.from_date:
        return False
    if request.to_date is not None and invoice.invoice_date > request.to_date:
        return False
    if request.overdue_only and not invoice.is_overdue(today):
        return False
    return True


def _sort_key(field: InvoiceSortField) -> Callable[[Invoice], Any]:
    match field:
        case InvoiceSortField.INVOICE_NUMBER:
            return lambda inv: (inv.invoice_number is not None, inv.invoice_number or "")
        case InvoiceSortField.INVOICE_DATE:
            return lambda inv: inv.invoice_date
        case InvoiceSortField.DUE_DATE:
            return lambda inv: inv.due_date
        case InvoiceSortField.TOTAL_AMOUNT:
            return lambda inv: inv.total_amount
        case InvoiceSortField.BALANCE:
            return lambda inv: inv.balance
        case _:
            assert_never(field)
