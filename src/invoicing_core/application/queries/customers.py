from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, assert_never

from invoicing_core.application.dtos import CustomerDetail, CustomerPage, CustomerSummary
from invoicing_core.application.queries.paging import (
    DEFAULT_PAGE_SIZE,
    SortDirection,
    count_pages,
    normalize_page,
    page_of,
)
from invoicing_core.application.services import summarize_account
from invoicing_core.application.use_cases.loading import load_customer

if TYPE_CHECKING:
    from collections.abc import Callable

    from invoicing_core.application.ports import UnitOfWork
    from invoicing_core.domain.entities import Customer, CustomerStatus, Invoice
    from invoicing_core.domain.value_objects import CustomerId


class CustomerSortField(Enum):
    NAME = "name"
    EMAIL = "email"
    CREATED_AT = "created_at"


@dataclass(frozen=True, slots=True)
class ListCustomersRequest:
    """Filters, ordering and page for ListCustomersQuery.

    ``search`` matches case-insensitively anywhere in the first name, last
    name or email. Blank searches are ignored.
    """

    status: CustomerStatus | None = None
    search: str | None = None
    sort_by: CustomerSortField = CustomerSortField.NAME
    direction: SortDirection = SortDirection.ASC
    page_number: int = 0
    page_size: int = DEFAULT_PAGE_SIZE


class GetCustomerByIdQuery:
    """Fetch one customer with their account summary."""

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def execute(self, customer_id: CustomerId) -> CustomerDetail:
        """Raises NotFoundError if the customer does not exist."""
        with self._uow_factory() as uow:
            customer = load_customer(uow, customer_id)
            invoices = uow.invoices.find_by_customer_id(customer_id)
        return CustomerDetail.from_entity(customer, summarize_account(invoices))


class ListCustomersQuery:
    """Filter, sort and page customers, each with outstanding totals."""

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def execute(self, request: ListCustomersRequest | None = None) -> CustomerPage:
        request = request or ListCustomersRequest()
        with self._uow_factory() as uow:
            customers = uow.customers.list_all()
            invoices = uow.invoices.list_all()

        by_customer: defaultdict[CustomerId, list[Invoice]] = defaultdict(list)
        for invoice in invoices:
            by_customer[invoice.customer_id].append(invoice)

        search = (request.search or "").strip().lower()
        matching = [
            c
            for c in customers
            if (request.status is None or c.status == request.status)
            and (not search or _matches_search(c, search))
        ]
        matching.sort(
            key=_sort_key(request.sort_by),
            reverse=request.direction == SortDirection.DESC,
        )

        page_number, page_size = normalize_page(request.page_number, request.page_size)
        return CustomerPage(
            customers=[
                CustomerSummary.from_entity(c, summarize_account(by_customer[c.id]))
                for c in page_of(matching, page_number, page_size)
            ],
            total_count=len(matching),
            page_number=page_number,
            page_size=page_size,
            total_pages=count_pages(len(matching), page_size),
        )


def _matches_search(customer: Customer, search: str) -> bool:
    return any(
        search in field.lower()
        for field in (customer.name.first_name, customer.name.last_name, str(customer.email))
    )


def _sort_key(field: CustomerSortField) -> Callable[[Customer], Any]:
    match field:
        case CustomerSortField.NAME:
            return lambda c: (c.name.last_name.lower(), c.name.first_name.lower())
        case CustomerSortField.EMAIL:
            return lambda c: str(c.email)
        case CustomerSortField.CREATED_AT:
            return lambda c: c.audit.created_at
        case _:
            assert_never(field)
