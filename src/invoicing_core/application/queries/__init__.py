"""Queries - Read-only use cases returning flat DTOs."""

from invoicing_core.application.queries.customers import (
    CustomerSortField,
    GetCustomerByIdQuery,
    ListCustomersQuery,
    ListCustomersRequest,
)
from invoicing_core.application.queries.invoices import (
    GetInvoiceByIdQuery,
    InvoiceSortField,
    ListInvoicesQuery,
    ListInvoicesRequest,
)
from invoicing_core.application.queries.paging import SortDirection
from invoicing_core.application.queries.payments import (
    GetPaymentByIdQuery,
    ListPaymentsForInvoiceQuery,
)

__all__ = [
    "CustomerSortField",
    "GetCustomerByIdQuery",
    "GetInvoiceByIdQuery",
    "GetPaymentByIdQuery",
    "InvoiceSortField",
    "ListCustomersQuery",
    "ListCustomersRequest",
    "ListInvoicesQuery",
    "ListInvoicesRequest",
    "ListPaymentsForInvoiceQuery",
    "SortDirection",
]
