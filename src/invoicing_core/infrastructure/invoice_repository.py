from __future__ import annotations

import copy
from typing import TYPE_CHECKING

from invoicing_core.application.ports import InvoiceRepository

if TYPE_CHECKING:
    from collections.abc import Iterable, MutableMapping

    from invoicing_core.domain.entities import Invoice, InvoiceStatus
    from invoicing_core.domain.value_objects import CustomerId, InvoiceId


class InMemoryInvoiceRepository(InvoiceRepository):
    """In-memory invoice repository.

    Same storage model as InMemoryPaymentRepository: a mapping keyed by ID,
    deep copies in and out, no locking of its own.
    """

    def __init__(self, invoices: MutableMapping[InvoiceId, Invoice] | None = None) -> None:
        self._invoices: MutableMapping[InvoiceId, Invoice] = (
            invoices if invoices is not None else {}
        )

    def get(self, invoice_id: InvoiceId) -> Invoice | None:
        invoice = self._invoices.get(invoice_id)
        if invoice is None:
            return None
        return copy.deepcopy(invoice)

    def save(self, invoice: Invoice) -> None:
        self._invoices[invoice.id] = copy.deepcopy(invoice)

    def find_numbers_with_prefix(self, prefix: str) -> list[str]:
        return sorted(
            invoice.invoice_number
            for invoice in self._invoices.values()
            if invoice.invoice_number is not None and invoice.invoice_number.startswith(prefix)
        )

    def exists_by_customer_id_and_status_in(
        self, customer_id: CustomerId, statuses: Iterable[InvoiceStatus]
    ) -> bool:
        wanted = frozenset(statuses)
        return any(
            invoice.customer_id == customer_id and invoice.status in wanted
            for invoice in self._invoices.values()
        )

    def list_all(self) -> list[Invoice]:
        return [copy.deepcopy(invoice) for invoice in self._invoices.values()]

    def find_by_customer_id(self, customer_id: CustomerId) -> list[Invoice]:
        return [
            copy.deepcopy(invoice)
            for invoice in self._invoices.values()
            if invoice.customer_id == customer_id
        ]
