from __future__ import annotations

import copy
from typing import TYPE_CHECKING

from invoicing_core.application.ports import PaymentRepository

if TYPE_CHECKING:
    from collections.abc import MutableMapping

    from invoicing_core.domain.entities import Payment, PaymentStatus
    from invoicing_core.domain.value_objects import InvoiceId, PaymentId


class InMemoryPaymentRepository(PaymentRepository):
    """In-memory payment repository.

    Implementation notes:
    - Backed by any mapping keyed by PaymentId. Standalone it owns a dict;
      inside InMemoryUnitOfWork it is handed a ChainMap of pending writes
      over a committed snapshot, so saves are staged until commit
    - Returns deep copies from get() to mimic database detachment
    - Stores deep copies in save() to prevent external mutation
    - NOT thread-safe; relies on InMemoryUnitOfWork and LockProvider
    """

    def __init__(self, payments: MutableMapping[PaymentId, Payment] | None = None) -> None:
        self._payments: MutableMapping[PaymentId, Payment] = (
            payments if payments is not None else {}
        )

    def get(self, payment_id: PaymentId) -> Payment | None:
        payment = self._payments.get(payment_id)
        if payment is None:
            return None
        return copy.deepcopy(payment)

    def save(self, payment: Payment) -> None:
        self._payments[payment.id] = copy.deepcopy(payment)

    def find_by_invoice_id(self, invoice_id: InvoiceId) -> list[Payment]:
        return self._select(invoice_id)

    def find_by_invoice_id_and_status(
        self, invoice_id: InvoiceId, status: PaymentStatus
    ) -> list[Payment]:
        return self._select(invoice_id, status)

    def exists_by_invoice_id_and_status(
        self, invoice_id: InvoiceId, status: PaymentStatus
    ) -> bool:
        return any(
            p.invoice_id == invoice_id and p.status == status
            for p in self._payments.values()
        )

    def _select(
        self, invoice_id: InvoiceId, status: PaymentStatus | None = None
    ) -> list[Payment]:
        matches = [
            p
            for p in self._payments.values()
            if p.invoice_id == invoice_id and (status is None or p.status == status)
        ]
        matches.sort(key=lambda p: (p.payment_date, p.audit.created_at))
        return copy.deepcopy(matches)
