from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from invoicing_core.domain.entities import Payment, PaymentStatus
    from invoicing_core.domain.value_objects import InvoiceId, PaymentId


class PaymentRepository(ABC):
    """Port for payment persistence.

    Contract:
    - get() returns None if payment does not exist (no exception)
    - save() performs upsert: creates if new, updates if exists
    - find_* methods return payments ordered by payment_date, then created_at
    - Returned entities are copies; mutations do not affect stored state

    Repositories are reached through a UnitOfWork. Callers that need a
    consistent read-then-write (e.g. "no APPLIED payments, then cancel")
    must also hold the invoice lock from LockProvider.
    """

    @abstractmethod
    def get(self, payment_id: PaymentId) -> Payment | None:
        """Retrieve a payment by ID, or None if it does not exist."""

    @abstractmethod
    def save(self, payment: Payment) -> None:
        """Persist a payment (upsert semantics).

        The payment.id must not change between creation and updates.
        """

    @abstractmethod
    def find_by_invoice_id(self, invoice_id: InvoiceId) -> list[Payment]:
        """All payments recorded against an invoice, any status."""

    @abstractmethod
    def find_by_invoice_id_and_status(
        self, invoice_id: InvoiceId, status: PaymentStatus
    ) -> list[Payment]:
        """Payments recorded against an invoice with the given status."""

    @abstractmethod
    def exists_by_invoice_id_and_status(
        self, invoice_id: InvoiceId, status: PaymentStatus
    ) -> bool:
        """Whether any payment on the invoice has the given status.

        Answered without loading the matching payments in full.
        """
