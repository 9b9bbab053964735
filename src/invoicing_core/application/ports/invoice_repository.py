from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from invoicing_core.domain.entities import Invoice, InvoiceStatus
    from invoicing_core.domain.value_objects import CustomerId, InvoiceId


class InvoiceRepository(ABC):
    """Port for invoice persistence.

    Contract:
    - get() returns None if invoice does not exist (no exception)
    - save() performs upsert: creates if new, updates if exists
    - Returned entities are copies; mutations do not affect stored state
    """

    @abstractmethod
    def get(self, invoice_id: InvoiceId) -> Invoice | None:
        """Retrieve an invoice by ID, or None if it does not exist."""

    @abstractmethod
    def save(self, invoice: Invoice) -> None:
        """Persist an invoice (upsert semantics)."""

    @abstractmethod
    def find_numbers_with_prefix(self, prefix: str) -> list[str]:
        """Invoice numbers starting with ``prefix`` (e.g. ``"INV-2025-"``).

        Invoices without a number (drafts) are never included.
        """

    @abstractmethod
    def exists_by_customer_id_and_status_in(
        self, customer_id: CustomerId, statuses: Iterable[InvoiceStatus]
    ) -> bool:
        """Whether the customer has any invoice in one of ``statuses``."""

    @abstractmethod
    def list_all(self) -> list[Invoice]:
        """Every stored invoice, in no particular order."""

    @abstractmethod
    def find_by_customer_id(self, customer_id: CustomerId) -> list[Invoice]:
        """All invoices billed to the customer, any status."""
