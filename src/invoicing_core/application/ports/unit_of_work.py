from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from types import TracebackType

    from invoicing_core.application.ports.customer_repository import CustomerRepository
    from invoicing_core.application.ports.invoice_repository import InvoiceRepository
    from invoicing_core.application.ports.payment_repository import PaymentRepository


class UnitOfWork(ABC):
    """Port for an atomic, all-or-nothing persistence scope.

    Contract:
    - Repositories are only valid inside ``with uow:``
    - Leaving the block normally commits every save made through
      ``invoices``, ``payments`` and ``customers`` as one unit
    - Leaving the block with an exception discards every save; the
      exception propagates
    - Reads see one consistent snapshot of committed state plus this
      unit's own pending saves; another unit's partial commit is never
      observable

    Usage:
        with uow_factory() as uow:
            payment = uow.payments.get(payment_id)
            invoice = uow.invoices.get(payment.invoice_id)
            uow.payments.save(payment.void_payment(...))
            uow.invoices.save(invoice.reverse_payment(...))
        # both saved, or neither
    """

    invoices: InvoiceRepository
    payments: PaymentRepository
    customers: CustomerRepository

    def __enter__(self) -> UnitOfWork:
        self._begin()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is None:
            self.commit()
        else:
            self.rollback()

    @abstractmethod
    def _begin(self) -> None:
        """Open the scope and bind the repositories."""

    @abstractmethod
    def commit(self) -> None:
        """Atomically publish all pending saves."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard all pending saves."""
