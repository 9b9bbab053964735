from __future__ import annotations

from collections import ChainMap
from threading import Lock
from typing import TYPE_CHECKING

import structlog

from invoicing_core.application.ports import UnitOfWork
from invoicing_core.infrastructure.customer_repository import InMemoryCustomerRepository
from invoicing_core.infrastructure.invoice_repository import InMemoryInvoiceRepository
from invoicing_core.infrastructure.payment_repository import InMemoryPaymentRepository

if TYPE_CHECKING:
    from invoicing_core.domain.entities import Customer, Invoice, Payment
    from invoicing_core.domain.value_objects import CustomerId, InvoiceId, PaymentId

logger = structlog.get_logger(__name__)


class InMemoryDatabase:
    """Committed state shared by all InMemoryUnitOfWork instances.

    ``lock`` guards both snapshot copies and commits, so a snapshot never
    contains half of another unit's commit.
    """

    def __init__(self) -> None:
        self.invoices: dict[InvoiceId, Invoice] = {}
        self.payments: dict[PaymentId, Payment] = {}
        self.customers: dict[CustomerId, Customer] = {}
        self.lock = Lock()


class InMemoryUnitOfWork(UnitOfWork):
    """Snapshot-isolated unit of work over an InMemoryDatabase.

    Implementation:
    1. _begin() copies the committed dicts under the database lock
    2. Repositories read and write a ChainMap(pending, snapshot): saves land
       in ``pending``, reads prefer pending over the snapshot
    3. commit() applies every pending dict under the database lock
    4. rollback() drops the pending dicts

    Limitations:
    - No write-write conflict detection: two units saving the same entity
      concurrently resolve as last-commit-wins. Use cases prevent this by
      holding a LockProvider lock for the entity across the whole unit.
    - Snapshot copies are O(n); fine for tests and single-process use.
    """

    def __init__(self, database: InMemoryDatabase) -> None:
        self._database = database
        self._pending_invoices: dict[InvoiceId, Invoice] = {}
        self._pending_payments: dict[PaymentId, Payment] = {}
        self._pending_customers: dict[CustomerId, Customer] = {}

    def _begin(self) -> None:
        db = self._database
        with db.lock:
            invoices = dict(db.invoices)
            payments = dict(db.payments)
            customers = dict(db.customers)

        self._pending_invoices = {}
        self._pending_payments = {}
        self._pending_customers = {}
        self.invoices = InMemoryInvoiceRepository(ChainMap(self._pending_invoices, invoices))
        self.payments = InMemoryPaymentRepository(ChainMap(self._pending_payments, payments))
        self.customers = InMemoryCustomerRepository(
            ChainMap(self._pending_customers, customers)
        )

    def commit(self) -> None:
        db = self._database
        with db.lock:
            db.invoices.update(self._pending_invoices)
            db.payments.update(self._pending_payments)
            db.customers.update(self._pending_customers)

        if self._has_pending():
            logger.debug(
                "Unit of work committed",
                invoices=len(self._pending_invoices),
                payments=len(self._pending_payments),
                customers=len(self._pending_customers),
            )
        self._clear()

    def rollback(self) -> None:
        if self._has_pending():
            logger.debug(
                "Unit of work rolled back",
                invoices=len(self._pending_invoices),
                payments=len(self._pending_payments),
                customers=len(self._pending_customers),
            )
        self._clear()

    def _has_pending(self) -> bool:
        return bool(self._pending_invoices or self._pending_payments or self._pending_customers)

    def _clear(self) -> None:
        self._pending_invoices.clear()
        self._pending_payments.clear()
        self._pending_customers.clear()
