"""Tests for InMemoryUnitOfWork.

Tests cover:
- Commit on normal exit, rollback on exception
- Reads see own pending writes
- Snapshot isolation: commits made after begin are not visible
"""

from datetime import UTC, datetime

import pytest

from invoicing_core.application.ports import UnitOfWork
from invoicing_core.domain.entities import Invoice, Payment, PaymentMethod
from invoicing_core.domain.value_objects import CustomerId, LineItem, Money
from invoicing_core.infrastructure import InMemoryDatabase, InMemoryUnitOfWork


@pytest.fixture
def now() -> datetime:
    return datetime(2025, 3, 10, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def invoice(now: datetime) -> Invoice:
    return Invoice.create(
        CustomerId.generate(), [LineItem.of("Item", 1, Money.of("5.00"))], "clerk", now
    )


class TestInMemoryUnitOfWork:
    def test_implements_interface(self, database: InMemoryDatabase) -> None:
        assert isinstance(InMemoryUnitOfWork(database), UnitOfWork)

    def test_commit_on_exit(self, database: InMemoryDatabase, invoice: Invoice) -> None:
        with InMemoryUnitOfWork(database) as uow:
            uow.invoices.save(invoice)
            assert invoice.id not in database.invoices

        assert database.invoices[invoice.id] == invoice

    def test_rollback_on_exception(
        self, database: InMemoryDatabase, invoice: Invoice, now: datetime
    ) -> None:
        payment = Payment.create(
            invoice.id, Money.of("1.00"), now.date(), PaymentMethod.CASH, "cashier", now
        )

        with pytest.raises(RuntimeError), InMemoryUnitOfWork(database) as uow:
            uow.invoices.save(invoice)
            uow.payments.save(payment)
            raise RuntimeError("boom")

        assert database.invoices == {}
        assert database.payments == {}

    def test_reads_own_writes(self, database: InMemoryDatabase, invoice: Invoice) -> None:
        with InMemoryUnitOfWork(database) as uow:
            uow.invoices.save(invoice)

            assert uow.invoices.get(invoice.id) == invoice

    def test_snapshot_hides_later_commits(
        self, database: InMemoryDatabase, invoice: Invoice
    ) -> None:
        with InMemoryUnitOfWork(database) as reader:
            with InMemoryUnitOfWork(database) as writer:
                writer.invoices.save(invoice)

            assert invoice.id in database.invoices
            assert reader.invoices.get(invoice.id) is None

    def test_new_unit_sees_committed_state(
        self, database: InMemoryDatabase, invoice: Invoice
    ) -> None:
        with InMemoryUnitOfWork(database) as uow:
            uow.invoices.save(invoice)

        with InMemoryUnitOfWork(database) as uow:
            assert uow.invoices.get(invoice.id) == invoice
