"""Shared pytest fixtures for the test suite."""

from collections.abc import Callable
from datetime import UTC, date, datetime
from functools import partial

import pytest

from invoicing_core.application.ports import UnitOfWork
from invoicing_core.application.services import InvoiceNumberAllocator
from invoicing_core.domain.entities import Customer, Invoice, Payment, PaymentMethod
from invoicing_core.domain.value_objects import (
    Address,
    CustomerName,
    EmailAddress,
    LineItem,
    Money,
)
from invoicing_core.infrastructure.invoice_sequence import InMemoryInvoiceSequence
from invoicing_core.infrastructure.lock_provider import InMemoryLockProvider
from invoicing_core.infrastructure.time_provider import FixedTimeProvider
from invoicing_core.infrastructure.unit_of_work import InMemoryDatabase, InMemoryUnitOfWork


@pytest.fixture
def fixed_time() -> datetime:
    """A fixed timestamp for deterministic testing."""
    return datetime(2025, 3, 10, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def time_provider(fixed_time: datetime) -> FixedTimeProvider:
    """A time provider with a fixed timestamp."""
    return FixedTimeProvider(fixed_time)


@pytest.fixture
def lock_provider() -> InMemoryLockProvider:
    """An in-memory lock provider for testing."""
    return InMemoryLockProvider()


@pytest.fixture
def database() -> InMemoryDatabase:
    return InMemoryDatabase()


@pytest.fixture
def uow_factory(database: InMemoryDatabase) -> Callable[[], UnitOfWork]:
    return partial(InMemoryUnitOfWork, database)


@pytest.fixture
def line_items() -> tuple[LineItem, ...]:
    """Two items totalling 25.00 (2 x 10.00 + 1 x 5.00)."""
    return (
        LineItem.of("Consulting hours", 2, Money.of("10.00")),
        LineItem.of("Hosting", 1, Money.of("5.00")),
    )


@pytest.fixture
def customer(database: InMemoryDatabase, fixed_time: datetime) -> Customer:
    """An active customer, already stored."""
    customer = Customer.create(
        name=CustomerName.of("Ada", "Lovelace"),
        email=EmailAddress.of("ada@example.com"),
        billing_address=Address.of("1 Main St", "London", "LDN", "N1 9GU", "UK"),
        created_by="admin",
        now=fixed_time,
    )
    database.customers[customer.id] = customer
    return customer


@pytest.fixture
def draft_invoice(
    database: InMemoryDatabase,
    customer: Customer,
    line_items: tuple[LineItem, ...],
    fixed_time: datetime,
) -> Invoice:
    """A stored DRAFT invoice dated 2025-03-01, total 25.00."""
    invoice = Invoice.create(
        customer_id=customer.id,
        line_items=line_items,
        created_by="clerk",
        now=fixed_time,
        invoice_date=date(2025, 3, 1),
    )
    database.invoices[invoice.id] = invoice
    return invoice


@pytest.fixture
def sent_invoice(
    database: InMemoryDatabase, draft_invoice: Invoice, fixed_time: datetime
) -> Invoice:
    """The draft invoice, sent as INV-2025-0001 and stored."""
    invoice = draft_invoice.mark_as_sent("INV-2025-0001", date(2025, 3, 2), "clerk", fixed_time)
    database.invoices[invoice.id] = invoice
    return invoice


@pytest.fixture
def allocator(
    lock_provider: InMemoryLockProvider, time_provider: FixedTimeProvider
) -> InvoiceNumberAllocator:
    return InvoiceNumberAllocator(
        sequence=InMemoryInvoiceSequence(lock_provider),
        time_provider=time_provider,
    )


@pytest.fixture
def applied_payment(
    database: InMemoryDatabase, sent_invoice: Invoice, fixed_time: datetime
) -> Payment:
    """A stored 10.00 APPLIED payment against sent_invoice, reflected in amount_paid."""
    payment = Payment.create(
        invoice_id=sent_invoice.id,
        amount=Money.of("10.00"),
        payment_date=date(2025, 3, 5),
        method=PaymentMethod.CHECK,
        created_by="cashier",
        now=fixed_time,
    )
    database.payments[payment.id] = payment
    database.invoices[sent_invoice.id] = sent_invoice.apply_payment(
        payment.amount, "cashier", fixed_time
    )
    return payment
