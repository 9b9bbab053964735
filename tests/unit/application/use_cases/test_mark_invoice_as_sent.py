"""Tests for MarkInvoiceAsSentUseCase.

Tests cover:
- Happy path: number allocation, default and explicit sent date
- Guards: not found, not draft, no line items (no number consumed)
- Concurrency: one draft sent at most once, distinct numbers across drafts,
  and sending waits while the customer is locked
"""

from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from dataclasses import replace
from datetime import date

import pytest

from invoicing_core.application.ports import UnitOfWork, customer_lock_key
from invoicing_core.application.services import InvoiceNumberAllocator
from invoicing_core.application.use_cases.mark_invoice_as_sent import (
    MarkInvoiceAsSentRequest,
    MarkInvoiceAsSentUseCase,
)
from invoicing_core.domain.entities import Customer, Invoice, InvoiceStatus
from invoicing_core.domain.exceptions import (
    DomainException,
    ErrorCode,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from invoicing_core.domain.value_objects import InvoiceId, LineItem
from invoicing_core.infrastructure import (
    FixedTimeProvider,
    InMemoryDatabase,
    InMemoryLockProvider,
)

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def use_case(
    lock_provider: InMemoryLockProvider,
    time_provider: FixedTimeProvider,
    uow_factory: Callable[[], UnitOfWork],
    allocator: InvoiceNumberAllocator,
) -> MarkInvoiceAsSentUseCase:
    return MarkInvoiceAsSentUseCase(
        lock_provider=lock_provider,
        time_provider=time_provider,
        uow_factory=uow_factory,
        allocator=allocator,
    )


# =============================================================================
# Happy path
# =============================================================================


class TestMarkInvoiceAsSentHappyPath:
    def test_assigns_first_number_and_defaults_sent_date(
        self,
        use_case: MarkInvoiceAsSentUseCase,
        draft_invoice: Invoice,
        database: InMemoryDatabase,
    ) -> None:
        response = use_case.execute(
            MarkInvoiceAsSentRequest(invoice_id=draft_invoice.id, sent_by="clerk")
        )

        assert response.invoice.status == InvoiceStatus.SENT
        assert response.invoice.invoice_number == "INV-2025-0001"
        assert response.invoice.sent_date == date(2025, 3, 10)
        assert database.invoices[draft_invoice.id] == response.invoice

    def test_explicit_sent_date(
        self, use_case: MarkInvoiceAsSentUseCase, draft_invoice: Invoice
    ) -> None:
        response = use_case.execute(
            MarkInvoiceAsSentRequest(
                invoice_id=draft_invoice.id, sent_by="clerk", sent_date=date(2025, 3, 4)
            )
        )

        assert response.invoice.sent_date == date(2025, 3, 4)

    def test_continues_after_existing_numbers(
        self,
        use_case: MarkInvoiceAsSentUseCase,
        sent_invoice: Invoice,
        customer: Customer,
        line_items: tuple[LineItem, ...],
        database: InMemoryDatabase,
        time_provider: FixedTimeProvider,
    ) -> None:
        second = Invoice.create(customer.id, line_items, "clerk", time_provider.now())
        database.invoices[second.id] = second

        response = use_case.execute(MarkInvoiceAsSentRequest(invoice_id=second.id, sent_by="clerk"))

        assert sent_invoice.invoice_number == "INV-2025-0001"
        assert response.invoice.invoice_number == "INV-2025-0002"


# =============================================================================
# Guards
# =============================================================================


class TestMarkInvoiceAsSentGuards:
    def test_unknown_invoice(self, use_case: MarkInvoiceAsSentUseCase) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            use_case.execute(
                MarkInvoiceAsSentRequest(invoice_id=InvoiceId.generate(), sent_by="clerk")
            )

        assert exc_info.value.code == ErrorCode.INVOICE_NOT_FOUND

    def test_already_sent(
        self, use_case: MarkInvoiceAsSentUseCase, sent_invoice: Invoice
    ) -> None:
        with pytest.raises(InvalidStateError) as exc_info:
            use_case.execute(MarkInvoiceAsSentRequest(invoice_id=sent_invoice.id, sent_by="clerk"))

        assert exc_info.value.code == ErrorCode.INVOICE_NOT_DRAFT

    def test_empty_draft_is_rejected_without_consuming_a_number(
        self,
        use_case: MarkInvoiceAsSentUseCase,
        draft_invoice: Invoice,
        customer: Customer,
        line_items: tuple[LineItem, ...],
        database: InMemoryDatabase,
        time_provider: FixedTimeProvider,
    ) -> None:
        empty = replace(draft_invoice, line_items=())
        database.invoices[empty.id] = empty

        with pytest.raises(ValidationError) as exc_info:
            use_case.execute(MarkInvoiceAsSentRequest(invoice_id=empty.id, sent_by="clerk"))

        assert exc_info.value.code == ErrorCode.LINE_ITEMS_REQUIRED
        assert database.invoices[empty.id].status == InvoiceStatus.DRAFT

        other = Invoice.create(customer.id, line_items, "clerk", time_provider.now())
        database.invoices[other.id] = other
        response = use_case.execute(MarkInvoiceAsSentRequest(invoice_id=other.id, sent_by="clerk"))

        assert response.invoice.invoice_number == "INV-2025-0001"


# =============================================================================
# Concurrency
# =============================================================================


class TestMarkInvoiceAsSentConcurrency:
    def test_same_draft_is_sent_once(
        self,
        use_case: MarkInvoiceAsSentUseCase,
        draft_invoice: Invoice,
        database: InMemoryDatabase,
    ) -> None:
        num_workers = 10

        def send() -> str:
            try:
                response = use_case.execute(
                    MarkInvoiceAsSentRequest(invoice_id=draft_invoice.id, sent_by="clerk")
                )
                return response.invoice.invoice_number or ""
            except DomainException as e:
                return e.code.name

        with ThreadPoolExecutor(max_workers=num_workers) as executor:
            results = list(executor.map(lambda _: send(), range(num_workers)))

        assert results.count("INV-2025-0001") == 1
        assert results.count(ErrorCode.INVOICE_NOT_DRAFT.name) == num_workers - 1
        assert database.invoices[draft_invoice.id].invoice_number == "INV-2025-0001"

    def test_distinct_drafts_get_distinct_numbers(
        self,
        use_case: MarkInvoiceAsSentUseCase,
        customer: Customer,
        line_items: tuple[LineItem, ...],
        database: InMemoryDatabase,
        time_provider: FixedTimeProvider,
    ) -> None:
        drafts = [
            Invoice.create(customer.id, line_items, "clerk", time_provider.now())
            for _ in range(20)
        ]
        for draft in drafts:
            database.invoices[draft.id] = draft

        def send(invoice: Invoice) -> str | None:
            request = MarkInvoiceAsSentRequest(invoice_id=invoice.id, sent_by="clerk")
            return use_case.execute(request).invoice.invoice_number

        with ThreadPoolExecutor(max_workers=8) as executor:
            numbers = list(executor.map(send, drafts))

        assert len(set(numbers)) == len(drafts)
        stored = {database.invoices[d.id].invoice_number for d in drafts}
        assert stored == set(numbers)

    def test_waits_for_customer_lock(
        self,
        use_case: MarkInvoiceAsSentUseCase,
        lock_provider: InMemoryLockProvider,
        draft_invoice: Invoice,
        database: InMemoryDatabase,
    ) -> None:
        # A customer delete holding this lock must see the invoice still DRAFT
        with ThreadPoolExecutor(max_workers=1) as executor:
            with lock_provider.acquire(customer_lock_key(draft_invoice.customer_id)):
                future = executor.submit(
                    use_case.execute,
                    MarkInvoiceAsSentRequest(invoice_id=draft_invoice.id, sent_by="clerk"),
                )
                with pytest.raises(FuturesTimeoutError):
                    future.result(timeout=0.2)
                assert database.invoices[draft_invoice.id].status == InvoiceStatus.DRAFT

            response = future.result(timeout=5)

        assert response.invoice.status == InvoiceStatus.SENT
