"""Tests for RecordPaymentUseCase."""

from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime

import pytest

from invoicing_core.application.ports import UnitOfWork
from invoicing_core.application.use_cases.record_payment import (
    RecordPaymentRequest,
    RecordPaymentUseCase,
)
from invoicing_core.domain.entities import (
    Invoice,
    InvoiceStatus,
    PaymentMethod,
    PaymentStatus,
)
from invoicing_core.domain.exceptions import (
    DomainException,
    ErrorCode,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from invoicing_core.domain.value_objects import InvoiceId, Money
from invoicing_core.infrastructure import (
    FixedTimeProvider,
    InMemoryDatabase,
    InMemoryLockProvider,
)


@pytest.fixture
def use_case(
    lock_provider: InMemoryLockProvider,
    time_provider: FixedTimeProvider,
    uow_factory: Callable[[], UnitOfWork],
) -> RecordPaymentUseCase:
    return RecordPaymentUseCase(
        lock_provider=lock_provider,
        time_provider=time_provider,
        uow_factory=uow_factory,
    )


def payment_request(
    invoice_id: InvoiceId,
    amount: str = "10.00",
    payment_date: date = date(2025, 3, 5),
) -> RecordPaymentRequest:
    return RecordPaymentRequest(
        invoice_id=invoice_id,
        amount=Money.of(amount),
        payment_date=payment_date,
        method=PaymentMethod.CREDIT_CARD,
        recorded_by="cashier",
        reference_number="AUTH-1",
    )


class TestRecordPaymentHappyPath:
    def test_partial_payment(
        self,
        use_case: RecordPaymentUseCase,
        sent_invoice: Invoice,
        database: InMemoryDatabase,
    ) -> None:
        response = use_case.execute(payment_request(sent_invoice.id))

        assert response.payment.status == PaymentStatus.APPLIED
        assert response.payment.invoice_id == sent_invoice.id
        assert response.payment.reference_number == "AUTH-1"
        assert response.invoice.amount_paid == Money.of("10.00")
        assert response.invoice.status == InvoiceStatus.SENT
        assert database.payments[response.payment.id] == response.payment
        assert database.invoices[sent_invoice.id].amount_paid == Money.of("10.00")

    def test_full_payment_marks_paid(
        self, use_case: RecordPaymentUseCase, sent_invoice: Invoice
    ) -> None:
        response = use_case.execute(payment_request(sent_invoice.id, amount="25.00"))

        assert response.invoice.status == InvoiceStatus.PAID
        assert response.invoice.balance == Money.zero()

    def test_payment_on_invoice_date_is_allowed(
        self, use_case: RecordPaymentUseCase, sent_invoice: Invoice
    ) -> None:
        response = use_case.execute(
            payment_request(sent_invoice.id, payment_date=sent_invoice.invoice_date)
        )

        assert response.payment.payment_date == date(2025, 3, 1)


class TestRecordPaymentGuards:
    def test_unknown_invoice(self, use_case: RecordPaymentUseCase) -> None:
        with pytest.raises(NotFoundError):
            use_case.execute(payment_request(InvoiceId.generate()))

    def test_draft_invoice(self, use_case: RecordPaymentUseCase, draft_invoice: Invoice) -> None:
        with pytest.raises(InvalidStateError) as exc_info:
            use_case.execute(payment_request(draft_invoice.id))

        assert exc_info.value.code == ErrorCode.INVOICE_NOT_PAYABLE

    def test_cancelled_invoice(
        self,
        use_case: RecordPaymentUseCase,
        sent_invoice: Invoice,
        database: InMemoryDatabase,
        fixed_time: datetime,
    ) -> None:
        database.invoices[sent_invoice.id] = sent_invoice.cancel("lost", "manager", fixed_time)

        with pytest.raises(InvalidStateError):
            use_case.execute(payment_request(sent_invoice.id))

    def test_payment_before_invoice_date(
        self, use_case: RecordPaymentUseCase, sent_invoice: Invoice
    ) -> None:
        with pytest.raises(ValidationError) as exc_info:
            use_case.execute(payment_request(sent_invoice.id, payment_date=date(2025, 2, 28)))

        assert exc_info.value.code == ErrorCode.INVALID_DATE

    def test_overpayment_saves_nothing(
        self,
        use_case: RecordPaymentUseCase,
        sent_invoice: Invoice,
        database: InMemoryDatabase,
    ) -> None:
        with pytest.raises(ValidationError) as exc_info:
            use_case.execute(payment_request(sent_invoice.id, amount="25.01"))

        assert exc_info.value.code == ErrorCode.PAYMENT_EXCEEDS_BALANCE
        assert database.payments == {}
        assert database.invoices[sent_invoice.id].amount_paid == Money.zero()

    def test_zero_amount(self, use_case: RecordPaymentUseCase, sent_invoice: Invoice) -> None:
        with pytest.raises(ValidationError) as exc_info:
            use_case.execute(payment_request(sent_invoice.id, amount="0"))

        assert exc_info.value.code == ErrorCode.INVALID_AMOUNT


class TestRecordPaymentConcurrency:
    def test_concurrent_payments_never_exceed_total(
        self,
        use_case: RecordPaymentUseCase,
        sent_invoice: Invoice,
        database: InMemoryDatabase,
    ) -> None:
        num_workers = 10

        def pay() -> str:
            try:
                use_case.execute(payment_request(sent_invoice.id, amount="5.00"))
                return "applied"
            except DomainException as e:
                return e.code.name

        with ThreadPoolExecutor(max_workers=num_workers) as executor:
            results = list(executor.map(lambda _: pay(), range(num_workers)))

        # 25.00 total, 5.00 each: five fit, the rest exceed the balance
        assert results.count("applied") == 5
        assert results.count(ErrorCode.PAYMENT_EXCEEDS_BALANCE.name) == 5
        assert len(database.payments) == 5
        stored = database.invoices[sent_invoice.id]
        assert stored.amount_paid == Money.of("25.00")
        assert stored.status == InvoiceStatus.PAID
