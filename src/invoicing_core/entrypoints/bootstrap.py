"""Composition root: wires use cases to in-memory adapters."""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING

from invoicing_core.application.queries import (
    GetCustomerByIdQuery,
    GetInvoiceByIdQuery,
    GetPaymentByIdQuery,
    ListCustomersQuery,
    ListInvoicesQuery,
    ListPaymentsForInvoiceQuery,
)
from invoicing_core.application.services import InvoiceNumberAllocator
from invoicing_core.application.use_cases.cancel_invoice import CancelInvoiceUseCase
from invoicing_core.application.use_cases.create_customer import CreateCustomerUseCase
from invoicing_core.application.use_cases.create_invoice import CreateInvoiceUseCase
from invoicing_core.application.use_cases.delete_customer import DeleteCustomerUseCase
from invoicing_core.application.use_cases.mark_invoice_as_sent import MarkInvoiceAsSentUseCase
from invoicing_core.application.use_cases.record_payment import RecordPaymentUseCase
from invoicing_core.application.use_cases.update_customer import UpdateCustomerUseCase
from invoicing_core.application.use_cases.update_invoice import UpdateInvoiceUseCase
from invoicing_core.application.use_cases.void_payment import VoidPaymentUseCase
from invoicing_core.config import settings as default_settings
from invoicing_core.infrastructure import (
    InMemoryDatabase,
    InMemoryInvoiceSequence,
    InMemoryLockProvider,
    InMemoryUnitOfWork,
    SystemTimeProvider,
)

if TYPE_CHECKING:
    from invoicing_core.application.ports import LockProvider, TimeProvider
    from invoicing_core.config import Settings


@dataclass(frozen=True)
class InvoicingApplication:
    """Every use case and query, sharing one database, clock and lock provider."""

    database: InMemoryDatabase
    create_invoice: CreateInvoiceUseCase
    update_invoice: UpdateInvoiceUseCase
    mark_invoice_as_sent: MarkInvoiceAsSentUseCase
    cancel_invoice: CancelInvoiceUseCase
    record_payment: RecordPaymentUseCase
    void_payment: VoidPaymentUseCase
    create_customer: CreateCustomerUseCase
    update_customer: UpdateCustomerUseCase
    delete_customer: DeleteCustomerUseCase
    get_invoice: GetInvoiceByIdQuery
    list_invoices: ListInvoicesQuery
    get_payment: GetPaymentByIdQuery
    list_payments_for_invoice: ListPaymentsForInvoiceQuery
    get_customer: GetCustomerByIdQuery
    list_customers: ListCustomersQuery


def build_in_memory_application(
    settings: Settings | None = None,
    time_provider: TimeProvider | None = None,
    lock_provider: LockProvider | None = None,
) -> InvoicingApplication:
    """Build an application backed by in-memory storage.

    Args:
        settings: Defaults to the module-level settings singleton.
        time_provider: Defaults to the system clock.
        lock_provider: Defaults to InMemoryLockProvider. Must block; the
            invoice sequence shares it.
    """
    settings = settings or default_settings
    time_provider = time_provider or SystemTimeProvider()
    lock_provider = lock_provider or InMemoryLockProvider()

    database = InMemoryDatabase()
    uow_factory = partial(InMemoryUnitOfWork, database)
    allocator = InvoiceNumberAllocator(
        sequence=InMemoryInvoiceSequence(lock_provider),
        time_provider=time_provider,
        prefix=settings.invoice_number_prefix,
        width=settings.invoice_number_width,
    )

    return InvoicingApplication(
        database=database,
        create_invoice=CreateInvoiceUseCase(
            time_provider, uow_factory, settings.default_payment_terms_days
        ),
        update_invoice=UpdateInvoiceUseCase(lock_provider, time_provider, uow_factory),
        mark_invoice_as_sent=MarkInvoiceAsSentUseCase(
            lock_provider, time_provider, uow_factory, allocator
        ),
        cancel_invoice=CancelInvoiceUseCase(lock_provider, time_provider, uow_factory),
        record_payment=RecordPaymentUseCase(lock_provider, time_provider, uow_factory),
        void_payment=VoidPaymentUseCase(lock_provider, time_provider, uow_factory),
        create_customer=CreateCustomerUseCase(lock_provider, time_provider, uow_factory),
        update_customer=UpdateCustomerUseCase(lock_provider, time_provider, uow_factory),
        delete_customer=DeleteCustomerUseCase(lock_provider, time_provider, uow_factory),
        get_invoice=GetInvoiceByIdQuery(uow_factory, time_provider),
        list_invoices=ListInvoicesQuery(uow_factory, time_provider),
        get_payment=GetPaymentByIdQuery(uow_factory),
        list_payments_for_invoice=ListPaymentsForInvoiceQuery(uow_factory),
        get_customer=GetCustomerByIdQuery(uow_factory),
        list_customers=ListCustomersQuery(uow_factory),
    )
