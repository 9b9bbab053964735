"""Infrastructure layer - Concrete implementations of ports.

This layer contains:
- Persistence: In-memory repositories and the snapshot-isolated unit of work
- Numbering: Atomic per-year invoice sequence
- Time Provider: Clock abstraction for testability
- Locking: Per-resource locks

Infrastructure adapters implement the ports defined in the application layer.
"""

from invoicing_core.infrastructure.customer_repository import InMemoryCustomerRepository
from invoicing_core.infrastructure.invoice_repository import InMemoryInvoiceRepository
from invoicing_core.infrastructure.invoice_sequence import InMemoryInvoiceSequence
from invoicing_core.infrastructure.lock_provider import InMemoryLockProvider, NoOpLockProvider
from invoicing_core.infrastructure.payment_repository import InMemoryPaymentRepository
from invoicing_core.infrastructure.time_provider import FixedTimeProvider, SystemTimeProvider
from invoicing_core.infrastructure.unit_of_work import InMemoryDatabase, InMemoryUnitOfWork

__all__ = [
    "FixedTimeProvider",
    "InMemoryCustomerRepository",
    "InMemoryDatabase",
    "InMemoryInvoiceRepository",
    "InMemoryInvoiceSequence",
    "InMemoryLockProvider",
    "InMemoryPaymentRepository",
    "InMemoryUnitOfWork",
    "NoOpLockProvider",
    "SystemTimeProvider",
]
