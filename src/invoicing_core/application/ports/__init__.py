"""Ports - Abstract interfaces for external dependencies.

Ports define the contracts that infrastructure adapters must implement.
This allows the application layer to remain decoupled from concrete implementations.
"""

from invoicing_core.application.ports.customer_repository import CustomerRepository
from invoicing_core.application.ports.invoice_repository import InvoiceRepository
from invoicing_core.application.ports.invoice_sequence import InvoiceSequence
from invoicing_core.application.ports.lock_provider import (
    LockProvider,
    customer_email_lock_key,
    customer_lock_key,
    invoice_lock_key,
    invoice_sequence_lock_key,
)
from invoicing_core.application.ports.payment_repository import PaymentRepository
from invoicing_core.application.ports.time_provider import TimeProvider
from invoicing_core.application.ports.unit_of_work import UnitOfWork

__all__ = [
    "CustomerRepository",
    "InvoiceRepository",
    "InvoiceSequence",
    "LockProvider",
    "PaymentRepository",
    "TimeProvider",
    "UnitOfWork",
    "customer_email_lock_key",
    "customer_lock_key",
    "invoice_lock_key",
    "invoice_sequence_lock_key",
]
