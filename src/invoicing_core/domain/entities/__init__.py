"""Domain entities - Objects with identity and lifecycle."""

from invoicing_core.domain.entities.customer import Customer, CustomerStatus
from invoicing_core.domain.entities.invoice import Invoice, InvoiceStatus
from invoicing_core.domain.entities.payment import Payment, PaymentMethod, PaymentStatus

__all__ = [
    "Customer",
    "CustomerStatus",
    "Invoice",
    "InvoiceStatus",
    "Payment",
    "PaymentMethod",
    "PaymentStatus",
]
