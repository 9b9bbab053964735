"""Value objects - Immutable objects defined by their attributes."""

from invoicing_core.domain.value_objects.audit_info import AuditInfo
from invoicing_core.domain.value_objects.customer_details import (
    Address,
    CustomerName,
    EmailAddress,
    PhoneNumber,
    TaxIdentifier,
)
from invoicing_core.domain.value_objects.customer_id import CustomerId
from invoicing_core.domain.value_objects.invoice_id import InvoiceId
from invoicing_core.domain.value_objects.line_item import LineItem
from invoicing_core.domain.value_objects.money import Money
from invoicing_core.domain.value_objects.payment_id import PaymentId

__all__ = [
    "Address",
    "AuditInfo",
    "CustomerId",
    "CustomerName",
    "EmailAddress",
    "InvoiceId",
    "LineItem",
    "Money",
    "PaymentId",
    "PhoneNumber",
    "TaxIdentifier",
]
