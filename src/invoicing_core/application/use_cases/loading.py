"""Load-or-raise helpers shared by use cases and queries."""

from __future__ import annotations

from typing import TYPE_CHECKING

from invoicing_core.domain.exceptions import ErrorCode, NotFoundError

if TYPE_CHECKING:
    from invoicing_core.application.ports import UnitOfWork
    from invoicing_core.domain.entities import Customer, Invoice, Payment
    from invoicing_core.domain.value_objects import CustomerId, InvoiceId, PaymentId


def load_invoice(uow: UnitOfWork, invoice_id: InvoiceId) -> Invoice:
    invoice = uow.invoices.get(invoice_id)
    if invoice is None:
        raise NotFoundError(
            ErrorCode.INVOICE_NOT_FOUND,
            f"Invoice not found: {invoice_id.value}",
            invoice_id=str(invoice_id),
        )
    return invoice


def load_payment(uow: UnitOfWork, payment_id: PaymentId) -> Payment:
    payment = uow.payments.get(payment_id)
    if payment is None:
        raise NotFoundError(
            ErrorCode.PAYMENT_NOT_FOUND,
            f"Payment not found: {payment_id.value}",
            payment_id=str(payment_id),
        )
    return payment


def load_customer(uow: UnitOfWork, customer_id: CustomerId) -> Customer:
    customer = uow.customers.get(customer_id)
    if customer is None:
        raise NotFoundError(
            ErrorCode.CUSTOMER_NOT_FOUND,
            f"Customer not found: {customer_id.value}",
            customer_id=str(customer_id),
        )
    return customer
