"""Data Transfer Objects returned by use cases and queries.

Detail and summary DTOs are flat projections: identifiers are strings,
amounts are Decimals with two places, enums are their string values, and
there are no nested objects. Page DTOs hold a list of them plus paging
totals. An HTTP layer can serialize them field by field.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import date, datetime
    from decimal import Decimal

    from invoicing_core.application.services import AccountSummary
    from invoicing_core.domain.entities import Customer, Invoice, Payment


@dataclass(frozen=True)
class PaymentDetail:
    """Output DTO for a single payment."""

    id: str
    invoice_id: str
    amount: Decimal
    payment_date: date
    payment_method: str
    reference_number: str | None
    status: str
    notes: str | None
    created_at: datetime
    created_by: str
    voided_at: datetime | None
    voided_by: str | None
    void_reason: str | None

    @classmethod
    def from_entity(cls, payment: Payment) -> PaymentDetail:
        return cls(
            id=str(payment.id),
            invoice_id=str(payment.invoice_id),
            amount=payment.amount.as_decimal(),
            payment_date=payment.payment_date,
            payment_method=payment.method.value,
            reference_number=payment.reference_number,
            status=payment.status.value,
            notes=payment.notes,
            created_at=payment.audit.created_at,
            created_by=payment.audit.created_by,
            voided_at=payment.voided_at,
            voided_by=payment.voided_by,
            void_reason=payment.void_reason,
        )


@dataclass(frozen=True)
class InvoiceDetail:
    """Output DTO for an invoice header (line items are summarized by count)."""

    id: str
    customer_id: str
    invoice_number: str | None
    status: str
    invoice_date: date
    due_date: date
    sent_date: date | None
    line_item_count: int
    subtotal: Decimal
    tax_amount: Decimal
    total_amount: Decimal
    amount_paid: Decimal
    balance: Decimal
    overdue: bool
    notes: str | None
    cancellation_reason: str | None
    cancelled_by: str | None
    created_at: datetime
    created_by: str
    last_modified_at: datetime
    last_modified_by: str

    @classmethod
    def from_entity(cls, invoice: Invoice, today: date) -> InvoiceDetail:
        """Project ``invoice``; ``today`` decides the overdue flag."""
        return cls(
            id=str(invoice.id),
            customer_id=str(invoice.customer_id),
            invoice_number=invoice.invoice_number,
            status=invoice.status.value,
            invoice_date=invoice.invoice_date,
            due_date=invoice.due_date,
            sent_date=invoice.sent_date,
            line_item_count=len(invoice.line_items),
            subtotal=invoice.subtotal.as_decimal(),
            tax_amount=invoice.tax_amount.as_decimal(),
            total_amount=invoice.total_amount.as_decimal(),
            amount_paid=invoice.amount_paid.as_decimal(),
            balance=invoice.balance.as_decimal(),
            overdue=invoice.is_overdue(today),
            notes=invoice.notes,
            cancellation_reason=invoice.cancellation_reason,
            cancelled_by=invoice.cancelled_by,
            created_at=invoice.audit.created_at,
            created_by=invoice.audit.created_by,
            last_modified_at=invoice.audit.last_modified_at,
            last_modified_by=invoice.audit.last_modified_by,
        )


@dataclass(frozen=True)
class InvoicePage:
    """One page of a filtered, sorted invoice listing.

    The sums cover every matching invoice, not only the ones on this page.
    """

    invoices: list[InvoiceDetail]
    total_count: int
    page_number: int
    page_size: int
    total_pages: int
    total_amount_sum: Decimal
    total_balance_sum: Decimal


@dataclass(frozen=True)
class CustomerDetail:
    """Output DTO for a customer, with the account summary."""

    id: str
    first_name: str
    last_name: str
    full_name: str
    email: str
    phone: str | None
    street: str
    city: str
    state: str
    zip_code: str
    country: str
    tax_id: str | None
    status: str
    total_invoices_count: int
    open_invoices_count: int
    total_invoiced_amount: Decimal
    total_paid_amount: Decimal
    outstanding_balance: Decimal
    created_at: datetime
    created_by: str
    last_modified_at: datetime

    @classmethod
    def from_entity(cls, customer: Customer, summary: AccountSummary) -> CustomerDetail:
        address = customer.billing_address
        return cls(
            id=str(customer.id),
            first_name=customer.name.first_name,
            last_name=customer.name.last_name,
            full_name=customer.name.full_name,
            email=str(customer.email),
            phone=str(customer.phone) if customer.phone else None,
            street=address.street,
            city=address.city,
            state=address.state,
            zip_code=address.zip_code,
            country=address.country,
            tax_id=str(customer.tax_id) if customer.tax_id else None,
            status=customer.status.value,
            total_invoices_count=summary.total_invoices_count,
            open_invoices_count=summary.open_invoices_count,
            total_invoiced_amount=summary.total_invoiced_amount.as_decimal(),
            total_paid_amount=summary.total_paid_amount.as_decimal(),
            outstanding_balance=summary.outstanding_balance.as_decimal(),
            created_at=customer.audit.created_at,
            created_by=customer.audit.created_by,
            last_modified_at=customer.audit.last_modified_at,
        )


@dataclass(frozen=True)
class CustomerSummary:
    """Output DTO for one row of a customer listing."""

    id: str
    full_name: str
    email: str
    status: str
    open_invoices_count: int
    outstanding_balance: Decimal

    @classmethod
    def from_entity(cls, customer: Customer, summary: AccountSummary) -> CustomerSummary:
        return cls(
            id=str(customer.id),
            full_name=customer.name.full_name,
            email=str(customer.email),
            status=customer.status.value,
            open_invoices_count=summary.open_invoices_count,
            outstanding_balance=summary.outstanding_balance.as_decimal(),
        )


@dataclass(frozen=True)
class CustomerPage:
    customers: list[CustomerSummary]
    total_count: int
    page_number: int
    page_size: int
    total_pages: int
