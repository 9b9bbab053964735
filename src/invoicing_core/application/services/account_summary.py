from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from invoicing_core.domain.entities import InvoiceStatus
from invoicing_core.domain.value_objects import Money

if TYPE_CHECKING:
    from collections.abc import Iterable

    from invoicing_core.domain.entities import Invoice

# Invoices the customer has actually been billed for
BILLED_STATUSES = frozenset({InvoiceStatus.SENT, InvoiceStatus.PAID})


@dataclass(frozen=True, slots=True)
class AccountSummary:
    """What a customer has been billed, has paid and still owes.

    Only SENT and PAID invoices count. Drafts have not been billed yet and
    cancelled invoices never carry applied payments.
    """

    total_invoices_count: int
    open_invoices_count: int
    total_invoiced_amount: Money
    total_paid_amount: Money
    outstanding_balance: Money


def summarize_account(invoices: Iterable[Invoice]) -> AccountSummary:
    """Fold one customer's invoices into an AccountSummary."""
    count = open_count = 0
    invoiced = paid = outstanding = Money.zero()

    for invoice in invoices:
        if invoice.status not in BILLED_STATUSES:
            continue
        count += 1
        if invoice.balance.is_positive():
            open_count += 1
        invoiced = invoiced + invoice.total_amount
        paid = paid + invoice.amount_paid
        outstanding = outstanding + invoice.balance

    return AccountSummary(
        total_invoices_count=count,
        open_invoices_count=open_count,
        total_invoiced_amount=invoiced,
        total_paid_amount=paid,
        outstanding_balance=outstanding,
    )
