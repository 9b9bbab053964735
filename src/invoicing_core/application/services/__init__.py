"""Application services shared by several use cases."""

from invoicing_core.application.services.account_summary import (
    AccountSummary,
    summarize_account,
)
from invoicing_core.application.services.invoice_number_allocator import InvoiceNumberAllocator

__all__ = [
    "AccountSummary",
    "InvoiceNumberAllocator",
    "summarize_account",
]
