"""Tests for summarize_account."""

from datetime import datetime

from invoicing_core.application.services import summarize_account
from invoicing_core.domain.entities import Invoice
from invoicing_core.domain.value_objects import Money


class TestSummarizeAccount:
    def test_no_invoices(self) -> None:
        summary = summarize_account([])

        assert summary.total_invoices_count == 0
        assert summary.open_invoices_count == 0
        assert summary.outstanding_balance == Money.zero()

    def test_draft_and_cancelled_are_ignored(
        self, draft_invoice: Invoice, fixed_time: datetime
    ) -> None:
        cancelled = draft_invoice.cancel("duplicate", "manager", fixed_time)

        summary = summarize_account([draft_invoice, cancelled])

        assert summary.total_invoices_count == 0
        assert summary.total_invoiced_amount == Money.zero()

    def test_paid_invoice_is_billed_but_not_open(
        self, sent_invoice: Invoice, fixed_time: datetime
    ) -> None:
        paid = sent_invoice.apply_payment(Money.of("25.00"), "cashier", fixed_time)

        summary = summarize_account([paid])

        assert summary.total_invoices_count == 1
        assert summary.open_invoices_count == 0
        assert summary.total_paid_amount == Money.of("25.00")
        assert summary.outstanding_balance == Money.zero()

    def test_reversed_payment_reopens_balance(
        self, sent_invoice: Invoice, fixed_time: datetime
    ) -> None:
        paid = sent_invoice.apply_payment(Money.of("25.00"), "cashier", fixed_time)
        reopened = paid.reverse_payment(Money.of("25.00"), "supervisor", fixed_time)

        summary = summarize_account([reopened])

        assert summary.open_invoices_count == 1
        assert summary.total_paid_amount == Money.zero()
        assert summary.outstanding_balance == Money.of("25.00")
