from __future__ import annotations

from typing import TYPE_CHECKING

from invoicing_core.application.dtos import PaymentDetail
from invoicing_core.application.use_cases.loading import load_invoice, load_payment

if TYPE_CHECKING:
    from collections.abc import Callable

    from invoicing_core.application.ports import UnitOfWork
    from invoicing_core.domain.entities import PaymentStatus
    from invoicing_core.domain.value_objects import InvoiceId, PaymentId


class GetPaymentByIdQuery:
    """Fetch one payment as a flat PaymentDetail."""

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def execute(self, payment_id: PaymentId) -> PaymentDetail:
        """Raises NotFoundError if the payment does not exist."""
        with self._uow_factory() as uow:
            return PaymentDetail.from_entity(load_payment(uow, payment_id))


class ListPaymentsForInvoiceQuery:
    """List an invoice's payments, optionally filtered by status.

    Results are ordered by payment date, then creation time.
    """

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def execute(
        self, invoice_id: InvoiceId, status: PaymentStatus | None = None
    ) -> list[PaymentDetail]:
        """Raises NotFoundError if the invoice does not exist."""
        with self._uow_factory() as uow:
            load_invoice(uow, invoice_id)
            if status is None:
                payments = uow.payments.find_by_invoice_id(invoice_id)
            else:
                payments = uow.payments.find_by_invoice_id_and_status(invoice_id, status)
        return [PaymentDetail.from_entity(p) for p in payments]
