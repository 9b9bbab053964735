from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from invoicing_core.application.ports import customer_lock_key
from invoicing_core.application.use_cases.loading import load_customer
from invoicing_core.domain.entities import InvoiceStatus
from invoicing_core.domain.exceptions import ConflictError, ErrorCode

if TYPE_CHECKING:
    from collections.abc import Callable

    from invoicing_core.application.ports import LockProvider, TimeProvider, UnitOfWork
    from invoicing_core.domain.entities import Customer
    from invoicing_core.domain.value_objects import CustomerId

logger = structlog.get_logger(__name__)

# Invoices that still expect money from the customer
ACTIVE_INVOICE_STATUSES = frozenset({InvoiceStatus.SENT, InvoiceStatus.PAID})


@dataclass(frozen=True, slots=True)
class DeleteCustomerRequest:
    customer_id: CustomerId
    deleted_by: str


@dataclass(frozen=True, slots=True)
class DeleteCustomerResponse:
    customer: Customer


class DeleteCustomerUseCase:
    """Soft-deletes a customer by marking it INACTIVE.

    Customers with SENT or PAID invoices cannot be deleted. Hard deletion
    is not supported; invoices keep referencing the inactive customer.
    """

    def __init__(
        self,
        lock_provider: LockProvider,
        time_provider: TimeProvider,
        uow_factory: Callable[[], UnitOfWork],
    ) -> None:
        self._lock_provider = lock_provider
        self._time_provider = time_provider
        self._uow_factory = uow_factory

    def execute(self, request: DeleteCustomerRequest) -> DeleteCustomerResponse:
        """Execute the delete customer workflow.

        Raises:
            NotFoundError: Customer does not exist.
            ConflictError: Customer has SENT or PAID invoices.
            InvalidStateError: Customer is already INACTIVE.
        """
        with self._lock_provider.acquire(customer_lock_key(request.customer_id)):
            now = self._time_provider.now()
            with self._uow_factory() as uow:
                customer = load_customer(uow, request.customer_id)

                if uow.invoices.exists_by_customer_id_and_status_in(
                    request.customer_id, ACTIVE_INVOICE_STATUSES
                ):
                    raise ConflictError(
                        ErrorCode.CUSTOMER_HAS_ACTIVE_INVOICES,
                        f"Cannot delete customer with active invoices: {request.customer_id.value}",
                        customer_id=str(request.customer_id),
                    )

                deactivated = customer.deactivate(request.deleted_by, now)
                uow.customers.save(deactivated)

        logger.info("Customer deactivated", customer_id=str(deactivated.id))
        return DeleteCustomerResponse(customer=deactivated)
