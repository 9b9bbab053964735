from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from invoicing_core.application.ports import customer_email_lock_key
from invoicing_core.domain.entities import Customer
from invoicing_core.domain.exceptions import ConflictError, ErrorCode

if TYPE_CHECKING:
    from collections.abc import Callable

    from invoicing_core.application.ports import LockProvider, TimeProvider, UnitOfWork
    from invoicing_core.domain.value_objects import (
        Address,
        CustomerName,
        EmailAddress,
        PhoneNumber,
        TaxIdentifier,
    )

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class CreateCustomerRequest:
    """Input DTO for create customer use case."""

    name: CustomerName
    email: EmailAddress
    billing_address: Address
    created_by: str
    phone: PhoneNumber | None = None
    tax_id: TaxIdentifier | None = None


@dataclass(frozen=True, slots=True)
class CreateCustomerResponse:
    customer: Customer


class CreateCustomerUseCase:
    """Creates an ACTIVE customer with a unique email address.

    The email lock makes the uniqueness check and the save atomic with
    respect to other creates or updates claiming the same address.
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

    def execute(self, request: CreateCustomerRequest) -> CreateCustomerResponse:
        """Execute the create customer workflow.

        Raises:
            ConflictError: Email address already in use.
        """
        with self._lock_provider.acquire(customer_email_lock_key(request.email)):
            now = self._time_provider.now()
            with self._uow_factory() as uow:
                if uow.customers.exists_by_email(request.email):
                    raise ConflictError(
                        ErrorCode.EMAIL_ALREADY_EXISTS,
                        f"Customer with email {request.email} already exists",
                        email=str(request.email),
                    )

                customer = Customer.create(
                    name=request.name,
                    email=request.email,
                    billing_address=request.billing_address,
                    created_by=request.created_by,
                    now=now,
                    phone=request.phone,
                    tax_id=request.tax_id,
                )
                uow.customers.save(customer)

        logger.info("Customer created", customer_id=str(customer.id))
        return CreateCustomerResponse(customer=customer)
