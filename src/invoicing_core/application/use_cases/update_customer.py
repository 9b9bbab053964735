from __future__ import annotations

from contextlib import ExitStack
from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from invoicing_core.application.ports import customer_email_lock_key, customer_lock_key
from invoicing_core.application.use_cases.loading import load_customer
from invoicing_core.domain.exceptions import (
    ConflictError,
    ErrorCode,
    InvalidStateError,
    ValidationError,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from invoicing_core.application.ports import LockProvider, TimeProvider, UnitOfWork
    from invoicing_core.domain.entities import Customer
    from invoicing_core.domain.value_objects import (
        Address,
        CustomerId,
        CustomerName,
        EmailAddress,
        PhoneNumber,
        TaxIdentifier,
    )

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class UpdateCustomerRequest:
    """Input DTO for update customer use case. None means "leave unchanged"."""

    customer_id: CustomerId
    updated_by: str
    name: CustomerName | None = None
    email: EmailAddress | None = None
    billing_address: Address | None = None
    phone: PhoneNumber | None = None
    tax_id: TaxIdentifier | None = None

    def has_changes(self) -> bool:
        return any(
            value is not None
            for value in (self.name, self.email, self.billing_address, self.phone, self.tax_id)
        )


@dataclass(frozen=True, slots=True)
class UpdateCustomerResponse:
    customer: Customer


class UpdateCustomerUseCase:
    """Partially updates an active customer.

    Lock order is customer, then the new email address. Create takes only
    the email lock, so the two never wait on each other in a cycle.
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

    def execute(self, request: UpdateCustomerRequest) -> UpdateCustomerResponse:
        """Execute the update customer workflow.

        Raises:
            NotFoundError: Customer does not exist.
            InvalidStateError: Customer is INACTIVE.
            ValidationError: No field supplied.
            ConflictError: New email belongs to another customer.
        """
        with ExitStack() as locks:
            locks.enter_context(self._lock_provider.acquire(customer_lock_key(request.customer_id)))
            if request.email is not None:
                locks.enter_context(
                    self._lock_provider.acquire(customer_email_lock_key(request.email))
                )
            return self._execute_within_lock(request)

    def _execute_within_lock(self, request: UpdateCustomerRequest) -> UpdateCustomerResponse:
        now = self._time_provider.now()

        with self._uow_factory() as uow:
            customer = load_customer(uow, request.customer_id)

            if not customer.is_active:
                raise InvalidStateError(
                    ErrorCode.CUSTOMER_INACTIVE,
                    f"Cannot update inactive customer: {request.customer_id.value}",
                    customer_id=str(request.customer_id),
                )

            if not request.has_changes():
                raise ValidationError(
                    ErrorCode.NO_FIELDS_PROVIDED,
                    "At least one field must be provided for update",
                    customer_id=str(request.customer_id),
                )

            if request.email is not None and request.email != customer.email:
                if uow.customers.exists_by_email(request.email):
                    raise ConflictError(
                        ErrorCode.EMAIL_ALREADY_EXISTS,
                        f"Customer with email {request.email} already exists",
                        email=str(request.email),
                    )

            updated = customer.update(
                request.updated_by,
                now,
                name=request.name,
                email=request.email,
                billing_address=request.billing_address,
                phone=request.phone,
                tax_id=request.tax_id,
            )
            uow.customers.save(updated)

        logger.info("Customer updated", customer_id=str(updated.id))
        return UpdateCustomerResponse(customer=updated)
