from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING

from invoicing_core.domain.exceptions import ErrorCode, InvalidStateError
from invoicing_core.domain.value_objects import AuditInfo, CustomerId

if TYPE_CHECKING:
    from datetime import datetime

    from invoicing_core.domain.value_objects import (
        Address,
        CustomerName,
        EmailAddress,
        PhoneNumber,
        TaxIdentifier,
    )


class CustomerStatus(Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


@dataclass(frozen=True, slots=True)
class Customer:
    """Customer entity.

    Invoices reference a customer by ID only, so updating a customer never
    changes existing invoices. Deletion is soft: the customer becomes
    INACTIVE and can no longer be invoiced or updated.
    """

    id: CustomerId
    name: CustomerName
    email: EmailAddress
    billing_address: Address
    status: CustomerStatus
    audit: AuditInfo
    phone: PhoneNumber | None = None
    tax_id: TaxIdentifier | None = None

    @classmethod
    def create(
        cls,
        name: CustomerName,
        email: EmailAddress,
        billing_address: Address,
        created_by: str,
        now: datetime,
        phone: PhoneNumber | None = None,
        tax_id: TaxIdentifier | None = None,
    ) -> Customer:
        return cls(
            id=CustomerId.generate(),
            name=name,
            email=email,
            billing_address=billing_address,
            status=CustomerStatus.ACTIVE,
            audit=AuditInfo.create(created_by, now),
            phone=phone,
            tax_id=tax_id,
        )

    @property
    def is_active(self) -> bool:
        return self.status == CustomerStatus.ACTIVE

    def update(
        self,
        updated_by: str,
        now: datetime,
        *,
        name: CustomerName | None = None,
        email: EmailAddress | None = None,
        billing_address: Address | None = None,
        phone: PhoneNumber | None = None,
        tax_id: TaxIdentifier | None = None,
    ) -> Customer:
        """Replace the supplied details; omitted fields are kept.

        Raises:
            InvalidStateError: If the customer is INACTIVE.
        """
        self._require_active("update")
        return replace(
            self,
            name=name or self.name,
            email=email or self.email,
            billing_address=billing_address or self.billing_address,
            phone=phone or self.phone,
            tax_id=tax_id or self.tax_id,
            audit=self.audit.touch(updated_by, now),
        )

    def deactivate(self, deactivated_by: str, now: datetime) -> Customer:
        """Soft-delete the customer.

        Raises:
            InvalidStateError: If the customer is already INACTIVE.
        """
        self._require_active("delete")
        return replace(
            self,
            status=CustomerStatus.INACTIVE,
            audit=self.audit.touch(deactivated_by, now),
        )

    def _require_active(self, action: str) -> None:
        if not self.is_active:
            raise InvalidStateError(
                ErrorCode.CUSTOMER_INACTIVE,
                f"Cannot {action} inactive customer: {self.id}",
                customer_id=str(self.id),
            )
