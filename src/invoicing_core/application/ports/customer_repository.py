from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from invoicing_core.domain.entities import Customer
    from invoicing_core.domain.value_objects import CustomerId, EmailAddress


class CustomerRepository(ABC):
    """Port for customer persistence.

    Contract:
    - get() and find_by_email() return None when nothing matches
    - save() performs upsert: creates if new, updates if exists
    - Email lookups compare normalized (lower-cased) addresses
    """

    @abstractmethod
    def get(self, customer_id: CustomerId) -> Customer | None: ...

    @abstractmethod
    def save(self, customer: Customer) -> None: ...

    @abstractmethod
    def find_by_email(self, email: EmailAddress) -> Customer | None: ...

    @abstractmethod
    def exists_by_email(self, email: EmailAddress) -> bool: ...

    @abstractmethod
    def list_all(self) -> list[Customer]: ...
