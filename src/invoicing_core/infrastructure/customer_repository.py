from __future__ import annotations

import copy
from typing import TYPE_CHECKING

from invoicing_core.application.ports import CustomerRepository

if TYPE_CHECKING:
    from collections.abc import MutableMapping

    from invoicing_core.domain.entities import Customer
    from invoicing_core.domain.value_objects import CustomerId, EmailAddress


class InMemoryCustomerRepository(CustomerRepository):
    def __init__(self, customers: MutableMapping[CustomerId, Customer] | None = None) -> None:
        self._customers: MutableMapping[CustomerId, Customer] = (
            customers if customers is not None else {}
        )

    def get(self, customer_id: CustomerId) -> Customer | None:
        customer = self._customers.get(customer_id)
        if customer is None:
            return None
        return copy.deepcopy(customer)

    def save(self, customer: Customer) -> None:
        self._customers[customer.id] = copy.deepcopy(customer)

    def find_by_email(self, email: EmailAddress) -> Customer | None:
        # Linear scan; a database adapter would use a unique index.
        for customer in self._customers.values():
            if customer.email == email:
                return copy.deepcopy(customer)
        return None

    def exists_by_email(self, email: EmailAddress) -> bool:
        return any(customer.email == email for customer in self._customers.values())

    def list_all(self) -> list[Customer]:
        return [copy.deepcopy(customer) for customer in self._customers.values()]
