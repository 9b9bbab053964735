from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from invoicing_core.domain.value_objects import CustomerId, EmailAddress, InvoiceId


class LockProvider(ABC):
    """Port for resource-level locking.

    Contract:
    - acquire() MUST serialize access to the same resource_id
    - acquire() MUST release the lock when the context exits (normal or exception)
    - acquire() MUST be blocking (waits until lock is available)
    - Different resource_ids MAY be acquired concurrently

    Resource IDs are built with the helpers below so that every workflow
    touching an invoice (send, cancel, record payment, void payment) contends
    on the same key. Workflows holding several locks take them in the order
    customer, customer-email, invoice, invoice-sequence.
    """

    @abstractmethod
    @contextmanager
    def acquire(self, resource_id: str) -> Iterator[None]:
        """Acquire a lock for the given resource ID.

        Args:
            resource_id: Canonical string identifier for the resource.
                         Must be stable and deterministic (e.g., "invoice:<uuid>").

        Yields:
            None. The lock is held for the duration of the context.

        Usage:
            with lock_provider.acquire(invoice_lock_key(invoice_id)):
                # Critical section - lock is held
                ...
            # Lock is released here
        """
        ...


def invoice_lock_key(invoice_id: InvoiceId) -> str:
    return f"invoice:{invoice_id.value}"


def customer_lock_key(customer_id: CustomerId) -> str:
    return f"customer:{customer_id.value}"


def customer_email_lock_key(email: EmailAddress) -> str:
    return f"customer-email:{email.value}"


def invoice_sequence_lock_key(year_prefix: str) -> str:
    return f"invoice-sequence:{year_prefix}"
