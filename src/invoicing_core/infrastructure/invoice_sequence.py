from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from invoicing_core.application.ports import InvoiceSequence, invoice_sequence_lock_key
from invoicing_core.infrastructure.lock_provider import InMemoryLockProvider

if TYPE_CHECKING:
    from collections.abc import Callable

    from invoicing_core.application.ports import LockProvider

logger = structlog.get_logger(__name__)


class InMemoryInvoiceSequence(InvoiceSequence):
    """Per-key counter serialized behind one lock per key.

    The first call for a key runs ``seed`` inside the key's lock, so
    numbering continues after whatever invoices already exist. Later calls
    only increment the stored counter; invoices are not rescanned.

    Must be given a real (blocking) LockProvider. With NoOpLockProvider
    concurrent callers can receive the same value.
    """

    def __init__(self, lock_provider: LockProvider | None = None) -> None:
        self._lock_provider = lock_provider or InMemoryLockProvider()
        self._values: dict[str, int] = {}

    def next_value(self, key: str, seed: Callable[[], int]) -> int:
        with self._lock_provider.acquire(invoice_sequence_lock_key(key)):
            current = self._values.get(key)
            if current is None:
                current = seed()
                logger.info("Seeded invoice sequence", key=key, highest_existing=current)
            value = current + 1
            self._values[key] = value
            return value
