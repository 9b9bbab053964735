from __future__ import annotations

from contextlib import contextmanager
from threading import Lock
from typing import TYPE_CHECKING

import structlog

from invoicing_core.application.ports import LockProvider

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = structlog.get_logger(__name__)


class InMemoryLockProvider(LockProvider):
    """In-memory lock provider using per-resource locks.

    Implementation uses two-phase locking:
    1. Global lock protects the lock dictionary during lookup/creation
    2. Resource lock serializes access to the specific resource

    Resource locks are not re-entrant. A workflow may hold an invoice lock
    and then take the invoice-sequence lock, but must never take the same
    key twice.

    Limitations:
    - Single-process only (locks don't work across processes)
    - Unbounded memory growth (locks are never evicted)
    """

    def __init__(self) -> None:
        self._locks: dict[str, Lock] = {}
        self._global_lock = Lock()

    @contextmanager
    def acquire(self, resource_id: str) -> Iterator[None]:
        # Phase 1: get or create the resource lock under the global lock
        with self._global_lock:
            lock = self._locks.get(resource_id)
            if lock is None:
                lock = self._locks[resource_id] = Lock()

        # Phase 2: block on the resource lock only
        if lock.locked():
            logger.debug("Waiting for resource lock", resource_id=resource_id)
        with lock:
            yield


class NoOpLockProvider(LockProvider):
    """Lock provider that performs no locking.

    For single-threaded unit tests only. Never use it where a test checks
    concurrent sends, voids or cancellations.
    """

    @contextmanager
    def acquire(self, resource_id: str) -> Iterator[None]:  # noqa: ARG002
        yield
