from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


class InvoiceSequence(ABC):
    """Port for a monotonic, per-key counter used to number invoices.

    Contract:
    - next_value() MUST be atomic: concurrent callers with the same key
      never receive the same value
    - Values for a key strictly increase; a value is never handed out twice
    - seed() is called at most once per key, before the first value is
      issued, and returns the highest value already in use (0 if none)
    - Different keys are independent

    A value whose surrounding transaction later fails is not returned to
    the pool, so the issued sequence may contain gaps.
    """

    @abstractmethod
    def next_value(self, key: str, seed: Callable[[], int]) -> int:
        """Return the next value for ``key``.

        Args:
            key: Counter name, e.g. the year prefix ``"INV-2025-"``.
            seed: Returns the current maximum for ``key`` on first use.
        """
