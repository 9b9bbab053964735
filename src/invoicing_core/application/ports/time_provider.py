from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import date, datetime


class TimeProvider(ABC):
    """Port for the clock every workflow reads inside its lock.

    Contract:
    - now() MUST return an aware datetime whose tzinfo is datetime.UTC
    - today() is the UTC calendar date of now(); the numbering year,
      default invoice dates and default sent dates all come from it
    - Audit timestamps (created_at, last_modified_at, voided_at) are
      taken from now(), never from the caller
    """

    @abstractmethod
    def now(self) -> datetime:
        """Return the current UTC datetime (tzinfo=datetime.UTC)."""
        ...

    def today(self) -> date:
        return self.now().date()
