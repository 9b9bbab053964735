from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(frozen=True, slots=True)
class AuditInfo:
    """Who created and last modified an entity, and when (UTC)."""

    created_at: datetime
    created_by: str
    last_modified_at: datetime
    last_modified_by: str

    @classmethod
    def create(cls, actor: str, now: datetime) -> AuditInfo:
        return cls(
            created_at=now,
            created_by=actor,
            last_modified_at=now,
            last_modified_by=actor,
        )

    def touch(self, actor: str, now: datetime) -> AuditInfo:
        """Return a copy stamped with a new modification."""
        return replace(self, last_modified_at=now, last_modified_by=actor)
