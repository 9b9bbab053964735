from datetime import UTC, datetime, timedelta

from invoicing_core.application.ports import TimeProvider


def _require_utc(moment: datetime) -> datetime:
    if moment.tzinfo is not UTC:
        raise ValueError(f"datetime must have tzinfo=UTC, got tzinfo={moment.tzinfo}")
    return moment


class SystemTimeProvider(TimeProvider):
    """Wall clock in UTC. Used by the composition root."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FixedTimeProvider(TimeProvider):
    """Clock frozen at a chosen UTC instant until moved explicitly.

    Tests use it to pin invoice dates, the numbering year and audit
    timestamps. Moving the clock (set_time, advance) is not synchronized;
    concurrency tests must set the time before their workers start.
    """

    def __init__(self, fixed_time: datetime) -> None:
        self._current = _require_utc(fixed_time)

    def now(self) -> datetime:
        return self._current

    def set_time(self, new_time: datetime) -> None:
        """Jump to ``new_time``, e.g. into the next year to restart numbering."""
        self._current = _require_utc(new_time)

    def advance(self, delta: timedelta) -> None:
        self._current = self._current + delta
