"""
Injectable source of the current time.

All timestamps are handled as naive UTC datetimes: the SQL store keeps them
without offset, and ``to_utc`` normalises aware values coming from clients
before they are compared or persisted.

Usage:
    clock = SystemClock()
    started_at = clock.now()

    # Tests pin time explicitly
    clock = FixedClock(datetime(2024, 3, 1, 9, 30))
    clock.advance(minutes=45)
"""
from datetime import datetime, timedelta, timezone
from typing import Optional, Protocol


def to_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Convert an aware datetime to naive UTC; naive values are assumed UTC."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class Clock(Protocol):
    """Anything that can tell the current UTC time."""

    def now(self) -> datetime:
        ...


class SystemClock:
    """Clock backed by the system time."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc).replace(tzinfo=None)


class FixedClock:
    """Clock frozen at a given instant until advanced manually."""

    def __init__(self, instant: datetime):
        self._now = to_utc(instant)

    def now(self) -> datetime:
        return self._now

    def advance(self, **delta) -> None:
        """Move the clock forward by ``timedelta(**delta)``."""
        self._now = self._now + timedelta(**delta)
