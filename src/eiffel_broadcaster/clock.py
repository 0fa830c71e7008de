"""Time source for event timestamps.

``meta.time`` is an integer count of milliseconds since the Unix epoch while
AMQP message timestamps and the signing key cache work with aware
``datetime`` values.  Both are derived from one ``Clock.now()`` so tests can
pin every timestamp the broadcaster produces with a single ``FrozenClock``.
"""
from __future__ import annotations

import abc
from datetime import UTC, datetime, timedelta


def to_epoch_millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


class Clock(abc.ABC):
    @abc.abstractmethod
    def now(self) -> datetime:
        """Current time as an aware UTC datetime."""

    def epoch_millis(self) -> int:
        return to_epoch_millis(self.now())


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now(UTC)


class FrozenClock(Clock):
    """Clock that only moves when told to.

    Defaults to 2026-01-01 12:00 UTC.  Naive datetimes are rejected since
    ``meta.time`` would otherwise depend on the host's timezone.
    """

    def __init__(self, start: datetime | None = None) -> None:
        start = start or datetime(2026, 1, 1, 12, 0, tzinfo=UTC)
        if start.tzinfo is None:
            raise ValueError("FrozenClock needs a timezone-aware datetime")
        self._current = start.astimezone(UTC)

    @classmethod
    def at_epoch_millis(cls, millis: int) -> FrozenClock:
        return cls(datetime.fromtimestamp(millis / 1000, UTC))

    def now(self) -> datetime:
        return self._current

    def advance(self, **delta: float) -> None:
        self._current += timedelta(**delta)


_system_clock = SystemClock()


def epoch_millis() -> int:
    """Milliseconds since the Unix epoch on the system clock."""
    return _system_clock.epoch_millis()


__all__ = ["Clock", "FrozenClock", "SystemClock", "epoch_millis", "to_epoch_millis"]
