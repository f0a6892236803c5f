"""Single source of "now" for the statistics engine."""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Protocol


class Clock(Protocol):
    """Anything that can report the current, timezone-aware local time."""

    def now(self) -> datetime:  # pragma: no cover - interface
        ...


class SystemClock:
    """Wall-clock time in the local timezone."""

    def now(self) -> datetime:
        return datetime.now().astimezone()


class FixedClock:
    """Clock pinned to a given instant; used by tests and ``--today``.

    A bare date pins local noon of that day; naive datetimes are read as
    local time.
    """

    def __init__(self, moment: datetime | date) -> None:
        if not isinstance(moment, datetime):
            moment = datetime.combine(moment, time(12, 0))
        self._moment = moment.astimezone()

    def now(self) -> datetime:
        return self._moment


def today(clock: Clock) -> date:
    """Calendar date of ``clock.now()`` in the clock's own timezone."""
    return clock.now().date()


def as_utc(moment: datetime) -> datetime:
    """Aware UTC copy of ``moment``; naive values are stored UTC and read as such."""
    if moment.tzinfo is None or moment.utcoffset() is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def to_local(moment: datetime) -> datetime:
    """``moment`` (naive meaning UTC) converted to the local timezone."""
    return as_utc(moment).astimezone()
