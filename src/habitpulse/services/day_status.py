"""Read and copy-on-write helpers for a habit's day-status calendar."""

from __future__ import annotations

from datetime import date
from typing import Iterator, Mapping, Optional

from ..models.enums import DayStatus

Calendar = Mapping[str, object]

# Order applied by repeated clicks on the same day; None means unrecorded.
CYCLE: tuple[Optional[DayStatus], ...] = (
    None,
    DayStatus.CHECK_IN,
    DayStatus.MISS,
    DayStatus.DAY_OFF,
)


def parse_key(key: object) -> Optional[date]:
    """Return the date for a canonical ``YYYY-MM-DD`` key, else None."""

    if not isinstance(key, str) or len(key) != 10:
        return None
    try:
        parsed = date.fromisoformat(key)
    except ValueError:
        return None
    return parsed if parsed.isoformat() == key else None


def date_key(day: date | str) -> str:
    """Canonical calendar key for ``day``; raises ValueError if malformed."""

    if isinstance(day, date):
        return day.isoformat()
    parsed = parse_key(day)
    if parsed is None:
        raise ValueError(f"Expected a YYYY-MM-DD date, got {day!r}")
    return day


def get_status(calendar: Optional[Calendar], day: date | str) -> Optional[DayStatus]:
    """Status recorded for ``day``; malformed or unknown entries read as None."""

    if not calendar:
        return None
    key = day.isoformat() if isinstance(day, date) else day
    return DayStatus.parse(calendar.get(key))


def set_status(
    calendar: Optional[Calendar], day: date | str, status: DayStatus | str | None
) -> dict[str, Optional[str]]:
    """Return a copy of ``calendar`` with ``day`` set to ``status``.

    ``None`` removes the entry. Unknown status strings raise ValueError.
    """

    if status is None:
        return unset_status(calendar, day)
    key = date_key(day)
    status = DayStatus(status)
    updated = dict(calendar or {})
    updated[key] = status.value
    return updated


def unset_status(calendar: Optional[Calendar], day: date | str) -> dict[str, Optional[str]]:
    """Return a copy of ``calendar`` without an entry for ``day``."""

    key = date_key(day)
    updated = dict(calendar or {})
    updated.pop(key, None)
    return updated


def next_in_cycle(status: Optional[DayStatus]) -> Optional[DayStatus]:
    """absent -> check-in -> miss -> day-off -> absent.

    A special day is outside the cycle and clears back to absent.
    """

    if status not in CYCLE:
        return None
    return CYCLE[(CYCLE.index(status) + 1) % len(CYCLE)]


def cycle_status(calendar: Optional[Calendar], day: date | str) -> dict[str, Optional[str]]:
    """Return a copy of ``calendar`` with ``day`` advanced one step in the cycle."""

    return set_status(calendar, day, next_in_cycle(get_status(calendar, day)))


def recorded_days(calendar: Optional[Calendar]) -> Iterator[tuple[date, DayStatus]]:
    """Yield (date, status) for every well-formed entry, in key order."""

    for key in sorted(calendar or {}, key=str):
        day = parse_key(key)
        status = DayStatus.parse(calendar[key])
        if day is not None and status is not None:
            yield day, status
