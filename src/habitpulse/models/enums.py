"""Enumerations shared by the tables and the statistics engine."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class DayStatus(str, Enum):
    """Status recorded for one habit on one calendar day.

    Absence of an entry means "unrecorded" and is modelled as ``None``.
    """

    CHECK_IN = "check-in"
    MISS = "miss"
    DAY_OFF = "day-off"
    SPECIAL = "special"

    @property
    def engaged(self) -> bool:
        """True for statuses that count as having performed the habit."""
        return self in (DayStatus.CHECK_IN, DayStatus.SPECIAL)

    @classmethod
    def parse(cls, value: object) -> Optional["DayStatus"]:
        """Lenient conversion used when reading stored calendars.

        Unknown values, ``None`` and the empty string all read as unrecorded.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class CalendarView(str, Enum):
    """Granularity of the window that scopes consistency and grids."""

    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    @classmethod
    def parse(cls, value: "CalendarView | str") -> "CalendarView":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown calendar view: {value!r}") from None


class ActivityType(str, Enum):
    """Kind of engagement an activity record captures."""

    CHECK_IN = "check-in"
    SPECIAL = "special"


class Mood(str, Enum):
    """Five-point pleasantness scale used by the emotion log."""

    VERY_UNPLEASANT = "Very Unpleasant"
    UNPLEASANT = "Unpleasant"
    NEUTRAL = "Neutral"
    PLEASANT = "Pleasant"
    VERY_PLEASANT = "Very Pleasant"
