"""Grid data for the contribution graph and the multi-habit heatmap."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterable, Mapping, Optional, Protocol

from ..models.enums import CalendarView, DayStatus
from .calendar_window import resolve_window
from .day_status import Calendar, get_status


class CalendarOwner(Protocol):
    """Anything with a display name and a day-status calendar (e.g. ``Habit``)."""

    name: str
    calendar: Mapping[str, object]


class ContributionTier(str, Enum):
    """Colour tier of a single-habit contribution cell."""

    NEUTRAL = "neutral"
    WARNING = "warning"
    FULL = "full"
    SPECIAL = "special"

    @property
    def engaged(self) -> bool:
        return self in (ContributionTier.FULL, ContributionTier.SPECIAL)


_TIER_BY_STATUS = {
    DayStatus.CHECK_IN: ContributionTier.FULL,
    DayStatus.SPECIAL: ContributionTier.SPECIAL,
    DayStatus.MISS: ContributionTier.WARNING,
    DayStatus.DAY_OFF: ContributionTier.NEUTRAL,
}


def contribution_tier(status: Optional[DayStatus]) -> ContributionTier:
    if status is None:
        return ContributionTier.NEUTRAL
    return _TIER_BY_STATUS[status]


# (lowest count, highest count or None for open-ended, legend label)
HEATMAP_BUCKETS: tuple[tuple[int, Optional[int], str], ...] = (
    (0, 0, "0"),
    (1, 2, "1-2"),
    (3, 4, "3-4"),
    (5, 6, "5-6"),
    (7, 8, "7-8"),
    (9, None, "9+"),
)


def intensity_bucket(engaged_count: int) -> int:
    """Index into ``HEATMAP_BUCKETS`` for a day's engaged-habit count."""

    for index, (low, high, _) in enumerate(HEATMAP_BUCKETS):
        if engaged_count >= low and (high is None or engaged_count <= high):
            return index
    return 0


def bucket_label(index: int) -> str:
    return HEATMAP_BUCKETS[index][2]


@dataclass(frozen=True, slots=True)
class ContributionCell:
    day: date
    status: Optional[DayStatus]

    @property
    def tier(self) -> ContributionTier:
        return contribution_tier(self.status)


@dataclass(frozen=True, slots=True)
class HeatmapCell:
    day: date
    engaged_count: int
    engaged_habit_names: tuple[str, ...]

    @property
    def bucket(self) -> int:
        return intensity_bucket(self.engaged_count)

    @property
    def label(self) -> str:
        return bucket_label(self.bucket)


def build_contribution_grid(
    calendar: Optional[Calendar], year: int
) -> tuple[tuple[ContributionCell, ...], ...]:
    """One row per week of ``year`` with each day's recorded status."""

    window = resolve_window(CalendarView.YEAR, date(year, 1, 1))
    return tuple(
        tuple(ContributionCell(day=day, status=get_status(calendar, day)) for day in row)
        for row in window.rows
    )


def build_heatmap(
    habits: Iterable[CalendarOwner],
    view: CalendarView | str,
    reference_date: date,
) -> tuple[tuple[HeatmapCell, ...], ...]:
    """Per-day count and names of habits engaged on that day, laid out in week rows."""

    habits = list(habits)
    window = resolve_window(view, reference_date)
    rows = []
    for row in window.rows:
        cells = []
        for day in row:
            names = tuple(habit.name for habit in engaged_habits_on(habits, day))
            cells.append(HeatmapCell(day=day, engaged_count=len(names), engaged_habit_names=names))
        rows.append(tuple(cells))
    return tuple(rows)


def engaged_habits_on(habits: Iterable[CalendarOwner], day: date) -> list[CalendarOwner]:
    """Habits whose calendar marks ``day`` as a check-in or special day."""

    engaged = []
    for habit in habits:
        status = get_status(habit.calendar, day)
        if status is not None and status.engaged:
            engaged.append(habit)
    return engaged
