"""Week/month/year windows and their week-aligned row layout.

Weeks start on Sunday. Every grid and heatmap is laid out from the rows
produced here, and consistency is measured over the same start/end bounds.
"""

from __future__ import annotations

from calendar import monthrange
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator, Optional

from ..models.enums import CalendarView
from .clock import Clock, SystemClock, today

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True, slots=True)
class CalendarWindow:
    """Inclusive date range plus its partition into Sunday-aligned rows."""

    view: CalendarView
    start: date
    end: date
    rows: tuple[tuple[date, ...], ...]

    @property
    def total_days(self) -> int:
        if self.end < self.start:
            return 0
        return (self.end - self.start).days + 1

    def __contains__(self, day: object) -> bool:
        return isinstance(day, date) and self.start <= day <= self.end


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every date from ``start`` to ``end`` inclusive."""

    cursor = start
    while cursor <= end:
        yield cursor
        cursor += ONE_DAY


def week_start(day: date) -> date:
    """The Sunday on or before ``day``."""
    # date.weekday(): Monday == 0 ... Sunday == 6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def week_end(day: date) -> date:
    """The Saturday on or after ``day``."""
    return week_start(day) + timedelta(days=6)


def window_bounds(view: CalendarView | str, reference: date) -> tuple[date, date]:
    """Return the inclusive (start, end) of the window containing ``reference``."""

    view = CalendarView.parse(view)
    if view is CalendarView.WEEK:
        return week_start(reference), week_end(reference)
    if view is CalendarView.MONTH:
        last = monthrange(reference.year, reference.month)[1]
        return reference.replace(day=1), reference.replace(day=last)
    return date(reference.year, 1, 1), date(reference.year, 12, 31)


def partition_rows(start: date, end: date) -> tuple[tuple[date, ...], ...]:
    """Split [start, end] into rows that break after every Saturday.

    The first row runs from ``start`` to its Saturday, later rows start on a
    Sunday, and the final row is clipped at ``end``.
    """

    rows: list[tuple[date, ...]] = []
    cursor = start
    while cursor <= end:
        row_end = min(week_end(cursor), end)
        rows.append(tuple(iter_days(cursor, row_end)))
        cursor = row_end + ONE_DAY
    return tuple(rows)


def resolve_window(
    view: CalendarView | str,
    reference_date: Optional[date] = None,
    *,
    clock: Optional[Clock] = None,
) -> CalendarWindow:
    """Resolve the window for ``view`` around ``reference_date``.

    ``reference_date`` defaults to today according to ``clock``. The result
    depends only on (view, reference_date), so repeated calls compare equal.
    """

    view = CalendarView.parse(view)
    if reference_date is None:
        reference_date = today(clock or SystemClock())
    start, end = window_bounds(view, reference_date)
    return CalendarWindow(view=view, start=start, end=end, rows=partition_rows(start, end))


def shift_reference(view: CalendarView | str, reference: date, steps: int = 1) -> date:
    """Move ``reference`` by ``steps`` weeks, months or years (negative = back).

    Month and year moves clamp the day to the length of the target month.
    """

    view = CalendarView.parse(view)
    if view is CalendarView.WEEK:
        return reference + timedelta(weeks=steps)
    if view is CalendarView.MONTH:
        month_index = reference.year * 12 + (reference.month - 1) + steps
        year, month = divmod(month_index, 12)
        month += 1
    else:
        year, month = reference.year + steps, reference.month
    day = min(reference.day, monthrange(year, month)[1])
    return date(year, month, day)
