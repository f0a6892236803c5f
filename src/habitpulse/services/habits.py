"""Habit statistics: streak, consistency and check-in count."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ..config import BaseConfig
from ..models.enums import CalendarView, DayStatus
from .calendar_window import resolve_window
from .day_status import Calendar, get_status, recorded_days

STREAK_LOOKBACK_DAYS = BaseConfig.STREAK_LOOKBACK_DAYS


@dataclass(frozen=True, slots=True)
class HabitStats:
    """The three cached figures shown on a habit card."""

    streak: int
    consistency: int
    check_ins: int


def compute_streak(
    calendar: Optional[Calendar],
    today: date,
    *,
    lookback_days: int = STREAK_LOOKBACK_DAYS,
) -> int:
    """Count engaged days walking backwards from ``today``.

    Check-in and special days extend the streak, day-off days are skipped
    without extending it, and a miss or unrecorded day ends it. At most
    ``lookback_days`` days are examined, so the streak never exceeds it.
    """

    streak = 0
    cursor = today
    for _ in range(lookback_days):
        status = get_status(calendar, cursor)
        if status is not None and status.engaged:
            streak += 1
        elif status is not DayStatus.DAY_OFF:
            break
        cursor -= timedelta(days=1)
    return streak


def percentage(part: int, whole: int) -> int:
    """``round(100 * part / whole)`` with half-up rounding; 0 when whole is 0."""

    if whole <= 0:
        return 0
    value = Decimal(100 * part) / Decimal(whole)
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def compute_consistency(
    calendar: Optional[Calendar],
    view: CalendarView | str,
    reference_date: date,
) -> int:
    """Percentage of engaged days within the window around ``reference_date``."""

    window = resolve_window(view, reference_date)
    engaged_days = sum(
        1 for day, status in recorded_days(calendar) if day in window and status.engaged
    )
    return percentage(engaged_days, window.total_days)


def count_check_ins(calendar: Optional[Calendar]) -> int:
    """Number of check-in and special days recorded anywhere in the calendar."""

    return sum(1 for _, status in recorded_days(calendar) if status.engaged)


def compute_stats(
    calendar: Optional[Calendar],
    *,
    today: date,
    view: CalendarView | str,
    reference_date: Optional[date] = None,
) -> HabitStats:
    """Recompute every cached figure for ``calendar`` in one pass."""

    reference_date = reference_date or today
    check_ins = count_check_ins(calendar)
    consistency = compute_consistency(calendar, view, reference_date)
    streak = compute_streak(calendar, today)
    return HabitStats(streak=streak, consistency=consistency, check_ins=check_ins)


__all__ = [
    "HabitStats",
    "STREAK_LOOKBACK_DAYS",
    "compute_consistency",
    "compute_stats",
    "compute_streak",
    "count_check_ins",
    "percentage",
]
