"""Habit stats orchestration.

Every change to a habit's calendar goes through ``HabitTracker`` so that the
cached ``streak``/``consistency``/``check_ins`` fields are recomputed before
the habit is written back. A write is two-phase: the new habit is computed
locally, handed to the repository as a full replace, and only returned to the
caller once the repository acknowledges it. On failure the caller keeps the
habit it passed in.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

from ..config import BaseConfig
from ..domain.repositories import ActivityRepository, HabitRepository
from ..errors import PersistenceError
from ..logging_config import get_logger
from ..models.activity import Activity
from ..models.enums import ActivityType, CalendarView, DayStatus
from ..models.habit import Habit
from .clock import Clock, SystemClock, as_utc, today as clock_today
from .day_status import get_status, next_in_cycle, set_status
from .habits import compute_stats

logger = get_logger(__name__)

_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


@dataclass(frozen=True, slots=True)
class Cycle:
    """Plain click: advance the day one step through the status cycle."""


@dataclass(frozen=True, slots=True)
class SetEngaged:
    """Engage toggle: set the day to check-in (or special), or clear it if already so."""

    special: bool = False

    @property
    def target(self) -> DayStatus:
        return DayStatus.SPECIAL if self.special else DayStatus.CHECK_IN


MutationIntent = Union[Cycle, SetEngaged]


def next_status(current: Optional[DayStatus], intent: MutationIntent) -> Optional[DayStatus]:
    """Status a day moves to when ``intent`` is applied to it."""

    if isinstance(intent, Cycle):
        return next_in_cycle(current)
    if isinstance(intent, SetEngaged):
        return None if current is intent.target else intent.target
    raise TypeError(f"Unsupported mutation intent: {intent!r}")


def activity_type_for(
    previous: Optional[DayStatus], current: Optional[DayStatus], intent: MutationIntent
) -> Optional[ActivityType]:
    """Activity to log for a transition, if any.

    Only the engage toggle logs, and only when the day becomes engaged
    from a non-engaged state.
    """

    if not isinstance(intent, SetEngaged) or current is None or not current.engaged:
        return None
    if previous is not None and previous.engaged:
        return None
    return ActivityType.SPECIAL if current is DayStatus.SPECIAL else ActivityType.CHECK_IN


def recompute(
    habit: Habit,
    *,
    today: date,
    view: CalendarView | str,
    reference_date: Optional[date] = None,
    calendar: Optional[dict] = None,
    **changes,
) -> Habit:
    """Copy of ``habit`` (with ``calendar``/``changes`` applied) and fresh stats."""

    calendar = dict(habit.calendar or {}) if calendar is None else calendar
    stats = compute_stats(calendar, today=today, view=view, reference_date=reference_date)
    return habit.copy_with(
        calendar=calendar,
        check_ins=stats.check_ins,
        consistency=stats.consistency,
        streak=stats.streak,
        **changes,
    )


@dataclass(frozen=True, slots=True)
class DayMutation:
    """Locally computed outcome of one day mutation, before persistence."""

    habit: Habit
    day: date
    previous: Optional[DayStatus]
    current: Optional[DayStatus]
    activity_type: Optional[ActivityType]


def apply_day_mutation(
    habit: Habit,
    day: date,
    intent: MutationIntent,
    *,
    today: date,
    view: CalendarView | str,
    reference_date: Optional[date] = None,
) -> DayMutation:
    """Apply ``intent`` to ``day`` and recompute every cached stat. Pure."""

    previous = get_status(habit.calendar, day)
    current = next_status(previous, intent)
    calendar = set_status(habit.calendar, day, current)
    updated = recompute(
        habit, today=today, view=view, reference_date=reference_date, calendar=calendar
    )
    return DayMutation(
        habit=updated,
        day=day,
        previous=previous,
        current=current,
        activity_type=activity_type_for(previous, current, intent),
    )


@dataclass(slots=True)
class MutationResult:
    """What the caller should render after a mutation attempt.

    ``habit`` is the stored habit when ``committed`` and the untouched input
    habit otherwise.
    """

    committed: bool
    habit: Habit
    previous_status: Optional[DayStatus] = None
    status: Optional[DayStatus] = None
    activity: Optional[Activity] = None
    error: Optional[PersistenceError] = None


class HabitTracker:
    """Coordinates calendar mutations, stat refreshes and the activity log."""

    def __init__(
        self,
        habits: HabitRepository,
        activities: ActivityRepository,
        *,
        clock: Optional[Clock] = None,
        config: Optional[BaseConfig] = None,
    ) -> None:
        self.habits = habits
        self.activities = activities
        self.clock = clock or SystemClock()
        self.config = config or BaseConfig()

    def today(self) -> date:
        return clock_today(self.clock)

    def _view(self, view: CalendarView | str | None) -> CalendarView:
        return CalendarView.parse(view if view is not None else self.config.DEFAULT_VIEW)

    # Habit CRUD
    def list_habits(self, user_id: int) -> list[Habit]:
        return self.habits.list_habits(user_id)

    def add_habit(self, user_id: int, name: str, icon: str, time: Optional[str] = None) -> Habit:
        """Create a habit; name and icon are required."""
        name, icon = (name or "").strip(), (icon or "").strip()
        if not name or not icon:
            raise ValueError("Habit name and icon are required")
        if time is not None and not _TIME_PATTERN.match(time):
            raise ValueError(f"Habit time must be HH:MM, got {time!r}")
        habit = self.habits.create_habit(user_id, name, icon, time)
        logger.info(f"Habit created: {habit.name}", extra={"habit_id": habit.id})
        return habit

    def edit_habit(
        self,
        habit: Habit,
        *,
        name: Optional[str] = None,
        icon: Optional[str] = None,
        time: Optional[str] = None,
        view: CalendarView | str | None = None,
        reference_date: Optional[date] = None,
    ) -> MutationResult:
        """Rename/re-icon/re-time a habit, writing it back with fresh stats."""
        changes = {}
        if name is not None:
            if not name.strip():
                raise ValueError("Habit name cannot be blank")
            changes["name"] = name.strip()
        if icon is not None:
            if not icon.strip():
                raise ValueError("Habit icon cannot be blank")
            changes["icon"] = icon.strip()
        if time is not None:
            if time and not _TIME_PATTERN.match(time):
                raise ValueError(f"Habit time must be HH:MM, got {time!r}")
            changes["time"] = time or None

        updated = recompute(
            habit,
            today=self.today(),
            view=self._view(view),
            reference_date=reference_date,
            **changes,
        )
        return self._commit(habit, updated)

    def remove_habit(self, habit_id: int, *, user_id: int) -> None:
        self.habits.delete_habit(habit_id, user_id=user_id)
        logger.info("Habit deleted", extra={"habit_id": habit_id})

    def recent_activities(self, user_id: int, limit: Optional[int] = None) -> list[Activity]:
        return self.activities.list_recent_activities(
            user_id, limit or self.config.RECENT_ACTIVITY_LIMIT
        )

    # Mutations
    def toggle_day(
        self,
        habit: Habit,
        day: date,
        intent: MutationIntent = Cycle(),
        *,
        user_name: str = "",
        view: CalendarView | str | None = None,
        reference_date: Optional[date] = None,
    ) -> MutationResult:
        """Apply ``intent`` to ``day`` of ``habit`` and persist the result."""

        mutation = apply_day_mutation(
            habit,
            day,
            intent,
            today=self.today(),
            view=self._view(view),
            reference_date=reference_date,
        )
        result = self._commit(habit, mutation.habit)
        result.previous_status = mutation.previous
        result.status = mutation.current
        if not result.committed:
            return result

        logger.info(
            f"Habit {habit.id} {mutation.day.isoformat()}: "
            f"{_label(mutation.previous)} -> {_label(mutation.current)}",
            extra={"habit_id": habit.id, "streak": result.habit.streak},
        )
        if mutation.activity_type is not None:
            result.activity = self._log_activity(result.habit, mutation.activity_type, user_name)
        return result

    def toggle_today(
        self,
        habit: Habit,
        *,
        special: bool = False,
        user_name: str = "",
        view: CalendarView | str | None = None,
        reference_date: Optional[date] = None,
    ) -> MutationResult:
        """Engage toggle for today; ``special`` is the long-press variant."""
        return self.toggle_day(
            habit,
            self.today(),
            SetEngaged(special=special),
            user_name=user_name,
            view=view,
            reference_date=reference_date,
        )

    def refresh_stats(
        self,
        habit: Habit,
        *,
        view: CalendarView | str | None = None,
        reference_date: Optional[date] = None,
    ) -> MutationResult:
        """Recompute and store stats without touching the calendar (e.g. after midnight)."""
        updated = recompute(
            habit, today=self.today(), view=self._view(view), reference_date=reference_date
        )
        return self._commit(habit, updated)

    def _commit(self, original: Habit, updated: Habit) -> MutationResult:
        try:
            stored = self.habits.replace_habit(
                original.id, updated, expected_version=original.version
            )
        except PersistenceError as exc:
            logger.error(
                f"Discarded update to habit {original.id}: {exc}",
                exc_info=True,
                extra={"habit_id": original.id},
            )
            return MutationResult(committed=False, habit=original, error=exc)
        return MutationResult(committed=True, habit=stored)

    def _log_activity(
        self, habit: Habit, activity_type: ActivityType, user_name: str
    ) -> Optional[Activity]:
        activity = Activity(
            user_id=habit.user_id,
            habit_id=habit.id,
            habit_name=habit.name,
            habit_icon=habit.icon,
            user_name=user_name,
            type=activity_type,
            completed_at=as_utc(self.clock.now()),
        )
        try:
            return self.activities.append_activity(activity)
        except PersistenceError as exc:
            logger.warning(f"Activity for habit {habit.id} not recorded: {exc}")
            return None


def _label(status: Optional[DayStatus]) -> str:
    return status.value if status is not None else "unrecorded"
