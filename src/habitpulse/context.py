"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from .config import BaseConfig
from .infra.database import SessionFactory, bootstrap_database
from .infra.repositories import (
    SQLModelActivityRepository,
    SQLModelEmotionRepository,
    SQLModelHabitRepository,
    SQLModelUserRepository,
)
from .models.enums import CalendarView
from .models.user import User
from .services.calendar_window import CalendarWindow, resolve_window, shift_reference
from .services.clock import Clock, SystemClock
from .services.tracker import HabitTracker


@dataclass
class AppContext:
    """Centralized application context with collaborators and view state."""

    # Configuration
    config: BaseConfig
    clock: Clock

    # Session factory
    session_factory: SessionFactory

    # Repositories
    habit_repo: SQLModelHabitRepository
    activity_repo: SQLModelActivityRepository
    emotion_repo: SQLModelEmotionRepository
    user_repo: SQLModelUserRepository

    # Orchestrator
    tracker: HabitTracker

    # View state: the window every consistency figure is measured over
    view: CalendarView = CalendarView.WEEK
    reference_date: Optional[date] = None
    current_user: Optional[User] = field(default=None)

    def require_user_id(self) -> int:
        """Return the current user id or raise if not set."""

        if self.current_user is None or self.current_user.id is None:
            raise RuntimeError("No current user selected")
        return self.current_user.id

    def window(self) -> CalendarWindow:
        return resolve_window(self.view, self.reference_date, clock=self.clock)

    def navigate(self, steps: int) -> CalendarWindow:
        """Move the selected window back (negative) or forward by whole periods."""
        reference = self.reference_date or self.tracker.today()
        self.reference_date = shift_reference(self.view, reference, steps)
        return self.window()


def create_app_context(
    config: Optional[BaseConfig] = None, *, clock: Optional[Clock] = None
) -> AppContext:
    """Create and initialize the application context."""

    if config is None:
        config = BaseConfig()
    clock = clock or SystemClock()

    _engine, session_factory = bootstrap_database(config)

    habit_repo = SQLModelHabitRepository(session_factory)
    activity_repo = SQLModelActivityRepository(session_factory)

    return AppContext(
        config=config,
        clock=clock,
        session_factory=session_factory,
        habit_repo=habit_repo,
        activity_repo=activity_repo,
        emotion_repo=SQLModelEmotionRepository(session_factory),
        user_repo=SQLModelUserRepository(session_factory),
        tracker=HabitTracker(habit_repo, activity_repo, clock=clock, config=config),
        view=CalendarView.parse(config.DEFAULT_VIEW),
    )
