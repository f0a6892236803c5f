"""SQLModel implementation of Habit repository."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional

from sqlmodel import Session, select

from ...errors import HabitConflictError, HabitNotFoundError
from ...models.habit import Habit
from ..database import translate_errors

# Everything a full replace overwrites; id, user_id, version and created_at are store-owned.
REPLACED_FIELDS = ("name", "icon", "time", "streak", "consistency", "check_ins", "calendar")


class SQLModelHabitRepository:
    """SQLModel-based habit repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def list_habits(self, user_id: int) -> list[Habit]:
        """List a user's habits ordered by creation."""
        with translate_errors("list habits"), self.session_factory() as session:
            statement = (
                select(Habit).where(Habit.user_id == user_id).order_by(Habit.id)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def get_habit(self, habit_id: int, *, user_id: int) -> Optional[Habit]:
        """Retrieve one habit owned by ``user_id``."""
        with translate_errors("load habit"), self.session_factory() as session:
            obj = session.exec(
                select(Habit).where(Habit.id == habit_id, Habit.user_id == user_id)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def create_habit(
        self, user_id: int, name: str, icon: str, time: Optional[str] = None
    ) -> Habit:
        """Create a habit with an empty calendar and zeroed stats."""
        with translate_errors("create habit"), self.session_factory() as session:
            habit = Habit(user_id=user_id, name=name, icon=icon, time=time, calendar={})
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def replace_habit(
        self, habit_id: int, habit: Habit, *, expected_version: Optional[int] = None
    ) -> Habit:
        """Overwrite every stored field of a habit and return the stored copy.

        When ``expected_version`` is given the write only succeeds if nobody
        else replaced the habit since that version was read.
        """
        with translate_errors("replace habit"), self.session_factory() as session:
            stored = session.exec(
                select(Habit).where(Habit.id == habit_id, Habit.user_id == habit.user_id)
            ).first()
            if stored is None:
                raise HabitNotFoundError(f"Habit {habit_id} not found")
            if expected_version is not None and stored.version != expected_version:
                raise HabitConflictError(habit_id, expected_version, stored.version)

            for field in REPLACED_FIELDS:
                setattr(stored, field, getattr(habit, field))
            stored.calendar = dict(habit.calendar or {})
            stored.version = stored.version + 1
            stored.updated_at = datetime.now(timezone.utc)

            session.add(stored)
            session.commit()
            session.refresh(stored)
            session.expunge(stored)
            return stored

    def delete_habit(self, habit_id: int, *, user_id: int) -> None:
        """Delete a habit; its activity history is kept."""
        with translate_errors("delete habit"), self.session_factory() as session:
            habit = session.exec(
                select(Habit).where(Habit.id == habit_id, Habit.user_id == user_id)
            ).first()
            if habit is None:
                raise HabitNotFoundError(f"Habit {habit_id} not found")
            session.delete(habit)
            session.commit()
