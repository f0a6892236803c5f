"""Pytest configuration and shared fixtures for HabitPulse tests.

This module provides database fixtures, test data factories, fake
collaborators and a pinned clock so that streak and consistency results never
depend on the real date.
"""

from __future__ import annotations

import tempfile
from datetime import date
from pathlib import Path
from typing import Optional

import pytest
from sqlmodel import Session, SQLModel, create_engine, select

from habitpulse.config import BaseConfig
from habitpulse.errors import HabitConflictError, HabitNotFoundError, PersistenceError
from habitpulse.models import Activity, Habit, User
from habitpulse.services.clock import FixedClock

# Wednesday; its Sunday-start week is 2024-05-12 .. 2024-05-18
TODAY = date(2024, 5, 15)


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    """Keep config, logs and the default database inside the test's tmp dir."""
    monkeypatch.setenv("HABITPULSE_DATA_DIR", str(tmp_path / "instance"))
    monkeypatch.delenv("HABITPULSE_DATABASE_URL", raising=False)
    monkeypatch.delenv("HABITPULSE_DEFAULT_VIEW", raising=False)
    monkeypatch.delenv("HABITPULSE_RECENT_ACTIVITY_LIMIT", raising=False)
    monkeypatch.delenv("HABITPULSE_DEV_MODE", raising=False)


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Create a database session for a single test."""
    session = Session(db_engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching what the repositories expect (Callable[[], Session])."""

    def factory():
        return Session(db_engine, expire_on_commit=False)

    return factory


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def user(db_session) -> User:
    """Create a default user for scoping data."""

    existing = db_session.exec(select(User).where(User.username == "tester")).first()
    if existing:
        return existing
    u = User(username="tester", display_name="Tester")
    db_session.add(u)
    db_session.commit()
    db_session.refresh(u)
    return u


@pytest.fixture
def habit_factory(db_session, user):
    """Factory for creating persisted test habits."""

    def _create_habit(
        name: str = "Read",
        icon: str = "📚",
        calendar: Optional[dict] = None,
        owner: Optional[User] = None,
    ) -> Habit:
        owner = owner or user
        habit = Habit(user_id=owner.id, name=name, icon=icon, calendar=dict(calendar or {}))
        db_session.add(habit)
        db_session.commit()
        db_session.refresh(habit)
        db_session.expunge(habit)
        return habit

    return _create_habit


@pytest.fixture
def fixed_clock() -> FixedClock:
    return FixedClock(TODAY)


@pytest.fixture
def config() -> BaseConfig:
    return BaseConfig()


# =============================================================================
# Fake collaborators
# =============================================================================


class FakeHabitRepo:
    """In-memory habit store honouring the replace/version contract."""

    def __init__(self):
        self.rows: dict[int, Habit] = {}
        self.replace_calls = 0
        self._next_id = 1

    def list_habits(self, user_id: int) -> list[Habit]:
        return [h.copy_with() for h in self.rows.values() if h.user_id == user_id]

    def get_habit(self, habit_id: int, *, user_id: int) -> Optional[Habit]:
        habit = self.rows.get(habit_id)
        if habit is None or habit.user_id != user_id:
            return None
        return habit.copy_with()

    def create_habit(self, user_id, name, icon, time=None) -> Habit:
        habit = Habit(id=self._next_id, user_id=user_id, name=name, icon=icon, time=time)
        self._next_id += 1
        self.rows[habit.id] = habit
        return habit.copy_with()

    def replace_habit(self, habit_id, habit, *, expected_version=None) -> Habit:
        self.replace_calls += 1
        stored = self.rows.get(habit_id)
        if stored is None:
            raise HabitNotFoundError(f"Habit {habit_id} not found")
        if expected_version is not None and stored.version != expected_version:
            raise HabitConflictError(habit_id, expected_version, stored.version)
        self.rows[habit_id] = habit.copy_with(version=stored.version + 1)
        return self.rows[habit_id].copy_with()

    def delete_habit(self, habit_id, *, user_id) -> None:
        if self.rows.pop(habit_id, None) is None:
            raise HabitNotFoundError(f"Habit {habit_id} not found")


class FailingHabitRepo(FakeHabitRepo):
    """Accepts creates but refuses every replace."""

    def replace_habit(self, habit_id, habit, *, expected_version=None) -> Habit:
        self.replace_calls += 1
        raise PersistenceError("database is locked")


class FakeActivityRepo:
    def __init__(self, fail: bool = False):
        self.records: list[Activity] = []
        self.fail = fail

    def append_activity(self, activity: Activity) -> Activity:
        if self.fail:
            raise PersistenceError("activity log unavailable")
        activity.id = len(self.records) + 1
        self.records.append(activity)
        return activity

    def list_recent_activities(self, user_id: int, limit: int = 10) -> list[Activity]:
        rows = [a for a in self.records if a.user_id == user_id]
        rows.sort(key=lambda a: a.completed_at, reverse=True)
        return rows[:limit]


@pytest.fixture
def habit_repo() -> FakeHabitRepo:
    return FakeHabitRepo()


@pytest.fixture
def activity_repo() -> FakeActivityRepo:
    return FakeActivityRepo()
