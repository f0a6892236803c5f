"""Tests for the SQLModel repositories."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import OperationalError

from habitpulse.errors import HabitConflictError, HabitNotFoundError, PersistenceError
from habitpulse.infra.database import translate_errors
from habitpulse.infra.repositories import (
    SQLModelActivityRepository,
    SQLModelEmotionRepository,
    SQLModelHabitRepository,
    SQLModelUserRepository,
)
from habitpulse.models import Activity, ActivityType, Emotion, Mood, User


class TestHabitRepository:
    def test_create_starts_empty(self, session_factory, user):
        repo = SQLModelHabitRepository(session_factory)

        habit = repo.create_habit(user.id, "Read", "📚", "07:00")

        assert habit.id is not None
        assert habit.calendar == {}
        assert (habit.streak, habit.consistency, habit.check_ins) == (0, 0, 0)
        assert habit.version == 1
        assert habit.time == "07:00"

    def test_list_is_scoped_to_user(self, session_factory, habit_factory, db_session):
        other = User(username="someone")
        db_session.add(other)
        db_session.commit()
        db_session.refresh(other)
        mine = habit_factory(name="Read")
        habit_factory(name="Run", owner=other)

        habits = SQLModelHabitRepository(session_factory).list_habits(mine.user_id)

        assert [h.name for h in habits] == ["Read"]

    def test_get_other_users_habit_returns_none(self, session_factory, habit_factory, user):
        habit = habit_factory()
        repo = SQLModelHabitRepository(session_factory)

        assert repo.get_habit(habit.id, user_id=user.id) is not None
        assert repo.get_habit(habit.id, user_id=user.id + 100) is None

    def test_replace_overwrites_and_bumps_version(self, session_factory, habit_factory):
        habit = habit_factory(calendar={"2024-05-14": "miss"})
        repo = SQLModelHabitRepository(session_factory)
        changed = habit.copy_with(
            name="Read more",
            calendar={"2024-05-15": "check-in"},
            streak=1,
            consistency=14,
            check_ins=1,
            version=99,
        )

        stored = repo.replace_habit(habit.id, changed, expected_version=habit.version)

        assert stored.name == "Read more"
        assert stored.calendar == {"2024-05-15": "check-in"}
        assert (stored.streak, stored.consistency, stored.check_ins) == (1, 14, 1)
        assert stored.version == habit.version + 1
        assert repo.get_habit(habit.id, user_id=habit.user_id).calendar == stored.calendar

    def test_replace_with_stale_version_conflicts(self, session_factory, habit_factory):
        habit = habit_factory()
        repo = SQLModelHabitRepository(session_factory)
        repo.replace_habit(habit.id, habit.copy_with(name="First"), expected_version=1)

        with pytest.raises(HabitConflictError) as excinfo:
            repo.replace_habit(habit.id, habit.copy_with(name="Second"), expected_version=1)

        assert excinfo.value.actual == 2
        assert repo.get_habit(habit.id, user_id=habit.user_id).name == "First"

    def test_replace_without_version_always_writes(self, session_factory, habit_factory):
        habit = habit_factory()
        repo = SQLModelHabitRepository(session_factory)
        repo.replace_habit(habit.id, habit.copy_with(name="First"))

        stored = repo.replace_habit(habit.id, habit.copy_with(name="Second"))

        assert stored.name == "Second"
        assert stored.version == 3

    def test_replace_missing_habit(self, session_factory, habit_factory):
        habit = habit_factory()

        with pytest.raises(HabitNotFoundError):
            SQLModelHabitRepository(session_factory).replace_habit(habit.id + 1, habit)

    def test_delete_keeps_activities(self, session_factory, habit_factory, user):
        habit = habit_factory()
        habits = SQLModelHabitRepository(session_factory)
        activities = SQLModelActivityRepository(session_factory)
        activities.append_activity(
            Activity(user_id=user.id, habit_id=habit.id, habit_name=habit.name, habit_icon=habit.icon)
        )

        habits.delete_habit(habit.id, user_id=user.id)

        assert habits.get_habit(habit.id, user_id=user.id) is None
        assert [a.habit_id for a in activities.list_recent_activities(user.id)] == [habit.id]
        with pytest.raises(HabitNotFoundError):
            habits.delete_habit(habit.id, user_id=user.id)


class TestActivityRepository:
    def test_newest_first_with_limit(self, session_factory, user):
        repo = SQLModelActivityRepository(session_factory)
        start = datetime(2024, 5, 10, 9, 0, tzinfo=timezone.utc)
        for offset in range(5):
            repo.append_activity(
                Activity(
                    user_id=user.id,
                    habit_id=1,
                    habit_name=f"habit {offset}",
                    type=ActivityType.SPECIAL if offset == 4 else ActivityType.CHECK_IN,
                    completed_at=start + timedelta(days=offset),
                )
            )

        recent = repo.list_recent_activities(user.id, limit=3)

        assert [a.habit_name for a in recent] == ["habit 4", "habit 3", "habit 2"]
        assert recent[0].type is ActivityType.SPECIAL

    def test_append_only(self, session_factory, user):
        repo = SQLModelActivityRepository(session_factory)
        saved = repo.append_activity(Activity(user_id=user.id, habit_id=1, habit_name="Read"))

        with pytest.raises(ValueError):
            repo.append_activity(saved)


class TestEmotionRepository:
    def test_since_filter_and_order(self, session_factory, user):
        repo = SQLModelEmotionRepository(session_factory)
        for day, emotion in [(10, "Calm"), (12, "Tired"), (14, "Focused")]:
            repo.add_emotion(
                Emotion(
                    user_id=user.id,
                    emotion=emotion,
                    mood=Mood.NEUTRAL,
                    intensity=4,
                    created_at=datetime(2024, 5, day, 8, 0, tzinfo=timezone.utc),
                )
            )

        assert [e.emotion for e in repo.list_emotions(user.id)] == ["Focused", "Tired", "Calm"]
        since = datetime(2024, 5, 12, tzinfo=timezone.utc)
        assert [e.emotion for e in repo.list_emotions(user.id, since=since)] == ["Focused", "Tired"]


class TestUserRepository:
    def test_get_or_create_is_stable(self, session_factory):
        repo = SQLModelUserRepository(session_factory)

        first = repo.get_or_create("sam", "Sam")
        second = repo.get_or_create("sam")

        assert first.id == second.id
        assert second.label == "Sam"
        assert repo.get_by_username("nobody") is None


def test_translate_errors_wraps_driver_failures():
    with pytest.raises(PersistenceError) as excinfo:
        with translate_errors("replace habit"):
            raise OperationalError("UPDATE habit", {}, Exception("database is locked"))

    assert "replace habit" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, OperationalError)
