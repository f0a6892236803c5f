"""Errors raised by the persistence collaborators."""

from __future__ import annotations


class PersistenceError(RuntimeError):
    """A storage collaborator failed to acknowledge a read or write."""


class HabitNotFoundError(PersistenceError, LookupError):
    """The habit does not exist or belongs to another user."""


class HabitConflictError(PersistenceError):
    """The stored habit changed since the caller last read it."""

    def __init__(self, habit_id: int, expected: int, actual: int) -> None:
        super().__init__(
            f"Habit {habit_id} is at version {actual}, expected {expected}"
        )
        self.habit_id = habit_id
        self.expected = expected
        self.actual = actual
