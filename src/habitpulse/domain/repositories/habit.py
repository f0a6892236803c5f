"""Habit repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.habit import Habit


class HabitRepository(Protocol):
    """Persistence collaborator for habits.

    Implementations raise ``PersistenceError`` (or a subclass) when the store
    does not acknowledge a write.
    """

    def list_habits(self, user_id: int) -> list[Habit]:
        """List a user's habits ordered by creation."""
        ...

    def get_habit(self, habit_id: int, *, user_id: int) -> Optional[Habit]:
        """Retrieve one habit owned by ``user_id``."""
        ...

    def create_habit(
        self, user_id: int, name: str, icon: str, time: Optional[str] = None
    ) -> Habit:
        """Create a habit with an empty calendar and zeroed stats."""
        ...

    def replace_habit(
        self, habit_id: int, habit: Habit, *, expected_version: Optional[int] = None
    ) -> Habit:
        """Overwrite every stored field of a habit and return the stored copy."""
        ...

    def delete_habit(self, habit_id: int, *, user_id: int) -> None:
        """Delete a habit; its activity history is kept."""
        ...
