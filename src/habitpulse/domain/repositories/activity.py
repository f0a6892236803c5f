"""Activity log repository protocol."""

from __future__ import annotations

from typing import Protocol

from ...models.activity import Activity


class ActivityRepository(Protocol):
    """Append-only store of check-in events."""

    def append_activity(self, activity: Activity) -> Activity:
        """Persist a new activity record."""
        ...

    def list_recent_activities(self, user_id: int, limit: int = 10) -> list[Activity]:
        """Newest activities first."""
        ...
