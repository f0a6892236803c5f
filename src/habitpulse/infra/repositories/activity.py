"""SQLModel implementation of the activity log."""

from __future__ import annotations

from typing import Callable

from sqlmodel import Session, select

from ...models.activity import Activity
from ..database import translate_errors


class SQLModelActivityRepository:
    """Append-only activity store."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def append_activity(self, activity: Activity) -> Activity:
        """Persist a new activity record."""
        if activity.id is not None:
            raise ValueError("Activities are append-only; this record already has an id")
        with translate_errors("append activity"), self.session_factory() as session:
            session.add(activity)
            session.commit()
            session.refresh(activity)
            session.expunge(activity)
            return activity

    def list_recent_activities(self, user_id: int, limit: int = 10) -> list[Activity]:
        """Newest activities first."""
        with translate_errors("list activities"), self.session_factory() as session:
            statement = (
                select(Activity)
                .where(Activity.user_id == user_id)
                .order_by(Activity.completed_at.desc(), Activity.id.desc())  # type: ignore
                .limit(limit)
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows
