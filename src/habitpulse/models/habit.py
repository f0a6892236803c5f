"""Habit tracking data structures."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, ClassVar, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class Habit(SQLModel, table=True):
    """A user-defined habit with its day-status calendar and cached stats.

    ``calendar`` maps ``YYYY-MM-DD`` keys to a ``DayStatus`` value string.
    ``streak``, ``consistency`` and ``check_ins`` are derived from it and are
    only trustworthy after the tracker has recomputed them.
    """

    __tablename__: ClassVar[str] = "habit"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=80, index=True)
    icon: str = Field(default="", max_length=16)
    time: Optional[str] = Field(default=None, max_length=5)
    streak: int = Field(default=0, nullable=False)
    consistency: int = Field(default=0, nullable=False)
    check_ins: int = Field(default=0, nullable=False)
    calendar: dict[str, Optional[str]] = Field(
        default_factory=dict, sa_column=Column(JSON, nullable=False)
    )
    version: int = Field(default=1, nullable=False)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def copy_with(self, **changes: Any) -> "Habit":
        """Return a detached copy with ``changes`` applied.

        The calendar is always copied so the result never aliases this habit.
        """
        data = self.model_dump()
        data["calendar"] = dict(self.calendar or {})
        data.update(changes)
        if "calendar" in changes:
            data["calendar"] = dict(changes["calendar"] or {})
        return Habit(**data)
