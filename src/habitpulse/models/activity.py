"""Append-only engagement log."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

from .enums import ActivityType


class Activity(SQLModel, table=True):
    """A check-in or special check-in event, recorded once and never edited.

    ``habit_id`` is a plain back-reference: deleting the habit keeps history.
    """

    __tablename__: ClassVar[str] = "activity"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    habit_id: int = Field(nullable=False, index=True)
    habit_name: str = Field(nullable=False, max_length=80)
    habit_icon: str = Field(default="", max_length=16)
    user_name: str = Field(default="", max_length=64)
    type: ActivityType = Field(default=ActivityType.CHECK_IN, nullable=False)
    completed_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True,
    )
