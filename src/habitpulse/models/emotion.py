"""Emotion check-in records."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

from .enums import Mood


class Emotion(SQLModel, table=True):
    """How the user felt at a moment, with a 1-10 intensity."""

    __tablename__: ClassVar[str] = "emotion"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    emotion: str = Field(nullable=False, max_length=40)
    mood: Mood = Field(default=Mood.NEUTRAL, nullable=False)
    intensity: int = Field(default=5, nullable=False)
    note: str = Field(default="", max_length=500)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True,
    )
