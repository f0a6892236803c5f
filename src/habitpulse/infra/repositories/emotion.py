"""SQLModel implementation of the emotion log."""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from sqlmodel import Session, select

from ...models.emotion import Emotion
from ...services.clock import as_utc
from ..database import translate_errors


class SQLModelEmotionRepository:
    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def add_emotion(self, emotion: Emotion) -> Emotion:
        with translate_errors("add emotion"), self.session_factory() as session:
            session.add(emotion)
            session.commit()
            session.refresh(emotion)
            session.expunge(emotion)
            return emotion

    def list_emotions(self, user_id: int, *, since: Optional[datetime] = None) -> list[Emotion]:
        """Newest entries first, optionally only those created at or after ``since``."""
        with translate_errors("list emotions"), self.session_factory() as session:
            statement = select(Emotion).where(Emotion.user_id == user_id)
            if since is not None:
                statement = statement.where(Emotion.created_at >= as_utc(since))
            statement = statement.order_by(Emotion.created_at.desc())  # type: ignore
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows
