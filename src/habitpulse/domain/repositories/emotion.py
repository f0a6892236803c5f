"""Emotion log repository protocol."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from ...models.emotion import Emotion


class EmotionRepository(Protocol):
    def add_emotion(self, emotion: Emotion) -> Emotion:
        ...

    def list_emotions(self, user_id: int, *, since: Optional[datetime] = None) -> list[Emotion]:
        """Newest entries first, optionally only those created at or after ``since``."""
        ...
