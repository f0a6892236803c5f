"""Emotion check-ins and the emotion/habit trend chart data."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterable, Optional, Sequence

from ..constants.emotions import EMOTIONS_BY_MOOD, INTENSITY_MAX, INTENSITY_MIN
from ..domain.repositories import EmotionRepository
from ..logging_config import get_logger
from ..models.emotion import Emotion
from ..models.enums import Mood
from .clock import Clock, SystemClock, as_utc, to_local
from .heatmap import CalendarOwner, engaged_habits_on

logger = get_logger(__name__)


def validate_emotion(mood: Mood | str, emotion: str, intensity: int) -> tuple[Mood, str]:
    """Return the canonical (mood, emotion) pair or raise ValueError."""

    try:
        mood = Mood(mood)
    except ValueError:
        raise ValueError(f"Unknown mood: {mood!r}") from None
    matches = [e for e in EMOTIONS_BY_MOOD[mood] if e.lower() == (emotion or "").strip().lower()]
    if not matches:
        raise ValueError(f"{emotion!r} is not offered for mood {mood.value!r}")
    if not INTENSITY_MIN <= intensity <= INTENSITY_MAX:
        raise ValueError(f"Intensity must be between {INTENSITY_MIN} and {INTENSITY_MAX}")
    return mood, matches[0]


def log_emotion(
    repository: EmotionRepository,
    *,
    user_id: int,
    mood: Mood | str,
    emotion: str,
    intensity: int,
    note: str = "",
    clock: Optional[Clock] = None,
) -> Emotion:
    """Validate and persist one emotion check-in."""

    mood, emotion = validate_emotion(mood, emotion, intensity)
    record = Emotion(
        user_id=user_id,
        mood=mood,
        emotion=emotion,
        intensity=intensity,
        note=note.strip(),
        created_at=as_utc((clock or SystemClock()).now()),
    )
    saved = repository.add_emotion(record)
    logger.info(f"Emotion logged: {emotion} ({intensity})", extra={"mood": mood.value})
    return saved


@dataclass(frozen=True, slots=True)
class TrendPoint:
    """One day of the emotion trend chart."""

    day: date
    intensity: Optional[int]
    emotion: Optional[str]
    completed_habits: tuple[str, ...]


def emotion_trend(
    emotions: Iterable[Emotion],
    habits: Sequence[CalendarOwner],
    *,
    today: date,
    days: int = 7,
) -> list[TrendPoint]:
    """Last ``days`` days, oldest first.

    Each point carries the latest emotion logged that day (if any) and the
    ``"<icon> <name>"`` labels of habits engaged that day.
    """

    latest: dict[date, Emotion] = {}
    for record in emotions:
        day = to_local(record.created_at).date()
        current = latest.get(day)
        if current is None or as_utc(record.created_at) > as_utc(current.created_at):
            latest[day] = record

    points = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        record = latest.get(day)
        labels = tuple(
            f"{getattr(habit, 'icon', '')} {habit.name}".strip()
            for habit in engaged_habits_on(habits, day)
        )
        points.append(
            TrendPoint(
                day=day,
                intensity=record.intensity if record else None,
                emotion=record.emotion if record else None,
                completed_habits=labels,
            )
        )
    return points


def trend_since(today: date, days: int = 7) -> datetime:
    """Local midnight starting the first day covered by ``emotion_trend(..., days=days)``."""
    return datetime.combine(today - timedelta(days=days - 1), time.min).astimezone()
