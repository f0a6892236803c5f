"""SQLModel table exports."""

from .activity import Activity
from .emotion import Emotion
from .enums import ActivityType, CalendarView, DayStatus, Mood
from .habit import Habit
from .user import User

__all__ = [
    "Activity",
    "ActivityType",
    "CalendarView",
    "DayStatus",
    "Emotion",
    "Habit",
    "Mood",
    "User",
]
