"""Repository protocol definitions for domain layer."""

from .activity import ActivityRepository
from .emotion import EmotionRepository
from .habit import HabitRepository
from .user import UserRepository

__all__ = [
    "ActivityRepository",
    "EmotionRepository",
    "HabitRepository",
    "UserRepository",
]
