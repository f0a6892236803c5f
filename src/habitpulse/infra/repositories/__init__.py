"""Concrete repository implementations using SQLModel."""

from .activity import SQLModelActivityRepository
from .emotion import SQLModelEmotionRepository
from .habit import SQLModelHabitRepository
from .user import SQLModelUserRepository

__all__ = [
    "SQLModelActivityRepository",
    "SQLModelEmotionRepository",
    "SQLModelHabitRepository",
    "SQLModelUserRepository",
]
