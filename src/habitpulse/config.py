"""Environment-driven settings for HabitPulse.

Values come from ``HABITPULSE_*`` environment variables, optionally loaded
from a ``.env`` file in the working directory.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()

ENV_PREFIX = "HABITPULSE_"
VALID_VIEWS = ("week", "month", "year")
_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _env(name: str, default: str) -> str:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(f"{ENV_PREFIX}{name}")
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def _env_int(name: str, default: int) -> int:
    """Positive integer setting; blank means ``default``."""

    raw = os.getenv(f"{ENV_PREFIX}{name}", "").strip()
    if not raw:
        return default
    parsed = int(raw)
    if parsed <= 0:
        raise ValueError(f"{ENV_PREFIX}{name} must be a positive integer, got {raw!r}.")
    return parsed


class BaseConfig:
    """Settings shared by the CLI, the tests and any embedding application."""

    APP_NAME = "HabitPulse"
    DB_FILENAME = "habitpulse.db"
    # Upper bound of the backwards streak walk, in days
    STREAK_LOOKBACK_DAYS = 365
    SQLITE_PRAGMAS = {"journal_mode": "wal", "foreign_keys": "on"}

    def __init__(self) -> None:
        self.DATA_DIR = self._data_dir()
        self.DEV_MODE = _env_bool("DEV_MODE", default=True)
        self.DATABASE_URL = _env("DATABASE_URL", f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}")
        self.DEFAULT_VIEW = _env("DEFAULT_VIEW", "week").strip().lower()
        self.RECENT_ACTIVITY_LIMIT = _env_int("RECENT_ACTIVITY_LIMIT", 10)

        if self.DEFAULT_VIEW not in VALID_VIEWS:
            raise ValueError(
                f"{ENV_PREFIX}DEFAULT_VIEW must be one of {', '.join(VALID_VIEWS)}; "
                f"got {self.DEFAULT_VIEW!r}."
            )

    @staticmethod
    def _data_dir() -> Path:
        """Directory holding the SQLite file and ``logs/``; created if missing."""

        path = Path(_env("DATA_DIR", "instance")).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Keyword arguments for ``create_engine``."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {"pool_pre_ping": True}


class DevConfig(BaseConfig):
    """Local development: debug on, real SQLite file."""

    DEBUG = True
    TESTING = False
