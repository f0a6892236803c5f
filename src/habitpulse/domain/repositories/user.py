"""User repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.user import User


class UserRepository(Protocol):
    def get_by_username(self, username: str) -> Optional[User]:
        ...

    def get_or_create(self, username: str, display_name: str = "") -> User:
        ...
