"""SQLModel implementation of User repository."""

from __future__ import annotations

from typing import Callable, Optional

from sqlmodel import Session, select

from ...models.user import User
from ..database import translate_errors


class SQLModelUserRepository:
    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get_by_username(self, username: str) -> Optional[User]:
        with translate_errors("load user"), self.session_factory() as session:
            obj = session.exec(select(User).where(User.username == username)).first()
            if obj:
                session.expunge(obj)
            return obj

    def get_or_create(self, username: str, display_name: str = "") -> User:
        """Return the user called ``username``, creating it on first use."""
        existing = self.get_by_username(username)
        if existing is not None:
            return existing
        with translate_errors("create user"), self.session_factory() as session:
            user = User(username=username, display_name=display_name)
            session.add(user)
            session.commit()
            session.refresh(user)
            session.expunge(user)
            return user
