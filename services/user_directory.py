from __future__ import annotations

from typing import Optional, Protocol

from models.user import User


class UserDirectory(Protocol):
    def find_by_username(self, username: str) -> Optional[User]: ...

    def find_by_id(self, user_id: int) -> Optional[User]: ...


class SqlUserDirectory:
    """UserDirectory over the SQLAlchemy storage."""

    def __init__(self, storage) -> None:
        self.storage = storage

    def find_by_username(self, username: str) -> Optional[User]:
        session = self.storage.get_session()
        return session.query(User).filter(User.username == username).first()

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self.storage.get(User, user_id)
