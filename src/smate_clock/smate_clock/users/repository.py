from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): services depend on this interface, not on a concrete DB.
    """

    def get_by_subject(self, auth_subject: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(self, *, auth_subject: str, email: str, name: Optional[str], role: Role) -> User:
        """Insert a user; an existing row for the same subject is returned unchanged."""

        raise NotImplementedError

    def upsert_by_subject(self, *, auth_subject: str, email: str, name: Optional[str], role: Role) -> User:
        raise NotImplementedError
