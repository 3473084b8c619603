from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import to_iso
from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a staff member known to the service.

    Note: Plain data object (no DB access code).
    """

    user_id: int
    auth_subject: Optional[str]
    email: str
    name: Optional[str]
    role: Role
    created_at: datetime
    updated_at: Optional[datetime] = None

    @property
    def display_name(self) -> str:
        return self.name or self.email

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "authSubject": self.auth_subject,
            "email": self.email,
            "name": self.name,
            "role": self.role.value,
            "createdAt": to_iso(self.created_at),
        }
