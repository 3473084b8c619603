from __future__ import annotations

from enum import Enum
from typing import Optional


class Role(str, Enum):
    """User role used for authorization. CARE is the lowest privilege."""

    MANAGER = "MANAGER"
    CARE = "CARE"

    @classmethod
    def from_claim(cls, value: Optional[str]) -> "Role":
        if not value:
            return cls.CARE
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            return cls.CARE


class ClockEventKind(str, Enum):
    IN = "IN"
    OUT = "OUT"
