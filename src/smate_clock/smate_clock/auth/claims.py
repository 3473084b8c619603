from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..core.constants import DEFAULT_ROLE_CLAIM


@dataclass(frozen=True)
class VerifiedClaims:
    """Identity asserted by the authenticator after the token was verified."""

    subject: str
    email: Optional[str] = None
    name: Optional[str] = None
    role_claim: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any], *, role_claim: str = DEFAULT_ROLE_CLAIM) -> "VerifiedClaims":
        return cls(
            subject=str(payload["sub"]),
            email=payload.get("email") or None,
            name=payload.get("name") or payload.get("nickname") or None,
            role_claim=payload.get(role_claim) or None,
        )
