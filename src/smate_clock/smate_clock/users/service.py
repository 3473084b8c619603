from __future__ import annotations

import logging
from typing import Optional

from ..auth.claims import VerifiedClaims
from ..core.constants import FALLBACK_EMAIL_DOMAIN
from ..core.enums import Role
from ..core.exceptions import UnauthorizedError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


def fallback_email(subject: str) -> str:
    return f"{subject}@{FALLBACK_EMAIL_DOMAIN}"


class IdentityResolver:
    """Use case: map verified claims to the local acting user.

    Two entry points with different privilege behaviour:

    * ``resolve`` runs on every authenticated request. Unknown subjects are
      provisioned as CARE; the role claim is ignored.
    * ``first_login`` is the explicit upsert. It refreshes email and name and
      applies the role claim (CARE when absent).
    """

    def __init__(self, users: UserRepository):
        self._users = users

    @staticmethod
    def _require_claims(claims: Optional[VerifiedClaims]) -> VerifiedClaims:
        if claims is None or not claims.subject:
            raise UnauthorizedError("Unauthorized")
        return claims

    def resolve(self, claims: Optional[VerifiedClaims]) -> User:
        claims = self._require_claims(claims)

        user = self._users.get_by_subject(claims.subject)
        if user:
            return user

        user = self._users.create_user(
            auth_subject=claims.subject,
            email=claims.email or fallback_email(claims.subject),
            name=claims.name,
            role=Role.CARE,
        )
        logger.info("provisioned user %s for subject %s", user.user_id, claims.subject)
        return user

    def first_login(self, claims: Optional[VerifiedClaims]) -> User:
        claims = self._require_claims(claims)

        user = self._users.upsert_by_subject(
            auth_subject=claims.subject,
            email=claims.email or fallback_email(claims.subject),
            name=claims.name,
            role=Role.from_claim(claims.role_claim),
        )
        logger.info("first login for user %s (role=%s)", user.user_id, user.role.value)
        return user
