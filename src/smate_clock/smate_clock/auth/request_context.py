from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from flask import g, request

from ..core.exceptions import UnauthorizedError
from ..users.model import User
from .claims import VerifiedClaims

if TYPE_CHECKING:
    from ..container import Container


def bearer_token() -> Optional[str]:
    header = request.headers.get("Authorization", "")
    if not header.startswith("Bearer "):
        return None
    return header[len("Bearer "):].strip() or None


def current_claims(container: "Container") -> Optional[VerifiedClaims]:
    """Verified claims for this request, or None when no bearer token was sent.

    A token that fails verification raises ``UnauthorizedError``.
    """
    if "claims" not in g:
        token = bearer_token()
        g.claims = container.authenticator.authenticate(token) if token else None
    return g.claims


def acting_user(container: "Container") -> Optional[User]:
    """Resolve (and auto-provision) the acting user once per request."""
    if "acting_user" not in g:
        claims = current_claims(container)
        g.acting_user = container.identity_resolver.resolve(claims) if claims else None
    return g.acting_user


def require_acting_user(container: "Container") -> User:
    user = acting_user(container)
    if user is None:
        raise UnauthorizedError("Unauthorized")
    return user
