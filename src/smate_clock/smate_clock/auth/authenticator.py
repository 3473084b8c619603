from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

import jwt
from jwt import PyJWKClient

from ..core.constants import DEFAULT_ROLE_CLAIM, DEFAULT_STORE_TIMEOUT_SECONDS
from ..core.exceptions import TransientError, UnauthorizedError
from .claims import VerifiedClaims

logger = logging.getLogger(__name__)


class Authenticator(Protocol):
    """Turns a bearer credential into verified claims or fails."""

    def authenticate(self, token: str) -> VerifiedClaims:
        raise NotImplementedError


@dataclass(frozen=True)
class AuthConfig:
    issuer: str
    audience: str
    role_claim: str = DEFAULT_ROLE_CLAIM
    timeout_seconds: int = DEFAULT_STORE_TIMEOUT_SECONDS

    @property
    def jwks_uri(self) -> str:
        return f"{self.issuer.rstrip('/')}/.well-known/jwks.json"

    @property
    def expected_issuer(self) -> str:
        return f"{self.issuer.rstrip('/')}/"


class JwksAuthenticator(Authenticator):
    """RS256 bearer tokens verified against the issuer's JWKS."""

    def __init__(self, config: AuthConfig, *, jwks_client: PyJWKClient | None = None):
        self._config = config
        self._jwks_client = jwks_client or PyJWKClient(config.jwks_uri, timeout=config.timeout_seconds)

    def authenticate(self, token: str) -> VerifiedClaims:
        if not token:
            raise UnauthorizedError("Missing bearer token")

        try:
            signing_key = self._jwks_client.get_signing_key_from_jwt(token)
            payload = jwt.decode(
                token,
                signing_key.key,
                algorithms=["RS256"],
                audience=self._config.audience,
                issuer=self._config.expected_issuer,
                options={"require": ["sub"]},
            )
        except jwt.PyJWKClientConnectionError as e:
            logger.error("JWKS endpoint unreachable: %s", e)
            raise TransientError("Authenticator unavailable") from e
        except jwt.ExpiredSignatureError as e:
            logger.warning("token expired")
            raise UnauthorizedError("Token has expired") from e
        except (jwt.InvalidTokenError, jwt.PyJWKClientError) as e:
            logger.warning("token rejected: %s", e)
            raise UnauthorizedError("Invalid token") from e

        return VerifiedClaims.from_payload(payload, role_claim=self._config.role_claim)
