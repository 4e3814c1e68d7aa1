"""
Session token creation and verification.

Tokens are HS256 JWTs carrying ``userId``, ``username``, ``iat`` and
``exp``.  The signature covers the whole claim set.  Expiry is checked
against an injectable clock: a token is expired once ``now >= exp``.

The signing secret is supplied by the caller (from ``Settings``); a missing
secret raises ``ConfigurationMissingError`` rather than a token error.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

import jwt

from auth.errors import (
    ConfigurationMissingError,
    SignatureInvalidError,
    TokenExpiredError,
    TokenMalformedError,
)

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 3600
_REQUIRED_CLAIMS = ["userId", "username", "iat", "exp"]


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    username: str
    issued_at: int
    expires_at: int


class TokenService:
    """Mints and verifies signed, time-bounded session tokens."""

    def __init__(
        self,
        secret: Optional[str],
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        algorithm: str = "HS256",
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._secret = secret
        self.ttl_seconds = ttl_seconds
        self.algorithm = algorithm
        self._clock = clock

    @property
    def configured(self) -> bool:
        return bool(self._secret)

    def _require_secret(self) -> str:
        if not self._secret:
            raise ConfigurationMissingError("JWT_SECRET not configured")
        return self._secret

    def issue(self, user_id: int, username: str) -> str:
        """Create a signed token for ``user_id`` valid for ``ttl_seconds``."""
        secret = self._require_secret()
        issued_at = int(self._clock())
        payload = {
            "userId": user_id,
            "username": username,
            "iat": issued_at,
            "exp": issued_at + self.ttl_seconds,
        }
        return jwt.encode(payload, secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Verify signature and expiry, returning the decoded claims.

        Raises ``TokenMalformedError``, ``SignatureInvalidError`` or
        ``TokenExpiredError``.
        """
        secret = self._require_secret()
        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[self.algorithm],
                options={
                    "require": _REQUIRED_CLAIMS,
                    # expiry is checked below against our own clock
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.InvalidSignatureError as exc:
            raise SignatureInvalidError() from exc
        except jwt.InvalidTokenError as exc:
            logger.debug("Rejected malformed token: %s", type(exc).__name__)
            raise TokenMalformedError() from exc

        claims = _claims_from_payload(payload)
        if self._clock() >= claims.expires_at:
            raise TokenExpiredError()
        return claims


def _claims_from_payload(payload: dict) -> TokenClaims:
    user_id = payload["userId"]
    username = payload["username"]
    issued_at = payload["iat"]
    expires_at = payload["exp"]
    if (
        not isinstance(user_id, int)
        or isinstance(user_id, bool)
        or not isinstance(username, str)
        or not isinstance(issued_at, int)
        or not isinstance(expires_at, int)
    ):
        raise TokenMalformedError()
    return TokenClaims(
        user_id=user_id,
        username=username,
        issued_at=issued_at,
        expires_at=expires_at,
    )
