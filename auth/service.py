"""
Orchestration of the register, login and profile requests.

``AuthService`` composes a user store, the password hasher and the token
service.  It is built per request around that request's store; the hasher
and token service are the process-wide instances created at startup.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Protocol

from auth.errors import (
    ConfigurationMissingError,
    DuplicateUserError,
    InvalidCredentialsError,
    NoTokenError,
    TokenError,
    UnauthorizedError,
    UserNotFoundError,
    ValidationError,
)
from auth.password import PasswordHasher
from auth.tokens import TokenClaims, TokenService

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


class UserRecord(Protocol):
    id: int
    username: str
    email: str
    password_hash: str


class UserStoreProtocol(Protocol):
    async def find_by_email(self, email: str) -> Optional[UserRecord]: ...

    async def find_by_id(self, user_id: int) -> Optional[UserRecord]: ...

    async def exists_by_email(self, email: str) -> bool: ...

    async def insert_user(self, username: str, email: str, password_hash: str) -> UserRecord: ...

    async def commit(self) -> None: ...

def public_user(user: UserRecord) -> Dict[str, Any]:
    return {"id": user.id, "username": user.username, "email": user.email}


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Return the token from an ``Authorization: Bearer <token>`` header value."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise NoTokenError()
    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise NoTokenError()
    return token


class AuthService:
    def __init__(
        self,
        store: UserStoreProtocol,
        hasher: PasswordHasher,
        tokens: TokenService,
    ) -> None:
        self.store = store
        self.hasher = hasher
        self.tokens = tokens

    async def register(self, username: str, email: str, password: str) -> Dict[str, Any]:
        """Create a user and return its public fields."""
        if not username or not email:
            raise ValidationError("username and email are required")

        password_hash = self.hasher.hash(password)

        if await self.store.exists_by_email(email):
            logger.info("Registration rejected: email already in use")
            raise DuplicateUserError()

        user = await self.store.insert_user(username, email, password_hash)
        await self.store.commit()
        logger.info("Registered user %s (%s)", user.username, user.id)
        return public_user(user)

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        """Check credentials and return ``{token, user}``."""
        if not self.tokens.configured:
            raise ConfigurationMissingError("JWT_SECRET not configured")

        user = await self.store.find_by_email(email)
        if user is None:
            # Burn the same hashing time as a real check.
            self.hasher.verify(password, self.hasher.dummy_hash)
            logger.info("Login failed: invalid credentials")
            raise InvalidCredentialsError()

        if not self.hasher.verify(password, user.password_hash):
            logger.info("Login failed: invalid credentials")
            raise InvalidCredentialsError()

        if self.hasher.needs_rehash(user.password_hash):
            logger.warning("User %s has a password digest below the current policy", user.id)

        token = self.tokens.issue(user.id, user.username)
        logger.info("Login: %s (%s)", user.username, user.id)
        return {"token": token, "user": public_user(user)}

    def authenticate(self, authorization: Optional[str]) -> TokenClaims:
        """
        Resolve an Authorization header to verified claims.

        Every token failure is reported as ``UnauthorizedError``;
        a missing secret still surfaces as ``ConfigurationMissingError``.
        """
        token = extract_bearer_token(authorization)
        try:
            return self.tokens.verify(token)
        except TokenError as exc:
            logger.info("Token rejected: %s", exc.kind.value)
            raise UnauthorizedError() from exc

    async def current_user(self, authorization: Optional[str]) -> UserRecord:
        claims = self.authenticate(authorization)
        user = await self.store.find_by_id(claims.user_id)
        if user is None:
            raise UserNotFoundError()
        return user

    async def profile(self, authorization: Optional[str]) -> Dict[str, Any]:
        """Return the public fields of the user the bearer token belongs to."""
        return public_user(await self.current_user(authorization))
