"""
FastAPI dependencies for authentication.

Provides ``db_session``, ``get_auth_service`` and ``get_current_user``
dependencies that are used across all protected routes.
"""

from __future__ import annotations

from typing import AsyncGenerator, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from auth.service import AuthService
from database.models import User
from database.session import get_db_session
from database.users import UserStore


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


def get_auth_service(
    request: Request,
    session: AsyncSession = Depends(db_session),
) -> AuthService:
    return AuthService(
        store=UserStore(session),
        hasher=request.app.state.password_hasher,
        tokens=request.app.state.token_service,
    )


async def get_current_user(
    authorization: Optional[str] = Header(None),
    service: AuthService = Depends(get_auth_service),
) -> User:
    """
    Verify the Bearer token and load its user.

    Raises ``NoTokenError`` / ``UnauthorizedError`` / ``UserNotFoundError``.
    """
    return await service.current_user(authorization)
