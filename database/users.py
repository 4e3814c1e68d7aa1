"""
User store: lookups and inserts against the ``users`` table.

All SQLAlchemy errors are wrapped in ``StoreFailureError``.  A violation of
the unique ``email`` constraint on insert is reported as
``DuplicateUserError``; that, not the pre-check in the auth service, is the
authoritative duplicate signal.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.errors import DuplicateUserError, StoreFailureError
from database.models import User

logger = logging.getLogger(__name__)


class UserStore:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_email(self, email: str) -> Optional[User]:
        try:
            result = await self._session.execute(
                select(User).where(User.email == email).limit(1)
            )
        except SQLAlchemyError as exc:
            logger.exception("User lookup by email failed")
            raise StoreFailureError() from exc
        return result.scalar_one_or_none()

    async def find_by_id(self, user_id: int) -> Optional[User]:
        try:
            return await self._session.get(User, user_id)
        except SQLAlchemyError as exc:
            logger.exception("User lookup by id failed for %s", user_id)
            raise StoreFailureError() from exc

    async def exists_by_email(self, email: str) -> bool:
        try:
            result = await self._session.execute(
                select(exists().where(User.email == email))
            )
        except SQLAlchemyError as exc:
            logger.exception("User existence check failed")
            raise StoreFailureError() from exc
        return bool(result.scalar())

    async def insert_user(self, username: str, email: str, password_hash: str) -> User:
        user = User(username=username, email=email, password_hash=password_hash)
        self._session.add(user)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            logger.info("Insert rejected by unique email constraint")
            raise DuplicateUserError() from exc
        except SQLAlchemyError as exc:
            logger.exception("User insert failed")
            raise StoreFailureError() from exc
        return user

    async def commit(self) -> None:
        """Commit inside the request so the response reflects the stored state."""
        try:
            await self._session.commit()
        except IntegrityError as exc:
            raise DuplicateUserError() from exc
        except SQLAlchemyError as exc:
            logger.exception("User commit failed")
            raise StoreFailureError() from exc
