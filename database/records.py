"""
Record store for workouts, cardio sessions and body measurements.

Every query is scoped to a single owner (``user_id``).
"""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.errors import StoreFailureError
from database.models import CardioRoutine, UserMeasurement, WorkoutRoutine

logger = logging.getLogger(__name__)


class RecordStore:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _add(self, record):
        self._session.add(record)
        try:
            await self._session.flush()
        except SQLAlchemyError as exc:
            logger.exception("Insert into %s failed", record.__tablename__)
            raise StoreFailureError() from exc
        return record

    async def commit(self) -> None:
        try:
            await self._session.commit()
        except SQLAlchemyError as exc:
            logger.exception("Record commit failed")
            raise StoreFailureError() from exc

    async def _all(self, stmt) -> list:
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as exc:
            logger.exception("Record query failed")
            raise StoreFailureError() from exc
        return list(result.scalars().all())

    # ── Workouts ───────────────────────────────────────────────────────

    async def add_workout(
        self, user_id: int, activity: str, sets: int, reps: int, weight: int,
    ) -> WorkoutRoutine:
        return await self._add(
            WorkoutRoutine(
                user_id=user_id, activity=activity, sets=sets, reps=reps, weight=weight,
            )
        )

    async def list_workouts(
        self, user_id: int, on: Optional[date] = None,
    ) -> List[WorkoutRoutine]:
        stmt = select(WorkoutRoutine).where(WorkoutRoutine.user_id == user_id)
        if on is not None:
            stmt = stmt.where(WorkoutRoutine.logged_date == on)
        return await self._all(stmt.order_by(WorkoutRoutine.id))

    # ── Cardio ─────────────────────────────────────────────────────────

    async def add_cardio(
        self,
        user_id: int,
        activity: str,
        distance: float,
        time: str,
        speed: Optional[float] = None,
    ) -> CardioRoutine:
        return await self._add(
            CardioRoutine(
                user_id=user_id, activity=activity, distance=distance, time=time, speed=speed,
            )
        )

    async def list_cardio(
        self, user_id: int, on: Optional[date] = None,
    ) -> List[CardioRoutine]:
        stmt = select(CardioRoutine).where(CardioRoutine.user_id == user_id)
        if on is not None:
            stmt = stmt.where(CardioRoutine.logged_date == on)
        return await self._all(stmt.order_by(CardioRoutine.id))

    # ── Measurements ───────────────────────────────────────────────────

    async def add_measurement(self, user_id: int, **values: float) -> UserMeasurement:
        return await self._add(UserMeasurement(user_id=user_id, **values))

    async def list_measurements(self, user_id: int) -> List[UserMeasurement]:
        return await self._all(
            select(UserMeasurement)
            .where(UserMeasurement.user_id == user_id)
            .order_by(UserMeasurement.id)
        )
