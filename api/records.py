"""
Training record routes — workouts, cardio, body measurements.

All routes require a Bearer token; records belong to the token's user.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import db_session, get_current_user
from auth.errors import RecordsNotFoundError
from database.models import User, utc_today
from database.records import RecordStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["records"])


# ── Request / response schemas ─────────────────────────────────────────


class WorkoutRequest(BaseModel):
    activity: str = Field(..., min_length=1, max_length=255)
    sets: int = Field(..., ge=0)
    reps: int = Field(..., ge=0)
    weight: int = Field(..., ge=0)


class CardioRequest(BaseModel):
    activity: str = Field(..., min_length=1, max_length=255)
    distance: float = Field(..., ge=0)
    time: str = Field(..., min_length=1, max_length=255)
    speed: Optional[float] = Field(None, ge=0)


class MeasurementRequest(BaseModel):
    height: float = Field(..., ge=0)
    weight: float = Field(..., ge=0)
    weight_goal: float = Field(..., ge=0)
    arms: float = Field(..., ge=0)
    thighs: float = Field(..., ge=0)
    waist: float = Field(..., ge=0)
    hips: float = Field(..., ge=0)


class _Record(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class WorkoutOut(_Record):
    id: int
    activity: str
    sets: int
    reps: int
    weight: int
    logged_date: date


class CardioOut(_Record):
    id: int
    activity: str
    distance: float
    time: str
    speed: Optional[float] = None
    logged_date: date


class MeasurementOut(_Record):
    id: int
    height: float
    weight: float
    weight_goal: float
    arms: float
    thighs: float
    waist: float
    hips: float


def _dump(rows, schema) -> list:
    return [schema.model_validate(row).model_dump(mode="json") for row in rows]


# ── Workouts ───────────────────────────────────────────────────────────


@router.post("/workouts", status_code=status.HTTP_201_CREATED)
async def add_workout(
    req: WorkoutRequest,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    store = RecordStore(session)
    workout = await store.add_workout(user.id, **req.model_dump())
    await store.commit()
    logger.info("Workout %s logged for user %s", workout.id, user.id)
    return {"message": "workout added", "data": workout.id}


@router.get("/workouts")
async def list_workouts(
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    rows = await RecordStore(session).list_workouts(user.id)
    if not rows:
        raise RecordsNotFoundError("No Workouts Found")
    return {"message": "Workouts Found", "data": _dump(rows, WorkoutOut)}


@router.get("/workouts/today")
async def list_workouts_today(
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    today = utc_today()
    rows = await RecordStore(session).list_workouts(user.id, on=today)
    if not rows:
        raise RecordsNotFoundError("No Workouts Found")
    return {"message": "Workouts Found", "data": _dump(rows, WorkoutOut), "date": today.isoformat()}


# ── Cardio ─────────────────────────────────────────────────────────────


@router.post("/cardio", status_code=status.HTTP_201_CREATED)
async def add_cardio(
    req: CardioRequest,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    store = RecordStore(session)
    cardio = await store.add_cardio(user.id, **req.model_dump())
    await store.commit()
    logger.info("Cardio session %s logged for user %s", cardio.id, user.id)
    return {"message": "cardio added", "data": cardio.id}


@router.get("/cardio/today")
async def list_cardio_today(
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    today = utc_today()
    rows = await RecordStore(session).list_cardio(user.id, on=today)
    if not rows:
        raise RecordsNotFoundError("No Cardio Found")
    return {"message": "Cardio Found", "data": _dump(rows, CardioOut), "date": today.isoformat()}


# ── Measurements ───────────────────────────────────────────────────────


@router.post("/measurements", status_code=status.HTTP_201_CREATED)
async def add_measurement(
    req: MeasurementRequest,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    store = RecordStore(session)
    measurement = await store.add_measurement(user.id, **req.model_dump())
    await store.commit()
    return {"message": "measurements added", "data": measurement.id}


@router.get("/measurements")
async def list_measurements(
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    rows = await RecordStore(session).list_measurements(user.id)
    if not rows:
        raise RecordsNotFoundError("No Measurements Found")
    return {"message": "Measurements Found", "data": _dump(rows, MeasurementOut)}
