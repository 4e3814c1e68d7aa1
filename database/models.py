"""
SQLAlchemy ORM models for users and their training records.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
)
from sqlalchemy.orm import DeclarativeBase, relationship


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_today() -> date:
    return _utc_now().date()


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utc_now)

    workouts = relationship("WorkoutRoutine", back_populates="user", cascade="all, delete-orphan")
    cardio_sessions = relationship("CardioRoutine", back_populates="user", cascade="all, delete-orphan")
    measurements = relationship("UserMeasurement", back_populates="user", cascade="all, delete-orphan")


class WorkoutRoutine(Base):
    __tablename__ = "workout_routines"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    activity = Column(String(255), nullable=False)
    sets = Column(Integer, nullable=False)
    reps = Column(Integer, nullable=False)
    weight = Column(Integer, nullable=False)
    logged_date = Column(Date, nullable=False, default=utc_today)

    user = relationship("User", back_populates="workouts")

    __table_args__ = (Index("ix_workout_routines_user_date", "user_id", "logged_date"),)


class CardioRoutine(Base):
    __tablename__ = "cardio_routines"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    activity = Column(String(255), nullable=False)
    distance = Column(Float, nullable=False)
    time = Column(String(255), nullable=False)
    speed = Column(Float, nullable=True)
    logged_date = Column(Date, nullable=False, default=utc_today)

    user = relationship("User", back_populates="cardio_sessions")

    __table_args__ = (Index("ix_cardio_routines_user_date", "user_id", "logged_date"),)


class UserMeasurement(Base):
    __tablename__ = "user_measurements"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    height = Column(Float, nullable=False)
    weight = Column(Float, nullable=False)
    weight_goal = Column(Float, nullable=False)
    arms = Column(Float, nullable=False)
    thighs = Column(Float, nullable=False)
    waist = Column(Float, nullable=False)
    hips = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utc_now)

    user = relationship("User", back_populates="measurements")
