"""
SQLAlchemy ORM models for the workout tracker.

Every table carries a ``version`` column registered as the mapper's
``version_id_col``: SQLAlchemy sets it to 1 on insert, increments it on each
UPDATE and adds ``WHERE version = :old`` so a concurrent write raises
``StaleDataError``.

All tables except ``exercises`` are soft-deletable through SoftDeleteMixin.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum as SAEnum,
    ForeignKey,
    Integer,
    Numeric,
    String,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from domain.clock import SystemClock
from domain.models import (
    DifficultyLevel,
    ExerciseType,
    SetKind,
    TargetMuscleGroup,
    UserRole,
    WorkoutStatus,
)


def _utcnow() -> datetime:
    return SystemClock().now()


def _enum(enum_cls):
    # Store member values as plain strings so the schema is portable
    return SAEnum(
        enum_cls,
        native_enum=False,
        length=20,
        values_callable=lambda members: [m.value for m in members],
    )


class Base(DeclarativeBase):
    pass


class AuditMixin:
    """Creation/modification timestamps and acting principal."""

    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=_utcnow, onupdate=_utcnow, nullable=False
    )
    created_by: Mapped[Optional[str]] = mapped_column(String(100))
    updated_by: Mapped[Optional[str]] = mapped_column(String(100))


class SoftDeleteMixin:
    """Reversible deletion flag."""

    deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False, index=True)
    deleted_at: Mapped[Optional[datetime]] = mapped_column(DateTime)

    @property
    def is_active(self) -> bool:
        return not self.deleted

    def soft_delete(self, now: datetime) -> None:
        self.deleted = True
        self.deleted_at = now

    def restore(self) -> None:
        self.deleted = False
        self.deleted_at = None


# =============================================================================
# Users and exercise library
# =============================================================================


class User(SoftDeleteMixin, AuditMixin, Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    auth0_user_id: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    first_name: Mapped[Optional[str]] = mapped_column(String(50))
    last_name: Mapped[Optional[str]] = mapped_column(String(50))
    role: Mapped[UserRole] = mapped_column(_enum(UserRole), default=UserRole.USER, nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    @property
    def display_name(self) -> str:
        full_name = " ".join(part for part in (self.first_name, self.last_name) if part)
        return full_name or self.username


class Exercise(AuditMixin, Base):
    __tablename__ = "exercises"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(String(1000))
    type: Mapped[ExerciseType] = mapped_column(_enum(ExerciseType), nullable=False)
    target_muscle_group: Mapped[TargetMuscleGroup] = mapped_column(
        _enum(TargetMuscleGroup), nullable=False
    )
    difficulty_level: Mapped[DifficultyLevel] = mapped_column(
        _enum(DifficultyLevel), nullable=False
    )
    image_url: Mapped[Optional[str]] = mapped_column(String(500))
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}


# =============================================================================
# Workouts
# =============================================================================


class WorkoutSession(SoftDeleteMixin, AuditMixin, Base):
    __tablename__ = "workout_sessions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String(1000))
    status: Mapped[WorkoutStatus] = mapped_column(
        _enum(WorkoutStatus), default=WorkoutStatus.PLANNED, nullable=False
    )
    scheduled_date: Mapped[Optional[datetime]] = mapped_column(DateTime)
    started_at: Mapped[Optional[datetime]] = mapped_column(DateTime)
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime)
    actual_duration_in_minutes: Mapped[Optional[int]] = mapped_column(Integer)
    session_notes: Mapped[Optional[str]] = mapped_column(String(1000))
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}


class WorkoutExercise(SoftDeleteMixin, AuditMixin, Base):
    __tablename__ = "workout_exercises"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    workout_session_id: Mapped[int] = mapped_column(
        ForeignKey("workout_sessions.id"), nullable=False, index=True
    )
    exercise_id: Mapped[int] = mapped_column(ForeignKey("exercises.id"), nullable=False)
    order_in_workout: Mapped[int] = mapped_column(Integer, nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(String(1000))
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    exercise: Mapped[Exercise] = relationship(lazy="joined")

    __mapper_args__ = {"version_id_col": version}


# =============================================================================
# Sets
# =============================================================================


class SetColumnsMixin:
    """Columns shared by the three set tables."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    workout_exercise_id: Mapped[int] = mapped_column(
        ForeignKey("workout_exercises.id"), nullable=False, index=True
    )
    set_number: Mapped[int] = mapped_column(Integer, nullable=False)
    rest_time_in_seconds: Mapped[Optional[int]] = mapped_column(Integer)
    notes: Mapped[Optional[str]] = mapped_column(String(500))
    completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)


class StrengthSetRecord(SetColumnsMixin, SoftDeleteMixin, AuditMixin, Base):
    __tablename__ = "strength_sets"
    kind = SetKind.STRENGTH.value

    reps: Mapped[int] = mapped_column(Integer, nullable=False)
    weight: Mapped[Optional[Decimal]] = mapped_column(Numeric(5, 2))
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}


class CardioSetRecord(SetColumnsMixin, SoftDeleteMixin, AuditMixin, Base):
    __tablename__ = "cardio_sets"
    kind = SetKind.CARDIO.value

    duration_in_seconds: Mapped[int] = mapped_column(Integer, nullable=False)
    distance: Mapped[Optional[Decimal]] = mapped_column(Numeric(8, 2))
    distance_unit: Mapped[Optional[str]] = mapped_column(String(10))
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}


class FlexibilitySetRecord(SetColumnsMixin, SoftDeleteMixin, AuditMixin, Base):
    __tablename__ = "flexibility_sets"
    kind = SetKind.FLEXIBILITY.value

    duration_in_seconds: Mapped[int] = mapped_column(Integer, nullable=False)
    stretch_type: Mapped[str] = mapped_column(String(50), nullable=False)
    intensity: Mapped[int] = mapped_column(Integer, nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}


SOFT_DELETE_MODELS = (
    User,
    WorkoutSession,
    WorkoutExercise,
    StrengthSetRecord,
    CardioSetRecord,
    FlexibilitySetRecord,
)
