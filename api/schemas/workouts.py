"""Workout session and workout exercise request/response models."""
import re
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from api.schemas.common import NAME_PATTERN
from api.schemas.sets import SetResponse, set_response
from application.use_cases.workout_sessions import WorkoutSessionDetail
from domain.models import ExerciseType, WorkoutStatus
from domain.rules import WorkoutAction

_NAME_RE = re.compile(NAME_PATTERN)


def _check_workout_name(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    if not _NAME_RE.match(value):
        raise ValueError(
            "Workout name can only contain letters, numbers, spaces, hyphens, and parentheses"
        )
    return value


# =============================================================================
# Workout exercises
# =============================================================================


class WorkoutExerciseCreateRequest(BaseModel):
    exercise_id: int = Field(..., ge=1)
    order_in_workout: Optional[int] = Field(default=None, ge=1, le=100)
    notes: Optional[str] = Field(default=None, max_length=1000)


class WorkoutExerciseUpdateRequest(BaseModel):
    exercise_id: int = Field(default=None, ge=1)
    order_in_workout: int = Field(default=None, ge=1, le=100)
    notes: Optional[str] = Field(default=None, max_length=1000)
    version: Optional[int] = Field(default=None, ge=1)

    @model_validator(mode="after")
    def at_least_one_field(self):
        if not (self.model_fields_set - {"version"}):
            raise ValueError("At least one field must be provided for update")
        return self


class WorkoutExerciseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    workout_session_id: int
    exercise_id: int
    order_in_workout: int
    notes: Optional[str] = None
    version: int
    created_at: datetime
    updated_at: datetime


class WorkoutExerciseDetailResponse(WorkoutExerciseResponse):
    """Workout exercise with the referenced exercise summary and its sets."""

    exercise_name: str
    exercise_type: ExerciseType
    sets: List[SetResponse] = Field(default_factory=list)


# =============================================================================
# Workout sessions
# =============================================================================


class WorkoutCreateRequest(BaseModel):
    """
    New workout session.

    ``status`` defaults to PLANNED. ``exercises`` may carry the first workout
    exercises; they are created in the same transaction as the session.
    """

    name: str = Field(..., min_length=2, max_length=100)
    description: Optional[str] = Field(default=None, max_length=1000)
    status: Optional[WorkoutStatus] = None
    scheduled_date: Optional[datetime] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    actual_duration_in_minutes: Optional[int] = Field(default=None, ge=1, le=1440)
    session_notes: Optional[str] = Field(default=None, max_length=1000)
    exercises: List[WorkoutExerciseCreateRequest] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _check_workout_name(v)


class WorkoutUpdateRequest(BaseModel):
    name: str = Field(default=None, min_length=2, max_length=100)
    description: Optional[str] = Field(default=None, max_length=1000)
    scheduled_date: Optional[datetime] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    actual_duration_in_minutes: Optional[int] = Field(default=None, ge=1, le=1440)
    session_notes: Optional[str] = Field(default=None, max_length=1000)
    version: Optional[int] = Field(default=None, ge=1)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _check_workout_name(v)

    @model_validator(mode="after")
    def at_least_one_field(self):
        if not (self.model_fields_set - {"version"}):
            raise ValueError("At least one field must be provided for update")
        return self


class WorkoutStatusRequest(BaseModel):
    """Lifecycle action to apply: start, pause, resume, complete or cancel."""

    action: WorkoutAction
    version: Optional[int] = Field(default=None, ge=1)


class WorkoutResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str
    description: Optional[str] = None
    status: WorkoutStatus
    scheduled_date: Optional[datetime] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    actual_duration_in_minutes: Optional[int] = None
    session_notes: Optional[str] = None
    version: int
    created_at: datetime
    updated_at: datetime


class WorkoutDetailResponse(WorkoutResponse):
    exercises: List[WorkoutExerciseDetailResponse] = Field(default_factory=list)

    @classmethod
    def from_detail(cls, detail: WorkoutSessionDetail) -> "WorkoutDetailResponse":
        exercises = []
        for item in detail.exercises:
            base = WorkoutExerciseResponse.model_validate(item.workout_exercise)
            exercises.append(
                WorkoutExerciseDetailResponse(
                    **base.model_dump(),
                    exercise_name=item.workout_exercise.exercise.name,
                    exercise_type=item.workout_exercise.exercise.type,
                    sets=[set_response(s).model_dump() for s in item.sets],
                )
            )
        base = WorkoutResponse.model_validate(detail.session)
        return cls(**base.model_dump(), exercises=exercises)
