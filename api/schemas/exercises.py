"""Exercise library request and response models."""
import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, TypeAdapter, field_validator, model_validator

from api.schemas.common import NAME_PATTERN
from domain.models import DifficultyLevel, ExerciseType, TargetMuscleGroup

IMAGE_URL_MAX_LENGTH = 500

_NAME_RE = re.compile(NAME_PATTERN)
_HTTP_URL = TypeAdapter(HttpUrl)


def _check_exercise_name(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    if not value.strip():
        raise ValueError("Exercise name is required")
    if not _NAME_RE.match(value):
        raise ValueError(
            "Exercise name can only contain letters, numbers, spaces, hyphens, and parentheses"
        )
    return value.strip()


def _check_image_url(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    if len(value) > IMAGE_URL_MAX_LENGTH:
        raise ValueError(f"Image URL must not exceed {IMAGE_URL_MAX_LENGTH} characters")
    try:
        _HTTP_URL.validate_python(value)
    except ValueError:
        raise ValueError("Image URL must be a valid URL") from None
    return value


class ExerciseCreateRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    description: Optional[str] = Field(default=None, max_length=1000)
    type: ExerciseType
    target_muscle_group: TargetMuscleGroup
    difficulty_level: DifficultyLevel
    image_url: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _check_exercise_name(v)

    @field_validator("image_url")
    @classmethod
    def validate_image_url(cls, v: Optional[str]) -> Optional[str]:
        return _check_image_url(v)


class ExerciseUpdateRequest(BaseModel):
    name: str = Field(default=None, min_length=2, max_length=100)
    description: Optional[str] = Field(default=None, max_length=1000)
    type: ExerciseType = None
    target_muscle_group: TargetMuscleGroup = None
    difficulty_level: DifficultyLevel = None
    image_url: Optional[str] = None
    version: Optional[int] = Field(default=None, ge=1)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _check_exercise_name(v)

    @field_validator("image_url")
    @classmethod
    def validate_image_url(cls, v: Optional[str]) -> Optional[str]:
        return _check_image_url(v)

    @model_validator(mode="after")
    def at_least_one_field(self):
        if not (self.model_fields_set - {"version"}):
            raise ValueError("At least one field must be provided for update")
        return self


class ExerciseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
    type: ExerciseType
    target_muscle_group: TargetMuscleGroup
    difficulty_level: DifficultyLevel
    image_url: Optional[str] = None
    version: int
    created_at: datetime
    updated_at: datetime
