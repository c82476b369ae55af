"""
Set variants for logged workout exercises.

A set is one of three kinds, modelled as a tagged union on ``kind`` so that
each variant only carries the fields that make sense for it: a cardio set has
no ``reps`` and a strength set has no ``stretch_type``.

Examples:
    >>> StrengthSet(set_number=1, reps=8, weight=Decimal("60.00")).kind
    'strength'

    >>> adapter = TypeAdapter(WorkoutSet)
    >>> type(adapter.validate_python(
    ...     {"kind": "cardio", "set_number": 1, "duration_in_seconds": 600}
    ... )).__name__
    'CardioSet'
"""

from decimal import Decimal
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from domain.models.enums import SetKind

# Shared bounds, also used by the update request schemas
SET_NUMBER_MIN = 1
SET_NUMBER_MAX = 50
REST_TIME_MAX_SECONDS = 3600
SET_NOTES_MAX_LENGTH = 500
REPS_MIN = 1
REPS_MAX = 1000
WEIGHT_MAX = Decimal("999.99")
DURATION_MIN_SECONDS = 1
DURATION_MAX_SECONDS = 14400
DISTANCE_MAX = Decimal("1000")
DISTANCE_UNIT_MAX_LENGTH = 10
STRETCH_TYPE_MIN_LENGTH = 2
STRETCH_TYPE_MAX_LENGTH = 50
INTENSITY_MIN = 1
INTENSITY_MAX = 10


class _SetBase(BaseModel):
    """Fields common to every set kind."""

    model_config = ConfigDict(frozen=True)

    set_number: int = Field(..., ge=SET_NUMBER_MIN, le=SET_NUMBER_MAX)
    rest_time_in_seconds: Optional[int] = Field(
        default=None, ge=0, le=REST_TIME_MAX_SECONDS
    )
    notes: Optional[str] = Field(default=None, max_length=SET_NOTES_MAX_LENGTH)
    completed: bool = False


class StrengthSet(_SetBase):
    """Repetitions with an optional external load."""

    kind: Literal["strength"] = "strength"
    reps: int = Field(..., ge=REPS_MIN, le=REPS_MAX)
    weight: Optional[Decimal] = Field(
        default=None, ge=0, le=WEIGHT_MAX, max_digits=5, decimal_places=2
    )


class CardioSet(_SetBase):
    """Timed effort with an optional distance covered."""

    kind: Literal["cardio"] = "cardio"
    duration_in_seconds: int = Field(
        ..., ge=DURATION_MIN_SECONDS, le=DURATION_MAX_SECONDS
    )
    distance: Optional[Decimal] = Field(
        default=None, ge=0, le=DISTANCE_MAX, decimal_places=2
    )
    distance_unit: Optional[str] = Field(
        default=None, max_length=DISTANCE_UNIT_MAX_LENGTH
    )


class FlexibilitySet(_SetBase):
    """Held stretch of a given type and intensity."""

    kind: Literal["flexibility"] = "flexibility"
    duration_in_seconds: int = Field(
        ..., ge=DURATION_MIN_SECONDS, le=DURATION_MAX_SECONDS
    )
    stretch_type: str = Field(
        ..., min_length=STRETCH_TYPE_MIN_LENGTH, max_length=STRETCH_TYPE_MAX_LENGTH
    )
    intensity: int = Field(..., ge=INTENSITY_MIN, le=INTENSITY_MAX)


WorkoutSet = Annotated[
    Union[StrengthSet, CardioSet, FlexibilitySet],
    Field(discriminator="kind"),
]

SET_MODELS: dict[SetKind, type[_SetBase]] = {
    SetKind.STRENGTH: StrengthSet,
    SetKind.CARDIO: CardioSet,
    SetKind.FLEXIBILITY: FlexibilitySet,
}
