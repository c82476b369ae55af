"""
Set request and response models.

Create bodies are the domain set models themselves (``StrengthSet`` etc.);
``kind`` is implied by the route and may be omitted.
"""
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from domain.models import CardioSet, FlexibilitySet, SetKind, StrengthSet
from domain.models.sets import (
    DISTANCE_MAX,
    DISTANCE_UNIT_MAX_LENGTH,
    DURATION_MAX_SECONDS,
    DURATION_MIN_SECONDS,
    INTENSITY_MAX,
    INTENSITY_MIN,
    REPS_MAX,
    REPS_MIN,
    REST_TIME_MAX_SECONDS,
    SET_NOTES_MAX_LENGTH,
    SET_NUMBER_MAX,
    SET_NUMBER_MIN,
    STRETCH_TYPE_MAX_LENGTH,
    STRETCH_TYPE_MIN_LENGTH,
    WEIGHT_MAX,
)

SET_CREATE_MODELS = {
    SetKind.STRENGTH: StrengthSet,
    SetKind.CARDIO: CardioSet,
    SetKind.FLEXIBILITY: FlexibilitySet,
}


# =============================================================================
# Update requests
# =============================================================================


class _SetUpdateBase(BaseModel):
    # Non-nullable columns are typed without Optional: omitting them keeps
    # the stored value, an explicit null fails validation.
    set_number: int = Field(default=None, ge=SET_NUMBER_MIN, le=SET_NUMBER_MAX)
    rest_time_in_seconds: Optional[int] = Field(default=None, ge=0, le=REST_TIME_MAX_SECONDS)
    notes: Optional[str] = Field(default=None, max_length=SET_NOTES_MAX_LENGTH)
    completed: bool = None
    version: Optional[int] = Field(default=None, ge=1)

    @model_validator(mode="after")
    def at_least_one_field(self):
        if not (self.model_fields_set - {"version"}):
            raise ValueError("At least one field must be provided for update")
        return self


class StrengthSetUpdateRequest(_SetUpdateBase):
    reps: int = Field(default=None, ge=REPS_MIN, le=REPS_MAX)
    weight: Optional[Decimal] = Field(
        default=None, ge=0, le=WEIGHT_MAX, max_digits=5, decimal_places=2
    )


class CardioSetUpdateRequest(_SetUpdateBase):
    duration_in_seconds: int = Field(
        default=None, ge=DURATION_MIN_SECONDS, le=DURATION_MAX_SECONDS
    )
    distance: Optional[Decimal] = Field(default=None, ge=0, le=DISTANCE_MAX, decimal_places=2)
    distance_unit: Optional[str] = Field(default=None, max_length=DISTANCE_UNIT_MAX_LENGTH)


class FlexibilitySetUpdateRequest(_SetUpdateBase):
    duration_in_seconds: int = Field(
        default=None, ge=DURATION_MIN_SECONDS, le=DURATION_MAX_SECONDS
    )
    stretch_type: str = Field(
        default=None, min_length=STRETCH_TYPE_MIN_LENGTH, max_length=STRETCH_TYPE_MAX_LENGTH
    )
    intensity: int = Field(default=None, ge=INTENSITY_MIN, le=INTENSITY_MAX)


SET_UPDATE_MODELS = {
    SetKind.STRENGTH: StrengthSetUpdateRequest,
    SetKind.CARDIO: CardioSetUpdateRequest,
    SetKind.FLEXIBILITY: FlexibilitySetUpdateRequest,
}


# =============================================================================
# Responses
# =============================================================================


class _SetResponseBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    workout_exercise_id: int
    set_number: int
    rest_time_in_seconds: Optional[int] = None
    notes: Optional[str] = None
    completed: bool
    version: int
    created_at: datetime
    updated_at: datetime


class StrengthSetResponse(_SetResponseBase):
    kind: Literal["strength"] = "strength"
    reps: int
    weight: Optional[float] = None


class CardioSetResponse(_SetResponseBase):
    kind: Literal["cardio"] = "cardio"
    duration_in_seconds: int
    distance: Optional[float] = None
    distance_unit: Optional[str] = None


class FlexibilitySetResponse(_SetResponseBase):
    kind: Literal["flexibility"] = "flexibility"
    duration_in_seconds: int
    stretch_type: str
    intensity: int


SetResponse = Annotated[
    Union[StrengthSetResponse, CardioSetResponse, FlexibilitySetResponse],
    Field(discriminator="kind"),
]

SET_RESPONSE_MODELS = {
    SetKind.STRENGTH: StrengthSetResponse,
    SetKind.CARDIO: CardioSetResponse,
    SetKind.FLEXIBILITY: FlexibilitySetResponse,
}


def set_response(record: Any) -> _SetResponseBase:
    """Build the response model matching a set record's kind."""
    return SET_RESPONSE_MODELS[SetKind(record.kind)].model_validate(record)
