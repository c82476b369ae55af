"""
Pydantic schemas for API requests and responses.

Organized by feature/domain:
- common: error envelope and pagination
- users: account provisioning, profile updates
- exercises: exercise library
- workouts: workout sessions and their exercises
- sets: strength, cardio and flexibility sets
"""

from api.schemas.common import ErrorResponse, ExistenceCheckResponse, PagedResponse
from api.schemas.exercises import (
    ExerciseCreateRequest,
    ExerciseResponse,
    ExerciseUpdateRequest,
)
from api.schemas.sets import (
    CardioSetResponse,
    CardioSetUpdateRequest,
    FlexibilitySetResponse,
    FlexibilitySetUpdateRequest,
    SetResponse,
    StrengthSetResponse,
    StrengthSetUpdateRequest,
    set_response,
)
from api.schemas.users import UserCreateRequest, UserResponse, UserUpdateRequest
from api.schemas.workouts import (
    WorkoutCreateRequest,
    WorkoutDetailResponse,
    WorkoutExerciseCreateRequest,
    WorkoutExerciseDetailResponse,
    WorkoutExerciseResponse,
    WorkoutExerciseUpdateRequest,
    WorkoutResponse,
    WorkoutStatusRequest,
    WorkoutUpdateRequest,
)

__all__ = [
    "ErrorResponse",
    "ExistenceCheckResponse",
    "PagedResponse",
    "ExerciseCreateRequest",
    "ExerciseResponse",
    "ExerciseUpdateRequest",
    "CardioSetResponse",
    "CardioSetUpdateRequest",
    "FlexibilitySetResponse",
    "FlexibilitySetUpdateRequest",
    "SetResponse",
    "StrengthSetResponse",
    "StrengthSetUpdateRequest",
    "set_response",
    "UserCreateRequest",
    "UserResponse",
    "UserUpdateRequest",
    "WorkoutCreateRequest",
    "WorkoutDetailResponse",
    "WorkoutExerciseCreateRequest",
    "WorkoutExerciseDetailResponse",
    "WorkoutExerciseResponse",
    "WorkoutExerciseUpdateRequest",
    "WorkoutResponse",
    "WorkoutStatusRequest",
    "WorkoutUpdateRequest",
]
