"""
Workouts router.

Workout sessions and the exercises scheduled in them. Every single-session
endpoint checks ownership before reading or writing; administrators may act
on any session.
"""

import logging

from fastapi import APIRouter, Depends, Query, status

from api.deps import (
    get_session_service,
    get_workout_exercise_service,
    rate_limit,
    require_admin,
    require_permissions,
)
from api.schemas import (
    PagedResponse,
    WorkoutCreateRequest,
    WorkoutDetailResponse,
    WorkoutExerciseCreateRequest,
    WorkoutExerciseResponse,
    WorkoutExerciseUpdateRequest,
    WorkoutResponse,
    WorkoutStatusRequest,
    WorkoutUpdateRequest,
)
from api.schemas.common import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from application.authorization import (
    DELETE_WORKOUTS,
    READ_USERS,
    READ_WORKOUTS,
    WRITE_WORKOUTS,
    Principal,
)
from application.use_cases import WorkoutExerciseService, WorkoutSessionService
from backend.rate_limit import WORKOUT_CREATION

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/workouts",
    tags=["Workouts"],
)


# =============================================================================
# Collections
# =============================================================================


@router.post(
    "",
    response_model=WorkoutDetailResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(rate_limit(WORKOUT_CREATION))],
)
def create_workout(
    request: WorkoutCreateRequest,
    principal: Principal = Depends(require_permissions(WRITE_WORKOUTS)),
    service: WorkoutSessionService = Depends(get_session_service),
):
    """
    Create a workout session owned by the caller.

    Exercises listed in the body are added in the same transaction; an
    unknown exercise id fails the whole request.
    """
    session = service.create_session(principal, request.model_dump())
    return WorkoutDetailResponse.from_detail(service.describe_session(session.id, principal))


@router.get("/my", response_model=list[WorkoutResponse])
def list_my_workouts(
    principal: Principal = Depends(require_permissions(READ_WORKOUTS)),
    service: WorkoutSessionService = Depends(get_session_service),
):
    """The caller's sessions, newest first."""
    return service.list_my_sessions(principal)


@router.get("", response_model=PagedResponse[WorkoutResponse])
def list_workouts(
    page: int = Query(0, ge=0),
    size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    principal: Principal = Depends(require_permissions(READ_USERS)),
    service: WorkoutSessionService = Depends(get_session_service),
):
    result = service.list_sessions(page, size)
    return PagedResponse.from_page(
        result, [WorkoutResponse.model_validate(session) for session in result.items]
    )


@router.get("/user/{user_id}", response_model=list[WorkoutResponse])
def list_user_workouts(
    user_id: int,
    principal: Principal = Depends(require_permissions(READ_WORKOUTS)),
    service: WorkoutSessionService = Depends(get_session_service),
):
    return service.list_user_sessions(user_id, principal)


# =============================================================================
# Workout exercises
# =============================================================================


@router.get("/exercises/{workout_exercise_id}", response_model=WorkoutExerciseResponse)
def get_workout_exercise(
    workout_exercise_id: int,
    principal: Principal = Depends(require_permissions(READ_WORKOUTS)),
    service: WorkoutExerciseService = Depends(get_workout_exercise_service),
):
    return service.get_workout_exercise(workout_exercise_id, principal)


@router.put("/exercises/{workout_exercise_id}", response_model=WorkoutExerciseResponse)
def update_workout_exercise(
    workout_exercise_id: int,
    request: WorkoutExerciseUpdateRequest,
    principal: Principal = Depends(require_permissions(WRITE_WORKOUTS)),
    service: WorkoutExerciseService = Depends(get_workout_exercise_service),
):
    """Reorder, annotate or swap the exercise; ``version`` guards lost updates."""
    return service.update_workout_exercise(
        workout_exercise_id, request.model_dump(exclude_unset=True), principal
    )


@router.delete("/exercises/{workout_exercise_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_workout_exercise(
    workout_exercise_id: int,
    principal: Principal = Depends(require_permissions(WRITE_WORKOUTS)),
    service: WorkoutExerciseService = Depends(get_workout_exercise_service),
):
    service.delete_workout_exercise(workout_exercise_id, principal)


# =============================================================================
# Single session
# =============================================================================


@router.get("/{workout_id}", response_model=WorkoutDetailResponse)
def get_workout(
    workout_id: int,
    principal: Principal = Depends(require_permissions(READ_WORKOUTS)),
    service: WorkoutSessionService = Depends(get_session_service),
):
    """Session with its exercises and each exercise's sets."""
    return WorkoutDetailResponse.from_detail(service.describe_session(workout_id, principal))


@router.put("/{workout_id}", response_model=WorkoutResponse)
def update_workout(
    workout_id: int,
    request: WorkoutUpdateRequest,
    principal: Principal = Depends(require_permissions(WRITE_WORKOUTS)),
    service: WorkoutSessionService = Depends(get_session_service),
):
    return service.update_session(workout_id, request.model_dump(exclude_unset=True), principal)


@router.patch("/{workout_id}/status", response_model=WorkoutResponse)
def change_workout_status(
    workout_id: int,
    request: WorkoutStatusRequest,
    principal: Principal = Depends(require_permissions(WRITE_WORKOUTS)),
    service: WorkoutSessionService = Depends(get_session_service),
):
    """Apply start, pause, resume, complete or cancel."""
    return service.change_status(workout_id, request.action, principal, request.version)


@router.delete("/{workout_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_workout(
    workout_id: int,
    principal: Principal = Depends(require_permissions(DELETE_WORKOUTS)),
    service: WorkoutSessionService = Depends(get_session_service),
):
    service.delete_session(workout_id, principal)


@router.post("/{workout_id}/restore", response_model=WorkoutResponse)
def restore_workout(
    workout_id: int,
    principal: Principal = Depends(require_admin),
    service: WorkoutSessionService = Depends(get_session_service),
):
    return service.restore_session(workout_id)


@router.post(
    "/{workout_id}/exercises",
    response_model=WorkoutExerciseResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_workout_exercise(
    workout_id: int,
    request: WorkoutExerciseCreateRequest,
    principal: Principal = Depends(require_permissions(WRITE_WORKOUTS)),
    service: WorkoutExerciseService = Depends(get_workout_exercise_service),
):
    return service.add_exercise(workout_id, request.model_dump(), principal)


@router.get("/{workout_id}/exercises", response_model=list[WorkoutExerciseResponse])
def list_workout_exercises(
    workout_id: int,
    principal: Principal = Depends(require_permissions(READ_WORKOUTS)),
    service: WorkoutExerciseService = Depends(get_workout_exercise_service),
):
    return service.list_exercises(workout_id, principal)
