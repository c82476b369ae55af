"""
Exercises router.

The shared exercise library: paginated listing, name search, filtering by
classification, and scope-gated create/update/delete.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from api.deps import get_exercise_service, require_permissions
from api.schemas import (
    ExerciseCreateRequest,
    ExerciseResponse,
    ExerciseUpdateRequest,
    PagedResponse,
)
from api.schemas.common import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from application.authorization import (
    DELETE_EXERCISES,
    READ_EXERCISES,
    WRITE_EXERCISES,
    Principal,
)
from application.use_cases import ExerciseService
from domain.models import DifficultyLevel, ExerciseType, TargetMuscleGroup

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/exercises",
    tags=["Exercises"],
)


@router.get("", response_model=PagedResponse[ExerciseResponse])
def list_exercises(
    page: int = Query(0, ge=0),
    size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    principal: Principal = Depends(require_permissions(READ_EXERCISES)),
    service: ExerciseService = Depends(get_exercise_service),
):
    """Exercises ordered by name."""
    result = service.list_exercises(page, size)
    return PagedResponse.from_page(
        result, [ExerciseResponse.model_validate(exercise) for exercise in result.items]
    )


@router.get("/search", response_model=list[ExerciseResponse])
def search_exercises(
    name: str = Query(..., min_length=1, max_length=100),
    principal: Principal = Depends(require_permissions(READ_EXERCISES)),
    service: ExerciseService = Depends(get_exercise_service),
):
    return service.search(name)


@router.get("/filter", response_model=list[ExerciseResponse])
def filter_exercises(
    type: Optional[ExerciseType] = Query(None),
    target_muscle_group: Optional[TargetMuscleGroup] = Query(None),
    difficulty_level: Optional[DifficultyLevel] = Query(None),
    principal: Principal = Depends(require_permissions(READ_EXERCISES)),
    service: ExerciseService = Depends(get_exercise_service),
):
    """
    Exercises matching every supplied criterion.

    Omitted criteria are not applied; with none supplied, all exercises match.
    """
    return service.filter(type, target_muscle_group, difficulty_level)


@router.get("/{exercise_id}", response_model=ExerciseResponse)
def get_exercise(
    exercise_id: int,
    principal: Principal = Depends(require_permissions(READ_EXERCISES)),
    service: ExerciseService = Depends(get_exercise_service),
):
    return service.get_exercise(exercise_id)


@router.post("", response_model=ExerciseResponse, status_code=status.HTTP_201_CREATED)
def create_exercise(
    request: ExerciseCreateRequest,
    principal: Principal = Depends(require_permissions(WRITE_EXERCISES)),
    service: ExerciseService = Depends(get_exercise_service),
):
    return service.create_exercise(request.model_dump())


@router.put("/{exercise_id}", response_model=ExerciseResponse)
def update_exercise(
    exercise_id: int,
    request: ExerciseUpdateRequest,
    principal: Principal = Depends(require_permissions(WRITE_EXERCISES)),
    service: ExerciseService = Depends(get_exercise_service),
):
    return service.update_exercise(exercise_id, request.model_dump(exclude_unset=True))


@router.delete("/{exercise_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_exercise(
    exercise_id: int,
    principal: Principal = Depends(require_permissions(DELETE_EXERCISES)),
    service: ExerciseService = Depends(get_exercise_service),
):
    """Remove an exercise no workout references."""
    service.delete_exercise(exercise_id)
