"""
Sets router.

Strength, cardio and flexibility sets logged against a workout exercise:

    /api/v1/workout-exercises/{workout_exercise_id}/strength-sets
    /api/v1/workout-exercises/{workout_exercise_id}/cardio-sets
    /api/v1/workout-exercises/{workout_exercise_id}/flexibility-sets

The set kind in the path must match the type of the workout exercise's
exercise. Routes are registered per kind so each carries its own request and
response models.
"""

import logging

from fastapi import APIRouter, Depends, status

from api.deps import get_set_service, require_permissions
from api.schemas.sets import (
    SET_CREATE_MODELS,
    SET_RESPONSE_MODELS,
    SET_UPDATE_MODELS,
)
from application.authorization import READ_WORKOUTS, WRITE_WORKOUTS, Principal
from application.use_cases import SetService
from domain.models import SetKind

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/workout-exercises",
    tags=["Sets"],
)


def _register(kind: SetKind) -> None:
    create_model = SET_CREATE_MODELS[kind]
    update_model = SET_UPDATE_MODELS[kind]
    response_model = SET_RESPONSE_MODELS[kind]
    collection = f"/{{workout_exercise_id}}/{kind.value}-sets"
    item = f"{collection}/{{set_id}}"
    label = kind.value.capitalize()

    def create_set(
        workout_exercise_id: int,
        request: create_model,
        principal: Principal = Depends(require_permissions(WRITE_WORKOUTS)),
        service: SetService = Depends(get_set_service),
    ):
        return service.create_set(kind, workout_exercise_id, request.model_dump(), principal)

    def list_sets(
        workout_exercise_id: int,
        principal: Principal = Depends(require_permissions(READ_WORKOUTS)),
        service: SetService = Depends(get_set_service),
    ):
        return service.list_sets(kind, workout_exercise_id, principal)

    def get_set(
        workout_exercise_id: int,
        set_id: int,
        principal: Principal = Depends(require_permissions(READ_WORKOUTS)),
        service: SetService = Depends(get_set_service),
    ):
        return service.get_set(kind, workout_exercise_id, set_id, principal)

    def update_set(
        workout_exercise_id: int,
        set_id: int,
        request: update_model,
        principal: Principal = Depends(require_permissions(WRITE_WORKOUTS)),
        service: SetService = Depends(get_set_service),
    ):
        return service.update_set(
            kind, workout_exercise_id, set_id, request.model_dump(exclude_unset=True), principal
        )

    def delete_set(
        workout_exercise_id: int,
        set_id: int,
        principal: Principal = Depends(require_permissions(WRITE_WORKOUTS)),
        service: SetService = Depends(get_set_service),
    ):
        service.delete_set(kind, workout_exercise_id, set_id, principal)

    router.add_api_route(
        collection,
        create_set,
        methods=["POST"],
        response_model=response_model,
        status_code=status.HTTP_201_CREATED,
        name=f"create_{kind.value}_set",
        summary=f"Log {label} Set",
    )
    router.add_api_route(
        collection,
        list_sets,
        methods=["GET"],
        response_model=list[response_model],
        name=f"list_{kind.value}_sets",
        summary=f"List {label} Sets",
    )
    router.add_api_route(
        item,
        get_set,
        methods=["GET"],
        response_model=response_model,
        name=f"get_{kind.value}_set",
        summary=f"Get {label} Set",
    )
    router.add_api_route(
        item,
        update_set,
        methods=["PUT"],
        response_model=response_model,
        name=f"update_{kind.value}_set",
        summary=f"Update {label} Set",
    )
    router.add_api_route(
        item,
        delete_set,
        methods=["DELETE"],
        status_code=status.HTTP_204_NO_CONTENT,
        name=f"delete_{kind.value}_set",
        summary=f"Delete {label} Set",
    )


for _kind in SetKind:
    _register(_kind)
