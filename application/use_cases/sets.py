"""
Set logging use cases.

The set kind comes from the route (strength, cardio or flexibility) and must
match the type of the workout exercise's exercise. After every write the
workout exercise's full composition is re-checked: exactly one non-empty set
collection, matching the exercise type.
"""
import logging
from typing import Any, Dict, List, Mapping

from application.authorization import Principal, ResourceAccessPolicy
from application.exceptions import NotFoundError
from application.ports import SetRepository, WorkoutExerciseRepository
from application.use_cases.common import apply_changes, check_version, split_changes
from domain.models import SET_MODELS, SetKind
from domain.rules import validate_set_composition, validate_set_kind

logger = logging.getLogger(__name__)


def _fields_for(kind: SetKind) -> tuple[str, ...]:
    return tuple(name for name in SET_MODELS[kind].model_fields if name != "kind")


class SetService:
    """Create, read, update and delete sets of one workout exercise."""

    def __init__(
        self,
        workout_exercises: WorkoutExerciseRepository,
        sets: Dict[SetKind, SetRepository],
        policy: ResourceAccessPolicy,
    ):
        self._workout_exercises = workout_exercises
        self._sets = sets
        self._policy = policy

    def _check_composition(self, workout_exercise: Any) -> None:
        counts = {
            kind: repo.count_by_workout_exercise(workout_exercise.id)
            for kind, repo in self._sets.items()
        }
        validate_set_composition(
            workout_exercise.exercise.type,
            counts[SetKind.STRENGTH],
            counts[SetKind.CARDIO],
            counts[SetKind.FLEXIBILITY],
        )

    def _load_workout_exercise(self, workout_exercise_id: int, principal: Principal) -> Any:
        self._policy.ensure_can_access("workout_exercise", workout_exercise_id, principal)
        # Admins skip the ownership lookup; a deleted session still hides its children.
        if self._workout_exercises.find_owner_id(workout_exercise_id) is None:
            raise NotFoundError(self._workout_exercises.entity_name, "id", workout_exercise_id)
        return self._workout_exercises.get_by_id(workout_exercise_id)

    def _load_set(
        self, kind: SetKind, workout_exercise_id: int, set_id: int, principal: Principal
    ) -> Any:
        self._policy.ensure_can_access(kind.value, set_id, principal)
        if self._sets[kind].find_owner_id(set_id) is None:
            raise NotFoundError(self._sets[kind].entity_name, "id", set_id)
        workout_set = self._sets[kind].get_by_id(set_id)
        if workout_set.workout_exercise_id != workout_exercise_id:
            raise NotFoundError(self._sets[kind].entity_name, "id", set_id)
        return workout_set

    def create_set(
        self,
        kind: SetKind,
        workout_exercise_id: int,
        data: Mapping[str, Any],
        principal: Principal,
    ) -> Any:
        """
        Log a set against a workout exercise.

        Raises:
            AuthorizationDeniedError: If the caller does not own the workout
            NotFoundError: If the workout exercise does not exist
            SetTypeMismatchError: If ``kind`` does not match the exercise type
        """
        kind = SetKind(kind)
        workout_exercise = self._load_workout_exercise(workout_exercise_id, principal)
        validate_set_kind(workout_exercise.exercise.type, kind)

        values = {key: data.get(key) for key in _fields_for(kind) if key in data}
        workout_set = self._sets[kind].create(workout_exercise_id=workout_exercise_id, **values)
        self._check_composition(workout_exercise)
        logger.info(
            f"{kind.value} set {workout_set.id} added to workout exercise {workout_exercise_id}"
        )
        return workout_set

    def list_sets(self, kind: SetKind, workout_exercise_id: int, principal: Principal) -> List[Any]:
        kind = SetKind(kind)
        self._load_workout_exercise(workout_exercise_id, principal)
        return self._sets[kind].find_by_workout_exercise(workout_exercise_id)

    def get_set(
        self, kind: SetKind, workout_exercise_id: int, set_id: int, principal: Principal
    ) -> Any:
        return self._load_set(SetKind(kind), workout_exercise_id, set_id, principal)

    def update_set(
        self,
        kind: SetKind,
        workout_exercise_id: int,
        set_id: int,
        data: Mapping[str, Any],
        principal: Principal,
    ) -> Any:
        """
        Raises:
            OptimisticLockConflictError: If ``version`` is stale
        """
        kind = SetKind(kind)
        changes, expected_version = split_changes(data)
        workout_set = self._load_set(kind, workout_exercise_id, set_id, principal)
        check_version(workout_set, expected_version, self._sets[kind].entity_name)

        apply_changes(workout_set, changes, _fields_for(kind))
        self._sets[kind].save(workout_set)
        logger.info(f"{kind.value} set updated: set_id={set_id}")
        return workout_set

    def delete_set(
        self, kind: SetKind, workout_exercise_id: int, set_id: int, principal: Principal
    ) -> None:
        kind = SetKind(kind)
        self._load_set(kind, workout_exercise_id, set_id, principal)
        self._sets[kind].soft_delete_by_id(set_id)
