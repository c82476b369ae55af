"""Exercise library use cases."""
import logging
from typing import Any, List, Mapping, Optional

from application.exceptions import ConflictError
from application.ports import ExerciseRepository, Page
from application.use_cases.common import apply_changes, check_version, split_changes
from domain.models import DifficultyLevel, ExerciseType, TargetMuscleGroup

logger = logging.getLogger(__name__)

EXERCISE_FIELDS = (
    "name",
    "description",
    "type",
    "target_muscle_group",
    "difficulty_level",
    "image_url",
)


class ExerciseService:
    """
    Use cases for the shared exercise library.

    Scope checks (read/write/delete:exercises) happen at the router; every
    authenticated caller with the scope sees the same library.
    """

    def __init__(self, exercises: ExerciseRepository):
        self._exercises = exercises

    def get_exercise(self, exercise_id: int) -> Any:
        return self._exercises.get_by_id(exercise_id)

    def list_exercises(self, page: int, size: int) -> Page[Any]:
        return self._exercises.find_page(page, size, sort=(("name", "asc"),))

    def search(self, name: str) -> List[Any]:
        return self._exercises.search_by_name(name)

    def filter(
        self,
        exercise_type: Optional[ExerciseType] = None,
        target_muscle_group: Optional[TargetMuscleGroup] = None,
        difficulty_level: Optional[DifficultyLevel] = None,
    ) -> List[Any]:
        return self._exercises.filter(exercise_type, target_muscle_group, difficulty_level)

    def create_exercise(self, data: Mapping[str, Any]) -> Any:
        """
        Raises:
            ConflictError: If an exercise with the same name exists
        """
        if self._exercises.exists_by_name(data["name"]):
            raise ConflictError(f"Exercise already exists with name: {data['name']}")
        exercise = self._exercises.create(
            **{key: data.get(key) for key in EXERCISE_FIELDS}
        )
        logger.info(f"Exercise created: exercise_id={exercise.id}")
        return exercise

    def update_exercise(self, exercise_id: int, data: Mapping[str, Any]) -> Any:
        """
        Raises:
            NotFoundError: If the exercise does not exist
            OptimisticLockConflictError: If ``version`` is stale
            ConflictError: If renaming onto an existing name, or changing the
                type of an exercise already used in workouts
        """
        changes, expected_version = split_changes(data)
        exercise = self._exercises.get_by_id(exercise_id)
        check_version(exercise, expected_version, "Exercise")

        new_name = changes.get("name")
        if new_name and new_name.lower() != exercise.name.lower():
            if self._exercises.exists_by_name(new_name):
                raise ConflictError(f"Exercise already exists with name: {new_name}")

        new_type = changes.get("type")
        if new_type is not None and new_type != exercise.type:
            if self._exercises.is_referenced(exercise_id):
                raise ConflictError(
                    "Exercise type cannot change while workouts reference this exercise"
                )

        apply_changes(exercise, changes, EXERCISE_FIELDS)
        self._exercises.save(exercise)
        logger.info(f"Exercise updated: exercise_id={exercise_id}")
        return exercise

    def delete_exercise(self, exercise_id: int) -> None:
        """
        Raises:
            NotFoundError: If the exercise does not exist
            ConflictError: If workouts still reference it
        """
        exercise = self._exercises.get_by_id(exercise_id)
        if self._exercises.is_referenced(exercise_id):
            raise ConflictError("Exercise is used in workouts and cannot be deleted")
        self._exercises.delete(exercise)
