"""Use cases for exercises scheduled inside a workout session."""
import logging
from typing import Any, Dict, List, Mapping

from application.authorization import Principal, ResourceAccessPolicy
from application.exceptions import NotFoundError
from application.ports import (
    ExerciseRepository,
    SetRepository,
    WorkoutExerciseRepository,
    WorkoutSessionRepository,
)
from application.use_cases.common import apply_changes, check_version, split_changes
from domain.models import SetKind
from domain.rules import validate_set_composition

logger = logging.getLogger(__name__)


class WorkoutExerciseService:
    """Add, reorder, annotate and remove workout exercises."""

    def __init__(
        self,
        sessions: WorkoutSessionRepository,
        workout_exercises: WorkoutExerciseRepository,
        exercises: ExerciseRepository,
        sets: Dict[SetKind, SetRepository],
        policy: ResourceAccessPolicy,
    ):
        self._sessions = sessions
        self._workout_exercises = workout_exercises
        self._exercises = exercises
        self._sets = sets
        self._policy = policy

    def _load(self, workout_exercise_id: int, principal: Principal) -> Any:
        self._policy.ensure_can_access("workout_exercise", workout_exercise_id, principal)
        # Admins skip the ownership lookup; a deleted session still hides its children.
        if self._workout_exercises.find_owner_id(workout_exercise_id) is None:
            raise NotFoundError(self._workout_exercises.entity_name, "id", workout_exercise_id)
        return self._workout_exercises.get_by_id(workout_exercise_id)

    def add_exercise(self, session_id: int, data: Mapping[str, Any], principal: Principal) -> Any:
        """
        Append an exercise to a session.

        Raises:
            AuthorizationDeniedError: If the caller does not own the session
            NotFoundError: If the session or exercise does not exist
        """
        self._policy.ensure_can_access("workout", session_id, principal)
        session = self._sessions.get_by_id(session_id)
        exercise = self._exercises.get_by_id(data["exercise_id"])

        workout_exercise = self._workout_exercises.create(
            workout_session_id=session.id,
            exercise_id=exercise.id,
            order_in_workout=data.get("order_in_workout")
            or self._workout_exercises.next_order(session.id),
            notes=data.get("notes"),
        )
        logger.info(
            f"Workout exercise {workout_exercise.id} added to session {session_id}"
        )
        return workout_exercise

    def list_exercises(self, session_id: int, principal: Principal) -> List[Any]:
        self._policy.ensure_can_access("workout", session_id, principal)
        self._sessions.get_by_id(session_id)
        return self._workout_exercises.find_by_session(session_id)

    def get_workout_exercise(self, workout_exercise_id: int, principal: Principal) -> Any:
        return self._load(workout_exercise_id, principal)

    def update_workout_exercise(
        self, workout_exercise_id: int, data: Mapping[str, Any], principal: Principal
    ) -> Any:
        """
        Change order, notes or the referenced exercise.

        Swapping the exercise is only allowed when the logged sets still match
        the new exercise type.

        Raises:
            OptimisticLockConflictError: If ``version`` is stale
            SetTypeMismatchError: If existing sets do not fit the new exercise
        """
        changes, expected_version = split_changes(data)
        workout_exercise = self._load(workout_exercise_id, principal)
        check_version(workout_exercise, expected_version, "WorkoutExercise")

        new_exercise_id = changes.get("exercise_id")
        if new_exercise_id is not None and new_exercise_id != workout_exercise.exercise_id:
            exercise = self._exercises.get_by_id(new_exercise_id)
            counts = {
                kind: repo.count_by_workout_exercise(workout_exercise_id)
                for kind, repo in self._sets.items()
            }
            validate_set_composition(
                exercise.type,
                counts[SetKind.STRENGTH],
                counts[SetKind.CARDIO],
                counts[SetKind.FLEXIBILITY],
                require_sets=False,
            )
            workout_exercise.exercise = exercise

        apply_changes(workout_exercise, changes, ("exercise_id", "order_in_workout", "notes"))
        self._workout_exercises.save(workout_exercise)
        logger.info(f"Workout exercise updated: workout_exercise_id={workout_exercise_id}")
        return workout_exercise

    def delete_workout_exercise(self, workout_exercise_id: int, principal: Principal) -> None:
        self._load(workout_exercise_id, principal)
        self._workout_exercises.soft_delete_by_id(workout_exercise_id)
