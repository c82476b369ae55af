"""
Workout session use cases.

Every single-session operation runs the ownership check before touching the
row, then loads it with ``get_by_id`` so an admin asking for a missing or
deleted session gets a NotFound instead of a denial.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from application.authorization import Principal, ResourceAccessPolicy
from application.exceptions import AuthorizationDeniedError, NotFoundError
from application.ports import (
    ExerciseRepository,
    Page,
    SetRepository,
    WorkoutExerciseRepository,
    WorkoutSessionRepository,
)
from application.use_cases.common import apply_changes, check_version, split_changes
from domain.clock import Clock, to_utc
from domain.exceptions import BusinessRuleError, WorkoutDateError
from domain.models import SetKind, WorkoutStatus
from domain.rules import WorkoutAction, duration_in_minutes, next_status, validate_workout_dates

logger = logging.getLogger(__name__)

SESSION_FIELDS = (
    "name",
    "description",
    "scheduled_date",
    "started_at",
    "completed_at",
    "actual_duration_in_minutes",
    "session_notes",
)
_TIMESTAMP_FIELDS = ("scheduled_date", "started_at", "completed_at")


@dataclass
class WorkoutExerciseDetail:
    """A workout exercise with its exercise and active sets."""

    workout_exercise: Any
    sets: List[Any] = field(default_factory=list)


@dataclass
class WorkoutSessionDetail:
    """A workout session with its ordered workout exercises."""

    session: Any
    exercises: List[WorkoutExerciseDetail] = field(default_factory=list)


def _check_completion_fields(status: WorkoutStatus, completed_at) -> None:
    if completed_at is not None and status != WorkoutStatus.COMPLETED:
        raise WorkoutDateError(
            "Completion time can only be set on a completed workout session",
            field="completed_at",
        )


class WorkoutSessionService:
    """Use cases for workout sessions."""

    def __init__(
        self,
        sessions: WorkoutSessionRepository,
        workout_exercises: WorkoutExerciseRepository,
        exercises: ExerciseRepository,
        sets: Dict[SetKind, SetRepository],
        policy: ResourceAccessPolicy,
        clock: Clock,
    ):
        self._sessions = sessions
        self._workout_exercises = workout_exercises
        self._exercises = exercises
        self._sets = sets
        self._policy = policy
        self._clock = clock

    def _load(self, session_id: int, principal: Principal) -> Any:
        self._policy.ensure_can_access("workout", session_id, principal)
        return self._sessions.get_by_id(session_id)

    # -------------------------------------------------------------------------
    # Create
    # -------------------------------------------------------------------------

    def create_session(self, principal: Principal, data: Mapping[str, Any]) -> Any:
        """
        Create a session for the caller, optionally with its first exercises.

        The session and its workout exercises are written in the caller's
        transaction, so a missing exercise id rolls back the whole request.

        Args:
            principal: Owner of the new session
            data: Session attributes, plus an optional ``exercises`` list of
                ``{exercise_id, order_in_workout?, notes?}``

        Returns:
            The created session

        Raises:
            WorkoutDateError: If timestamps are inconsistent
            NotFoundError: If a referenced exercise does not exist
        """
        values = {key: data.get(key) for key in SESSION_FIELDS}
        for key in _TIMESTAMP_FIELDS:
            values[key] = to_utc(values[key])
        status = WorkoutStatus(data.get("status") or WorkoutStatus.PLANNED)

        now = self._clock.now()
        if status in (WorkoutStatus.IN_PROGRESS, WorkoutStatus.PAUSED) and values["started_at"] is None:
            values["started_at"] = now
        if status == WorkoutStatus.COMPLETED and values["completed_at"] is None:
            values["completed_at"] = now
        _check_completion_fields(status, values["completed_at"])
        validate_workout_dates(values["started_at"], values["completed_at"], self._clock)
        if (
            status == WorkoutStatus.COMPLETED
            and values["started_at"] is not None
            and values["actual_duration_in_minutes"] is None
        ):
            values["actual_duration_in_minutes"] = duration_in_minutes(
                values["started_at"], values["completed_at"]
            )

        session = self._sessions.create(user_id=principal.user_id, status=status, **values)

        for position, item in enumerate(data.get("exercises") or [], start=1):
            exercise = self._exercises.get_by_id(item["exercise_id"])
            self._workout_exercises.create(
                workout_session_id=session.id,
                exercise_id=exercise.id,
                order_in_workout=item.get("order_in_workout") or position,
                notes=item.get("notes"),
            )

        logger.info(f"Workout session created: session_id={session.id} user_id={principal.user_id}")
        return session

    # -------------------------------------------------------------------------
    # Read
    # -------------------------------------------------------------------------

    def get_session(self, session_id: int, principal: Principal) -> Any:
        return self._load(session_id, principal)

    def describe_session(self, session_id: int, principal: Principal) -> WorkoutSessionDetail:
        """Session with its workout exercises and each one's sets."""
        session = self._load(session_id, principal)
        return self._detail(session)

    def _detail(self, session: Any) -> WorkoutSessionDetail:
        details = []
        for workout_exercise in self._workout_exercises.find_by_session(session.id):
            kind = SetKind.for_exercise_type(workout_exercise.exercise.type)
            sets = self._sets[kind].find_by_workout_exercise(workout_exercise.id)
            details.append(WorkoutExerciseDetail(workout_exercise, sets))
        return WorkoutSessionDetail(session, details)

    def list_my_sessions(self, principal: Principal) -> List[Any]:
        return self._sessions.find_by_user(principal.user_id)

    def list_user_sessions(self, user_id: int, principal: Principal) -> List[Any]:
        if not principal.is_admin and principal.user_id != user_id:
            logger.warning(
                f"SECURITY: user {principal.user_id} requested workouts of user {user_id}"
            )
            raise AuthorizationDeniedError()
        return self._sessions.find_by_user(user_id)

    def list_sessions(self, page: int, size: int) -> Page[Any]:
        return self._sessions.find_page(page, size, sort=(("created_at", "desc"), ("id", "desc")))

    # -------------------------------------------------------------------------
    # Update
    # -------------------------------------------------------------------------

    def update_session(self, session_id: int, data: Mapping[str, Any], principal: Principal) -> Any:
        """
        Raises:
            AuthorizationDeniedError: If the caller does not own the session
            OptimisticLockConflictError: If ``version`` is stale
            WorkoutDateError: If the resulting timestamps are inconsistent
        """
        changes, expected_version = split_changes(data)
        session = self._load(session_id, principal)
        check_version(session, expected_version, "WorkoutSession")

        for key in _TIMESTAMP_FIELDS:
            if key in changes:
                changes[key] = to_utc(changes[key])
        started_at = changes.get("started_at", session.started_at)
        completed_at = changes.get("completed_at", session.completed_at)
        _check_completion_fields(session.status, completed_at)
        validate_workout_dates(started_at, completed_at, self._clock)

        apply_changes(session, changes, SESSION_FIELDS)
        self._sessions.save(session)
        logger.info(f"Workout session updated: session_id={session_id}")
        return session

    def change_status(
        self,
        session_id: int,
        action: WorkoutAction,
        principal: Principal,
        expected_version: Optional[int] = None,
    ) -> Any:
        """
        Apply a lifecycle action (start, pause, resume, complete, cancel).

        Starting stamps ``started_at`` when unset; completing stamps
        ``completed_at`` and derives the duration when unset.

        Raises:
            InvalidStatusTransitionError: If the action is not allowed from the
                current status
        """
        session = self._load(session_id, principal)
        check_version(session, expected_version, "WorkoutSession")

        target = next_status(session.status, action)
        now = self._clock.now()
        if target == WorkoutStatus.IN_PROGRESS and session.started_at is None:
            session.started_at = now
        if target == WorkoutStatus.COMPLETED:
            session.completed_at = now
            if session.started_at is not None and session.actual_duration_in_minutes is None:
                session.actual_duration_in_minutes = duration_in_minutes(session.started_at, now)
        validate_workout_dates(session.started_at, session.completed_at, self._clock)

        previous = session.status
        session.status = target
        self._sessions.save(session)
        logger.info(
            f"Workout session {session_id} status {WorkoutStatus(previous).value} -> {target.value}"
        )
        return session

    # -------------------------------------------------------------------------
    # Delete / restore
    # -------------------------------------------------------------------------

    def delete_session(self, session_id: int, principal: Principal) -> None:
        self._load(session_id, principal)
        self._sessions.soft_delete_by_id(session_id)

    def restore_session(self, session_id: int) -> Any:
        """
        Raises:
            NotFoundError: If no session row exists
            BusinessRuleError: If the session is not deleted
        """
        session = self._sessions.find_by_id_including_deleted(session_id)
        if session is None:
            raise NotFoundError("WorkoutSession", "id", session_id)
        if not session.deleted:
            raise BusinessRuleError("Workout session is not deleted and cannot be restored")
        self._sessions.restore_by_id(session_id)
        return session
