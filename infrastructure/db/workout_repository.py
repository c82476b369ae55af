"""
SQLAlchemy implementations of the workout session and workout exercise
repositories.

Ownership lookups join through the chain with the active-only filter applied
at every level, so a soft-deleted parent hides its children.
"""
import logging
from typing import List, Optional

from sqlalchemy import func, select

from application.ports.soft_delete_repository import Page
from infrastructure.db.models import User, WorkoutExercise, WorkoutSession
from infrastructure.db.soft_delete_repository import SqlAlchemySoftDeleteRepository

logger = logging.getLogger(__name__)

NEWEST_FIRST = (("created_at", "desc"), ("id", "desc"))


class SqlAlchemyWorkoutSessionRepository(SqlAlchemySoftDeleteRepository[WorkoutSession]):
    """Workout sessions owned by users."""

    model = WorkoutSession
    entity_name = "WorkoutSession"

    def find_by_user(self, user_id: int) -> List[WorkoutSession]:
        stmt = self._order(self._active().where(WorkoutSession.user_id == user_id), NEWEST_FIRST)
        return list(self._session.scalars(stmt).all())

    def find_page_by_user(
        self, user_id: int, page: int = 0, size: int = 20
    ) -> Page[WorkoutSession]:
        stmt = self._active().where(WorkoutSession.user_id == user_id)
        return self._page(stmt, page, size, NEWEST_FIRST)

    def find_owner_id(self, session_id: int) -> Optional[int]:
        stmt = (
            select(WorkoutSession.user_id)
            .join(User, User.id == WorkoutSession.user_id)
            .where(WorkoutSession.id == session_id)
            .where(WorkoutSession.deleted.is_(False))
            .where(User.deleted.is_(False))
        )
        return self._session.scalar(stmt)


class SqlAlchemyWorkoutExerciseRepository(SqlAlchemySoftDeleteRepository[WorkoutExercise]):
    """Exercises scheduled within a workout session."""

    model = WorkoutExercise
    entity_name = "WorkoutExercise"

    def find_by_session(self, session_id: int) -> List[WorkoutExercise]:
        stmt = self._order(
            self._active().where(WorkoutExercise.workout_session_id == session_id),
            (("order_in_workout", "asc"), ("id", "asc")),
        )
        return list(self._session.scalars(stmt).all())

    def find_owner_id(self, workout_exercise_id: int) -> Optional[int]:
        stmt = (
            select(WorkoutSession.user_id)
            .join(WorkoutExercise, WorkoutExercise.workout_session_id == WorkoutSession.id)
            .join(User, User.id == WorkoutSession.user_id)
            .where(WorkoutExercise.id == workout_exercise_id)
            .where(WorkoutExercise.deleted.is_(False))
            .where(WorkoutSession.deleted.is_(False))
            .where(User.deleted.is_(False))
        )
        return self._session.scalar(stmt)

    def next_order(self, session_id: int) -> int:
        stmt = (
            select(func.max(WorkoutExercise.order_in_workout))
            .where(WorkoutExercise.workout_session_id == session_id)
            .where(WorkoutExercise.deleted.is_(False))
        )
        return (self._session.scalar(stmt) or 0) + 1
