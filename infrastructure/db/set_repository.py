"""
SQLAlchemy implementations of SetRepository, one per set table.

The three classes share every query; only the mapped model differs.
"""
from typing import Dict, List, Optional, Type

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from domain.clock import Clock
from domain.models import SetKind
from infrastructure.db.models import (
    CardioSetRecord,
    FlexibilitySetRecord,
    StrengthSetRecord,
    User,
    WorkoutExercise,
    WorkoutSession,
)
from infrastructure.db.soft_delete_repository import SqlAlchemySoftDeleteRepository


class SqlAlchemySetRepository(SqlAlchemySoftDeleteRepository):
    """Base for the per-kind set repositories."""

    kind: SetKind

    def find_by_workout_exercise(self, workout_exercise_id: int) -> List:
        stmt = self._order(
            self._active().where(self.model.workout_exercise_id == workout_exercise_id),
            (("set_number", "asc"), ("id", "asc")),
        )
        return list(self._session.scalars(stmt).all())

    def count_by_workout_exercise(self, workout_exercise_id: int) -> int:
        stmt = (
            select(func.count())
            .select_from(self.model)
            .where(self.model.workout_exercise_id == workout_exercise_id)
            .where(self.model.deleted.is_(False))
        )
        return self._session.scalar(stmt) or 0

    def find_owner_id(self, set_id: int) -> Optional[int]:
        stmt = (
            select(WorkoutSession.user_id)
            .join(WorkoutExercise, WorkoutExercise.workout_session_id == WorkoutSession.id)
            .join(self.model, self.model.workout_exercise_id == WorkoutExercise.id)
            .join(User, User.id == WorkoutSession.user_id)
            .where(self.model.id == set_id)
            .where(self.model.deleted.is_(False))
            .where(WorkoutExercise.deleted.is_(False))
            .where(WorkoutSession.deleted.is_(False))
            .where(User.deleted.is_(False))
        )
        return self._session.scalar(stmt)

    def find_workout_exercise_id(self, set_id: int) -> Optional[int]:
        stmt = (
            select(self.model.workout_exercise_id)
            .where(self.model.id == set_id)
            .where(self.model.deleted.is_(False))
        )
        return self._session.scalar(stmt)


class SqlAlchemyStrengthSetRepository(SqlAlchemySetRepository):
    model = StrengthSetRecord
    entity_name = "StrengthSet"
    kind = SetKind.STRENGTH


class SqlAlchemyCardioSetRepository(SqlAlchemySetRepository):
    model = CardioSetRecord
    entity_name = "CardioSet"
    kind = SetKind.CARDIO


class SqlAlchemyFlexibilitySetRepository(SqlAlchemySetRepository):
    model = FlexibilitySetRecord
    entity_name = "FlexibilitySet"
    kind = SetKind.FLEXIBILITY


SET_REPOSITORY_CLASSES: Dict[SetKind, Type[SqlAlchemySetRepository]] = {
    SetKind.STRENGTH: SqlAlchemyStrengthSetRepository,
    SetKind.CARDIO: SqlAlchemyCardioSetRepository,
    SetKind.FLEXIBILITY: SqlAlchemyFlexibilitySetRepository,
}


def build_set_repositories(
    session: Session, clock: Optional[Clock] = None
) -> Dict[SetKind, SqlAlchemySetRepository]:
    """One repository per set kind sharing ``session``."""
    return {kind: cls(session, clock) for kind, cls in SET_REPOSITORY_CLASSES.items()}
