"""
SQLAlchemy implementation of ExerciseRepository.

Exercises are not soft-deletable; ``delete`` removes the row.
"""
import logging
from typing import List, Optional

from sqlalchemy import func, select

from domain.models import DifficultyLevel, ExerciseType, TargetMuscleGroup
from infrastructure.db.models import Exercise, WorkoutExercise
from infrastructure.db.soft_delete_repository import SqlAlchemyRepository, contains_pattern

logger = logging.getLogger(__name__)


class SqlAlchemyExerciseRepository(SqlAlchemyRepository[Exercise]):
    """The shared exercise library."""

    model = Exercise
    entity_name = "Exercise"

    def search_by_name(self, name: str, limit: int = 50) -> List[Exercise]:
        stmt = (
            select(Exercise)
            .where(Exercise.name.ilike(contains_pattern(name), escape="\\"))
            .order_by(Exercise.name)
            .limit(limit)
        )
        return list(self._session.scalars(stmt).all())

    def filter(
        self,
        exercise_type: Optional[ExerciseType] = None,
        target_muscle_group: Optional[TargetMuscleGroup] = None,
        difficulty_level: Optional[DifficultyLevel] = None,
    ) -> List[Exercise]:
        stmt = select(Exercise)
        if exercise_type is not None:
            stmt = stmt.where(Exercise.type == exercise_type)
        if target_muscle_group is not None:
            stmt = stmt.where(Exercise.target_muscle_group == target_muscle_group)
        if difficulty_level is not None:
            stmt = stmt.where(Exercise.difficulty_level == difficulty_level)
        return list(self._session.scalars(stmt.order_by(Exercise.name)).all())

    def exists_by_name(self, name: str) -> bool:
        stmt = select(Exercise.id).where(func.lower(Exercise.name) == name.lower())
        return self._session.scalar(stmt.limit(1)) is not None

    def is_referenced(self, exercise_id: int) -> bool:
        stmt = select(WorkoutExercise.id).where(WorkoutExercise.exercise_id == exercise_id)
        return self._session.scalar(stmt.limit(1)) is not None

    def delete(self, exercise: Exercise) -> None:
        self._session.delete(exercise)
        self._session.flush()
        logger.info(f"Deleted exercise {exercise.id}")
