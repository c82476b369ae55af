"""
Exercise Repository Interface (Port).

Exercises form a shared library and are not soft-deletable; removal is a
physical delete that fails while workout exercises still reference the row.
"""
from typing import Any, List, Optional, Protocol

from application.ports.soft_delete_repository import Page, SortSpec
from domain.models import DifficultyLevel, ExerciseType, TargetMuscleGroup


class ExerciseRepository(Protocol):
    """Abstract interface for the exercise library."""

    entity_name: str

    def save(self, exercise: Any) -> Any:
        ...

    def create(self, **fields: Any) -> Any:
        ...

    def find_by_id(self, exercise_id: int) -> Optional[Any]:
        ...

    def get_by_id(self, exercise_id: int) -> Any:
        """
        Raises:
            NotFoundError: If the exercise does not exist
        """
        ...

    def find_page(
        self, page: int = 0, size: int = 20, sort: Optional[SortSpec] = None
    ) -> Page[Any]:
        ...

    def search_by_name(self, name: str, limit: int = 50) -> List[Any]:
        """
        Case-insensitive substring search on the exercise name.

        Args:
            name: Text to look for; LIKE wildcards are matched literally
            limit: Maximum results to return
        """
        ...

    def filter(
        self,
        exercise_type: Optional[ExerciseType] = None,
        target_muscle_group: Optional[TargetMuscleGroup] = None,
        difficulty_level: Optional[DifficultyLevel] = None,
    ) -> List[Any]:
        """List exercises matching every criterion that is provided."""
        ...

    def exists_by_name(self, name: str) -> bool:
        ...

    def is_referenced(self, exercise_id: int) -> bool:
        """True if any workout exercise (active or deleted) points at it."""
        ...

    def delete(self, exercise: Any) -> None:
        ...

    def count(self) -> int:
        ...
