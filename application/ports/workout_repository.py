"""
Workout Repository Interfaces (Ports).

Workout sessions, workout exercises and the three set tables all follow the
soft-delete contract. The additional queries below also default to active
rows only.
"""
from typing import Any, List, Optional, Protocol

from application.ports.soft_delete_repository import Page, SoftDeleteRepository


class WorkoutSessionRepository(SoftDeleteRepository[Any], Protocol):
    """Abstract interface for workout session persistence."""

    def find_by_user(self, user_id: int) -> List[Any]:
        """Active sessions owned by ``user_id``, newest first."""
        ...

    def find_page_by_user(self, user_id: int, page: int = 0, size: int = 20) -> Page[Any]:
        """One page of the user's active sessions, newest first."""
        ...

    def find_owner_id(self, session_id: int) -> Optional[int]:
        """Owner of an active session, or None if absent or deleted."""
        ...


class WorkoutExerciseRepository(SoftDeleteRepository[Any], Protocol):
    """Abstract interface for workout exercise persistence."""

    def find_by_session(self, session_id: int) -> List[Any]:
        """Active workout exercises of a session ordered by ``order_in_workout``."""
        ...

    def find_owner_id(self, workout_exercise_id: int) -> Optional[int]:
        """
        Owner of the session behind an active workout exercise.

        Returns None if the workout exercise or its session is absent or deleted.
        """
        ...

    def next_order(self, session_id: int) -> int:
        """Order index following the last active workout exercise."""
        ...


class SetRepository(SoftDeleteRepository[Any], Protocol):
    """Abstract interface for one set table (strength, cardio or flexibility)."""

    def find_by_workout_exercise(self, workout_exercise_id: int) -> List[Any]:
        """Active sets ordered by ``set_number``."""
        ...

    def count_by_workout_exercise(self, workout_exercise_id: int) -> int:
        ...

    def find_owner_id(self, set_id: int) -> Optional[int]:
        """
        Owner reached by walking set -> workout exercise -> session.

        Returns None if any link in the chain is absent or deleted.
        """
        ...

    def find_workout_exercise_id(self, set_id: int) -> Optional[int]:
        ...
