"""
Repository Interfaces (Ports) for the workout tracker.

This package defines abstract interfaces that decouple application logic from
infrastructure (database). Implementations are provided in the
infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the application needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import WorkoutSessionRepository

    class WorkoutSessionService:
        def __init__(self, sessions: WorkoutSessionRepository):
            self._sessions = sessions
"""

# Generic soft-delete contract
from application.ports.soft_delete_repository import (
    Page,
    SoftDeleteRepository,
    SortSpec,
)

# Users
from application.ports.user_repository import UserRepository

# Exercise library
from application.ports.exercise_repository import ExerciseRepository

# Workouts and sets
from application.ports.workout_repository import (
    SetRepository,
    WorkoutExerciseRepository,
    WorkoutSessionRepository,
)

__all__ = [
    "Page",
    "SoftDeleteRepository",
    "SortSpec",
    "UserRepository",
    "ExerciseRepository",
    "SetRepository",
    "WorkoutExerciseRepository",
    "WorkoutSessionRepository",
]
