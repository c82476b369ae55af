"""
Infrastructure Layer for the workout tracker.

This package contains concrete implementations of repository interfaces:
- db/: SQLAlchemy models, repositories, seeding and maintenance
"""

# Re-export database repositories for convenient access
from infrastructure.db import (
    SqlAlchemyExerciseRepository,
    SqlAlchemyUserRepository,
    SqlAlchemyWorkoutExerciseRepository,
    SqlAlchemyWorkoutSessionRepository,
    build_set_repositories,
)

__all__ = [
    "SqlAlchemyExerciseRepository",
    "SqlAlchemyUserRepository",
    "SqlAlchemyWorkoutExerciseRepository",
    "SqlAlchemyWorkoutSessionRepository",
    "build_set_repositories",
]
