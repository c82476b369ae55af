"""
Infrastructure Database Layer.

This package provides SQLAlchemy-backed implementations of the repository
interfaces defined in application.ports. Repositories take a request-scoped
Session (and optionally a Clock) in their constructor.

Usage:
    from infrastructure.db import (
        SqlAlchemyWorkoutSessionRepository,
        build_set_repositories,
    )

    sessions = SqlAlchemyWorkoutSessionRepository(db_session)
    set_repos = build_set_repositories(db_session)

    sessions.soft_delete_by_id(42)
    sessions.find_by_id(42)                      # None
    sessions.find_by_id_including_deleted(42)    # WorkoutSession(deleted=True)
"""

# Importing the module registers the flush hook
from infrastructure.db import audit
from infrastructure.db.audit import set_actor
from infrastructure.db.models import (
    SOFT_DELETE_MODELS,
    Base,
    CardioSetRecord,
    Exercise,
    FlexibilitySetRecord,
    StrengthSetRecord,
    User,
    WorkoutExercise,
    WorkoutSession,
)
from infrastructure.db.soft_delete_repository import (
    SqlAlchemyRepository,
    SqlAlchemySoftDeleteRepository,
)
from infrastructure.db.user_repository import SqlAlchemyUserRepository
from infrastructure.db.exercise_repository import SqlAlchemyExerciseRepository
from infrastructure.db.workout_repository import (
    SqlAlchemyWorkoutExerciseRepository,
    SqlAlchemyWorkoutSessionRepository,
)
from infrastructure.db.set_repository import (
    SET_REPOSITORY_CLASSES,
    SqlAlchemyCardioSetRepository,
    SqlAlchemyFlexibilitySetRepository,
    SqlAlchemySetRepository,
    SqlAlchemyStrengthSetRepository,
    build_set_repositories,
)
from infrastructure.db.seed import DEFAULT_EXERCISES, seed_default_exercises
from infrastructure.db.maintenance import hard_delete_user, purge_soft_deleted

__all__ = [
    "audit",
    "set_actor",
    # ORM models
    "SOFT_DELETE_MODELS",
    "Base",
    "CardioSetRecord",
    "Exercise",
    "FlexibilitySetRecord",
    "StrengthSetRecord",
    "User",
    "WorkoutExercise",
    "WorkoutSession",
    # Repositories
    "SqlAlchemyRepository",
    "SqlAlchemySoftDeleteRepository",
    "SqlAlchemyUserRepository",
    "SqlAlchemyExerciseRepository",
    "SqlAlchemyWorkoutExerciseRepository",
    "SqlAlchemyWorkoutSessionRepository",
    "SET_REPOSITORY_CLASSES",
    "SqlAlchemyCardioSetRepository",
    "SqlAlchemyFlexibilitySetRepository",
    "SqlAlchemySetRepository",
    "SqlAlchemyStrengthSetRepository",
    "build_set_repositories",
    # Seeding and maintenance
    "DEFAULT_EXERCISES",
    "seed_default_exercises",
    "hard_delete_user",
    "purge_soft_deleted",
]
