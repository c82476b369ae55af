"""
Application Use Cases for the workout tracker.

This package contains application-level services that orchestrate domain
rules and coordinate between repository ports. Services are the entry points
for business operations.

Architecture follows Clean Architecture / Hexagonal pattern:
- Services orchestrate domain rules and repository ports
- Dependencies are injected via constructors for testability
- Services return persisted entities, not API responses
- Failures are raised as application.exceptions, never HTTP errors

Usage:
    from application.use_cases import WorkoutSessionService

    service = WorkoutSessionService(sessions, workout_exercises, exercises, sets, policy, clock)
    session = service.change_status(session_id, WorkoutAction.START, principal)
"""

from application.use_cases.exercises import ExerciseService
from application.use_cases.sets import SetService
from application.use_cases.users import IdentityClaims, UserService
from application.use_cases.workout_exercises import WorkoutExerciseService
from application.use_cases.workout_sessions import (
    WorkoutExerciseDetail,
    WorkoutSessionDetail,
    WorkoutSessionService,
)

__all__ = [
    "ExerciseService",
    "SetService",
    "IdentityClaims",
    "UserService",
    "WorkoutExerciseService",
    "WorkoutExerciseDetail",
    "WorkoutSessionDetail",
    "WorkoutSessionService",
]
