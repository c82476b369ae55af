"""
FastAPI Dependency Providers for the workout tracker API.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) rather than concrete implementations. This
enables clean separation of concerns and easy testing with fakes.

Architecture:
- Settings and the engine are cached per-process (lru_cache)
- One SQLAlchemy Session per request (backend.database.get_db_session)
- Repository and service providers create new instances per-request
- Auth providers verify the bearer token, then sync the local user record

Usage in routers:
    from api.deps import get_current_principal, get_session_service

    @router.get("/workouts/my")
    def my_workouts(
        principal: Principal = Depends(get_current_principal),
        service: WorkoutSessionService = Depends(get_session_service),
    ):
        return service.list_my_sessions(principal)

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_current_principal] = lambda: owner_principal
    app.dependency_overrides[get_clock] = lambda: FixedClock(instant)
"""

from typing import Callable, Dict

from fastapi import Depends, Request
from sqlalchemy.orm import Session

# Protocol types (interfaces)
from application.ports import (
    ExerciseRepository,
    SetRepository,
    UserRepository,
    WorkoutExerciseRepository,
    WorkoutSessionRepository,
)
from application.authorization import Principal, ResourceAccessPolicy, ensure_permission
from application.exceptions import AuthorizationDeniedError, RateLimitExceededError
from application.use_cases import (
    ExerciseService,
    IdentityClaims,
    SetService,
    UserService,
    WorkoutExerciseService,
    WorkoutSessionService,
)
from domain.clock import Clock, SystemClock
from domain.models import SetKind

# Concrete implementations
from infrastructure import (
    SqlAlchemyExerciseRepository,
    SqlAlchemyUserRepository,
    SqlAlchemyWorkoutExerciseRepository,
    SqlAlchemyWorkoutSessionRepository,
    build_set_repositories,
)
from infrastructure.db import set_actor

from backend.auth import get_current_identity
from backend.database import get_db_session
from backend.rate_limit import KeyType, RateLimiter, RateLimitRule, build_key, get_rate_limiter
from backend.settings import Settings, get_settings as _get_settings


# =============================================================================
# Settings / Clock Providers
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    """
    return _get_settings()


def get_clock() -> Clock:
    """Wall clock used for timestamps and date rules; overridden in tests."""
    return SystemClock()


# =============================================================================
# Repository Providers
# =============================================================================


def get_user_repo(
    db: Session = Depends(get_db_session),
    clock: Clock = Depends(get_clock),
) -> UserRepository:
    return SqlAlchemyUserRepository(db, clock)


def get_exercise_repo(
    db: Session = Depends(get_db_session),
    clock: Clock = Depends(get_clock),
) -> ExerciseRepository:
    return SqlAlchemyExerciseRepository(db, clock)


def get_session_repo(
    db: Session = Depends(get_db_session),
    clock: Clock = Depends(get_clock),
) -> WorkoutSessionRepository:
    return SqlAlchemyWorkoutSessionRepository(db, clock)


def get_workout_exercise_repo(
    db: Session = Depends(get_db_session),
    clock: Clock = Depends(get_clock),
) -> WorkoutExerciseRepository:
    return SqlAlchemyWorkoutExerciseRepository(db, clock)


def get_set_repos(
    db: Session = Depends(get_db_session),
    clock: Clock = Depends(get_clock),
) -> Dict[SetKind, SetRepository]:
    """
    One repository per set kind.

    Returns:
        Dict keyed by SetKind (strength, cardio, flexibility)
    """
    return build_set_repositories(db, clock)


def get_access_policy(
    sessions: WorkoutSessionRepository = Depends(get_session_repo),
    workout_exercises: WorkoutExerciseRepository = Depends(get_workout_exercise_repo),
    sets: Dict[SetKind, SetRepository] = Depends(get_set_repos),
) -> ResourceAccessPolicy:
    return ResourceAccessPolicy(sessions, workout_exercises, sets)


# =============================================================================
# Service Providers
# =============================================================================


def get_user_service(
    users: UserRepository = Depends(get_user_repo),
    sessions: WorkoutSessionRepository = Depends(get_session_repo),
) -> UserService:
    return UserService(users, sessions)


def get_exercise_service(
    exercises: ExerciseRepository = Depends(get_exercise_repo),
) -> ExerciseService:
    return ExerciseService(exercises)


def get_session_service(
    sessions: WorkoutSessionRepository = Depends(get_session_repo),
    workout_exercises: WorkoutExerciseRepository = Depends(get_workout_exercise_repo),
    exercises: ExerciseRepository = Depends(get_exercise_repo),
    sets: Dict[SetKind, SetRepository] = Depends(get_set_repos),
    policy: ResourceAccessPolicy = Depends(get_access_policy),
    clock: Clock = Depends(get_clock),
) -> WorkoutSessionService:
    return WorkoutSessionService(sessions, workout_exercises, exercises, sets, policy, clock)


def get_workout_exercise_service(
    sessions: WorkoutSessionRepository = Depends(get_session_repo),
    workout_exercises: WorkoutExerciseRepository = Depends(get_workout_exercise_repo),
    exercises: ExerciseRepository = Depends(get_exercise_repo),
    sets: Dict[SetKind, SetRepository] = Depends(get_set_repos),
    policy: ResourceAccessPolicy = Depends(get_access_policy),
) -> WorkoutExerciseService:
    return WorkoutExerciseService(sessions, workout_exercises, exercises, sets, policy)


def get_set_service(
    workout_exercises: WorkoutExerciseRepository = Depends(get_workout_exercise_repo),
    sets: Dict[SetKind, SetRepository] = Depends(get_set_repos),
    policy: ResourceAccessPolicy = Depends(get_access_policy),
) -> SetService:
    return SetService(workout_exercises, sets, policy)


# =============================================================================
# Authentication Providers
# =============================================================================


def get_current_principal(
    identity: IdentityClaims = Depends(get_current_identity),
    users: UserService = Depends(get_user_service),
    db: Session = Depends(get_db_session),
) -> Principal:
    """
    Get the authenticated caller.

    Verifies the bearer token, creates or refreshes the local user record and
    tags the request's database session with the subject for audit columns.

    Returns:
        Principal: Caller with local user id, role and granted permissions

    Raises:
        HTTPException: 401 if the token is missing or invalid
        AuthorizationDeniedError: 403 if the email is unverified or the account
            is deactivated
    """
    user = users.sync_from_identity(identity)
    set_actor(db, identity.subject)
    return Principal(
        subject=identity.subject,
        user_id=user.id,
        email=user.email,
        role=user.role,
        permissions=identity.permissions,
    )


def require_permissions(*permissions: str) -> Callable[..., Principal]:
    """
    Dependency factory gating an endpoint on token scopes.

    Usage:
        @router.get("/exercises")
        def list_exercises(principal: Principal = Depends(require_permissions(READ_EXERCISES))):
            ...
    """

    def dependency(principal: Principal = Depends(get_current_principal)) -> Principal:
        for permission in permissions:
            ensure_permission(principal, permission)
        return principal

    return dependency


def require_admin(principal: Principal = Depends(get_current_principal)) -> Principal:
    """Allow only administrators (ADMIN role or read:users scope)."""
    if not principal.is_admin:
        raise AuthorizationDeniedError()
    return principal


# =============================================================================
# Rate Limiting
# =============================================================================


def get_limiter() -> RateLimiter:
    return get_rate_limiter()


def _consume(limiter: RateLimiter, rule: RateLimitRule, key: str) -> None:
    allowed, retry_after = limiter.check_rate_limit(rule, key)
    if not allowed:
        raise RateLimitExceededError(retry_after_seconds=retry_after)


def rate_limit(rule: RateLimitRule) -> Callable[..., None]:
    """
    Dependency factory enforcing ``rule`` before the endpoint runs.

    User-keyed rules authenticate first so the bucket follows the subject;
    IP and global rules work for anonymous callers.

    Raises:
        RateLimitExceededError: 429 once the bucket is empty
    """
    if rule.key_type == KeyType.USER:

        def user_dependency(
            request: Request,
            principal: Principal = Depends(get_current_principal),
            settings: Settings = Depends(get_settings),
            limiter: RateLimiter = Depends(get_limiter),
        ) -> None:
            if settings.rate_limit_enabled:
                _consume(limiter, rule, build_key(rule, request, principal.subject))

        return user_dependency

    def anonymous_dependency(
        request: Request,
        settings: Settings = Depends(get_settings),
        limiter: RateLimiter = Depends(get_limiter),
    ) -> None:
        if settings.rate_limit_enabled:
            _consume(limiter, rule, build_key(rule, request))

    return anonymous_dependency


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Settings / clock
    "get_settings",
    "get_clock",
    # Database
    "get_db_session",
    # Repositories
    "get_user_repo",
    "get_exercise_repo",
    "get_session_repo",
    "get_workout_exercise_repo",
    "get_set_repos",
    "get_access_policy",
    # Services
    "get_user_service",
    "get_exercise_service",
    "get_session_service",
    "get_workout_exercise_service",
    "get_set_service",
    # Authentication
    "get_current_principal",
    "require_permissions",
    "require_admin",
    # Rate limiting
    "get_limiter",
    "rate_limit",
]
