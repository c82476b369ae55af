"""
Shared fixtures: in-memory database, pinned clock, principals and an app
wired to both through dependency overrides.
"""
from datetime import datetime
from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from api.deps import get_clock, get_current_principal, get_db_session
from application.authorization import (
    DELETE_EXERCISES,
    DELETE_USERS,
    DELETE_WORKOUTS,
    READ_EXERCISES,
    READ_USERS,
    READ_WORKOUTS,
    WRITE_EXERCISES,
    WRITE_WORKOUTS,
    Principal,
)
from backend.database import build_engine
from backend.main import create_app
from backend.rate_limit import get_rate_limiter
from backend.settings import Settings
from domain.clock import FixedClock
from domain.models import (
    DifficultyLevel,
    ExerciseType,
    TargetMuscleGroup,
    UserRole,
)
from infrastructure.db import Base, Exercise, User

NOW = datetime(2026, 3, 1, 12, 0, 0)

USER_PERMISSIONS = frozenset(
    {
        READ_WORKOUTS,
        WRITE_WORKOUTS,
        DELETE_WORKOUTS,
        READ_EXERCISES,
        WRITE_EXERCISES,
        DELETE_EXERCISES,
    }
)
ADMIN_PERMISSIONS = USER_PERMISSIONS | {READ_USERS, DELETE_USERS}


# =============================================================================
# Database
# =============================================================================


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory) -> Iterator[Session]:
    """Session for direct repository tests; the test decides when to commit."""
    session = session_factory()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


# =============================================================================
# Seed data
# =============================================================================


def _add_user(session: Session, subject: str, username: str, role: UserRole) -> User:
    user = User(
        auth0_user_id=subject,
        username=username,
        email=f"{username}@example.com",
        first_name=username.capitalize(),
        last_name="Tester",
        role=role,
    )
    session.add(user)
    session.flush()
    return user


@pytest.fixture
def seeded(session_factory):
    """Three users and one exercise of each type, committed."""
    with session_factory() as session:
        with session.begin():
            owner = _add_user(session, "auth0|owner", "owner", UserRole.USER)
            other = _add_user(session, "auth0|other", "other", UserRole.USER)
            admin = _add_user(session, "auth0|admin", "admin", UserRole.ADMIN)
            exercises = {}
            for name, exercise_type, muscle in (
                ("Bench Press", ExerciseType.STRENGTH, TargetMuscleGroup.CHEST),
                ("Running", ExerciseType.CARDIO, TargetMuscleGroup.LEGS),
                ("Hamstring Stretch", ExerciseType.FLEXIBILITY, TargetMuscleGroup.HAMSTRINGS),
            ):
                exercise = Exercise(
                    name=name,
                    type=exercise_type,
                    target_muscle_group=muscle,
                    difficulty_level=DifficultyLevel.BEGINNER,
                )
                session.add(exercise)
                session.flush()
                exercises[exercise_type] = exercise.id
            ids = {"owner": owner.id, "other": other.id, "admin": admin.id}
    return {"users": ids, "exercises": exercises}


@pytest.fixture
def principals(seeded):
    users = seeded["users"]
    return {
        "owner": Principal(
            subject="auth0|owner",
            user_id=users["owner"],
            email="owner@example.com",
            permissions=USER_PERMISSIONS,
        ),
        "other": Principal(
            subject="auth0|other",
            user_id=users["other"],
            email="other@example.com",
            permissions=USER_PERMISSIONS,
        ),
        "admin": Principal(
            subject="auth0|admin",
            user_id=users["admin"],
            email="admin@example.com",
            role=UserRole.ADMIN,
            permissions=ADMIN_PERMISSIONS,
        ),
    }


# =============================================================================
# Application
# =============================================================================


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    get_rate_limiter().reset()
    yield
    get_rate_limiter().reset()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(environment="test", seed_exercises=False, _env_file=None)


@pytest.fixture
def app(test_settings, session_factory, clock):
    app = create_app(settings=test_settings)

    def override_db():
        session = session_factory()
        try:
            yield session
            session.commit()
        except BaseException:
            session.rollback()
            raise
        finally:
            session.close()

    app.dependency_overrides[get_db_session] = override_db
    app.dependency_overrides[get_clock] = lambda: clock
    yield app
    app.dependency_overrides.clear()


class AuthenticatedClient:
    """TestClient whose caller can be switched between principals."""

    def __init__(self, app, principals):
        self._app = app
        self._principals = principals
        self.http = TestClient(app, raise_server_exceptions=False)
        self.act_as("owner")

    def act_as(self, name: str) -> Principal:
        principal = self._principals[name]
        self._app.dependency_overrides[get_current_principal] = lambda: principal
        return principal

    def __getattr__(self, name):
        return getattr(self.http, name)


@pytest.fixture
def client(app, principals) -> AuthenticatedClient:
    """Client acting as the workout owner until ``act_as`` switches it."""
    return AuthenticatedClient(app, principals)


@pytest.fixture
def anonymous_client(app) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)
