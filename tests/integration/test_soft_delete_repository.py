"""
Integration tests for the SQLAlchemy soft-delete repositories against an
in-memory SQLite database.
"""
from datetime import timedelta

import pytest

from application.exceptions import NotFoundError, OptimisticLockConflictError
from domain.models import UserRole, WorkoutStatus
from infrastructure.db import (
    SqlAlchemyUserRepository,
    SqlAlchemyWorkoutSessionRepository,
    User,
)


def _user(repo: SqlAlchemyUserRepository, name: str) -> User:
    return repo.create(
        auth0_user_id=f"auth0|{name}",
        username=name,
        email=f"{name}@example.com",
        first_name=name.capitalize(),
        role=UserRole.USER,
    )


@pytest.fixture
def users(db_session, clock):
    return SqlAlchemyUserRepository(db_session, clock)


@pytest.fixture
def sessions(db_session, clock):
    return SqlAlchemySoftDeleteFixtures(db_session, clock)


class SqlAlchemySoftDeleteFixtures:
    """Workout sessions for a single owner."""

    def __init__(self, db_session, clock):
        self.repo = SqlAlchemyWorkoutSessionRepository(db_session, clock)
        self.owner = SqlAlchemyUserRepository(db_session, clock).create(
            auth0_user_id="auth0|owner",
            username="owner",
            email="owner@example.com",
            role=UserRole.USER,
        )

    def add(self, name: str):
        return self.repo.create(user_id=self.owner.id, name=name, status=WorkoutStatus.PLANNED)


@pytest.mark.integration
class TestSoftDeleteVisibility:
    """A soft-deleted row disappears from every standard read."""

    def test_deleted_row_hidden_from_standard_reads(self, users):
        alice = _user(users, "alice")
        assert users.soft_delete_by_id(alice.id) is True

        assert users.find_by_id(alice.id) is None
        assert users.exists_by_id(alice.id) is False
        assert users.find_by_username("alice") is None
        assert users.find_by_email("alice@example.com") is None
        assert users.find_by_auth0_user_id("auth0|alice") is None
        assert alice not in users.find_all()
        assert users.count() == 0

    def test_deleted_row_visible_through_explicit_reads(self, users, clock):
        alice = _user(users, "alice")
        users.soft_delete_by_id(alice.id)

        found = users.find_by_id_including_deleted(alice.id)
        assert found is not None
        assert found.deleted is True
        assert found.deleted_at == clock.now()
        assert users.find_all_deleted() == [found]
        assert users.count_deleted() == 1
        assert users.count_including_deleted() == 1
        assert users.find_by_auth0_user_id_including_deleted("auth0|alice") is found

    def test_get_by_id_raises_for_deleted(self, users):
        alice = _user(users, "alice")
        users.soft_delete_by_id(alice.id)
        with pytest.raises(NotFoundError) as exc_info:
            users.get_by_id(alice.id)
        assert exc_info.value.message == f"User not found with id: {alice.id}"

    def test_soft_delete_is_idempotent(self, users, clock):
        alice = _user(users, "alice")
        assert users.soft_delete_by_id(alice.id) is True
        first_deleted_at = users.find_by_id_including_deleted(alice.id).deleted_at

        clock.advance(hours=1)
        assert users.soft_delete_by_id(alice.id) is False
        assert users.find_by_id_including_deleted(alice.id).deleted_at == first_deleted_at

    def test_soft_delete_missing_row_raises(self, users):
        with pytest.raises(NotFoundError):
            users.soft_delete_by_id(999)

    def test_restore_reactivates(self, users):
        alice = _user(users, "alice")
        users.soft_delete_by_id(alice.id)

        assert users.restore_by_id(alice.id) is True
        restored = users.find_by_id(alice.id)
        assert restored is not None
        assert restored.deleted is False
        assert restored.deleted_at is None
        assert restored.is_active is True

    def test_restore_active_row_is_noop(self, users):
        alice = _user(users, "alice")
        assert users.restore_by_id(alice.id) is False

    def test_hard_delete_removes_row(self, users):
        alice = _user(users, "alice")
        assert users.hard_delete_by_id(alice.id) is True
        assert users.find_by_id_including_deleted(alice.id) is None
        assert users.hard_delete_by_id(alice.id) is False


@pytest.mark.integration
class TestPagination:
    """Totals count active rows only."""

    def test_page_totals_exclude_deleted(self, sessions):
        created = [sessions.add(f"Workout {i}") for i in range(7)]
        for session in created[:2]:
            sessions.repo.soft_delete_by_id(session.id)

        page = sessions.repo.find_page(page=0, size=3)
        assert page.total == 5
        assert page.total_pages == 2
        assert page.has_next is True
        assert len(page.items) == 3
        assert all(not item.deleted for item in page.items)

        last = sessions.repo.find_page(page=1, size=3)
        assert len(last.items) == 2
        assert last.has_next is False

    def test_find_by_user_excludes_deleted(self, sessions):
        kept = sessions.add("Kept")
        dropped = sessions.add("Dropped")
        sessions.repo.soft_delete_by_id(dropped.id)
        assert [s.id for s in sessions.repo.find_by_user(sessions.owner.id)] == [kept.id]

    def test_owner_lookup_ignores_deleted_session(self, sessions):
        session = sessions.add("Leg day")
        assert sessions.repo.find_owner_id(session.id) == sessions.owner.id
        sessions.repo.soft_delete_by_id(session.id)
        assert sessions.repo.find_owner_id(session.id) is None


@pytest.mark.integration
class TestRetentionPurge:
    def test_purges_only_rows_deleted_before_cutoff(self, users, clock):
        old = _user(users, "old")
        recent = _user(users, "recent")
        active = _user(users, "active")

        users.soft_delete_by_id(old.id)
        clock.advance(days=20)
        users.soft_delete_by_id(recent.id)
        clock.advance(days=15)

        assert users.permanently_delete_older_than(30) == 1
        assert users.find_by_id_including_deleted(old.id) is None
        assert users.find_by_id_including_deleted(recent.id) is not None
        assert users.find_by_id(active.id) is not None

    def test_negative_days_rejected(self, users):
        with pytest.raises(ValueError):
            users.permanently_delete_older_than(-1)


@pytest.mark.integration
class TestVersioning:
    def test_version_increments_on_update(self, users):
        alice = _user(users, "alice")
        assert alice.version == 1
        alice.first_name = "Alicia"
        users.save(alice)
        assert alice.version == 2

    def test_concurrent_update_raises_conflict(self, users, session_factory, db_session):
        alice = _user(users, "alice")
        db_session.commit()

        with session_factory() as other:
            with other.begin():
                copy = other.get(User, alice.id)
                copy.first_name = "Changed elsewhere"

        alice.first_name = "Stale write"
        with pytest.raises(OptimisticLockConflictError) as exc_info:
            users.save(alice)
        assert exc_info.value.expected_version == 1
        assert exc_info.value.current_version == 2
