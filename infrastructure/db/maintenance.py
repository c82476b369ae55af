"""
Administrative data removal: retention purge and compliance hard-delete.

Not reachable from the HTTP API. Children of a removed row are removed with
it so no orphaned workout exercises or sets remain.
"""
import logging
from collections import Counter
from datetime import timedelta
from typing import Dict, Optional

from sqlalchemy import delete, false, or_, select
from sqlalchemy.orm import Session

from application.exceptions import NotFoundError
from domain.clock import Clock, SystemClock
from infrastructure.db.models import User, WorkoutExercise, WorkoutSession
from infrastructure.db.set_repository import build_set_repositories
from infrastructure.db.soft_delete_repository import SqlAlchemySoftDeleteRepository
from infrastructure.db.user_repository import SqlAlchemyUserRepository
from infrastructure.db.workout_repository import (
    SqlAlchemyWorkoutExerciseRepository,
    SqlAlchemyWorkoutSessionRepository,
)

logger = logging.getLogger(__name__)


def _bulk_delete(session: Session, model, condition) -> int:
    result = session.execute(
        delete(model).where(condition).execution_options(synchronize_session="fetch")
    )
    return result.rowcount or 0


def _delete_children(session: Session, session_filter, exercise_filter) -> Counter:
    """Remove workout exercises (and their sets) under the selected parents."""
    removed: Counter = Counter()
    exercise_ids = select(WorkoutExercise.id).where(
        or_(
            WorkoutExercise.workout_session_id.in_(
                select(WorkoutSession.id).where(session_filter)
            ),
            exercise_filter,
        )
    )
    for kind, repo in build_set_repositories(session).items():
        removed[f"{kind.value}_sets"] += _bulk_delete(
            session, repo.model, repo.model.workout_exercise_id.in_(exercise_ids)
        )
    removed["workout_exercises"] += _bulk_delete(
        session, WorkoutExercise, WorkoutExercise.id.in_(exercise_ids)
    )
    return removed


def purge_soft_deleted(
    session: Session,
    days: int,
    clock: Optional[Clock] = None,
    dry_run: bool = False,
) -> Dict[str, int]:
    """
    Permanently remove rows soft-deleted more than ``days`` days ago.

    Args:
        session: Session to run in; the caller commits
        days: Retention threshold in days
        clock: Time source for the cutoff
        dry_run: Only count expired rows, remove nothing

    Returns:
        Mapping of table name to number of rows removed. A dry run counts
        expired rows only, not the active children that would go with them.
    """
    clock = clock or SystemClock()
    cutoff = clock.now() - timedelta(days=days)

    set_repos = build_set_repositories(session, clock)
    # Leaf tables first so parents never leave dangling references
    ordered: list[tuple[str, SqlAlchemySoftDeleteRepository]] = [
        *((f"{kind.value}_sets", repo) for kind, repo in set_repos.items()),
        ("workout_exercises", SqlAlchemyWorkoutExerciseRepository(session, clock)),
        ("workout_sessions", SqlAlchemyWorkoutSessionRepository(session, clock)),
        ("users", SqlAlchemyUserRepository(session, clock)),
    ]

    if dry_run:
        return {
            name: sum(1 for row in repo.find_all_deleted() if row.deleted_at < cutoff)
            for name, repo in ordered
        }

    expired_users = select(User.id).where(User.deleted.is_(True), User.deleted_at < cutoff)
    expired_sessions = WorkoutSession.deleted.is_(True) & (WorkoutSession.deleted_at < cutoff)
    removed = _delete_children(
        session,
        or_(expired_sessions, WorkoutSession.user_id.in_(expired_users)),
        WorkoutExercise.deleted.is_(True) & (WorkoutExercise.deleted_at < cutoff),
    )
    removed["workout_sessions"] += _bulk_delete(
        session, WorkoutSession, WorkoutSession.user_id.in_(expired_users)
    )

    for name, repo in ordered:
        removed[name] += repo.permanently_delete_older_than(days)

    counts = {name: removed[name] for name, _ in ordered}
    logger.info(f"Retention purge ({days} days) removed: {counts}")
    return counts


def hard_delete_user(session: Session, user_id: int) -> None:
    """
    Irreversibly remove a user and every workout they own.

    Raises:
        NotFoundError: If no user row exists, deleted or not
    """
    users = SqlAlchemyUserRepository(session)
    if users.find_by_id_including_deleted(user_id) is None:
        raise NotFoundError("User", "id", user_id)

    owned = WorkoutSession.user_id == user_id
    _delete_children(session, owned, false())
    _bulk_delete(session, WorkoutSession, owned)
    users.hard_delete_by_id(user_id)
    logger.warning(f"Hard-deleted user {user_id} and all owned workouts")
