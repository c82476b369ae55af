"""Temporal consistency of a workout session's start and completion times."""
from datetime import datetime
from typing import Optional

from domain.clock import Clock, to_utc
from domain.exceptions import WorkoutDateError


def validate_workout_dates(
    started_at: Optional[datetime],
    completed_at: Optional[datetime],
    clock: Clock,
) -> None:
    """
    Check that a session did not start or finish in the future and did not
    finish before it started.

    Raises:
        WorkoutDateError: On the first inconsistency found
    """
    now = clock.now()
    started_at = to_utc(started_at)
    completed_at = to_utc(completed_at)

    if started_at is not None and started_at > now:
        raise WorkoutDateError(
            "Workout session cannot start in the future", field="started_at"
        )
    if completed_at is not None:
        if started_at is not None and completed_at < started_at:
            raise WorkoutDateError(
                "Workout session cannot be completed before it starts",
                field="completed_at",
            )
        if completed_at > now:
            raise WorkoutDateError(
                "Workout session cannot be completed in the future",
                field="completed_at",
            )


def duration_in_minutes(started_at: datetime, completed_at: datetime) -> int:
    """Whole minutes between start and completion, at least 1."""
    seconds = (to_utc(completed_at) - to_utc(started_at)).total_seconds()
    return max(1, int(seconds // 60))
