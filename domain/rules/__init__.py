"""
Business rules that span more than one field or entity.

- workout_status: status transition table for workout sessions
- workout_dates: start/completion timestamp consistency
- set_composition: set kinds must match the exercise type
"""

from domain.rules.set_composition import (
    is_set_composition_valid,
    validate_set_composition,
    validate_set_kind,
)
from domain.rules.workout_dates import duration_in_minutes, validate_workout_dates
from domain.rules.workout_status import (
    TERMINAL_STATUSES,
    TRANSITIONS,
    WorkoutAction,
    allowed_actions,
    next_status,
)

__all__ = [
    "is_set_composition_valid",
    "validate_set_composition",
    "validate_set_kind",
    "duration_in_minutes",
    "validate_workout_dates",
    "TERMINAL_STATUSES",
    "TRANSITIONS",
    "WorkoutAction",
    "allowed_actions",
    "next_status",
]
