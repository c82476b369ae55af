"""
Domain models for the workout tracker.

These models are independent of infrastructure concerns (database, API):
- enums: roles, exercise classification, workout status, set kinds
- sets: the StrengthSet | CardioSet | FlexibilitySet tagged union

Usage:
    >>> from domain.models import StrengthSet, SetKind
    >>> StrengthSet(set_number=1, reps=10).kind == SetKind.STRENGTH.value
    True
"""

from domain.models.enums import (
    DifficultyLevel,
    ExerciseType,
    SetKind,
    TargetMuscleGroup,
    UserRole,
    WorkoutStatus,
)
from domain.models.sets import (
    SET_MODELS,
    CardioSet,
    FlexibilitySet,
    StrengthSet,
    WorkoutSet,
)

__all__ = [
    # Enums
    "DifficultyLevel",
    "ExerciseType",
    "SetKind",
    "TargetMuscleGroup",
    "UserRole",
    "WorkoutStatus",
    # Set variants
    "SET_MODELS",
    "CardioSet",
    "FlexibilitySet",
    "StrengthSet",
    "WorkoutSet",
]
