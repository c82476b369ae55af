"""
Enumerations shared by the workout tracker domain.

Values are stored verbatim in the database and exchanged over the API,
so renaming a member is a breaking change.
"""

from enum import Enum


class UserRole(str, Enum):
    """Role assigned to a user account."""

    USER = "USER"
    ADMIN = "ADMIN"


class ExerciseType(str, Enum):
    """Kind of work an exercise prescribes; decides which set kind it accepts."""

    STRENGTH = "STRENGTH"
    CARDIO = "CARDIO"
    FLEXIBILITY = "FLEXIBILITY"


class TargetMuscleGroup(str, Enum):
    """Primary muscle group targeted by an exercise."""

    CHEST = "CHEST"
    BACK = "BACK"
    LEGS = "LEGS"
    ARMS = "ARMS"
    SHOULDERS = "SHOULDERS"
    CORE = "CORE"
    GLUTES = "GLUTES"
    CALVES = "CALVES"
    BICEPS = "BICEPS"
    TRICEPS = "TRICEPS"
    FOREARMS = "FOREARMS"
    HAMSTRINGS = "HAMSTRINGS"
    QUADRICEPS = "QUADRICEPS"
    FULL_BODY = "FULL_BODY"


class DifficultyLevel(str, Enum):
    """How demanding an exercise is."""

    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"


class WorkoutStatus(str, Enum):
    """Lifecycle state of a workout session."""

    PLANNED = "PLANNED"
    IN_PROGRESS = "IN_PROGRESS"
    PAUSED = "PAUSED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class SetKind(str, Enum):
    """Discriminator for the three set variants."""

    STRENGTH = "strength"
    CARDIO = "cardio"
    FLEXIBILITY = "flexibility"

    @property
    def exercise_type(self) -> ExerciseType:
        """Exercise type this set kind belongs to."""
        return ExerciseType(self.value.upper())

    @classmethod
    def for_exercise_type(cls, exercise_type: ExerciseType) -> "SetKind":
        return cls(ExerciseType(exercise_type).value.lower())
