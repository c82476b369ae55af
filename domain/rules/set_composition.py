"""
Type consistency between a workout exercise and its sets.

A workout exercise is consistent when exactly one of its three set
collections is non-empty and that collection's kind matches the exercise
type. A workout exercise with no sets at all is accepted unless
``require_sets`` is set, so exercises can be added to a plan before any set
is logged.
"""
from domain.exceptions import SetTypeMismatchError
from domain.models.enums import ExerciseType, SetKind


def is_set_composition_valid(
    exercise_type: ExerciseType,
    strength_count: int,
    cardio_count: int,
    flexibility_count: int,
    require_sets: bool = True,
) -> bool:
    counts = {
        SetKind.STRENGTH: strength_count,
        SetKind.CARDIO: cardio_count,
        SetKind.FLEXIBILITY: flexibility_count,
    }
    populated = [kind for kind, count in counts.items() if count > 0]
    if not populated:
        return not require_sets
    if len(populated) > 1:
        return False
    return populated[0] == SetKind.for_exercise_type(exercise_type)


def validate_set_composition(
    exercise_type: ExerciseType,
    strength_count: int,
    cardio_count: int,
    flexibility_count: int,
    require_sets: bool = True,
) -> None:
    """
    Raise if the set collections are not homogeneous with the exercise type.

    Raises:
        SetTypeMismatchError: If the composition is invalid
    """
    if not is_set_composition_valid(
        exercise_type, strength_count, cardio_count, flexibility_count, require_sets
    ):
        expected = SetKind.for_exercise_type(exercise_type)
        raise SetTypeMismatchError(
            f"A {ExerciseType(exercise_type).value} exercise must have only "
            f"{expected.value} sets",
            field="sets",
        )


def validate_set_kind(exercise_type: ExerciseType, kind: SetKind) -> None:
    """Reject adding a set whose kind does not match the exercise type."""
    expected = SetKind.for_exercise_type(exercise_type)
    if SetKind(kind) != expected:
        raise SetTypeMismatchError(
            f"Cannot add {SetKind(kind).value} sets to a "
            f"{ExerciseType(exercise_type).value} exercise",
            field="kind",
        )
