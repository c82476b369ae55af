"""
Workout session status state machine.

    PLANNED --start--> IN_PROGRESS --pause--> PAUSED
                        IN_PROGRESS <--resume-- PAUSED
                        IN_PROGRESS --complete--> COMPLETED
    {PLANNED, IN_PROGRESS, PAUSED} --cancel--> CANCELLED

COMPLETED and CANCELLED are terminal.
"""
from enum import Enum

from domain.exceptions import InvalidStatusTransitionError
from domain.models.enums import WorkoutStatus


class WorkoutAction(str, Enum):
    """Client-facing actions that drive status transitions."""

    START = "start"
    PAUSE = "pause"
    RESUME = "resume"
    COMPLETE = "complete"
    CANCEL = "cancel"


TRANSITIONS: dict[tuple[WorkoutStatus, WorkoutAction], WorkoutStatus] = {
    (WorkoutStatus.PLANNED, WorkoutAction.START): WorkoutStatus.IN_PROGRESS,
    (WorkoutStatus.IN_PROGRESS, WorkoutAction.PAUSE): WorkoutStatus.PAUSED,
    (WorkoutStatus.PAUSED, WorkoutAction.RESUME): WorkoutStatus.IN_PROGRESS,
    (WorkoutStatus.IN_PROGRESS, WorkoutAction.COMPLETE): WorkoutStatus.COMPLETED,
    (WorkoutStatus.PLANNED, WorkoutAction.CANCEL): WorkoutStatus.CANCELLED,
    (WorkoutStatus.IN_PROGRESS, WorkoutAction.CANCEL): WorkoutStatus.CANCELLED,
    (WorkoutStatus.PAUSED, WorkoutAction.CANCEL): WorkoutStatus.CANCELLED,
}

TERMINAL_STATUSES = frozenset({WorkoutStatus.COMPLETED, WorkoutStatus.CANCELLED})


def next_status(current: WorkoutStatus, action: WorkoutAction) -> WorkoutStatus:
    """
    Resolve the status reached by applying ``action`` in state ``current``.

    Args:
        current: Current session status
        action: Requested action

    Returns:
        The target status

    Raises:
        InvalidStatusTransitionError: If the pair is not in the transition table
    """
    current = WorkoutStatus(current)
    action = WorkoutAction(action)
    try:
        return TRANSITIONS[(current, action)]
    except KeyError:
        raise InvalidStatusTransitionError(action.value, current.value) from None


def allowed_actions(current: WorkoutStatus) -> list[WorkoutAction]:
    """Actions accepted from ``current``, in declaration order."""
    return [action for (state, action) in TRANSITIONS if state == current]
