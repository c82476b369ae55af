"""
Domain rule violations.

These are raised by the pure rules in ``domain.rules`` and surface to API
clients as 400 responses. They carry an optional ``field`` so the error
envelope can attribute the violation to a request attribute.
"""
from typing import Optional


class BusinessRuleError(Exception):
    """A cross-field or lifecycle rule was violated."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class InvalidStatusTransitionError(BusinessRuleError):
    """A workout action is not allowed from the session's current status."""

    def __init__(self, action: str, current_status: str):
        super().__init__(
            f"Cannot {action} a workout session that is {current_status}",
            field="action",
        )
        self.action = action
        self.current_status = current_status


class SetTypeMismatchError(BusinessRuleError):
    """Sets attached to a workout exercise do not match its exercise type."""

    pass


class WorkoutDateError(BusinessRuleError):
    """Workout start/completion timestamps are inconsistent."""

    pass
