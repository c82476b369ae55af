"""
Unit tests for the workout status state machine and date rules.
"""
from datetime import datetime, timedelta, timezone

import pytest

from domain.clock import FixedClock
from domain.exceptions import InvalidStatusTransitionError, WorkoutDateError
from domain.models import WorkoutStatus
from domain.rules import (
    TERMINAL_STATUSES,
    WorkoutAction,
    allowed_actions,
    duration_in_minutes,
    next_status,
    validate_workout_dates,
)

NOW = datetime(2026, 3, 1, 12, 0, 0)


@pytest.mark.unit
class TestStatusTransitions:
    """Every (status, action) pair either maps to a target or is rejected."""

    @pytest.mark.parametrize(
        "current,action,expected",
        [
            (WorkoutStatus.PLANNED, WorkoutAction.START, WorkoutStatus.IN_PROGRESS),
            (WorkoutStatus.IN_PROGRESS, WorkoutAction.PAUSE, WorkoutStatus.PAUSED),
            (WorkoutStatus.PAUSED, WorkoutAction.RESUME, WorkoutStatus.IN_PROGRESS),
            (WorkoutStatus.IN_PROGRESS, WorkoutAction.COMPLETE, WorkoutStatus.COMPLETED),
            (WorkoutStatus.PLANNED, WorkoutAction.CANCEL, WorkoutStatus.CANCELLED),
            (WorkoutStatus.IN_PROGRESS, WorkoutAction.CANCEL, WorkoutStatus.CANCELLED),
            (WorkoutStatus.PAUSED, WorkoutAction.CANCEL, WorkoutStatus.CANCELLED),
        ],
    )
    def test_allowed_transition(self, current, action, expected):
        assert next_status(current, action) == expected

    @pytest.mark.parametrize(
        "current,action",
        [
            (WorkoutStatus.PLANNED, WorkoutAction.PAUSE),
            (WorkoutStatus.PLANNED, WorkoutAction.RESUME),
            (WorkoutStatus.PLANNED, WorkoutAction.COMPLETE),
            (WorkoutStatus.IN_PROGRESS, WorkoutAction.START),
            (WorkoutStatus.IN_PROGRESS, WorkoutAction.RESUME),
            (WorkoutStatus.PAUSED, WorkoutAction.START),
            (WorkoutStatus.PAUSED, WorkoutAction.PAUSE),
            (WorkoutStatus.PAUSED, WorkoutAction.COMPLETE),
        ],
    )
    def test_rejected_transition(self, current, action):
        with pytest.raises(InvalidStatusTransitionError):
            next_status(current, action)

    @pytest.mark.parametrize("terminal", sorted(TERMINAL_STATUSES, key=lambda s: s.value))
    def test_terminal_states_accept_no_action(self, terminal):
        """COMPLETED and CANCELLED never transition."""
        assert allowed_actions(terminal) == []
        for action in WorkoutAction:
            with pytest.raises(InvalidStatusTransitionError):
                next_status(terminal, action)

    def test_rejection_message_names_action_and_status(self):
        with pytest.raises(InvalidStatusTransitionError) as exc_info:
            next_status(WorkoutStatus.COMPLETED, WorkoutAction.START)
        assert exc_info.value.message == "Cannot start a workout session that is COMPLETED"
        assert exc_info.value.field == "action"

    def test_accepts_raw_string_values(self):
        assert next_status("PLANNED", "start") == WorkoutStatus.IN_PROGRESS

    def test_allowed_actions_from_in_progress(self):
        assert set(allowed_actions(WorkoutStatus.IN_PROGRESS)) == {
            WorkoutAction.PAUSE,
            WorkoutAction.COMPLETE,
            WorkoutAction.CANCEL,
        }


@pytest.mark.unit
class TestWorkoutDates:
    """Start and completion times relative to each other and to now."""

    def setup_method(self):
        self.clock = FixedClock(NOW)

    def test_no_timestamps_is_valid(self):
        validate_workout_dates(None, None, self.clock)

    def test_past_start_and_completion_is_valid(self):
        validate_workout_dates(NOW - timedelta(hours=2), NOW - timedelta(hours=1), self.clock)

    def test_completion_equal_to_now_is_valid(self):
        validate_workout_dates(NOW - timedelta(minutes=30), NOW, self.clock)

    def test_start_in_future_rejected(self):
        with pytest.raises(WorkoutDateError) as exc_info:
            validate_workout_dates(NOW + timedelta(minutes=1), None, self.clock)
        assert exc_info.value.field == "started_at"
        assert exc_info.value.message == "Workout session cannot start in the future"

    def test_completion_before_start_rejected(self):
        with pytest.raises(WorkoutDateError) as exc_info:
            validate_workout_dates(NOW - timedelta(hours=1), NOW - timedelta(hours=2), self.clock)
        assert exc_info.value.message == "Workout session cannot be completed before it starts"

    def test_completion_in_future_rejected(self):
        with pytest.raises(WorkoutDateError) as exc_info:
            validate_workout_dates(None, NOW + timedelta(seconds=1), self.clock)
        assert exc_info.value.message == "Workout session cannot be completed in the future"

    def test_aware_timestamps_are_compared_in_utc(self):
        """10:00 at UTC+01:00 is 09:00 UTC, which is in the past."""
        plus_one = timezone(timedelta(hours=1))
        started = datetime(2026, 3, 1, 10, 0, tzinfo=plus_one)
        validate_workout_dates(started, None, self.clock)

    def test_duration_rounds_down_to_whole_minutes(self):
        assert duration_in_minutes(NOW, NOW + timedelta(minutes=45, seconds=59)) == 45

    def test_duration_is_at_least_one_minute(self):
        assert duration_in_minutes(NOW, NOW + timedelta(seconds=10)) == 1
