"""
Principal and resource-ownership authorization.

Scope checks (``read:workouts``...) gate whole endpoints; the policy here
gates single user-owned resources. Ownership is resolved through the chain
Set -> WorkoutExercise -> WorkoutSession -> User using active rows only, so a
soft-deleted link makes everything beneath it inaccessible.

Checks never raise: a missing resource and someone else's resource both
evaluate to False. Callers use ``ensure_can_access`` to turn that into an
AuthorizationDeniedError before any write runs.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional

from application.exceptions import AuthorizationDeniedError
from application.ports import SetRepository, WorkoutExerciseRepository, WorkoutSessionRepository
from domain.models import SetKind, UserRole

logger = logging.getLogger(__name__)

# Permission strings granted by the identity provider
READ_WORKOUTS = "read:workouts"
WRITE_WORKOUTS = "write:workouts"
DELETE_WORKOUTS = "delete:workouts"
READ_EXERCISES = "read:exercises"
WRITE_EXERCISES = "write:exercises"
DELETE_EXERCISES = "delete:exercises"
READ_USERS = "read:users"
DELETE_USERS = "delete:users"


@dataclass(frozen=True)
class Principal:
    """The authenticated caller as seen by the application layer."""

    subject: str
    user_id: Optional[int] = None
    email: Optional[str] = None
    role: UserRole = UserRole.USER
    permissions: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN or READ_USERS in self.permissions

    def has_permission(self, permission: str) -> bool:
        return permission in self.permissions

    def owns(self, owner_id: Optional[int]) -> bool:
        return owner_id is not None and self.user_id is not None and owner_id == self.user_id


class ResourceAccessPolicy:
    """
    Decides whether a principal may act on a single owned resource.

    Usage:
        policy = ResourceAccessPolicy(sessions, workout_exercises, set_repos)
        if not policy.can_access_workout(session_id, principal):
            ...
    """

    def __init__(
        self,
        sessions: WorkoutSessionRepository,
        workout_exercises: WorkoutExerciseRepository,
        sets: Dict[SetKind, SetRepository],
    ):
        self._sessions = sessions
        self._workout_exercises = workout_exercises
        self._sets = sets

    def _decide(self, resource: str, resource_id: int, owner_id: Optional[int], principal: Principal) -> bool:
        if principal.is_admin:
            return True
        if principal.owns(owner_id):
            return True
        if owner_id is None:
            logger.warning(
                f"SECURITY: user {principal.user_id} requested missing {resource} {resource_id}"
            )
        else:
            logger.warning(
                f"SECURITY: user {principal.user_id} attempted to access {resource} "
                f"{resource_id} owned by user {owner_id}"
            )
        return False

    def can_access_workout(self, session_id: int, principal: Principal) -> bool:
        owner_id = None if principal.is_admin else self._sessions.find_owner_id(session_id)
        return self._decide("workout session", session_id, owner_id, principal)

    def can_access_workout_exercise(self, workout_exercise_id: int, principal: Principal) -> bool:
        owner_id = (
            None if principal.is_admin
            else self._workout_exercises.find_owner_id(workout_exercise_id)
        )
        return self._decide("workout exercise", workout_exercise_id, owner_id, principal)

    def can_access_set(self, kind: SetKind, set_id: int, principal: Principal) -> bool:
        kind = SetKind(kind)
        owner_id = None if principal.is_admin else self._sets[kind].find_owner_id(set_id)
        return self._decide(f"{kind.value} set", set_id, owner_id, principal)

    def can_access(self, resource: str, resource_id: int, principal: Principal) -> bool:
        """
        Dispatch on a resource name.

        Args:
            resource: "workout", "workout_exercise" or a set kind
                ("strength", "cardio", "flexibility")
            resource_id: Primary key of the resource
            principal: The caller

        Returns:
            True if the caller owns the resource or is an admin
        """
        if resource == "workout":
            return self.can_access_workout(resource_id, principal)
        if resource == "workout_exercise":
            return self.can_access_workout_exercise(resource_id, principal)
        try:
            kind = SetKind(resource)
        except ValueError:
            logger.warning(f"SECURITY: access check for unknown resource type {resource!r}")
            return False
        return self.can_access_set(kind, resource_id, principal)

    def ensure_can_access(self, resource: str, resource_id: int, principal: Principal) -> None:
        """
        Raises:
            AuthorizationDeniedError: If ``can_access`` is False
        """
        if not self.can_access(resource, resource_id, principal):
            raise AuthorizationDeniedError()


def ensure_permission(principal: Principal, permission: str) -> None:
    """
    Raises:
        AuthorizationDeniedError: If the principal lacks ``permission``
    """
    if not principal.has_permission(permission):
        logger.warning(
            f"SECURITY: user {principal.user_id} lacks permission {permission}"
        )
        raise AuthorizationDeniedError()
