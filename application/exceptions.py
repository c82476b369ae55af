"""
Application-layer exceptions.

These exceptions are used across application and infrastructure layers and
are translated into the shared error envelope by ``api.errors``:

- NotFoundError -> 404
- ConflictError / OptimisticLockConflictError -> 409
- ValidationFailedError / BusinessRuleError -> 400
- AuthorizationDeniedError -> 403
- RateLimitExceededError -> 429
"""
from typing import Any, Dict, Optional

from domain.exceptions import BusinessRuleError


class NotFoundError(Exception):
    """An active resource with the given key does not exist."""

    def __init__(self, resource: str, field: str = "id", value: Any = None):
        self.resource = resource
        self.field = field
        self.value = value
        self.message = f"{resource} not found with {field}: {value}"
        super().__init__(self.message)


class ConflictError(Exception):
    """The write collides with existing state (duplicate key, stale version)."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class OptimisticLockConflictError(ConflictError):
    """The client's expected version does not match the stored version."""

    def __init__(
        self,
        entity_type: str,
        entity_id: Any,
        current_version: Optional[int],
        expected_version: Optional[int],
    ):
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.current_version = current_version
        self.expected_version = expected_version
        super().__init__(
            f"The {entity_type} with ID {entity_id} was modified by another user. "
            f"Current version: {current_version}, Expected version: {expected_version}. "
            "Please refresh and try again."
        )

    def details(self) -> Dict[str, Any]:
        return {
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "current_version": self.current_version,
            "expected_version": self.expected_version,
        }


class ValidationFailedError(Exception):
    """One or more request attributes are invalid."""

    def __init__(self, message: str, errors: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or {}


class AuthorizationDeniedError(Exception):
    """Authenticated, but not allowed to perform this operation."""

    def __init__(
        self,
        message: str = "Access denied. You don't have permission to access this resource.",
    ):
        super().__init__(message)
        self.message = message


class RateLimitExceededError(Exception):
    """Too many requests for the current rate-limit key."""

    def __init__(
        self,
        message: str = "Rate limit exceeded. Please try again later.",
        retry_after_seconds: int = 60,
    ):
        super().__init__(message)
        self.message = message
        self.retry_after_seconds = retry_after_seconds


__all__ = [
    "AuthorizationDeniedError",
    "BusinessRuleError",
    "ConflictError",
    "NotFoundError",
    "OptimisticLockConflictError",
    "RateLimitExceededError",
    "ValidationFailedError",
]
