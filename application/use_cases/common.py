"""Helpers shared by the application services."""
import logging
from typing import Any, Dict, Iterable, Mapping, Optional

from application.exceptions import OptimisticLockConflictError, ValidationFailedError

logger = logging.getLogger(__name__)

NO_FIELDS_MESSAGE = "At least one field must be provided for update"


def check_version(entity: Any, expected_version: Optional[int], entity_type: str) -> None:
    """
    Compare the client's version with the stored one.

    Raises:
        OptimisticLockConflictError: If the versions differ
    """
    if expected_version is None:
        return
    if entity.version != expected_version:
        logger.warning(
            f"Stale update on {entity_type} {entity.id}: "
            f"expected version {expected_version}, stored {entity.version}"
        )
        raise OptimisticLockConflictError(
            entity_type, entity.id, entity.version, expected_version
        )


def split_changes(data: Mapping[str, Any]) -> tuple[Dict[str, Any], Optional[int]]:
    """
    Separate the expected version from the changed attributes.

    Raises:
        ValidationFailedError: If no attribute besides ``version`` is present
    """
    changes = dict(data)
    expected_version = changes.pop("version", None)
    if not changes:
        raise ValidationFailedError("Validation failed", {"request": NO_FIELDS_MESSAGE})
    return changes, expected_version


def apply_changes(entity: Any, changes: Mapping[str, Any], allowed: Iterable[str]) -> None:
    """Copy whitelisted attributes onto ``entity``."""
    allowed = set(allowed)
    for key, value in changes.items():
        if key in allowed:
            setattr(entity, key, value)
