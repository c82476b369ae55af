"""
User account use cases.

Covers the first-login sync from identity-provider claims, admin
provisioning, profile reads/updates, soft delete/restore and the public
existence checks used by the sign-up form.
"""
import logging
import re
from dataclasses import dataclass, field
from typing import Any, FrozenSet, List, Mapping, Optional

from application.authorization import Principal
from application.exceptions import (
    AuthorizationDeniedError,
    ConflictError,
    ValidationFailedError,
)
from application.ports import Page, UserRepository, WorkoutSessionRepository
from application.use_cases.common import apply_changes, check_version, split_changes
from domain.exceptions import BusinessRuleError
from domain.models import UserRole

logger = logging.getLogger(__name__)

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50
NAME_MAX_LENGTH = 50

_USERNAME_INVALID_CHARS = re.compile(r"[^a-zA-Z0-9_]")
_NAME_INVALID_CHARS = re.compile(r"[^a-zA-Z\s'-]")


@dataclass(frozen=True)
class IdentityClaims:
    """Verified token claims relevant to the local user record."""

    subject: str
    email: Optional[str] = None
    email_verified: bool = False
    nickname: Optional[str] = None
    preferred_username: Optional[str] = None
    given_name: Optional[str] = None
    family_name: Optional[str] = None
    name: Optional[str] = None
    role: Optional[UserRole] = None
    permissions: FrozenSet[str] = field(default_factory=frozenset)


def _clean_name(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    cleaned = _NAME_INVALID_CHARS.sub("", value).strip()[:NAME_MAX_LENGTH]
    return cleaned or None


def _split_full_name(claims: IdentityClaims) -> tuple[Optional[str], Optional[str]]:
    first, last = claims.given_name, claims.family_name
    if not first and not last and claims.name and "@" not in claims.name:
        parts = claims.name.strip().split(None, 1)
        first = parts[0] if parts else None
        last = parts[1] if len(parts) > 1 else None
    return _clean_name(first), _clean_name(last)


class UserService:
    """Use cases for user accounts."""

    def __init__(self, users: UserRepository, sessions: WorkoutSessionRepository):
        """
        Args:
            users: Repository for user persistence
            sessions: Repository used to check workout history before deletion
        """
        self._users = users
        self._sessions = sessions

    # -------------------------------------------------------------------------
    # Identity sync
    # -------------------------------------------------------------------------

    def _unique_username(self, claims: IdentityClaims) -> str:
        candidates = [claims.nickname, claims.preferred_username]
        if claims.email:
            candidates.append(claims.email.split("@", 1)[0])
        base = "user"
        for candidate in candidates:
            cleaned = _USERNAME_INVALID_CHARS.sub("_", candidate or "")
            if cleaned.strip("_"):
                base = cleaned
                break
        base = base[:USERNAME_MAX_LENGTH].ljust(USERNAME_MIN_LENGTH, "_")

        username, suffix = base, 1
        while self._users.exists_by_username(username):
            tail = f"_{suffix}"
            username = base[: USERNAME_MAX_LENGTH - len(tail)] + tail
            suffix += 1
        return username

    def sync_from_identity(self, claims: IdentityClaims) -> Any:
        """
        Create or refresh the local user for an authenticated subject.

        Args:
            claims: Verified identity claims

        Returns:
            The active user record

        Raises:
            AuthorizationDeniedError: If the email is unverified or the account
                has been deactivated
            ValidationFailedError: If the token carries no email
        """
        if not claims.email:
            raise ValidationFailedError(
                "Validation failed", {"email": "Email claim is required"}
            )
        if not claims.email_verified:
            logger.warning(f"SECURITY: unverified email for subject {claims.subject}")
            raise AuthorizationDeniedError(
                "Email address not verified. Please verify your email before continuing."
            )

        user = self._users.find_by_auth0_user_id(claims.subject)
        if user is None:
            if self._users.find_by_auth0_user_id_including_deleted(claims.subject):
                logger.warning(f"SECURITY: deactivated account login {claims.subject}")
                raise AuthorizationDeniedError("This account has been deactivated.")
            return self._create_from_claims(claims)

        changed = False
        if claims.email.lower() != user.email.lower() and not self._users.exists_by_email(claims.email):
            user.email = claims.email
            changed = True
        first_name, last_name = _split_full_name(claims)
        for attribute, value in (("first_name", first_name), ("last_name", last_name)):
            if value and getattr(user, attribute) != value:
                setattr(user, attribute, value)
                changed = True
        if claims.role is not None and user.role != claims.role:
            user.role = claims.role
            changed = True

        if changed:
            self._users.save(user)
            logger.info(f"Synced user {user.id} from identity provider")
        return user

    def _create_from_claims(self, claims: IdentityClaims) -> Any:
        first_name, last_name = _split_full_name(claims)
        if self._users.exists_by_email(claims.email):
            raise ConflictError(f"User already exists with email: {claims.email}")
        user = self._users.create(
            auth0_user_id=claims.subject,
            email=claims.email,
            username=self._unique_username(claims),
            first_name=first_name,
            last_name=last_name,
            role=claims.role or UserRole.USER,
        )
        logger.info(f"Created user {user.id} for subject {claims.subject}")
        return user

    # -------------------------------------------------------------------------
    # CRUD
    # -------------------------------------------------------------------------

    def create_user(self, data: Mapping[str, Any]) -> Any:
        """
        Provision a user account.

        Raises:
            ConflictError: If the subject, username or email is taken
        """
        if self._users.find_by_auth0_user_id_including_deleted(data["auth0_user_id"]):
            raise ConflictError(
                f"User already exists with auth0_user_id: {data['auth0_user_id']}"
            )
        if self._users.exists_by_username(data["username"]):
            raise ConflictError(f"User already exists with username: {data['username']}")
        if self._users.exists_by_email(data["email"]):
            raise ConflictError(f"User already exists with email: {data['email']}")

        user = self._users.create(
            auth0_user_id=data["auth0_user_id"],
            username=data["username"],
            email=data["email"],
            first_name=data.get("first_name"),
            last_name=data.get("last_name"),
            role=UserRole.USER,
        )
        logger.info(f"User created: user_id={user.id}")
        return user

    def get_user(self, user_id: int, principal: Principal) -> Any:
        """Self, or any user for admins."""
        if not principal.is_admin and principal.user_id != user_id:
            logger.warning(f"SECURITY: user {principal.user_id} requested user {user_id}")
            raise AuthorizationDeniedError()
        return self._users.get_by_id(user_id)

    def get_current_user(self, principal: Principal) -> Any:
        return self._users.get_by_id(principal.user_id)

    def list_users(self, page: int, size: int) -> Page[Any]:
        return self._users.find_page(page, size, sort=(("username", "asc"),))

    def search_by_first_name(self, first_name: str) -> List[Any]:
        return self._users.search_by_first_name(first_name)

    def update_user(self, user_id: int, data: Mapping[str, Any], principal: Principal) -> Any:
        """
        Update the caller's own profile.

        Raises:
            AuthorizationDeniedError: If ``user_id`` is not the caller
            OptimisticLockConflictError: If ``version`` is stale
            ConflictError: If the new email is taken
        """
        if principal.user_id != user_id:
            logger.warning(f"SECURITY: user {principal.user_id} tried to update user {user_id}")
            raise AuthorizationDeniedError()

        changes, expected_version = split_changes(data)
        user = self._users.get_by_id(user_id)
        check_version(user, expected_version, "User")

        new_email = changes.get("email")
        if new_email and new_email.lower() != user.email.lower():
            if self._users.exists_by_email(new_email):
                raise ConflictError(f"User already exists with email: {new_email}")

        apply_changes(user, changes, ("email", "first_name", "last_name"))
        self._users.save(user)
        logger.info(f"User updated: user_id={user_id}")
        return user

    def delete_user(self, user_id: int) -> None:
        """
        Soft delete an account that has no workout history.

        Raises:
            NotFoundError: If the user is absent or already deleted
            BusinessRuleError: If the user still owns workout sessions
        """
        self._users.get_by_id(user_id)
        if self._sessions.find_by_user(user_id):
            raise BusinessRuleError(
                "Cannot delete user account with workout history. "
                "Please contact support if you need to delete your account."
            )
        self._users.soft_delete_by_id(user_id)
        logger.info(f"User deleted: user_id={user_id}")

    def restore_user(self, user_id: int) -> Any:
        """
        Raises:
            NotFoundError: If no user row exists
            BusinessRuleError: If the user is not deleted
        """
        if not self._users.restore_by_id(user_id):
            raise BusinessRuleError("User is not deleted and cannot be restored")
        return self._users.get_by_id(user_id)

    # -------------------------------------------------------------------------
    # Existence checks
    # -------------------------------------------------------------------------

    def username_exists(self, username: str) -> bool:
        return self._users.exists_by_username(username)

    def email_exists(self, email: str) -> bool:
        return self._users.exists_by_email(email)


__all__ = ["IdentityClaims", "UserService"]
