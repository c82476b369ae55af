"""
User Repository Interface (Port).

Extends the soft-delete contract with lookups by identity-provider subject,
username and email. All lookups only consider active users.
"""
from typing import Any, List, Optional, Protocol

from application.ports.soft_delete_repository import SoftDeleteRepository


class UserRepository(SoftDeleteRepository[Any], Protocol):
    """Abstract interface for user persistence."""

    def find_by_auth0_user_id(self, auth0_user_id: str) -> Optional[Any]:
        """Find the user linked to an identity-provider subject id."""
        ...

    def find_by_auth0_user_id_including_deleted(
        self, auth0_user_id: str
    ) -> Optional[Any]:
        """Same as find_by_auth0_user_id, but also returns deleted users."""
        ...

    def find_by_username(self, username: str) -> Optional[Any]:
        ...

    def find_by_email(self, email: str) -> Optional[Any]:
        ...

    def exists_by_username(self, username: str) -> bool:
        """Case-insensitive check across active and deleted users."""
        ...

    def exists_by_email(self, email: str) -> bool:
        """Case-insensitive check across active and deleted users."""
        ...

    def search_by_first_name(self, first_name: str) -> List[Any]:
        """
        Find active users whose first name contains ``first_name``.

        Args:
            first_name: Case-insensitive substring

        Returns:
            Matching users ordered by username
        """
        ...
