"""
Soft-Delete Repository Interface (Port).

This module defines the generic persistence contract shared by every
soft-deletable entity (users, workout sessions, workout exercises, sets).

Every standard read only sees active rows (``deleted = false``). Deleted rows
stay reachable through the explicitly named ``*_including_deleted`` and
``*_deleted`` entry points, and are only physically removed by
``hard_delete_by_id`` / ``permanently_delete_older_than``, which are reserved
for administrative tooling.
"""
from dataclasses import dataclass, field
from typing import Any, Generic, List, Optional, Protocol, Sequence, Tuple, TypeVar

E = TypeVar("E")

# (attribute, "asc" | "desc")
SortSpec = Sequence[Tuple[str, str]]


@dataclass
class Page(Generic[E]):
    """One page of results plus totals computed with the same filter."""

    items: List[E] = field(default_factory=list)
    total: int = 0
    page: int = 0
    size: int = 20

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 0
        return (self.total + self.size - 1) // self.size

    @property
    def has_next(self) -> bool:
        return (self.page + 1) * self.size < self.total


class SoftDeleteRepository(Protocol[E]):
    """
    Abstract interface for soft-deletable entity persistence.

    Implementations must apply the active-only filter on every method that
    does not name an alternative in its signature.
    """

    entity_name: str

    def save(self, entity: E) -> E:
        """
        Persist a new or modified entity and flush it.

        Returns:
            The entity with generated id and version populated
        """
        ...

    def create(self, **fields: Any) -> E:
        """
        Build a new entity from column values and persist it.

        Raises:
            ConflictError: If a unique constraint is violated
        """
        ...

    def find_by_id(self, entity_id: Any) -> Optional[E]:
        """Get an active entity, or None if absent or soft-deleted."""
        ...

    def get_by_id(self, entity_id: Any) -> E:
        """
        Get an active entity.

        Raises:
            NotFoundError: If absent or soft-deleted
        """
        ...

    def find_by_id_including_deleted(self, entity_id: Any) -> Optional[E]:
        """Get an entity regardless of its deleted flag."""
        ...

    def find_all(self, sort: Optional[SortSpec] = None) -> List[E]:
        """List active entities, optionally ordered."""
        ...

    def find_page(
        self, page: int = 0, size: int = 20, sort: Optional[SortSpec] = None
    ) -> Page[E]:
        """
        Get one page of active entities.

        Args:
            page: Zero-based page index
            size: Page size
            sort: Optional ordering

        Returns:
            Page whose total counts active rows only
        """
        ...

    def find_all_including_deleted(self) -> List[E]:
        """List every entity, active or not."""
        ...

    def find_all_deleted(self) -> List[E]:
        """List soft-deleted entities only."""
        ...

    def soft_delete_by_id(self, entity_id: Any) -> bool:
        """
        Mark an entity deleted and stamp ``deleted_at``.

        Returns:
            True if the row changed, False if it was already deleted

        Raises:
            NotFoundError: If no row with this id exists at all
        """
        ...

    def restore_by_id(self, entity_id: Any) -> bool:
        """
        Clear the deleted flag and ``deleted_at``.

        Returns:
            True if the row changed, False if it was already active

        Raises:
            NotFoundError: If no row with this id exists at all
        """
        ...

    def hard_delete_by_id(self, entity_id: Any) -> bool:
        """Physically remove a row. Returns False if it did not exist."""
        ...

    def permanently_delete_older_than(self, days: int) -> int:
        """
        Purge rows soft-deleted more than ``days`` days ago.

        Returns:
            Number of rows removed
        """
        ...

    def count(self) -> int:
        ...

    def count_including_deleted(self) -> int:
        ...

    def count_deleted(self) -> int:
        ...

    def exists_by_id(self, entity_id: Any) -> bool:
        """True only for an active row."""
        ...
