"""
SQLAlchemy implementation of SoftDeleteRepository.

One generic base class parametrized by the ORM model. Every query starts from
``_active()`` unless the method name says otherwise, so a query added to a
subclass is active-only by default as long as it builds on that helper.
"""
import logging
from datetime import timedelta
from typing import Any, Generic, List, Optional, Type, TypeVar

from sqlalchemy import Select, delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from application.exceptions import (
    ConflictError,
    NotFoundError,
    OptimisticLockConflictError,
)
from application.ports.soft_delete_repository import Page, SortSpec
from domain.clock import Clock, SystemClock

logger = logging.getLogger(__name__)

M = TypeVar("M")


class SqlAlchemyRepository(Generic[M]):
    """Shared plumbing: session, model, ordering, paging."""

    model: Type[M]
    entity_name: str = "Entity"

    def __init__(self, session: Session, clock: Optional[Clock] = None):
        """
        Initialize with a SQLAlchemy session.

        Args:
            session: Request-scoped session (injected, not global)
            clock: Time source for deletion timestamps
        """
        self._session = session
        self._clock = clock or SystemClock()

    def _base(self) -> Select:
        return select(self.model)

    def _order(self, stmt: Select, sort: Optional[SortSpec]) -> Select:
        if not sort:
            return stmt.order_by(self.model.id)
        for attribute, direction in sort:
            column = getattr(self.model, attribute, None)
            if column is None:
                raise ValueError(f"Unknown sort attribute: {attribute}")
            stmt = stmt.order_by(column.desc() if direction == "desc" else column.asc())
        return stmt

    def _page(
        self, stmt: Select, page: int, size: int, sort: Optional[SortSpec] = None
    ) -> Page[M]:
        # Count with the exact same WHERE clause as the item query
        total = self._session.scalar(
            select(func.count()).select_from(stmt.order_by(None).subquery())
        )
        items = self._session.scalars(
            self._order(stmt, sort).offset(page * size).limit(size)
        ).all()
        return Page(items=list(items), total=total or 0, page=page, size=size)

    def _flush(self, entity: M) -> None:
        """Flush pending changes, translating database conflicts."""
        entity_id = getattr(entity, "id", None)
        expected_version = getattr(entity, "version", None)
        try:
            self._session.flush()
        except StaleDataError:
            self._session.rollback()
            current_version = self._session.scalar(
                select(self.model.version).where(self.model.id == entity_id)
            )
            logger.warning(
                f"Optimistic lock conflict on {self.entity_name} {entity_id}: "
                f"expected version {expected_version}, found {current_version}"
            )
            raise OptimisticLockConflictError(
                self.entity_name, entity_id, current_version, expected_version
            ) from None
        except IntegrityError as e:
            self._session.rollback()
            logger.warning(f"Integrity error writing {self.entity_name}: {e.orig}")
            raise ConflictError(
                f"{self.entity_name} conflicts with an existing record"
            ) from None

    def save(self, entity: M) -> M:
        self._session.add(entity)
        self._flush(entity)
        return entity

    def create(self, **fields) -> M:
        """Build a new entity from column values and persist it."""
        return self.save(self.model(**fields))

    def get_by_id(self, entity_id: Any) -> M:
        entity = self.find_by_id(entity_id)
        if entity is None:
            raise NotFoundError(self.entity_name, "id", entity_id)
        return entity

    def find_by_id(self, entity_id: Any) -> Optional[M]:
        return self._session.scalar(self._base().where(self.model.id == entity_id))

    def find_page(
        self, page: int = 0, size: int = 20, sort: Optional[SortSpec] = None
    ) -> Page[M]:
        return self._page(self._base(), page, size, sort)

    def count(self) -> int:
        stmt = select(func.count()).select_from(self._base().subquery())
        return self._session.scalar(stmt) or 0


class SqlAlchemySoftDeleteRepository(SqlAlchemyRepository[M]):
    """
    SQLAlchemy implementation of the SoftDeleteRepository protocol.

    Subclasses set ``model`` (an ORM class using SoftDeleteMixin) and
    ``entity_name`` (used in NotFound messages and logs).
    """

    def _active(self) -> Select:
        return select(self.model).where(self.model.deleted.is_(False))

    def _base(self) -> Select:
        return self._active()

    def find_by_id_including_deleted(self, entity_id: Any) -> Optional[M]:
        return self._session.get(self.model, entity_id)

    def find_all(self, sort: Optional[SortSpec] = None) -> List[M]:
        return list(self._session.scalars(self._order(self._active(), sort)).all())

    def find_all_including_deleted(self) -> List[M]:
        return list(self._session.scalars(select(self.model).order_by(self.model.id)).all())

    def find_all_deleted(self) -> List[M]:
        stmt = select(self.model).where(self.model.deleted.is_(True)).order_by(self.model.id)
        return list(self._session.scalars(stmt).all())

    def _get_any_or_404(self, entity_id: Any) -> M:
        entity = self.find_by_id_including_deleted(entity_id)
        if entity is None:
            raise NotFoundError(self.entity_name, "id", entity_id)
        return entity

    def soft_delete_by_id(self, entity_id: Any) -> bool:
        entity = self._get_any_or_404(entity_id)
        if entity.deleted:
            logger.debug(f"{self.entity_name} {entity_id} already deleted")
            return False
        entity.soft_delete(self._clock.now())
        self._flush(entity)
        logger.info(f"Soft-deleted {self.entity_name} {entity_id}")
        return True

    def restore_by_id(self, entity_id: Any) -> bool:
        entity = self._get_any_or_404(entity_id)
        if not entity.deleted:
            return False
        entity.restore()
        self._flush(entity)
        logger.info(f"Restored {self.entity_name} {entity_id}")
        return True

    def hard_delete_by_id(self, entity_id: Any) -> bool:
        entity = self.find_by_id_including_deleted(entity_id)
        if entity is None:
            return False
        self._session.delete(entity)
        self._session.flush()
        logger.warning(f"Hard-deleted {self.entity_name} {entity_id}")
        return True

    def permanently_delete_older_than(self, days: int) -> int:
        if days < 0:
            raise ValueError("days must not be negative")
        cutoff = self._clock.now() - timedelta(days=days)
        result = self._session.execute(
            delete(self.model)
            .where(self.model.deleted.is_(True))
            .where(self.model.deleted_at < cutoff)
            .execution_options(synchronize_session="fetch")
        )
        purged = result.rowcount or 0
        if purged:
            logger.info(
                f"Purged {purged} {self.entity_name} rows deleted before {cutoff.isoformat()}"
            )
        return purged

    def count_including_deleted(self) -> int:
        return self._session.scalar(select(func.count()).select_from(self.model)) or 0

    def count_deleted(self) -> int:
        stmt = select(func.count()).select_from(self.model).where(self.model.deleted.is_(True))
        return self._session.scalar(stmt) or 0

    def exists_by_id(self, entity_id: Any) -> bool:
        return self.find_by_id(entity_id) is not None


def contains_pattern(text: str) -> str:
    """Build a LIKE pattern matching ``text`` literally anywhere in a value."""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
