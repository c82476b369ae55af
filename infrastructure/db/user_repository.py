"""SQLAlchemy implementation of UserRepository."""
import logging
from typing import List, Optional

from sqlalchemy import func, select

from infrastructure.db.models import User
from infrastructure.db.soft_delete_repository import (
    SqlAlchemySoftDeleteRepository,
    contains_pattern,
)

logger = logging.getLogger(__name__)


class SqlAlchemyUserRepository(SqlAlchemySoftDeleteRepository[User]):
    """Users, looked up by primary key, Auth0 subject, username or email."""

    model = User
    entity_name = "User"

    def find_by_auth0_user_id(self, auth0_user_id: str) -> Optional[User]:
        return self._session.scalar(
            self._active().where(User.auth0_user_id == auth0_user_id)
        )

    def find_by_auth0_user_id_including_deleted(self, auth0_user_id: str) -> Optional[User]:
        return self._session.scalar(select(User).where(User.auth0_user_id == auth0_user_id))

    def find_by_username(self, username: str) -> Optional[User]:
        return self._session.scalar(
            self._active().where(func.lower(User.username) == username.lower())
        )

    def find_by_email(self, email: str) -> Optional[User]:
        return self._session.scalar(
            self._active().where(func.lower(User.email) == email.lower())
        )

    # Unique constraints span deleted rows too, so existence checks do as well
    def exists_by_username(self, username: str) -> bool:
        stmt = select(User.id).where(func.lower(User.username) == username.lower())
        return self._session.scalar(stmt.limit(1)) is not None

    def exists_by_email(self, email: str) -> bool:
        stmt = select(User.id).where(func.lower(User.email) == email.lower())
        return self._session.scalar(stmt.limit(1)) is not None

    def search_by_first_name(self, first_name: str) -> List[User]:
        stmt = (
            self._active()
            .where(User.first_name.ilike(contains_pattern(first_name), escape="\\"))
            .order_by(User.username)
        )
        return list(self._session.scalars(stmt).all())
