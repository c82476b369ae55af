"""
Database engine and session management.

One engine per process (cached per URL); one Session per request. The
request session commits when the endpoint returns normally and rolls back on
any exception, including a client disconnect cancelling the request, so no
partial write survives.
"""
import logging
from functools import lru_cache
from typing import Iterator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from backend.settings import get_settings
from infrastructure.db import Base, seed_default_exercises

logger = logging.getLogger(__name__)


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine; in-memory SQLite shares one connection across threads."""
    kwargs = {"echo": echo, "future": True}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url or database_url in ("sqlite://", "sqlite+pysqlite://"):
            kwargs["poolclass"] = StaticPool
    return create_engine(database_url, **kwargs)


@lru_cache
def get_engine() -> Engine:
    """Process-wide engine for the configured database URL."""
    settings = get_settings()
    return build_engine(settings.database_url, settings.database_echo)


@lru_cache
def get_session_factory() -> sessionmaker:
    return sessionmaker(bind=get_engine(), expire_on_commit=False, autoflush=False)


def init_database(engine: Engine, seed: bool = True) -> None:
    """Create missing tables and optionally seed the exercise library."""
    Base.metadata.create_all(engine)
    if not seed:
        return
    with Session(engine) as session:
        with session.begin():
            seed_default_exercises(session)


def get_db_session() -> Iterator[Session]:
    """
    FastAPI dependency yielding a transactional session.

    Usage:
        @router.post("/things")
        def create_thing(db: Session = Depends(get_db_session)):
            ...
    """
    session = get_session_factory()()
    try:
        yield session
        session.commit()
    except BaseException:
        session.rollback()
        raise
    finally:
        session.close()
