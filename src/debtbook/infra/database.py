"""Database infrastructure for the desktop app."""

from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
from typing import Callable, ContextManager, Iterator, Tuple

from sqlalchemy.engine import Engine
from sqlalchemy.exc import DatabaseError
from sqlmodel import Session, SQLModel, create_engine

from ..config import BaseConfig
from ..logging_config import get_logger

logger = get_logger(__name__)

SessionFactory = Callable[[], ContextManager[Session]]


def create_db_engine(config: BaseConfig) -> Engine:
    """Create SQLModel engine from configuration."""
    engine_options = config.sqlalchemy_engine_options()
    return create_engine(config.DATABASE_URL, **engine_options)


def init_database(engine: Engine) -> None:
    """Initialize database schema."""
    # Import models so they register with the metadata
    from .. import models  # noqa: F401

    SQLModel.metadata.create_all(engine)


@contextmanager
def session_scope(engine: Engine) -> Iterator[Session]:
    """Provide a transactional scope around operations."""
    session = Session(engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def create_session_factory(engine: Engine) -> SessionFactory:
    """Create a session factory function."""

    def factory() -> ContextManager[Session]:
        return session_scope(engine)

    return factory


def _quarantine_database(config: BaseConfig) -> None:
    """Move an unreadable database file aside so a fresh one can be created."""

    db_path = config.database_path
    if db_path is None or not db_path.exists():
        return
    stamp = datetime.now().strftime("%Y%m%d%H%M%S")
    target = db_path.with_name(f"{db_path.name}.corrupt-{stamp}")
    db_path.rename(target)
    logger.warning(
        "Unreadable database moved aside",
        extra={"path": str(db_path), "moved_to": str(target)},
    )


def bootstrap_database(config: BaseConfig | None = None) -> Tuple[Engine, SessionFactory]:
    """Create engine + session factory with the schema in place.

    A database file that SQLite cannot open is quarantined and replaced by an
    empty one, so startup never fails on malformed saved data.
    """

    cfg = config or BaseConfig()
    engine = create_db_engine(cfg)
    try:
        init_database(engine)
    except DatabaseError as exc:
        logger.error("Database initialisation failed", extra={"error": str(exc)})
        engine.dispose()
        _quarantine_database(cfg)
        engine = create_db_engine(cfg)
        init_database(engine)
    return engine, create_session_factory(engine)
