"""
Database Infrastructure
=======================

Manages database connections, session lifecycle, and engine configuration.

Uses synchronous SQLAlchemy 2.0; SQLite by default, any SQLAlchemy URL works.
"""

from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from guide_roster.config import settings
from guide_roster.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    SQLAlchemy 2.0 style using DeclarativeBase.
    All models inherit from this class.
    """
    pass


# Global engine and session maker
_engine: Engine | None = None
_session_maker: sessionmaker[Session] | None = None


def get_engine() -> Engine:
    """
    Get the database engine.

    Returns:
        Engine: SQLAlchemy engine

    Raises:
        RuntimeError: If engine has not been initialized
    """
    if _engine is None:
        raise RuntimeError("Database engine not initialized. Call init_database() first.")
    return _engine


def init_database(database_url: Optional[str] = None) -> Engine:
    """
    Initialize the database engine and session maker.

    Should be called once at program start. Statement logging is left to
    the sqlalchemy.engine logger (see setup_logging), so nothing reaches stdout.

    Args:
        database_url: Overrides settings.database_url

    Returns:
        Engine: The initialized engine
    """
    global _engine, _session_maker

    url = make_url(database_url or settings.database_url)
    engine_kwargs: dict = {
        "pool_pre_ping": True,  # Verify connections before using
    }

    if url.get_backend_name() == "sqlite":
        if url.database in (None, "", ":memory:"):
            # A single shared connection keeps the in-memory schema alive
            engine_kwargs["poolclass"] = StaticPool
            engine_kwargs["connect_args"] = {"check_same_thread": False}
    else:
        engine_kwargs["pool_size"] = settings.db_pool_size
        engine_kwargs["max_overflow"] = settings.db_max_overflow

    logger.debug("creating engine", extra={"database_url": str(url)})
    _engine = create_engine(url, **engine_kwargs)

    _session_maker = sessionmaker(
        bind=_engine,
        class_=Session,
        expire_on_commit=False,  # Entities stay readable after commit
        autoflush=False,
    )

    return _engine


def close_database() -> None:
    """
    Close the database engine and dispose of connections.

    Should be called at program exit.
    """
    global _engine, _session_maker

    if _engine is not None:
        _engine.dispose()
        _engine = None
        _session_maker = None


@contextmanager
def get_session_context() -> Generator[Session, None, None]:
    """
    Context manager for one unit of work.

    Commits when the block finishes, rolls back and re-raises on any
    exception, and always closes the session.

    Usage:
        with get_session_context() as session:
            guides = session.scalars(select(GuideModel)).all()

    Yields:
        Session: SQLAlchemy session with an open transaction
    """
    if _session_maker is None:
        raise RuntimeError("Database not initialized. Call init_database() first.")

    with _session_maker() as session:
        logger.debug("beginning transaction")
        try:
            yield session
            logger.debug("making commit")
            session.commit()
        except Exception:
            logger.error("something went wrong, rolling back transaction")
            session.rollback()
            raise
        finally:
            logger.debug("closing session")


def create_tables() -> None:
    """
    Create all database tables.

    Models must be imported first so they are registered on Base.metadata.
    """
    import guide_roster.roster.infrastructure.models  # noqa: F401

    engine = get_engine()
    Base.metadata.create_all(engine)


def drop_tables() -> None:
    """Drop all database tables."""
    import guide_roster.roster.infrastructure.models  # noqa: F401

    engine = get_engine()
    Base.metadata.drop_all(engine)
