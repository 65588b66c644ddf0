"""
Database Session Management
============================

Handles database connections and session lifecycle.

Every unit of work gets its own session from get_db_context(), so the
underlying connection is acquired for one operation and released on every
exit path. Server databases use NullPool: no connection outlives its session.
"""

import logging
import os
from contextlib import contextmanager
from typing import Any, Callable, Dict, Generator, Optional
from urllib.parse import unquote
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import NullPool, StaticPool

from emdb.config import settings

logger = logging.getLogger(__name__)


def create_db_engine(database_url: Optional[str] = None) -> Engine:
    """
    Create and configure the database engine.

    Args:
        database_url: Override for settings.connection_url (tests, --database-url)
    """
    database_url = database_url or settings.connection_url

    # SQLite-specific configuration
    if database_url.startswith("sqlite"):
        # Ensure data directory exists
        db_path = make_url(database_url).database
        if db_path and db_path != ":memory:":
            db_dir = os.path.dirname(db_path)
            if db_dir and not os.path.exists(db_dir):
                os.makedirs(db_dir, exist_ok=True)

        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=settings.app_debug
        )

        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    else:
        engine = create_engine(database_url, poolclass=NullPool, echo=settings.app_debug)

    return engine


def create_session_factory(engine_instance: Engine) -> Callable[[], Session]:
    """
    Build a session factory bound to an engine.

    expire_on_commit=False keeps loaded attributes usable after the
    session that produced them has closed.
    """
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine_instance
    )


# Create global engine and session factory
engine = create_db_engine()
SessionLocal = create_session_factory(engine)


@contextmanager
def get_db_context(
    session_factory: Optional[Callable[[], Session]] = None
) -> Generator[Session, None, None]:
    """
    Context manager for database sessions.

    Commits when the block finishes, rolls back and re-raises on any
    exception, and always closes the session.

    Usage:
        with get_db_context() as db:
            db.add(employee)
    """
    db = (session_factory or SessionLocal)()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def create_all_tables(engine_instance: Optional[Engine] = None) -> None:
    """Create all tables in the database (existing tables are left alone)."""
    from emdb.models.base import Base

    if engine_instance is None:
        engine_instance = engine

    Base.metadata.create_all(bind=engine_instance)


def drop_all_tables(engine_instance: Optional[Engine] = None) -> None:
    """Drop all tables in the database."""
    from emdb.models.base import Base

    if engine_instance is None:
        engine_instance = engine

    Base.metadata.drop_all(bind=engine_instance)


def display_url(engine_instance: Engine) -> str:
    """Connection URL for people to read: password masked, nothing percent-encoded."""
    return unquote(engine_instance.url.render_as_string(hide_password=True))


def check_connection(engine_instance: Optional[Engine] = None) -> bool:
    """
    Check that the database is reachable.

    Returns:
        True if a trivial query succeeds, False otherwise (the error is logged)
    """
    if engine_instance is None:
        engine_instance = engine

    try:
        with engine_instance.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.error("Database connection failed: %s", e)
        return False


def get_database_info(engine_instance: Optional[Engine] = None) -> Dict[str, Any]:
    """
    Describe the database behind an engine.

    Returns:
        Dictionary with product, version, driver, url (password masked),
        username and isolation_level

    Raises:
        SQLAlchemyError: If the database cannot be reached
    """
    if engine_instance is None:
        engine_instance = engine

    with engine_instance.connect() as conn:
        dialect = conn.dialect
        version_info = dialect.server_version_info
        return {
            "product": dialect.name,
            "version": ".".join(str(part) for part in version_info) if version_info else "unknown",
            "driver": dialect.driver,
            "url": display_url(engine_instance),
            "username": engine_instance.url.username,
            "isolation_level": conn.get_isolation_level(),
        }
