"""Database package."""

from emdb.database.session import (
    engine,
    SessionLocal,
    create_db_engine,
    create_session_factory,
    get_db_context,
    create_all_tables,
    drop_all_tables,
    check_connection,
    get_database_info,
    display_url,
)

__all__ = [
    "engine",
    "SessionLocal",
    "create_db_engine",
    "create_session_factory",
    "get_db_context",
    "create_all_tables",
    "drop_all_tables",
    "check_connection",
    "get_database_info",
    "display_url",
]
