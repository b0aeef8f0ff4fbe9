"""Database maintenance operations used by the ``mrologix db`` CLI."""

from typing import Any

from sqlalchemy import inspect, text

from mrologix.db.connect import _engine_for, get_db_path, get_session
from mrologix.logging import get_logger


logger = get_logger(__file__)


def initialize(file_path: str | None = None) -> str:
    """Create all tables for the database at ``file_path`` and return its URI."""

    db_uri = get_db_path(file_path)
    logger.info("initializing database %s", db_uri)
    _engine_for(db_uri)
    return db_uri


def check_status(file_path: str | None = None) -> str | None:
    """Query the database for its SQLite version and log/return it."""

    logger.info("checking db status...")
    with get_session(file_path) as session:
        result = session.execute(text("SELECT sqlite_version();")).fetchone()
    if result:
        version = result[0]
        logger.info("sqlite version: %s", version)
        return version
    logger.warning("sqlite version query returned no result")
    return None


def show_tables(file_path: str | None = None) -> dict[str, list[dict[str, Any]]]:
    """Return table and column metadata for the SQLite database.

    Returns
    -------
    dict
        Mapping of table names to a list of column definitions. Each column
        definition contains ``name``, ``type``, ``nullable`` and ``default``
        keys.
    """

    with get_session(file_path) as session:
        inspector = inspect(session.bind)
        table_definitions: dict[str, list[dict[str, Any]]] = {}
        for table_name in sorted(inspector.get_table_names()):
            table_definitions[table_name] = [
                {
                    "name": column["name"],
                    "type": str(column["type"]),
                    "nullable": column.get("nullable", True),
                    "default": column.get("default"),
                }
                for column in inspector.get_columns(table_name)
            ]
    logger.info("tables: %s", list(table_definitions))
    return table_definitions
