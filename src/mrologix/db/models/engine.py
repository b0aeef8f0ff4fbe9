import os

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from mrologix.logging import get_logger

from .base import Base

logger = get_logger(__file__)


def sqlite_engine(db_path: str = "sqlite:///./mrologix.db") -> Engine:
    engine = create_engine(
        db_path,
        connect_args={"check_same_thread": False},
        echo=False,
    )

    trace_sql = os.getenv("MROLOGIX_SQL_TRACE")

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        if trace_sql:
            dbapi_connection.set_trace_callback(lambda x: logger.info(x))
        cursor.close()

    return engine


def initialize_db(engine: Engine):
    Base.metadata.create_all(bind=engine)
