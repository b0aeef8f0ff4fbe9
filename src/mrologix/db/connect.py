# mrologix/db/connect.py

import os
from contextlib import contextmanager
from functools import lru_cache
from pathlib import Path
from typing import Iterator

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from mrologix.db.models import initialize_db, sqlite_engine
from mrologix.logging import get_logger

logger = get_logger(__file__)


@lru_cache(maxsize=None)
def get_db_dir() -> Path:
    db_dir = Path(os.environ.get("MROLOGIX_DB_DIR", Path.home() / "mrologix"))
    db_dir.mkdir(parents=True, exist_ok=True)
    logger.info("setting db_dir to %s", str(db_dir))
    return db_dir


def get_db_path(file: str | Path | None = None) -> str:
    """Return a SQLite database URI string.

    Resolution order: explicit ``file``, ``MROLOGIX_DB_PATH``, then
    ``mrologix.db`` inside :func:`get_db_dir`. Values that already look like
    a SQLite URI are returned unchanged.
    """

    raw = file if file is not None else os.getenv("MROLOGIX_DB_PATH")
    if raw is None or not str(raw).strip():
        return "sqlite:///" + str(get_db_dir() / "mrologix.db")
    text = str(raw).strip()
    if text.startswith("sqlite"):
        return text
    return "sqlite:///" + str(Path(text).expanduser())


@lru_cache(maxsize=None)
def _engine_for(db_uri: str) -> Engine:
    engine = sqlite_engine(db_uri)
    initialize_db(engine=engine)
    logger.info("opened database %s", db_uri)
    return engine


def make_session_factory(engine: Engine):
    SessionLocal = sessionmaker(bind=engine)
    initialize_db(engine=engine)

    @contextmanager
    def get_session():
        session = SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return get_session


@contextmanager
def get_session(file_path: str | Path | None = None) -> Iterator[Session]:
    """Provide a transactional scope around a series of operations.

    Parameters
    ----------
    file_path:
        Optional path or URI to the SQLite database. If not provided, the
        ``MROLOGIX_DB_PATH`` environment variable or the default location
        from :func:`get_db_dir` is used.
    """

    engine = _engine_for(get_db_path(file_path))
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def get_session_dep() -> Iterator[Session]:
    """FastAPI dependency that yields a SQLAlchemy session.

    ``get_session`` is a ``contextmanager`` for CLI/scripts. FastAPI expects a
    generator dependency (``yield``) so it can manage teardown after the
    request. This wrapper bridges the two.
    """

    with get_session() as session:
        yield session
