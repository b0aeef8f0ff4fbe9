# Shared SQLAlchemy base and timestamp helpers
import uuid
from datetime import datetime, UTC

from sqlalchemy.orm import DeclarativeBase


def utcnow() -> datetime:
    return datetime.now(UTC)


def new_id() -> str:
    """Opaque string identifier used by the record tables."""

    return uuid.uuid4().hex


class Base(DeclarativeBase):
    __table_args__ = {"sqlite_autoincrement": True}
