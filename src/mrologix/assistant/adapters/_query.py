"""Predicate builders shared by the search adapters."""

from __future__ import annotations

from datetime import UTC, datetime, time
from typing import Any, Iterable, Mapping

from sqlalchemy import func
from sqlalchemy.sql.elements import ColumnElement

from mrologix.db.models import Attachment


Columns = Mapping[str, Any]


def utc_now() -> datetime:
    # stored datetimes are naive UTC
    return datetime.now(UTC).replace(tzinfo=None)


def end_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.max)


def equals_insensitive(column: Any, value: str) -> ColumnElement[bool]:
    return func.lower(column) == value.lower()


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def contains_insensitive(column: Any, value: str) -> ColumnElement[bool]:
    return column.ilike(f"%{_escape_like(value)}%", escape="\\")


def date_range(column: Any, start: datetime | None, end: datetime | None) -> list[ColumnElement[bool]]:
    """Inclusive range; ``end`` is advanced to the last instant of its day."""

    conditions: list[ColumnElement[bool]] = []
    if start is not None:
        conditions.append(column >= start)
    if end is not None:
        conditions.append(column <= end_of_day(end))
    return conditions


def build_conditions(
    args: Mapping[str, Any],
    *,
    equals: Columns | None = None,
    exact: Columns | None = None,
    contains: Columns | None = None,
    flags: Columns | None = None,
    ranges: Iterable[tuple[str, str, Any]] = (),
) -> list[ColumnElement[bool]]:
    """Conjunction of every filter present in ``args``; absent keys add nothing."""

    conditions: list[ColumnElement[bool]] = []
    for key, column in (equals or {}).items():
        if key in args:
            conditions.append(equals_insensitive(column, args[key]))
    for key, column in (exact or {}).items():
        if key in args:
            conditions.append(column == args[key])
    for key, column in (contains or {}).items():
        if key in args:
            conditions.append(contains_insensitive(column, args[key]))
    for key, column in (flags or {}).items():
        if key in args:
            conditions.append(column.is_(bool(args[key])))
    for start_key, end_key, column in ranges:
        conditions.extend(date_range(column, args.get(start_key), args.get(end_key)))
    return conditions


def attachment_summary(attachment: Attachment) -> dict[str, Any]:
    return {
        "id": attachment.id,
        "fileName": attachment.file_name,
        "fileType": attachment.file_type,
        "fileSize": attachment.file_size,
    }


def attachment_summaries(attachments: Iterable[Attachment]) -> list[dict[str, Any]]:
    ordered = sorted(attachments, key=lambda a: (a.created_at or datetime.min, a.id))
    return [attachment_summary(a) for a in ordered]
