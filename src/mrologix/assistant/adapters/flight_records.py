"""Flight record queries."""

from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from mrologix.assistant.adapters._query import attachment_summaries, build_conditions, equals_insensitive
from mrologix.assistant.serialization import UNDEFINED
from mrologix.db.models import Attachment, FlightRecord
from mrologix.storage import file_url


_EQUALS = {
    "airline": FlightRecord.airline,
    "fleet": FlightRecord.fleet,
    "tail": FlightRecord.tail,
    "station": FlightRecord.station,
    "service": FlightRecord.service,
    "systemAffected": FlightRecord.system_affected,
    "flightNumber": FlightRecord.flight_number,
    "technician": FlightRecord.technician,
}
_EXACT = {
    "blockTime": FlightRecord.block_time,
    "outTime": FlightRecord.out_time,
    "logPageNo": FlightRecord.log_page_no,
}
_CONTAINS = {
    "discrepancyNote": FlightRecord.discrepancy_note,
    "rectificationNote": FlightRecord.rectification_note,
}
_FLAGS = {
    "hasDefect": FlightRecord.has_defect,
    "hasTime": FlightRecord.has_time,
    "hasAttachments": FlightRecord.has_attachments,
}
_RANGES = (
    ("dateFrom", "dateTo", FlightRecord.date),
    ("createdFrom", "createdTo", FlightRecord.created_at),
    ("updatedFrom", "updatedTo", FlightRecord.updated_at),
)


def project_flight_record(record: FlightRecord, *, include_attachments: bool = True) -> dict[str, Any]:
    out: dict[str, Any] = {
        "id": record.id,
        "date": record.date,
        "airline": record.airline,
        "fleet": record.fleet,
        "flightNumber": record.flight_number,
        "station": record.station,
        "service": record.service,
        "tail": record.tail,
        "hasTime": bool(record.has_time),
        "blockTime": record.block_time if record.has_time else UNDEFINED,
        "outTime": record.out_time if record.has_time else UNDEFINED,
        "hasDefect": bool(record.has_defect),
        "logPageNo": record.log_page_no,
        "discrepancyNote": record.discrepancy_note,
        "rectificationNote": record.rectification_note,
        "systemAffected": record.system_affected,
        "technician": record.technician,
        "hasPartReplaced": bool(record.has_part_replaced),
        "hasAttachments": bool(record.has_attachments),
        "createdAt": record.created_at,
        "updatedAt": record.updated_at,
    }
    if include_attachments:
        out["attachments"] = attachment_summaries(record.attachments)
    return out


def _newest_first(stmt):
    return stmt.options(selectinload(FlightRecord.attachments)).order_by(
        FlightRecord.date.desc(), FlightRecord.id.desc()
    )


def get_flight_record_by_id(db: Session, args: Mapping[str, Any]) -> dict[str, Any] | None:
    record = db.get(FlightRecord, args["id"])
    return project_flight_record(record) if record is not None else None


def list_attachments_for_record(db: Session, args: Mapping[str, Any]) -> list[dict[str, Any]]:
    """Attachment metadata for a flight record, with resolved access URLs."""

    attachments = db.scalars(
        select(Attachment)
        .where(Attachment.flight_record_id == args["id"])
        .order_by(Attachment.created_at.asc(), Attachment.id.asc())
    ).all()
    return [
        {
            "id": a.id,
            "fileName": a.file_name,
            "url": file_url(a.file_key),
            "fileSize": a.file_size,
            "fileType": a.file_type,
        }
        for a in attachments
    ]


def list_recent_flight_records(db: Session, args: Mapping[str, Any]) -> list[dict[str, Any]]:
    records = db.scalars(_newest_first(select(FlightRecord)).limit(args["limit"])).all()
    return [project_flight_record(r) for r in records]


def search_flight_records_by_tail(db: Session, args: Mapping[str, Any]) -> list[dict[str, Any]]:
    stmt = _newest_first(select(FlightRecord).where(equals_insensitive(FlightRecord.tail, args["tail"])))
    records = db.scalars(stmt.limit(args["limit"])).all()
    return [project_flight_record(r) for r in records]


def search_flight_records(db: Session, args: Mapping[str, Any]) -> list[dict[str, Any]]:
    conditions = build_conditions(
        args,
        equals=_EQUALS,
        exact=_EXACT,
        contains=_CONTAINS,
        flags=_FLAGS,
        ranges=_RANGES,
    )
    stmt = _newest_first(select(FlightRecord).where(*conditions))
    records = db.scalars(stmt.limit(args["limit"])).all()
    return [project_flight_record(r) for r in records]
