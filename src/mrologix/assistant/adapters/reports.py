"""SDR (Service Difficulty Report) queries."""

from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from mrologix.assistant.adapters._query import attachment_summaries, build_conditions
from mrologix.db.models import SDRReport


_CONTAINS = {
    "controlNumber": SDRReport.control_number,
    "reportTitle": SDRReport.report_title,
    "submitter": SDRReport.submitter,
    "submitterName": SDRReport.submitter_name,
    "station": SDRReport.station,
    "condition": SDRReport.condition,
    "flightNumber": SDRReport.flight_number,
    "airplaneModel": SDRReport.airplane_model,
    "airplaneTailNumber": SDRReport.airplane_tail_number,
    "partNumber": SDRReport.part_number,
    "serialNumber": SDRReport.serial_number,
    "ataSystemCode": SDRReport.ata_system_code,
    "problemDescription": SDRReport.problem_description,
}


def project_sdr_report(report: SDRReport) -> dict[str, Any]:
    return {
        "id": report.id,
        "controlNumber": report.control_number,
        "reportTitle": report.report_title,
        "difficultyDate": report.difficulty_date,
        "submitter": report.submitter,
        "submitterName": report.submitter_name,
        "station": report.station,
        "condition": report.condition,
        "flightNumber": report.flight_number,
        "airplaneModel": report.airplane_model,
        "airplaneTailNumber": report.airplane_tail_number,
        "partNumber": report.part_number,
        "serialNumber": report.serial_number,
        "ataSystemCode": report.ata_system_code,
        "problemDescription": report.problem_description,
        "hasAttachments": bool(report.has_attachments),
        "createdAt": report.created_at,
        "updatedAt": report.updated_at,
        "attachments": attachment_summaries(report.attachments),
    }


def search_sdr_reports(db: Session, args: Mapping[str, Any]) -> list[dict[str, Any]]:
    conditions = build_conditions(
        args,
        contains=_CONTAINS,
        ranges=(("dateFrom", "dateTo", SDRReport.difficulty_date),),
    )
    stmt = (
        select(SDRReport)
        .where(*conditions)
        .options(selectinload(SDRReport.attachments))
        .order_by(SDRReport.difficulty_date.desc(), SDRReport.id.desc())
        .limit(args["limit"])
    )
    return [project_sdr_report(r) for r in db.scalars(stmt).all()]


def get_sdr_report_by_id(db: Session, args: Mapping[str, Any]) -> dict[str, Any] | None:
    report = db.get(SDRReport, args["id"])
    return project_sdr_report(report) if report is not None else None
