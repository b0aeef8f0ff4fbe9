"""Station compliance queries: climate logs, training, SMS reports and airport badges."""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Mapping

from sqlalchemy import or_, select
from sqlalchemy.orm import Session, selectinload

from mrologix.assistant.adapters._query import (
    attachment_summaries,
    build_conditions,
    contains_insensitive,
    utc_now,
)
from mrologix.assistant.serialization import UNDEFINED
from mrologix.db.models import AirportID, SMSReport, TechnicianTraining, TemperatureControl


_TEMPERATURE_CONTAINS = {
    "location": TemperatureControl.location,
    "employeeName": TemperatureControl.employee_name,
}
# (argument, column, is lower bound)
_TEMPERATURE_BOUNDS = (
    ("tempMin", TemperatureControl.temperature, True),
    ("tempMax", TemperatureControl.temperature, False),
    ("humidityMin", TemperatureControl.humidity, True),
    ("humidityMax", TemperatureControl.humidity, False),
)
_TRAINING_CONTAINS = {
    "technician": TechnicianTraining.technician,
    "organization": TechnicianTraining.organization,
    "type": TechnicianTraining.type,
    "training": TechnicianTraining.training,
    "engineType": TechnicianTraining.engine_type,
}
_TRAINING_FLAGS = {
    "hasEngine": TechnicianTraining.has_engine,
    "hasHours": TechnicianTraining.has_hours,
}
_SMS_EQUALS = {
    "priority": SMSReport.priority,
    "status": SMSReport.status,
}
_SMS_CONTAINS = {
    "reportType": SMSReport.report_type,
    "submitter": SMSReport.reporter_name,
}
_BADGE_CONTAINS = {
    "employeeName": AirportID.employee_name,
    "station": AirportID.station,
    "badgeIdNumber": AirportID.badge_id_number,
}


def project_temperature_reading(reading: TemperatureControl) -> dict[str, Any]:
    return {
        "id": reading.id,
        "date": reading.date,
        "time": reading.time,
        "location": reading.location,
        "customLocation": reading.custom_location,
        "temperature": reading.temperature,
        "humidity": reading.humidity,
        "employeeName": reading.employee_name,
        "hasComment": bool(reading.has_comment),
        "comment": reading.comment if reading.has_comment else UNDEFINED,
        "createdAt": reading.created_at,
        "updatedAt": reading.updated_at,
    }


def project_training(training: TechnicianTraining) -> dict[str, Any]:
    return {
        "id": training.id,
        "date": training.date,
        "technician": training.technician,
        "organization": training.organization,
        "customOrg": training.custom_org,
        "type": training.type,
        "customType": training.custom_type,
        "training": training.training,
        "hasEngine": bool(training.has_engine),
        "engineType": training.engine_type if training.has_engine else UNDEFINED,
        "hasHours": bool(training.has_hours),
        "hours": training.hours if training.has_hours else UNDEFINED,
        "hasComment": bool(training.has_comment),
        "comment": training.comment if training.has_comment else UNDEFINED,
        "hasAttachments": bool(training.has_attachments),
        "createdAt": training.created_at,
        "updatedAt": training.updated_at,
        "attachments": attachment_summaries(training.attachments),
    }


def project_sms_report(report: SMSReport) -> dict[str, Any]:
    return {
        "id": report.id,
        "reportNumber": report.report_number,
        "reportTitle": report.report_title,
        "reportDescription": report.report_description,
        "reportType": report.report_type,
        "priority": report.priority,
        "status": report.status,
        "reporterName": report.reporter_name,
        "reporterEmail": report.reporter_email,
        "date": report.date,
        "timeOfEvent": report.time_of_event,
        "hasAttachments": bool(report.has_attachments),
        "createdAt": report.created_at,
        "updatedAt": report.updated_at,
        "attachments": attachment_summaries(report.attachments),
    }


def project_airport_badge(badge: AirportID) -> dict[str, Any]:
    return {
        "id": badge.id,
        "employeeName": badge.employee_name,
        "station": badge.station,
        "customStation": badge.custom_station,
        "badgeIdNumber": badge.badge_id_number,
        "idIssuedDate": badge.id_issued_date,
        "expireDate": badge.expire_date,
        "hasComment": bool(badge.has_comment),
        "comment": badge.comment if badge.has_comment else UNDEFINED,
        "hasAttachment": bool(badge.has_attachment),
        "createdAt": badge.created_at,
        "updatedAt": badge.updated_at,
        "attachments": attachment_summaries(badge.attachments),
    }


def _readings_newest_first(stmt):
    return stmt.order_by(TemperatureControl.date.desc(), TemperatureControl.id.desc())


def search_temperature_control(db: Session, args: Mapping[str, Any]) -> list[dict[str, Any]]:
    conditions = build_conditions(
        args,
        contains=_TEMPERATURE_CONTAINS,
        ranges=(("dateFrom", "dateTo", TemperatureControl.date),),
    )
    for key, column, lower in _TEMPERATURE_BOUNDS:
        if key in args:
            conditions.append(column >= args[key] if lower else column <= args[key])
    stmt = _readings_newest_first(select(TemperatureControl).where(*conditions))
    return [project_temperature_reading(r) for r in db.scalars(stmt.limit(args["limit"])).all()]


def list_recent_temperature_control(db: Session, args: Mapping[str, Any]) -> list[dict[str, Any]]:
    stmt = _readings_newest_first(select(TemperatureControl)).limit(args["limit"])
    return [project_temperature_reading(r) for r in db.scalars(stmt).all()]


def search_technician_training(db: Session, args: Mapping[str, Any]) -> list[dict[str, Any]]:
    conditions = build_conditions(
        args,
        contains=_TRAINING_CONTAINS,
        flags=_TRAINING_FLAGS,
        ranges=(("dateFrom", "dateTo", TechnicianTraining.date),),
    )
    stmt = (
        select(TechnicianTraining)
        .where(*conditions)
        .options(selectinload(TechnicianTraining.attachments))
        .order_by(TechnicianTraining.date.desc(), TechnicianTraining.id.desc())
        .limit(args["limit"])
    )
    return [project_training(t) for t in db.scalars(stmt).all()]


def get_technician_training_by_id(db: Session, args: Mapping[str, Any]) -> dict[str, Any] | None:
    training = db.get(TechnicianTraining, args["id"])
    return project_training(training) if training is not None else None


def search_sms_reports(db: Session, args: Mapping[str, Any]) -> list[dict[str, Any]]:
    conditions = build_conditions(
        args,
        equals=_SMS_EQUALS,
        contains=_SMS_CONTAINS,
        ranges=(("dateFrom", "dateTo", SMSReport.created_at),),
    )
    if "description" in args:
        conditions.append(
            or_(
                contains_insensitive(SMSReport.report_description, args["description"]),
                contains_insensitive(SMSReport.report_title, args["description"]),
            )
        )
    stmt = (
        select(SMSReport)
        .where(*conditions)
        .options(selectinload(SMSReport.attachments))
        .order_by(SMSReport.created_at.desc(), SMSReport.id.desc())
        .limit(args["limit"])
    )
    return [project_sms_report(r) for r in db.scalars(stmt).all()]


def _expiry_conditions(args: Mapping[str, Any]) -> list[Any]:
    now = utc_now()
    # a window wins over the plain expired flag
    if "expiringWithinDays" in args:
        return [
            AirportID.expire_date >= now,
            AirportID.expire_date <= now + timedelta(days=args["expiringWithinDays"]),
        ]
    if "isExpired" in args:
        return [AirportID.expire_date < now] if args["isExpired"] else [AirportID.expire_date >= now]
    return []


def search_airport_id(db: Session, args: Mapping[str, Any]) -> list[dict[str, Any]]:
    conditions = build_conditions(
        args,
        contains=_BADGE_CONTAINS,
        ranges=(("dateFrom", "dateTo", AirportID.id_issued_date),),
    )
    conditions.extend(_expiry_conditions(args))
    stmt = (
        select(AirportID)
        .where(*conditions)
        .options(selectinload(AirportID.attachments))
        .order_by(AirportID.id_issued_date.desc(), AirportID.id.desc())
        .limit(args["limit"])
    )
    return [project_airport_badge(b) for b in db.scalars(stmt).all()]
