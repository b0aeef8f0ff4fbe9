"""Dashboard counters."""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Callable, Mapping

from sqlalchemy import func, select, true
from sqlalchemy.orm import Session

from mrologix.assistant.adapters._query import utc_now
from mrologix.db.models import (
    AirportID,
    FlightRecord,
    IncomingInspection,
    SDRReport,
    SMSReport,
    StockInventory,
    TechnicalQuery,
    TechnicianTraining,
    TemperatureControl,
    UserActivity,
)


def _count(db: Session, model: Any, *conditions: Any) -> int:
    stmt = select(func.count()).select_from(model)
    if conditions:
        stmt = stmt.where(*conditions)
    return int(db.scalar(stmt) or 0)


def _flight_records(db: Session) -> dict[str, int]:
    since = utc_now() - timedelta(days=7)
    return {
        "total": _count(db, FlightRecord),
        "withDefects": _count(db, FlightRecord, FlightRecord.has_defect.is_(true())),
        "withAttachments": _count(db, FlightRecord, FlightRecord.has_attachments.is_(true())),
        "recentCount": _count(db, FlightRecord, FlightRecord.created_at >= since),
    }


def _stock_inventory(db: Session) -> dict[str, int]:
    return {
        "total": _count(db, StockInventory),
        "withInspection": _count(db, StockInventory, StockInventory.has_inspection.is_(true())),
        "expired": _count(
            db,
            StockInventory,
            StockInventory.has_expire_date.is_(true()),
            StockInventory.expire_date < utc_now(),
        ),
    }


def _temperature_control(db: Session) -> dict[str, int]:
    since = utc_now() - timedelta(days=7)
    return {
        "total": _count(db, TemperatureControl),
        "recentCount": _count(db, TemperatureControl, TemperatureControl.created_at >= since),
    }


def _technician_training(db: Session) -> dict[str, int]:
    return {
        "total": _count(db, TechnicianTraining),
        "withEngine": _count(db, TechnicianTraining, TechnicianTraining.has_engine.is_(true())),
        "withHours": _count(db, TechnicianTraining, TechnicianTraining.has_hours.is_(true())),
    }


def _sms_reports(db: Session) -> dict[str, int]:
    since = utc_now() - timedelta(days=30)
    return {
        "total": _count(db, SMSReport),
        "recentCount": _count(db, SMSReport, SMSReport.created_at >= since),
    }


def _sdr_reports(db: Session) -> dict[str, int]:
    since = utc_now() - timedelta(days=30)
    return {
        "total": _count(db, SDRReport),
        "recentCount": _count(db, SDRReport, SDRReport.created_at >= since),
    }


def _technical_queries(db: Session) -> dict[str, int]:
    return {
        "total": _count(db, TechnicalQuery),
        "resolved": _count(db, TechnicalQuery, TechnicalQuery.is_resolved.is_(true())),
        "open": _count(db, TechnicalQuery, TechnicalQuery.status == "OPEN"),
    }


def _incoming_inspections(db: Session) -> dict[str, int]:
    since = utc_now() - timedelta(days=30)
    return {
        "total": _count(db, IncomingInspection),
        "recentCount": _count(db, IncomingInspection, IncomingInspection.created_at >= since),
    }


def _airport_id(db: Session) -> dict[str, int]:
    now = utc_now()
    return {
        "total": _count(db, AirportID),
        "expired": _count(db, AirportID, AirportID.expire_date < now),
        "expiringSoon": _count(
            db,
            AirportID,
            AirportID.expire_date >= now,
            AirportID.expire_date <= now + timedelta(days=30),
        ),
    }


def _user_activity(db: Session) -> dict[str, int]:
    since = utc_now() - timedelta(days=1)
    return {
        "total": _count(db, UserActivity),
        "recentCount": _count(db, UserActivity, UserActivity.created_at >= since),
    }


MODULE_COUNTERS: dict[str, Callable[[Session], dict[str, int]]] = {
    "flight_records": _flight_records,
    "stock_inventory": _stock_inventory,
    "temperature_control": _temperature_control,
    "technician_training": _technician_training,
    "sms_reports": _sms_reports,
    "sdr_reports": _sdr_reports,
    "technical_queries": _technical_queries,
    "incoming_inspections": _incoming_inspections,
    "airport_id": _airport_id,
    "user_activity": _user_activity,
}


def get_dashboard_statistics(db: Session, args: Mapping[str, Any]) -> dict[str, dict[str, int]]:
    stats: dict[str, dict[str, int]] = {}
    for module in args["modules"]:
        counter = MODULE_COUNTERS.get(module)
        if counter is not None and module not in stats:
            stats[module] = counter(db)
    return stats
