"""Stock inventory and incoming inspection queries."""

from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy import false, or_, select, true
from sqlalchemy.orm import Session, selectinload

from mrologix.assistant.adapters._query import (
    attachment_summaries,
    build_conditions,
    equals_insensitive,
    utc_now,
)
from mrologix.assistant.serialization import UNDEFINED
from mrologix.db.models import IncomingInspection, StockInventory


_STOCK_CONTAINS = {
    "partNo": StockInventory.part_no,
    "serialNo": StockInventory.serial_no,
    "description": StockInventory.description,
    "station": StockInventory.station,
    "owner": StockInventory.owner,
    "type": StockInventory.type,
    "location": StockInventory.location,
    "technician": StockInventory.technician,
}
_INSPECTION_CONTAINS = {
    "inspector": IncomingInspection.inspector,
    "partNo": IncomingInspection.part_no,
    "serialNo": IncomingInspection.serial_no,
    "description": IncomingInspection.description,
}
_INSPECTION_EXACT = {
    "productMatch": IncomingInspection.product_match,
    "productSpecs": IncomingInspection.product_specs,
    "physicalCondition": IncomingInspection.physical_condition,
}


def project_stock_item(item: StockInventory, *, include_inspections: bool = False) -> dict[str, Any]:
    out: dict[str, Any] = {
        "id": item.id,
        "incomingDate": item.incoming_date,
        "station": item.station,
        "owner": item.owner,
        "description": item.description,
        "partNo": item.part_no,
        "serialNo": item.serial_no,
        "quantity": item.quantity,
        "hasExpireDate": bool(item.has_expire_date),
        "expireDate": item.expire_date if item.has_expire_date else UNDEFINED,
        "type": item.type,
        "location": item.location,
        "hasInspection": bool(item.has_inspection),
        "inspectionResult": item.inspection_result,
        "technician": item.technician,
        "hasAttachments": bool(item.has_attachments),
        "createdAt": item.created_at,
        "updatedAt": item.updated_at,
        "attachments": attachment_summaries(item.attachments),
    }
    if include_inspections:
        inspections = sorted(item.inspections, key=lambda i: (i.inspection_date, i.id), reverse=True)
        out["inspections"] = [project_inspection(i, include_attachments=False) for i in inspections]
    return out


def _stock_summary(item: StockInventory | None) -> dict[str, Any] | None:
    if item is None:
        return None
    return {
        "id": item.id,
        "partNo": item.part_no,
        "serialNo": item.serial_no,
        "description": item.description,
        "station": item.station,
        "incomingDate": item.incoming_date,
    }


def project_inspection(
    inspection: IncomingInspection,
    *,
    include_attachments: bool = True,
    include_stock: bool = False,
) -> dict[str, Any]:
    out: dict[str, Any] = {
        "id": inspection.id,
        "inspectionDate": inspection.inspection_date,
        "inspector": inspection.inspector,
        "partNo": inspection.part_no,
        "serialNo": inspection.serial_no,
        "description": inspection.description,
        "productMatch": inspection.product_match,
        "productSpecs": inspection.product_specs,
        "physicalCondition": inspection.physical_condition,
        "stockInventoryId": inspection.stock_inventory_id,
        "createdAt": inspection.created_at,
        "updatedAt": inspection.updated_at,
    }
    if include_attachments:
        out["attachments"] = attachment_summaries(inspection.attachments)
    if include_stock:
        out["stockInventory"] = _stock_summary(inspection.stock_inventory)
    return out


def _stock_newest_first(stmt):
    return stmt.options(selectinload(StockInventory.attachments)).order_by(
        StockInventory.created_at.desc(), StockInventory.id.desc()
    )


def _expired_condition(expired: bool):
    now = utc_now()
    if expired:
        return (StockInventory.has_expire_date.is_(true())) & (StockInventory.expire_date < now)
    return or_(
        StockInventory.has_expire_date.is_(false()),
        StockInventory.expire_date.is_(None),
        StockInventory.expire_date >= now,
    )


def search_stock_inventory(db: Session, args: Mapping[str, Any]) -> list[dict[str, Any]]:
    conditions = build_conditions(
        args,
        contains=_STOCK_CONTAINS,
        flags={"hasInspection": StockInventory.has_inspection},
        ranges=(("dateFrom", "dateTo", StockInventory.incoming_date),),
    )
    if "inspectionResult" in args:
        conditions.append(equals_insensitive(StockInventory.inspection_result, args["inspectionResult"]))
    if "hasExpired" in args:
        conditions.append(_expired_condition(bool(args["hasExpired"])))
    stmt = _stock_newest_first(select(StockInventory).where(*conditions))
    items = db.scalars(stmt.limit(args["limit"])).all()
    return [project_stock_item(i) for i in items]


def get_stock_inventory_by_id(db: Session, args: Mapping[str, Any]) -> dict[str, Any] | None:
    item = db.get(StockInventory, args["id"])
    return project_stock_item(item, include_inspections=True) if item is not None else None


def list_recent_stock_inventory(db: Session, args: Mapping[str, Any]) -> list[dict[str, Any]]:
    items = db.scalars(_stock_newest_first(select(StockInventory)).limit(args["limit"])).all()
    return [project_stock_item(i) for i in items]


def search_incoming_inspections(db: Session, args: Mapping[str, Any]) -> list[dict[str, Any]]:
    conditions = build_conditions(
        args,
        contains=_INSPECTION_CONTAINS,
        exact=_INSPECTION_EXACT,
        ranges=(("dateFrom", "dateTo", IncomingInspection.inspection_date),),
    )
    stmt = (
        select(IncomingInspection)
        .where(*conditions)
        .options(selectinload(IncomingInspection.attachments))
        .order_by(IncomingInspection.inspection_date.desc(), IncomingInspection.id.desc())
        .limit(args["limit"])
    )
    return [project_inspection(i) for i in db.scalars(stmt).all()]


def get_incoming_inspection_by_id(db: Session, args: Mapping[str, Any]) -> dict[str, Any] | None:
    inspection = db.get(IncomingInspection, args["id"])
    if inspection is None:
        return None
    return project_inspection(inspection, include_stock=True)
