"""Maintenance record tables read by the assistant.

Attachments keep their storage key in ``file_key``; that key is private and
is only turned into a URL on explicit request.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, Boolean, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, new_id, utcnow


class FlightRecord(Base):
    __tablename__ = "flight_record"

    id: Mapped[str] = mapped_column(Text, primary_key=True, default=new_id)
    date: Mapped[datetime] = mapped_column(DateTime, index=True)

    airline: Mapped[str | None] = mapped_column(Text, nullable=True)
    fleet: Mapped[str | None] = mapped_column(Text, nullable=True)
    flight_number: Mapped[str | None] = mapped_column(Text, nullable=True)
    station: Mapped[str | None] = mapped_column(Text, nullable=True)
    service: Mapped[str | None] = mapped_column(Text, nullable=True)
    tail: Mapped[str | None] = mapped_column(Text, nullable=True, index=True)

    has_time: Mapped[bool] = mapped_column(Boolean, default=False)
    block_time: Mapped[str | None] = mapped_column(Text, nullable=True)
    out_time: Mapped[str | None] = mapped_column(Text, nullable=True)

    has_defect: Mapped[bool] = mapped_column(Boolean, default=False)
    log_page_no: Mapped[str | None] = mapped_column(Text, nullable=True)
    discrepancy_note: Mapped[str | None] = mapped_column(Text, nullable=True)
    rectification_note: Mapped[str | None] = mapped_column(Text, nullable=True)
    system_affected: Mapped[str | None] = mapped_column(Text, nullable=True)
    technician: Mapped[str | None] = mapped_column(Text, nullable=True)
    has_part_replaced: Mapped[bool] = mapped_column(Boolean, default=False)

    has_attachments: Mapped[bool] = mapped_column(Boolean, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow)

    attachments: Mapped[list["Attachment"]] = relationship(
        back_populates="flight_record",
        cascade="all, delete-orphan",
        order_by="Attachment.created_at",
    )


class StockInventory(Base):
    __tablename__ = "stock_inventory"

    id: Mapped[str] = mapped_column(Text, primary_key=True, default=new_id)
    incoming_date: Mapped[datetime] = mapped_column(DateTime, index=True)

    station: Mapped[str | None] = mapped_column(Text, nullable=True)
    owner: Mapped[str | None] = mapped_column(Text, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    part_no: Mapped[str | None] = mapped_column(Text, nullable=True, index=True)
    serial_no: Mapped[str | None] = mapped_column(Text, nullable=True)
    quantity: Mapped[int | None] = mapped_column(Integer, nullable=True)

    has_expire_date: Mapped[bool] = mapped_column(Boolean, default=False)
    expire_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    type: Mapped[str | None] = mapped_column(Text, nullable=True)
    location: Mapped[str | None] = mapped_column(Text, nullable=True)
    has_inspection: Mapped[bool] = mapped_column(Boolean, default=False)
    inspection_result: Mapped[str | None] = mapped_column(Text, nullable=True)
    technician: Mapped[str | None] = mapped_column(Text, nullable=True)

    has_attachments: Mapped[bool] = mapped_column(Boolean, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow)

    attachments: Mapped[list["Attachment"]] = relationship(
        back_populates="stock_inventory",
        cascade="all, delete-orphan",
        order_by="Attachment.created_at",
    )
    inspections: Mapped[list["IncomingInspection"]] = relationship(
        back_populates="stock_inventory",
        order_by="IncomingInspection.inspection_date.desc()",
    )


class SDRReport(Base):
    __tablename__ = "sdr_report"

    id: Mapped[str] = mapped_column(Text, primary_key=True, default=new_id)
    control_number: Mapped[str | None] = mapped_column(Text, nullable=True, index=True)
    report_title: Mapped[str | None] = mapped_column(Text, nullable=True)
    difficulty_date: Mapped[datetime] = mapped_column(DateTime, index=True)

    submitter: Mapped[str | None] = mapped_column(Text, nullable=True)
    submitter_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    station: Mapped[str | None] = mapped_column(Text, nullable=True)
    condition: Mapped[str | None] = mapped_column(Text, nullable=True)
    flight_number: Mapped[str | None] = mapped_column(Text, nullable=True)
    airplane_model: Mapped[str | None] = mapped_column(Text, nullable=True)
    airplane_tail_number: Mapped[str | None] = mapped_column(Text, nullable=True)
    part_number: Mapped[str | None] = mapped_column(Text, nullable=True)
    serial_number: Mapped[str | None] = mapped_column(Text, nullable=True)
    ata_system_code: Mapped[str | None] = mapped_column(Text, nullable=True)
    problem_description: Mapped[str | None] = mapped_column(Text, nullable=True)

    has_attachments: Mapped[bool] = mapped_column(Boolean, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow)

    attachments: Mapped[list["Attachment"]] = relationship(
        back_populates="sdr_report",
        cascade="all, delete-orphan",
        order_by="Attachment.created_at",
    )


class IncomingInspection(Base):
    __tablename__ = "incoming_inspection"

    id: Mapped[str] = mapped_column(Text, primary_key=True, default=new_id)
    inspection_date: Mapped[datetime] = mapped_column(DateTime, index=True)

    inspector: Mapped[str | None] = mapped_column(Text, nullable=True)
    part_no: Mapped[str | None] = mapped_column(Text, nullable=True)
    serial_no: Mapped[str | None] = mapped_column(Text, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # YES | NO | N/A
    product_match: Mapped[str | None] = mapped_column(Text, nullable=True)
    product_specs: Mapped[str | None] = mapped_column(Text, nullable=True)
    physical_condition: Mapped[str | None] = mapped_column(Text, nullable=True)

    stock_inventory_id: Mapped[str | None] = mapped_column(
        ForeignKey("stock_inventory.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow)

    stock_inventory: Mapped[StockInventory | None] = relationship(back_populates="inspections")
    attachments: Mapped[list["Attachment"]] = relationship(
        back_populates="incoming_inspection",
        cascade="all, delete-orphan",
        order_by="Attachment.created_at",
    )


class Attachment(Base):
    __tablename__ = "attachment"

    id: Mapped[str] = mapped_column(Text, primary_key=True, default=new_id)
    file_name: Mapped[str] = mapped_column(Text)
    file_type: Mapped[str | None] = mapped_column(Text, nullable=True)
    file_size: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    file_key: Mapped[str] = mapped_column(Text)

    flight_record_id: Mapped[str | None] = mapped_column(
        ForeignKey("flight_record.id", ondelete="CASCADE"), nullable=True, index=True
    )
    stock_inventory_id: Mapped[str | None] = mapped_column(
        ForeignKey("stock_inventory.id", ondelete="CASCADE"), nullable=True, index=True
    )
    sdr_report_id: Mapped[str | None] = mapped_column(
        ForeignKey("sdr_report.id", ondelete="CASCADE"), nullable=True, index=True
    )
    incoming_inspection_id: Mapped[str | None] = mapped_column(
        ForeignKey("incoming_inspection.id", ondelete="CASCADE"), nullable=True, index=True
    )
    technician_training_id: Mapped[str | None] = mapped_column(
        ForeignKey("technician_training.id", ondelete="CASCADE"), nullable=True, index=True
    )
    airport_id_id: Mapped[str | None] = mapped_column(
        ForeignKey("airport_id.id", ondelete="CASCADE"), nullable=True, index=True
    )
    sms_report_id: Mapped[str | None] = mapped_column(
        ForeignKey("sms_report.id", ondelete="CASCADE"), nullable=True, index=True
    )
    technical_query_id: Mapped[str | None] = mapped_column(
        ForeignKey("technical_query.id", ondelete="CASCADE"), nullable=True, index=True
    )
    technical_query_response_id: Mapped[str | None] = mapped_column(
        ForeignKey("technical_query_response.id", ondelete="CASCADE"), nullable=True, index=True
    )

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    flight_record: Mapped[FlightRecord | None] = relationship(back_populates="attachments")
    stock_inventory: Mapped[StockInventory | None] = relationship(back_populates="attachments")
    sdr_report: Mapped[SDRReport | None] = relationship(back_populates="attachments")
    incoming_inspection: Mapped[IncomingInspection | None] = relationship(back_populates="attachments")
    technician_training: Mapped["TechnicianTraining | None"] = relationship(back_populates="attachments")
    airport_id: Mapped["AirportID | None"] = relationship(back_populates="attachments")
    sms_report: Mapped["SMSReport | None"] = relationship(back_populates="attachments")
    technical_query: Mapped["TechnicalQuery | None"] = relationship(back_populates="attachments")
    technical_query_response: Mapped["TechnicalQueryResponse | None"] = relationship(
        back_populates="attachments"
    )
