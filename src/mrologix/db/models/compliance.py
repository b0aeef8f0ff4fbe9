"""Station compliance tables: climate logs, training, airport badges and SMS reports."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Float, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, new_id, utcnow


class TemperatureControl(Base):
    __tablename__ = "temperature_control"

    id: Mapped[str] = mapped_column(Text, primary_key=True, default=new_id)
    date: Mapped[datetime] = mapped_column(DateTime, index=True)
    time: Mapped[str | None] = mapped_column(Text, nullable=True)

    location: Mapped[str | None] = mapped_column(Text, nullable=True)
    custom_location: Mapped[str | None] = mapped_column(Text, nullable=True)
    temperature: Mapped[float | None] = mapped_column(Float, nullable=True)
    humidity: Mapped[float | None] = mapped_column(Float, nullable=True)
    employee_name: Mapped[str | None] = mapped_column(Text, nullable=True)

    has_comment: Mapped[bool] = mapped_column(Boolean, default=False)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow)


class TechnicianTraining(Base):
    __tablename__ = "technician_training"

    id: Mapped[str] = mapped_column(Text, primary_key=True, default=new_id)
    date: Mapped[datetime] = mapped_column(DateTime, index=True)

    technician: Mapped[str | None] = mapped_column(Text, nullable=True, index=True)
    organization: Mapped[str | None] = mapped_column(Text, nullable=True)
    custom_org: Mapped[str | None] = mapped_column(Text, nullable=True)
    type: Mapped[str | None] = mapped_column(Text, nullable=True)
    custom_type: Mapped[str | None] = mapped_column(Text, nullable=True)
    training: Mapped[str | None] = mapped_column(Text, nullable=True)

    has_engine: Mapped[bool] = mapped_column(Boolean, default=False)
    engine_type: Mapped[str | None] = mapped_column(Text, nullable=True)
    has_hours: Mapped[bool] = mapped_column(Boolean, default=False)
    hours: Mapped[float | None] = mapped_column(Float, nullable=True)
    has_comment: Mapped[bool] = mapped_column(Boolean, default=False)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)

    has_attachments: Mapped[bool] = mapped_column(Boolean, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow)

    attachments: Mapped[list["Attachment"]] = relationship(
        back_populates="technician_training",
        cascade="all, delete-orphan",
        order_by="Attachment.created_at",
    )


class AirportID(Base):
    __tablename__ = "airport_id"

    id: Mapped[str] = mapped_column(Text, primary_key=True, default=new_id)
    employee_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    station: Mapped[str | None] = mapped_column(Text, nullable=True)
    custom_station: Mapped[str | None] = mapped_column(Text, nullable=True)
    badge_id_number: Mapped[str | None] = mapped_column(Text, nullable=True, index=True)

    id_issued_date: Mapped[datetime] = mapped_column(DateTime, index=True)
    expire_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True, index=True)

    has_comment: Mapped[bool] = mapped_column(Boolean, default=False)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    has_attachment: Mapped[bool] = mapped_column(Boolean, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow)

    attachments: Mapped[list["Attachment"]] = relationship(
        back_populates="airport_id",
        cascade="all, delete-orphan",
        order_by="Attachment.created_at",
    )


class SMSReport(Base):
    """Safety Management System report."""

    __tablename__ = "sms_report"

    id: Mapped[str] = mapped_column(Text, primary_key=True, default=new_id)
    report_number: Mapped[str | None] = mapped_column(Text, nullable=True, index=True)
    report_title: Mapped[str | None] = mapped_column(Text, nullable=True)
    report_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    report_type: Mapped[str | None] = mapped_column(Text, nullable=True)
    priority: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str | None] = mapped_column(Text, nullable=True)

    reporter_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    reporter_email: Mapped[str | None] = mapped_column(Text, nullable=True)
    date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    time_of_event: Mapped[str | None] = mapped_column(Text, nullable=True)

    has_attachments: Mapped[bool] = mapped_column(Boolean, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow)

    attachments: Mapped[list["Attachment"]] = relationship(
        back_populates="sms_report",
        cascade="all, delete-orphan",
        order_by="Attachment.created_at",
    )
