# Models package: split into domain modules but re-exported here
from mrologix.logging import get_logger

from .base import Base, new_id, utcnow
from .auth import AuthSession, AuthUser, UserActivity, UserRole
from .records import Attachment, FlightRecord, IncomingInspection, SDRReport, StockInventory
from .compliance import AirportID, SMSReport, TechnicianTraining, TemperatureControl
from .queries import TechnicalQuery, TechnicalQueryResponse, TechnicalQueryTag, TechnicalQueryVote
from .engine import sqlite_engine, initialize_db

logger = get_logger(__file__)

__all__ = [
    "Base",
    "new_id",
    "utcnow",
    "AuthSession",
    "AuthUser",
    "UserActivity",
    "UserRole",
    "Attachment",
    "FlightRecord",
    "IncomingInspection",
    "SDRReport",
    "StockInventory",
    "AirportID",
    "SMSReport",
    "TechnicianTraining",
    "TemperatureControl",
    "TechnicalQuery",
    "TechnicalQueryResponse",
    "TechnicalQueryTag",
    "TechnicalQueryVote",
    "sqlite_engine",
    "initialize_db",
    "logger",
]
