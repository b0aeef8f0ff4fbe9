"""Read-only queries behind each assistant function.

Every adapter takes a session and a sanitized argument mapping and returns a
projection: plain dicts with camelCase keys and no storage keys.
"""

from mrologix.assistant.adapters.compliance import (
    get_technician_training_by_id,
    list_recent_temperature_control,
    search_airport_id,
    search_sms_reports,
    search_technician_training,
    search_temperature_control,
)
from mrologix.assistant.adapters.flight_records import (
    get_flight_record_by_id,
    list_attachments_for_record,
    list_recent_flight_records,
    search_flight_records,
    search_flight_records_by_tail,
)
from mrologix.assistant.adapters.inventory import (
    get_incoming_inspection_by_id,
    get_stock_inventory_by_id,
    list_recent_stock_inventory,
    search_incoming_inspections,
    search_stock_inventory,
)
from mrologix.assistant.adapters.queries import (
    get_technical_query_by_id,
    search_technical_queries,
    search_user_activity,
)
from mrologix.assistant.adapters.reports import get_sdr_report_by_id, search_sdr_reports
from mrologix.assistant.adapters.statistics import get_dashboard_statistics

__all__ = [
    "get_dashboard_statistics",
    "get_flight_record_by_id",
    "get_incoming_inspection_by_id",
    "get_sdr_report_by_id",
    "get_stock_inventory_by_id",
    "get_technical_query_by_id",
    "get_technician_training_by_id",
    "list_attachments_for_record",
    "list_recent_flight_records",
    "list_recent_stock_inventory",
    "list_recent_temperature_control",
    "search_airport_id",
    "search_flight_records",
    "search_flight_records_by_tail",
    "search_incoming_inspections",
    "search_sdr_reports",
    "search_sms_reports",
    "search_stock_inventory",
    "search_technical_queries",
    "search_technician_training",
    "search_temperature_control",
    "search_user_activity",
]
