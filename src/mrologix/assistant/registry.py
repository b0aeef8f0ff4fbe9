"""Static catalog of the data functions the model may call.

The set of :class:`FunctionName` members is the model's whole vocabulary.
Each entry declares its parameters once; the same declaration is sent to the
model as a JSON schema and enforced by :mod:`mrologix.assistant.sanitize`.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Literal, Mapping


ParamType = Literal["string", "integer", "number", "boolean", "array"]


class FunctionName(str, enum.Enum):
    get_flight_record_by_id = "get_flight_record_by_id"
    list_attachments_for_record = "list_attachments_for_record"
    list_recent_flight_records = "list_recent_flight_records"
    search_flight_records_by_tail = "search_flight_records_by_tail"
    search_flight_records = "search_flight_records"
    search_stock_inventory = "search_stock_inventory"
    get_stock_inventory_by_id = "get_stock_inventory_by_id"
    list_recent_stock_inventory = "list_recent_stock_inventory"
    search_temperature_control = "search_temperature_control"
    list_recent_temperature_control = "list_recent_temperature_control"
    search_technician_training = "search_technician_training"
    get_technician_training_by_id = "get_technician_training_by_id"
    search_sms_reports = "search_sms_reports"
    search_sdr_reports = "search_sdr_reports"
    get_sdr_report_by_id = "get_sdr_report_by_id"
    search_technical_queries = "search_technical_queries"
    get_technical_query_by_id = "get_technical_query_by_id"
    search_incoming_inspections = "search_incoming_inspections"
    get_incoming_inspection_by_id = "get_incoming_inspection_by_id"
    search_airport_id = "search_airport_id"
    search_user_activity = "search_user_activity"
    get_dashboard_statistics = "get_dashboard_statistics"


@dataclass(frozen=True)
class ParameterSchema:
    type: ParamType
    description: str = ""
    required: bool = False
    minimum: int | float | None = None
    maximum: int | float | None = None
    default: Any = None
    format: Literal["date"] | None = None
    max_length: int = 512
    max_items: int = 32

    def to_json_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": self.type}
        if self.description:
            schema["description"] = self.description
        if self.type == "array":
            schema["items"] = {"type": "string"}
        if self.format == "date":
            schema["format"] = "date"
        if self.minimum is not None:
            schema["minimum"] = self.minimum
        if self.maximum is not None:
            schema["maximum"] = self.maximum
        if self.default is not None:
            schema["default"] = self.default
        return schema


@dataclass(frozen=True)
class FunctionSpec:
    name: FunctionName
    description: str
    parameters: Mapping[str, ParameterSchema] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))

    @property
    def required(self) -> list[str]:
        return [name for name, schema in self.parameters.items() if schema.required]

    def to_openai_tool(self) -> dict[str, Any]:
        parameters: dict[str, Any] = {
            "type": "object",
            "properties": {name: schema.to_json_schema() for name, schema in self.parameters.items()},
        }
        if self.required:
            parameters["required"] = self.required
        return {
            "type": "function",
            "function": {
                "name": self.name.value,
                "description": self.description,
                "parameters": parameters,
            },
        }


def _id(what: str) -> ParameterSchema:
    return ParameterSchema("string", f"The unique identifier of the {what}", required=True, max_length=128)


def _text(description: str) -> ParameterSchema:
    return ParameterSchema("string", description)


def _flag(description: str) -> ParameterSchema:
    return ParameterSchema("boolean", description)


def _date(description: str) -> ParameterSchema:
    return ParameterSchema("string", description, format="date")


def _number(description: str) -> ParameterSchema:
    return ParameterSchema("number", description)


def _limit(*, default: int, maximum: int, description: str | None = None) -> ParameterSchema:
    return ParameterSchema(
        "integer",
        description or f"Maximum records to return (1-{maximum}, default {default}).",
        minimum=1,
        maximum=maximum,
        default=default,
    )


DASHBOARD_MODULES = (
    "flight_records",
    "stock_inventory",
    "temperature_control",
    "technician_training",
    "sms_reports",
    "sdr_reports",
    "technical_queries",
    "incoming_inspections",
    "airport_id",
    "user_activity",
)


_SPECS: tuple[FunctionSpec, ...] = (
    FunctionSpec(
        FunctionName.get_flight_record_by_id,
        "Get full information about a flight record using its ID.",
        {"id": _id("flight record")},
    ),
    FunctionSpec(
        FunctionName.list_attachments_for_record,
        "Return attachment metadata (fileName, url, size, type) for the specified flight record ID.",
        {"id": _id("flight record")},
    ),
    FunctionSpec(
        FunctionName.list_recent_flight_records,
        "List the most recent flight records, newest first.",
        {"limit": _limit(default=5, maximum=20, description="Number of records to return (1-20).")},
    ),
    FunctionSpec(
        FunctionName.search_flight_records_by_tail,
        "Find flight records that match a given aircraft tail number.",
        {
            "tail": ParameterSchema("string", "The aircraft tail number to search for.", required=True),
            "limit": _limit(default=10, maximum=50),
        },
    ),
    FunctionSpec(
        FunctionName.search_flight_records,
        "Search flight records by optional filters such as airline, fleet, tail, station, "
        "date ranges, systemAffected, hasDefect or note text.",
        {
            "airline": _text("Airline code or name (e.g. Airline-1)"),
            "fleet": _text("Aircraft fleet type (e.g. A-320, B-737)"),
            "tail": _text("Aircraft tail/registration number"),
            "station": _text("Airport station code where the record was filed (e.g. STA-1)"),
            "service": _text("Type of service event (e.g. Transit, Over-Night)"),
            "systemAffected": _text("ATA / system affected code (e.g. ATA-21 Air Conditioning)"),
            "flightNumber": _text("Flight number under which the record was saved"),
            "technician": _text("Technician full name saved with the record"),
            "hasDefect": _flag("Whether the flight record reports a defect"),
            "hasTime": _flag("Whether block/out times are recorded"),
            "hasAttachments": _flag("Whether attachments exist for the record"),
            "blockTime": _text("Recorded block time HH:MM (exact match)"),
            "outTime": _text("Recorded out time HH:MM (exact match)"),
            "logPageNo": _text("Tech log page number (exact match)"),
            "discrepancyNote": _text("Text contained in the discrepancy/defect note"),
            "rectificationNote": _text("Text contained in the rectification/corrective action note"),
            "dateFrom": _date("ISO date for the start of the flight date range"),
            "dateTo": _date("ISO date for the end of the flight date range (inclusive)"),
            "createdFrom": _date("ISO date for createdAt start"),
            "createdTo": _date("ISO date for createdAt end (inclusive)"),
            "updatedFrom": _date("ISO date for updatedAt start"),
            "updatedTo": _date("ISO date for updatedAt end (inclusive)"),
            "limit": _limit(default=20, maximum=100),
        },
    ),
    FunctionSpec(
        FunctionName.search_stock_inventory,
        "Search stock inventory records by part number, serial number, station, owner, "
        "description, expiry or inspection status.",
        {
            "partNo": _text("Part number to search for"),
            "serialNo": _text("Serial number to search for"),
            "description": _text("Description text to search for"),
            "station": _text("Station where the item is located"),
            "owner": _text("Owner of the inventory item"),
            "type": _text("Type of inventory item"),
            "location": _text("Storage location"),
            "technician": _text("Technician name"),
            "inspectionResult": _text("Inspection result (Passed/Failed)"),
            "hasInspection": _flag("Whether the item has inspection records"),
            "hasExpired": _flag("Only expired items (true) or only non-expired items (false)"),
            "dateFrom": _date("ISO date for the start of the incoming date range"),
            "dateTo": _date("ISO date for the end of the incoming date range (inclusive)"),
            "limit": _limit(default=20, maximum=100),
        },
    ),
    FunctionSpec(
        FunctionName.get_stock_inventory_by_id,
        "Get detailed information about a stock inventory item, including its incoming inspections.",
        {"id": _id("stock inventory record")},
    ),
    FunctionSpec(
        FunctionName.list_recent_stock_inventory,
        "List the most recently added stock inventory records.",
        {"limit": _limit(default=10, maximum=50)},
    ),
    FunctionSpec(
        FunctionName.search_temperature_control,
        "Search temperature and humidity control records by location, employee, date range "
        "or temperature/humidity bounds.",
        {
            "location": _text("Location where the reading was taken"),
            "employeeName": _text("Name of the employee who recorded the reading"),
            "dateFrom": _date("ISO date for the start of the reading date range"),
            "dateTo": _date("ISO date for the end of the reading date range (inclusive)"),
            "tempMin": _number("Minimum temperature"),
            "tempMax": _number("Maximum temperature"),
            "humidityMin": _number("Minimum humidity percentage"),
            "humidityMax": _number("Maximum humidity percentage"),
            "limit": _limit(default=20, maximum=100),
        },
    ),
    FunctionSpec(
        FunctionName.list_recent_temperature_control,
        "List the most recent temperature control readings.",
        {"limit": _limit(default=10, maximum=50)},
    ),
    FunctionSpec(
        FunctionName.search_technician_training,
        "Search technician training records by technician, organization, training type or engine.",
        {
            "technician": _text("Technician name"),
            "organization": _text("Training organization"),
            "type": _text("Training type"),
            "training": _text("Training course name"),
            "engineType": _text("Engine type covered by the training"),
            "hasEngine": _flag("Whether the training is engine specific"),
            "hasHours": _flag("Whether training hours are recorded"),
            "dateFrom": _date("ISO date for the start of the training date range"),
            "dateTo": _date("ISO date for the end of the training date range (inclusive)"),
            "limit": _limit(default=20, maximum=100),
        },
    ),
    FunctionSpec(
        FunctionName.get_technician_training_by_id,
        "Get detailed information about a technician training record by ID.",
        {"id": _id("technician training record")},
    ),
    FunctionSpec(
        FunctionName.search_sms_reports,
        "Search Safety Management System (SMS) reports by type, priority, status, submitter "
        "or description text.",
        {
            "reportType": _text("Type of SMS report"),
            "priority": _text("Priority level (e.g. LOW, MEDIUM, HIGH)"),
            "status": _text("Report status (e.g. OPEN, CLOSED)"),
            "submitter": _text("Name of the person who submitted the report"),
            "description": _text("Text to search in the report title or description"),
            "dateFrom": _date("ISO date for the start of the creation date range"),
            "dateTo": _date("ISO date for the end of the creation date range (inclusive)"),
            "limit": _limit(default=20, maximum=100),
        },
    ),
    FunctionSpec(
        FunctionName.search_sdr_reports,
        "Search SDR (Service Difficulty Report) reports by control number, submitter, "
        "aircraft or part details.",
        {
            "controlNumber": _text("SDR control number"),
            "reportTitle": _text("Title of the SDR report"),
            "submitter": _text("Person who submitted the report"),
            "submitterName": _text("Full name of the submitter"),
            "station": _text("Station where the report was filed"),
            "condition": _text("Condition that triggered the report"),
            "flightNumber": _text("Associated flight number"),
            "airplaneModel": _text("Aircraft model"),
            "airplaneTailNumber": _text("Aircraft tail number"),
            "partNumber": _text("Part number involved"),
            "serialNumber": _text("Serial number of the part"),
            "ataSystemCode": _text("ATA system code"),
            "problemDescription": _text("Text to search in the problem description"),
            "dateFrom": _date("ISO date for the start of the difficulty date range"),
            "dateTo": _date("ISO date for the end of the difficulty date range (inclusive)"),
            "limit": _limit(default=20, maximum=100),
        },
    ),
    FunctionSpec(
        FunctionName.get_sdr_report_by_id,
        "Get detailed information about a specific SDR report by ID.",
        {"id": _id("SDR report")},
    ),
    FunctionSpec(
        FunctionName.search_technical_queries,
        "Search technical queries by title, description, category, priority, status, "
        "creator or tags.",
        {
            "title": _text("Text contained in the query title"),
            "description": _text("Text contained in the query description"),
            "category": _text("Query category"),
            "priority": _text("Priority (LOW, MEDIUM, HIGH, URGENT)"),
            "status": _text("Status (OPEN, IN_PROGRESS, RESOLVED, CLOSED)"),
            "isResolved": _flag("Whether the query has been resolved"),
            "createdBy": _text("First name, last name or username of the creator"),
            "tags": _text("Tag attached to the query (exact match)"),
            "dateFrom": _date("ISO date for the start of the creation date range"),
            "dateTo": _date("ISO date for the end of the creation date range (inclusive)"),
            "limit": _limit(default=20, maximum=100),
        },
    ),
    FunctionSpec(
        FunctionName.get_technical_query_by_id,
        "Get a technical query by ID with its responses, votes and attachments.",
        {"id": _id("technical query")},
    ),
    FunctionSpec(
        FunctionName.search_incoming_inspections,
        "Search incoming inspection records by inspector, part details or inspection results.",
        {
            "inspector": _text("Inspector name"),
            "partNo": _text("Part number being inspected"),
            "serialNo": _text("Serial number being inspected"),
            "description": _text("Part description"),
            "productMatch": _text("Product match result (YES/NO/N/A)"),
            "productSpecs": _text("Product specs result (YES/NO/N/A)"),
            "physicalCondition": _text("Physical condition result (YES/NO/N/A)"),
            "dateFrom": _date("ISO date for the start of the inspection date range"),
            "dateTo": _date("ISO date for the end of the inspection date range (inclusive)"),
            "limit": _limit(default=20, maximum=100),
        },
    ),
    FunctionSpec(
        FunctionName.get_incoming_inspection_by_id,
        "Get detailed information about a specific incoming inspection by ID.",
        {"id": _id("incoming inspection")},
    ),
    FunctionSpec(
        FunctionName.search_airport_id,
        "Search airport ID badge records by employee, station, badge number or expiry.",
        {
            "employeeName": _text("Employee name"),
            "station": _text("Station of the badge"),
            "badgeIdNumber": _text("Badge ID number"),
            "isExpired": _flag("Only expired badges (true) or only valid badges (false)"),
            "expiringWithinDays": ParameterSchema(
                "integer",
                "Only badges expiring within this many days from today",
                minimum=1,
                maximum=3650,
            ),
            "dateFrom": _date("ISO date for the start of the issue date range"),
            "dateTo": _date("ISO date for the end of the issue date range (inclusive)"),
            "limit": _limit(default=20, maximum=100),
        },
    ),
    FunctionSpec(
        FunctionName.search_user_activity,
        "Search the user activity log by user, action or resource type.",
        {
            "userId": _text("ID of the user whose activity to list"),
            "action": _text("Action performed (exact match, e.g. LOGIN, CREATE)"),
            "resourceType": _text("Type of resource acted on (exact match)"),
            "dateFrom": _date("ISO date for the start of the activity date range"),
            "dateTo": _date("ISO date for the end of the activity date range (inclusive)"),
            "limit": _limit(default=20, maximum=100),
        },
    ),
    FunctionSpec(
        FunctionName.get_dashboard_statistics,
        "Get overall counts for the requested modules.",
        {
            "modules": ParameterSchema(
                "array",
                "Modules to get stats for: " + ", ".join(DASHBOARD_MODULES),
                required=True,
                max_length=64,
                max_items=len(DASHBOARD_MODULES),
            ),
        },
    ),
)

_BY_NAME: Mapping[FunctionName, FunctionSpec] = MappingProxyType({spec.name: spec for spec in _SPECS})


def list_functions() -> list[FunctionSpec]:
    """Return every registered function, in declaration order."""

    return list(_SPECS)


def resolve_function_name(name: Any) -> FunctionName | None:
    if isinstance(name, FunctionName):
        return name
    if not isinstance(name, str):
        return None
    try:
        return FunctionName(name.strip())
    except ValueError:
        return None


def get_function(name: Any) -> FunctionSpec | None:
    resolved = resolve_function_name(name)
    if resolved is None:
        return None
    return _BY_NAME[resolved]


def openai_tools() -> list[dict[str, Any]]:
    """OpenAI-compatible ``tools`` payload, identical on every round."""

    return [spec.to_openai_tool() for spec in _SPECS]


def function_purposes() -> str:
    """One line per function, for the system instruction."""

    lines = []
    for spec in _SPECS:
        params = ", ".join(
            name + ("" if schema.required else "?") for name, schema in spec.parameters.items()
        )
        lines.append(f"- {spec.name.value}({params}): {spec.description}")
    return "\n".join(lines)


_missing = set(FunctionName) - set(_BY_NAME)
if _missing:  # pragma: no cover
    raise RuntimeError(f"Functions without a declaration: {sorted(m.value for m in _missing)}")
