"""Route a requested function to its adapter and package the outcome.

:func:`dispatch` never raises for tool-level problems. Unknown names, missing
required arguments and adapter exceptions all come back as an error
:class:`FunctionResult` so the model can recover on the next round.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import Any, Callable, Mapping

from sqlalchemy.orm import Session

from mrologix.assistant import adapters
from mrologix.assistant.errors import AdapterFailure, ToolError, UnknownFunction
from mrologix.assistant.registry import FunctionName, get_function
from mrologix.assistant.sanitize import sanitize_for
from mrologix.assistant.serialization import safe_dumps
from mrologix.logging import bind, get_logger


logger = get_logger(__file__)


Handler = Callable[[Session, Mapping[str, Any]], Any]


_HANDLERS: dict[FunctionName, Handler] = {
    FunctionName.get_flight_record_by_id: adapters.get_flight_record_by_id,
    FunctionName.list_attachments_for_record: adapters.list_attachments_for_record,
    FunctionName.list_recent_flight_records: adapters.list_recent_flight_records,
    FunctionName.search_flight_records_by_tail: adapters.search_flight_records_by_tail,
    FunctionName.search_flight_records: adapters.search_flight_records,
    FunctionName.search_stock_inventory: adapters.search_stock_inventory,
    FunctionName.get_stock_inventory_by_id: adapters.get_stock_inventory_by_id,
    FunctionName.list_recent_stock_inventory: adapters.list_recent_stock_inventory,
    FunctionName.search_temperature_control: adapters.search_temperature_control,
    FunctionName.list_recent_temperature_control: adapters.list_recent_temperature_control,
    FunctionName.search_technician_training: adapters.search_technician_training,
    FunctionName.get_technician_training_by_id: adapters.get_technician_training_by_id,
    FunctionName.search_sms_reports: adapters.search_sms_reports,
    FunctionName.search_sdr_reports: adapters.search_sdr_reports,
    FunctionName.get_sdr_report_by_id: adapters.get_sdr_report_by_id,
    FunctionName.search_technical_queries: adapters.search_technical_queries,
    FunctionName.get_technical_query_by_id: adapters.get_technical_query_by_id,
    FunctionName.search_incoming_inspections: adapters.search_incoming_inspections,
    FunctionName.get_incoming_inspection_by_id: adapters.get_incoming_inspection_by_id,
    FunctionName.search_airport_id: adapters.search_airport_id,
    FunctionName.search_user_activity: adapters.search_user_activity,
    FunctionName.get_dashboard_statistics: adapters.get_dashboard_statistics,
}

_unhandled = set(FunctionName) - set(_HANDLERS)
if _unhandled:  # pragma: no cover
    raise RuntimeError(f"Functions without a handler: {sorted(m.value for m in _unhandled)}")


@dataclass(frozen=True)
class FunctionResult:
    invocation_id: str
    name: str
    payload: Any
    is_error: bool = False
    code: str | None = None

    @cached_property
    def content(self) -> str:
        return safe_dumps(self.payload)


def _error_result(invocation_id: str, name: str, exc: ToolError) -> FunctionResult:
    return FunctionResult(
        invocation_id=invocation_id,
        name=name,
        payload=exc.payload(),
        is_error=True,
        code=exc.code,
    )


def dispatch(name: Any, raw_arguments: Any, *, db: Session, invocation_id: str) -> FunctionResult:
    """Sanitize, run and wrap one function invocation."""

    label = str(name)
    log = bind(logger, call=invocation_id)
    spec = get_function(name)
    if spec is None:
        log.warning("Model requested unknown function %r", label)
        return _error_result(invocation_id, label, UnknownFunction(label))

    label = spec.name.value
    try:
        args = sanitize_for(spec, raw_arguments)
    except ToolError as exc:
        log.info("Rejected %s call: %s", label, exc.message)
        return _error_result(invocation_id, label, exc)

    handler = _HANDLERS[spec.name]
    try:
        payload = handler(db, args)
    except Exception as exc:
        log.exception("Adapter %s failed", label)
        db.rollback()
        return _error_result(invocation_id, label, AdapterFailure(label, exc))

    result = FunctionResult(invocation_id=invocation_id, name=label, payload=payload)
    log.info("Dispatched %s args=%s (%d chars)", label, args, len(result.content))
    return result
