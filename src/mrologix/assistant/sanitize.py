"""Turn model-supplied argument text into typed, bounded values.

The model may send anything: malformed JSON, strings where numbers belong,
negative limits, fractional limits, dates it made up. Sanitizing never raises
for an optional argument; an invalid optional value falls back to its default
or is left out. Only an absent or invalid *required* argument raises
:class:`~mrologix.assistant.errors.MissingRequiredArgument`.
"""

from __future__ import annotations

import json
import math
from datetime import UTC, date, datetime
from typing import Any, Mapping

from mrologix.assistant.errors import MissingRequiredArgument, UnknownFunction
from mrologix.assistant.registry import FunctionSpec, ParameterSchema, get_function


_ABSENT = object()


def parse_arguments(raw: Any) -> dict[str, Any]:
    """Decode a raw argument payload into a mapping; anything else becomes ``{}``."""

    if raw is None:
        return {}
    if isinstance(raw, Mapping):
        return dict(raw)
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError:
            return {}
    if not isinstance(raw, str):
        return {}
    text = raw.strip()
    if not text:
        return {}
    try:
        payload = json.loads(text)
    except (ValueError, RecursionError):
        return {}
    return payload if isinstance(payload, dict) else {}


def parse_date(value: Any) -> datetime | None:
    """Parse an ISO date or datetime into a naive UTC datetime."""

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(UTC).replace(tzinfo=None)
    return parsed


def _clamp_int(value: int, *, min_value: int | None, max_value: int | None) -> int:
    if min_value is not None:
        value = max(min_value, value)
    if max_value is not None:
        value = min(max_value, value)
    return value


def _coerce_integer(value: Any, schema: ParameterSchema) -> Any:
    # bool is an int subclass; true/false is never a count
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return _ABSENT
    if isinstance(value, float) and not math.isfinite(value):
        return _ABSENT
    return _clamp_int(int(value), min_value=schema.minimum, max_value=schema.maximum)


def _coerce_number(value: Any, schema: ParameterSchema) -> Any:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return _ABSENT
    try:
        value = float(value)
    except OverflowError:
        return _ABSENT
    if not math.isfinite(value):
        return _ABSENT
    if schema.minimum is not None:
        value = max(float(schema.minimum), value)
    if schema.maximum is not None:
        value = min(float(schema.maximum), value)
    return value


def _coerce_string(value: Any, schema: ParameterSchema) -> Any:
    if not isinstance(value, str):
        return _ABSENT
    text = value.strip()
    if not text:
        return _ABSENT
    if schema.format == "date":
        parsed = parse_date(text)
        return _ABSENT if parsed is None else parsed
    return text[: schema.max_length]


def _coerce_boolean(value: Any, schema: ParameterSchema) -> Any:
    return value if isinstance(value, bool) else _ABSENT


def _coerce_array(value: Any, schema: ParameterSchema) -> Any:
    if not isinstance(value, (list, tuple)):
        return _ABSENT
    items: list[str] = []
    for item in value:
        if not isinstance(item, str):
            continue
        text = item.strip()[: schema.max_length]
        if text and text not in items:
            items.append(text)
        if len(items) >= schema.max_items:
            break
    return items or _ABSENT


_COERCERS = {
    "integer": _coerce_integer,
    "number": _coerce_number,
    "string": _coerce_string,
    "boolean": _coerce_boolean,
    "array": _coerce_array,
}


def sanitize_for(spec: FunctionSpec, raw_arguments: Any) -> dict[str, Any]:
    args = parse_arguments(raw_arguments)
    out: dict[str, Any] = {}
    for name, schema in spec.parameters.items():
        value = args.get(name, _ABSENT)
        if value is not _ABSENT:
            value = _COERCERS[schema.type](value, schema)
        if value is _ABSENT:
            if schema.required:
                raise MissingRequiredArgument(spec.name.value, name)
            if schema.default is not None:
                out[name] = schema.default
            continue
        out[name] = value
    return out


def sanitize_arguments(function_name: Any, raw_arguments: Any) -> dict[str, Any]:
    """Validate ``raw_arguments`` against the declared parameters of ``function_name``.

    Keys the function does not declare are dropped.
    """

    spec = get_function(function_name)
    if spec is None:
        raise UnknownFunction(function_name)
    return sanitize_for(spec, raw_arguments)
