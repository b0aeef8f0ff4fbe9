"""JSON encoding for function results sent back to the model.

Results mix ORM values the stdlib encoder refuses (datetimes, decimals,
enums, 64-bit sizes). :func:`safe_dumps` never raises for those: fields set
to :data:`UNDEFINED` are dropped and integers beyond the 53-bit safe range
are written as strings so no client loses precision.
"""

from __future__ import annotations

import enum
import json
import math
from datetime import UTC, date, datetime, time
from decimal import Decimal
from typing import Any


MAX_SAFE_INTEGER = 2**53 - 1


class _Undefined:
    __slots__ = ()

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False


UNDEFINED: Any = _Undefined()


def _datetime_text(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    else:
        value = value.astimezone(UTC)
    return value.isoformat().replace("+00:00", "Z")


def to_jsonable(value: Any) -> Any:
    if value is UNDEFINED:
        return None
    if value is None or isinstance(value, (str, bool)):
        return value
    if isinstance(value, int):
        return str(value) if abs(value) > MAX_SAFE_INTEGER else value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, enum.Enum):
        return to_jsonable(value.value)
    if isinstance(value, datetime):
        return _datetime_text(value)
    if isinstance(value, (date, time)):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items() if v is not UNDEFINED}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_jsonable(v) for v in value if v is not UNDEFINED]
    return str(value)


def safe_dumps(value: Any) -> str:
    return json.dumps(to_jsonable(value), ensure_ascii=False)
