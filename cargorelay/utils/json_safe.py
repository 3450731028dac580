from __future__ import annotations

import json
import math
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Mapping


def to_jsonable(obj: Any) -> Any:
    """
    Convert common Python objects to JSON-serializable equivalents.

    Used for debug-log entries and CLI output, where values may be
    dataclasses, enums or raw response bytes.

    Security considerations:
    - bytes are decoded as UTF-8 with replacement, never evaluated.
    - does NOT execute or import anything dynamically.

    """
    if isinstance(obj, Enum):
        return to_jsonable(obj.value)

    if obj is None or isinstance(obj, (str, int, float, bool)):
        return obj

    if isinstance(obj, (datetime, date)):
        return obj.isoformat()

    if isinstance(obj, (bytes, bytearray)):
        return bytes(obj).decode("utf-8", errors="replace")

    if is_dataclass(obj) and not isinstance(obj, type):
        return to_jsonable(asdict(obj))

    if isinstance(obj, Mapping):
        return {str(k): to_jsonable(v) for k, v in obj.items()}

    if isinstance(obj, (list, tuple, set, frozenset)):
        return [to_jsonable(x) for x in obj]

    # fallback: string representation
    return str(obj)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant: {name}")


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"number out of range: {text}")
    return value


def loads_strict(text: str) -> Any:
    """json.loads that refuses NaN, Infinity and out-of-range numbers.

    Those values cannot be rendered back by a JSON response, so they are
    treated like any other malformed input.
    """

    return json.loads(text, parse_constant=_reject_constant, parse_float=_finite_float)
