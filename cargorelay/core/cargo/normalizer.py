from __future__ import annotations

import math
from typing import Any, Mapping

from .schema import UNKNOWN, CanonicalCargo, CargoType, CargoValue, CargoWeight, RiskLevel

_TRUTHY = {"1", "true", "yes", "on", "y"}


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _text(value: Any, default: str) -> str:
    """Return value as text, or default when it is missing or not scalar."""

    if value is None or isinstance(value, (Mapping, list, tuple, set)):
        return default
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _non_negative_float(value: Any, default: float = 0.0) -> float:
    if isinstance(value, bool) or value is None:
        return default
    try:
        f = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    if not math.isfinite(f) or f < 0:
        return default
    return f


def _non_negative_int(value: Any, default: int = 0) -> int:
    f = _non_negative_float(value, float(default))
    return int(f)


def _flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return False


def normalize_type(raw: Any) -> CargoType:
    """Normalize the `cargo_info.type` group."""

    t = _mapping(raw)
    return CargoType(
        id=_text(t.get("id"), UNKNOWN),
        name=_text(t.get("name"), UNKNOWN),
        description=_text(t.get("description"), ""),
        risk_level=_text(t.get("risk_level"), RiskLevel.MEDIUM.value),
    )


def normalize_weight(raw: Any) -> CargoWeight:
    """Normalize the `cargo_info.weight` group."""

    w = _mapping(raw)
    return CargoWeight(
        kg=_non_negative_float(w.get("kg")),
        grams=_non_negative_int(w.get("grams")),
        display=_text(w.get("display"), "0 kg"),
    )


def normalize_value(raw: Any) -> CargoValue:
    """Normalize the `cargo_info.value` group."""

    v = _mapping(raw)
    return CargoValue(
        amount=_non_negative_float(v.get("amount")),
        currency=_text(v.get("currency"), UNKNOWN),
        currency_symbol=_text(v.get("currency_symbol"), ""),
        formatted=_text(v.get("formatted"), "0"),
    )


def normalize(raw: Any) -> CanonicalCargo:
    """Map a raw submission into a CanonicalCargo.

    Reads `raw["cargo_info"]`; every leaf falls back to a fixed default.

    Security notes:
    - Treat all inputs as attacker-controlled.
    - Total over any input: non-mapping values at any level count as missing.
    - Never mutates the raw submission.

    """

    info = _mapping(_mapping(raw).get("cargo_info"))
    return CanonicalCargo(
        type=normalize_type(info.get("type")),
        weight=normalize_weight(info.get("weight")),
        value=normalize_value(info.get("value")),
        insurance_required=_flag(info.get("insurance_required")),
    )
