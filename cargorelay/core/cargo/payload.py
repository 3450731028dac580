from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from .categorizer import categorize
from .cost_estimator import estimate
from .normalizer import normalize
from .schema import UNKNOWN, CanonicalCargo
from .validator import validate

EVENT_TYPE: str = "cargo_information"
DEFAULT_SOURCE: str = "telegram_web_app"
TIMESTAMP_FORMAT: str = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True, slots=True)
class CallerContext:
    """Ambient request metadata, used only when the submission omits it."""

    remote_addr: Optional[str] = None
    user_agent: Optional[str] = None
    server_name: Optional[str] = None


def format_timestamp(now: datetime) -> str:
    return now.strftime(TIMESTAMP_FORMAT)


def _first(*candidates: Any) -> Any:
    for c in candidates:
        if c is not None and c != "":
            return c
    return UNKNOWN


def cargo_details(cargo: CanonicalCargo) -> Dict[str, Any]:
    """Flatten a canonical record and attach the derived business outputs."""

    return {
        "type": cargo.type.name,
        "type_id": cargo.type.id,
        "type_description": cargo.type.description,
        "risk_level": cargo.type.risk_level,
        "weight_kg": cargo.weight.kg,
        "weight_grams": cargo.weight.grams,
        "weight_display": cargo.weight.display,
        "value_amount": cargo.value.amount,
        "value_currency": cargo.value.currency,
        "value_currency_symbol": cargo.value.currency_symbol,
        "value_formatted": cargo.value.formatted,
        "insurance_required": cargo.insurance_required,
        "requires_special_handling": cargo.requires_special_handling,
        "shipping_category": categorize(cargo.weight.kg, cargo.value.amount).value,
        "estimated_cost_range": estimate(
            cargo.weight.kg, cargo.value.amount, cargo.type.risk_level
        ).to_dict(),
    }


def build_payload(
    raw: Mapping[str, Any],
    *,
    caller: Optional[CallerContext] = None,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Build the enriched payload sent to the downstream webhook.

    Composes normalize -> categorize/estimate -> validate. The raw
    submission is only read; `user` is passed through untouched and is
    present only when the submission carries `telegram_user`.

    Metadata fields prefer the submission, then the caller context, then
    "unknown".

    """

    caller = caller or CallerContext()
    now = now or datetime.now()
    stamp = format_timestamp(now)

    data: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}
    md = data.get("metadata")
    meta: Mapping[str, Any] = md if isinstance(md, Mapping) else {}

    cargo = normalize(data)

    payload: Dict[str, Any] = {
        "event_type": EVENT_TYPE,
        "timestamp": stamp,
        "server_time": int(now.timestamp()),
        "source": _first(data.get("source"), DEFAULT_SOURCE),
        "action": _first(data.get("action")),
        "cargo_details": cargo_details(cargo),
    }

    if "telegram_user" in data:
        payload["user"] = data["telegram_user"]

    payload["metadata"] = {
        "ip_address": _first(data.get("ip_address"), caller.remote_addr),
        "user_agent": _first(meta.get("user_agent"), caller.user_agent),
        "timezone": _first(meta.get("timezone")),
        "language": _first(meta.get("language")),
        "screen_resolution": _first(meta.get("screen_resolution")),
        "server_name": _first(caller.server_name),
        "processed_at": stamp,
        "data_validation": validate(cargo).to_dict(),
    }
    return payload
