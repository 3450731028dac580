import copy
import json
from datetime import datetime

from cargorelay.core.cargo import CallerContext, build_payload

NOW = datetime(2026, 1, 2, 3, 4, 5)


def test_build_payload_shape_for_sample_submission(sample_submission):
    before = copy.deepcopy(sample_submission)

    payload = build_payload(sample_submission, now=NOW)

    assert sample_submission == before
    assert payload["event_type"] == "cargo_information"
    assert payload["timestamp"] == "2026-01-02 03:04:05"
    assert payload["server_time"] == int(NOW.timestamp())
    assert payload["source"] == "telegram_web_app"
    assert payload["action"] == "unknown"
    assert "user" not in payload

    details = payload["cargo_details"]
    assert details["type_id"] == "t1"
    assert details["type"] == "unknown"
    assert details["risk_level"] == "high"
    assert details["requires_special_handling"] is True
    assert details["weight_kg"] == 2.0
    assert details["value_currency"] == "USD"
    assert details["shipping_category"] == "medium_parcel"
    assert details["estimated_cost_range"] == {"min": 16000, "max": 20800, "currency": "IRR"}

    validation = payload["metadata"]["data_validation"]
    assert validation["all_valid"] is True


def test_build_payload_is_json_serializable(sample_submission):
    json.dumps(build_payload(sample_submission, now=NOW))


def test_metadata_prefers_submission_then_caller_then_unknown():
    raw = {
        "ip_address": "10.0.0.7",
        "metadata": {"timezone": "Asia/Tehran", "language": "fa"},
        "telegram_user": {"telegram_id": 1},
        "source": "web_test",
        "action": "cargo_info_submitted",
    }
    caller = CallerContext(
        remote_addr="127.0.0.1", user_agent="pytest-agent", server_name="relay.local"
    )

    payload = build_payload(raw, caller=caller, now=NOW)
    md = payload["metadata"]

    assert md["ip_address"] == "10.0.0.7"
    assert md["user_agent"] == "pytest-agent"
    assert md["timezone"] == "Asia/Tehran"
    assert md["language"] == "fa"
    assert md["screen_resolution"] == "unknown"
    assert md["server_name"] == "relay.local"
    assert md["processed_at"] == "2026-01-02 03:04:05"
    assert payload["user"] == {"telegram_id": 1}
    assert payload["source"] == "web_test"
    assert payload["action"] == "cargo_info_submitted"


def test_build_payload_without_cargo_info_still_has_defaults():
    payload = build_payload({"action": "ping"}, now=NOW)

    assert payload["cargo_details"]["type_id"] == "unknown"
    assert payload["cargo_details"]["shipping_category"] == "small_parcel"
    assert payload["cargo_details"]["estimated_cost_range"]["min"] == 0
    assert payload["metadata"]["ip_address"] == "unknown"
    assert payload["metadata"]["data_validation"]["all_valid"] is False


def test_build_payload_survives_huge_finite_weight():
    payload = build_payload({"cargo_info": {"weight": {"kg": 1e305}}}, now=NOW)

    details = payload["cargo_details"]
    assert details["shipping_category"] == "special_handling"
    assert details["estimated_cost_range"]["min"] == 6 * 10**308
    json.dumps(payload)
