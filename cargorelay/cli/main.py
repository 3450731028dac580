from __future__ import annotations

import argparse
import json
import sys
from typing import List

from cargorelay.cli.client_cmds import register_client_commands
from cargorelay.config import DEFAULT_TIMEOUT_SEC, DEFAULT_USER_AGENT, is_webhook_configured
from cargorelay.core.cargo import build_payload
from cargorelay.core.delivery import WebhookForwarder
from cargorelay.utils.debug_log import configure_debug_log
from cargorelay.utils.json_safe import to_jsonable


def _print_json(obj: object) -> None:
    print(json.dumps(to_jsonable(obj), indent=2, sort_keys=True, ensure_ascii=False))


def _read_submission(path: str) -> dict:
    """Read a JSON submission file ('-' reads stdin)."""

    if path == "-":
        data = json.load(sys.stdin)
    else:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError("submission must be a JSON object")
    return data


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the relay API server.

    Security notes:
    - Bind to 127.0.0.1 by default (safer than 0.0.0.0).
    - The webhook URL comes from CARGO_WEBHOOK_URL.

    """

    try:
        import uvicorn
    except Exception as e:
        print(f"error: uvicorn is required to serve the API: {e}", file=sys.stderr)
        return 2

    uvicorn.run(
        "cargorelay.api.server:app_from_env",
        factory=True,
        host=args.host,
        port=int(args.port),
        log_level=args.log_level,
    )
    return 0


def cmd_build_payload(args: argparse.Namespace) -> int:
    """Print the enriched payload for a submission (no network)."""

    try:
        raw = _read_submission(args.file)
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    _print_json(build_payload(raw))
    return 0


def cmd_forward(args: argparse.Namespace) -> int:
    """Build a payload and forward it once, bypassing the HTTP service."""

    if not is_webhook_configured(args.url):
        print("error: webhook URL not configured", file=sys.stderr)
        return 2
    try:
        raw = _read_submission(args.file)
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    configure_debug_log(args.debug_log)
    forwarder = WebhookForwarder(args.url, timeout=args.timeout, user_agent=args.user_agent)
    result = forwarder.forward(build_payload(raw))
    _print_json(result.to_dict())
    return 0 if result.success else 1


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI parser."""
    p = argparse.ArgumentParser(prog="cargorelay", description="Cargo webhook relay CLI")
    sub = p.add_subparsers(dest="cmd", required=True)

    bp = sub.add_parser("build-payload", help="Print the enriched payload for a JSON submission")
    bp.add_argument("file", help="Path to a JSON submission ('-' for stdin)")
    bp.set_defaults(func=cmd_build_payload)

    fw = sub.add_parser("forward", help="Enrich a submission and POST it to a webhook once")
    fw.add_argument("file", help="Path to a JSON submission ('-' for stdin)")
    fw.add_argument("--url", required=True, help="Webhook URL")
    fw.add_argument(
        "--timeout", type=float, default=DEFAULT_TIMEOUT_SEC, help="Request timeout in seconds"
    )
    fw.add_argument("--user-agent", default=DEFAULT_USER_AGENT, help="User-Agent header")
    fw.add_argument("--debug-log", default=None, help="Append a debug entry to this file")
    fw.set_defaults(func=cmd_forward)

    # --- API server ---
    sv = sub.add_parser("serve", help="Run the relay FastAPI server")
    sv.add_argument("--host", default="127.0.0.1", help="Bind host (default: 127.0.0.1)")
    sv.add_argument("--port", type=int, default=8080, help="Bind port (default: 8080)")
    sv.add_argument("--log-level", default="info", help="Uvicorn log level")
    sv.set_defaults(func=cmd_serve)

    # --- API client ---
    register_client_commands(sub)

    return p


def main(argv: List[str] | None = None) -> int:
    """CLI entry."""
    parser = build_parser()
    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
