from __future__ import annotations

import argparse
import json
import sys

from cargorelay.api.server import SUBMIT_PATH
from cargorelay.client.http import CargoRelayHttpClient, TransportError


def _print_json(obj: object) -> None:
    """Print JSON to stdout."""
    print(json.dumps(obj, indent=2, sort_keys=True, ensure_ascii=False, default=str))


def _read_submission(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError("submission file must contain a JSON object")
    return data


def cmd_client_health(args: argparse.Namespace) -> int:
    """Call GET /health.

    Security notes:
    - Treat server response as untrusted.

    """
    c = CargoRelayHttpClient(args.url, timeout=args.timeout)
    try:
        r = c.get("/health")
    except TransportError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    if r.status >= 400:
        print(r.text, file=sys.stderr)
        return 2
    _print_json(r.json())
    return 0


def cmd_client_submit(args: argparse.Namespace) -> int:
    """POST a submission file to a running relay and print its envelope.

    Exit code 1 when the relay answered success=false.
    """
    try:
        submission = _read_submission(args.file)
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    c = CargoRelayHttpClient(args.url, timeout=args.timeout)
    try:
        r = c.submit(args.path, submission)
    except TransportError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    try:
        envelope = r.json()
    except ValueError:
        print(r.text, file=sys.stderr)
        return 2
    _print_json(envelope)
    return 0 if r.status < 400 and envelope.get("success") else 1


def register_client_commands(sub: argparse._SubParsersAction) -> None:
    """Register the `client` commands."""

    client = sub.add_parser("client", help="Relay API client (talk to a running server)")
    client.add_argument("--url", default="http://127.0.0.1:8080", help="Base API URL")
    client.add_argument("--timeout", type=float, default=35.0, help="Request timeout in seconds")
    csub = client.add_subparsers(dest="client_cmd", required=True)

    h = csub.add_parser("health", help="Check server health")
    h.set_defaults(func=cmd_client_health)

    s = csub.add_parser("submit", help="Send a JSON cargo submission through the relay")
    s.add_argument("file", help="Path to a JSON submission")
    s.add_argument("--path", default=SUBMIT_PATH, help=f"Submission path (default: {SUBMIT_PATH})")
    s.set_defaults(func=cmd_client_submit)
