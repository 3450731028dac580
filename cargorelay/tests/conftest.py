from __future__ import annotations

import json
import socket
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Dict, List

import pytest


class _WebhookHandler(BaseHTTPRequestHandler):
    def do_POST(self) -> None:  # noqa: N802
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length)
        server = self.server
        server.received.append(  # type: ignore[attr-defined]
            {"path": self.path, "headers": dict(self.headers.items()), "body": body}
        )
        status, payload = server.reply  # type: ignore[attr-defined]
        if server.delay:  # type: ignore[attr-defined]
            time.sleep(server.delay)  # type: ignore[attr-defined]
        data = payload.encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(data)))
        if 300 <= status < 400:
            self.send_header("Location", "/elsewhere")
        self.end_headers()
        self.wfile.write(data)

    def log_message(self, format: str, *args: Any) -> None:
        return None


class MockWebhook:
    """Local stand-in for the downstream webhook."""

    def __init__(self, server: ThreadingHTTPServer):
        self._server = server

    @property
    def url(self) -> str:
        host, port = self._server.server_address[:2]
        return f"http://{host}:{port}/webhook/form/cargo_selection"

    @property
    def requests(self) -> List[Dict[str, Any]]:
        return self._server.received  # type: ignore[attr-defined]

    def reply_with(self, status: int, body: str = '{"ok": true}') -> None:
        self._server.reply = (status, body)  # type: ignore[attr-defined]

    def delay_replies(self, seconds: float) -> None:
        self._server.delay = seconds  # type: ignore[attr-defined]

    def last_json(self) -> Any:
        return json.loads(self.requests[-1]["body"].decode("utf-8"))


@pytest.fixture
def mock_webhook():
    server = ThreadingHTTPServer(("127.0.0.1", 0), _WebhookHandler)
    server.received = []  # type: ignore[attr-defined]
    server.reply = (200, '{"ok": true}')  # type: ignore[attr-defined]
    server.delay = 0.0  # type: ignore[attr-defined]
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield MockWebhook(server)
    finally:
        server.shutdown()
        server.server_close()


@pytest.fixture
def unreachable_url() -> str:
    """A URL on a local port with nothing listening."""

    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        port = s.getsockname()[1]
    return f"http://127.0.0.1:{port}/webhook"


@pytest.fixture
def sample_submission() -> Dict[str, Any]:
    return {
        "cargo_info": {
            "type": {"id": "t1", "risk_level": "high"},
            "weight": {"kg": 2},
            "value": {"amount": 1000000, "currency": "USD"},
        }
    }
