from __future__ import annotations

import json
import ssl
from dataclasses import dataclass
from http.client import HTTPException
from typing import Any, Mapping, Optional
from urllib.error import HTTPError, URLError
from urllib.parse import urljoin
from urllib.request import HTTPRedirectHandler, HTTPSHandler, Request, build_opener


class TransportError(RuntimeError):
    """Raised when no HTTP response was received (DNS, connect, TLS, timeout)."""


@dataclass(frozen=True, slots=True)
class HttpResponse:
    """HTTP response wrapper.

    Security notes:
    - Treat `body_bytes` as untrusted.

    """

    status: int
    headers: Mapping[str, str]
    body_bytes: bytes

    @property
    def text(self) -> str:
        return self.body_bytes.decode("utf-8", errors="replace")

    def json(self) -> Any:
        """Decode body as JSON."""

        return json.loads(self.body_bytes.decode("utf-8", errors="strict"))


class _NoRedirect(HTTPRedirectHandler):
    """Surface 3xx responses to the caller instead of following them."""

    def redirect_request(self, req, fp, code, msg, headers, newurl):
        return None


def post_json(
    url: str,
    body: Any,
    *,
    headers: Optional[Mapping[str, str]] = None,
    timeout: float = 30,
    follow_redirects: bool = True,
) -> HttpResponse:
    """POST a JSON document and return whatever status the server answered.

    Raises TransportError when no response was received at all.

    Security notes:
    - Uses the default SSL context (peer and hostname verification ON).

    """

    data = json.dumps(body, ensure_ascii=False).encode("utf-8")
    req = Request(url=url, data=data, method="POST")
    req.add_header("Content-Type", "application/json")
    req.add_header("Content-Length", str(len(data)))
    for k, v in (headers or {}).items():
        req.add_header(k, v)
    return _do_request(req, timeout=timeout, follow_redirects=follow_redirects)


class CargoRelayHttpClient:
    """Minimal stdlib-only HTTP client for a running relay service.

    Security notes:
    - Does NOT disable TLS verification.

    """

    def __init__(self, base_url: str, timeout: float = 30):
        self.base_url = base_url.rstrip("/") + "/"
        self.timeout = timeout

    def get(self, path: str) -> HttpResponse:
        """HTTP GET."""

        url = urljoin(self.base_url, path.lstrip("/"))
        req = Request(url=url, method="GET")
        return _do_request(req, timeout=self.timeout)

    def submit(self, path: str, submission: Mapping[str, Any]) -> HttpResponse:
        """POST a cargo submission as JSON."""

        url = urljoin(self.base_url, path.lstrip("/"))
        return post_json(url, dict(submission), timeout=self.timeout)


def _do_request(req: Request, *, timeout: float, follow_redirects: bool = True) -> HttpResponse:
    """Execute a request.

    HTTP error statuses are returned as responses, not raised.

    Security notes:
    - Uses default SSL context (verification ON).
    """

    ctx = ssl.create_default_context()
    handlers = [HTTPSHandler(context=ctx)]
    if not follow_redirects:
        handlers.append(_NoRedirect())
    opener = build_opener(*handlers)

    try:
        with opener.open(req, timeout=timeout) as resp:
            body = resp.read()
            headers = {k: v for k, v in resp.headers.items()}
            return HttpResponse(status=int(resp.status), headers=headers, body_bytes=body)
    except HTTPError as e:
        try:
            body = e.read()
        except (OSError, HTTPException):
            body = b""
        headers = dict(getattr(e, "headers", {}) or {})
        return HttpResponse(status=int(e.code or 0), headers=headers, body_bytes=body)
    except URLError as e:
        raise TransportError(str(e.reason)) from e
    except (OSError, HTTPException) as e:
        # Timeouts while reading, resets, RemoteDisconnected.
        raise TransportError(str(e) or type(e).__name__) from e
