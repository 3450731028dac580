from __future__ import annotations

import logging
import time
from typing import Callable, Mapping, Optional
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

log = logging.getLogger("cargorelay.api")

CORS_HEADERS: Mapping[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LEN = 128


def _request_id(supplied: Optional[str]) -> str:
    if supplied and len(supplied) <= MAX_REQUEST_ID_LEN and supplied.isprintable():
        return supplied
    return uuid4().hex


class CorsPreflightMiddleware(BaseHTTPMiddleware):
    """Answer OPTIONS with an empty 200 and stamp CORS headers on everything.

    Browsers submit from arbitrary origins (the relay has no caller
    authentication), so the allow-list is a wildcard.

    """

    async def dispatch(self, request: Request, call_next: Callable):
        if request.method == "OPTIONS":
            response: Response = Response(status_code=200)
        else:
            response = await call_next(request)
        for k, v in CORS_HEADERS.items():
            response.headers[k] = v
        return response


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Tag each relay request with an id echoed in X-Request-ID.

    The caller's own id is reused when it is short and printable, so a
    submission can be traced from the browser form to the access log.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        rid = _request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = rid
        response: Response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Structured access logging.

    Security notes:
    - Never log submission bodies here; they go to the debug side-file only.

    """

    async def dispatch(self, request: Request, call_next: Callable):
        start = time.monotonic()
        response: Optional[Response] = None
        try:
            response = await call_next(request)
            return response
        finally:
            log.info(
                "api_request",
                extra={
                    "request_id": getattr(request.state, "request_id", None),
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": getattr(response, "status_code", None),
                    "outcome": getattr(request.state, "relay_outcome", None),
                    "duration_ms": int((time.monotonic() - start) * 1000),
                },
            )
