from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Optional
from uuid import uuid4

from fastapi import FastAPI
from fastapi.responses import HTMLResponse, JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request

from cargorelay.api.middleware import (
    AccessLogMiddleware,
    CorsPreflightMiddleware,
    RequestIdMiddleware,
)
from cargorelay.api.models import ApiError, HealthOut, RelayFailureOut, RelaySuccessOut
from cargorelay.api.diagnostic_page import render_diagnostic_page
from cargorelay.config import RelayConfig
from cargorelay.core.cargo import CallerContext
from cargorelay.core.cargo.payload import format_timestamp
from cargorelay.core.delivery import (
    DeliveryFailure,
    InvalidInput,
    MisconfiguredDestination,
    default_forwarder,
    relay_submission,
)
from cargorelay.core.delivery.relay import ForwarderFactory
from cargorelay.utils.debug_log import configure_debug_log
from cargorelay.utils.json_safe import loads_strict

# Parent of the api and delivery loggers; CARGO_LOG_LEVEL applies to both.
log = logging.getLogger("cargorelay")

SUBMIT_PATH = "/webhook/cargo"


def _decode_submission(body: bytes) -> Dict[str, Any]:
    """Decode a request body into a RawSubmission.

    Security notes:
    - Only a non-empty JSON object is accepted; arrays, scalars and {} are
      rejected the same way as malformed JSON.

    """

    try:
        data = loads_strict(body.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as e:
        raise InvalidInput("Invalid JSON data") from e
    if not isinstance(data, dict) or not data:
        raise InvalidInput("Invalid JSON data")
    return data


def _caller_context(request: Request) -> CallerContext:
    client = getattr(request, "client", None)
    return CallerContext(
        remote_addr=getattr(client, "host", None),
        user_agent=request.headers.get("user-agent"),
        server_name=request.url.hostname,
    )


def _new_cargo_id() -> str:
    return "CARGO_" + uuid4().hex[:13]


def _json(model, status_code: int = 200) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=model.model_dump())


def create_app(
    config: Optional[RelayConfig] = None,
    *,
    forwarder_factory: ForwarderFactory = default_forwarder,
) -> FastAPI:
    """Create the FastAPI app.

    `forwarder_factory` builds the WebhookForwarder for each request; tests
    swap it to point at a local endpoint.
    """

    cfg = config or RelayConfig.from_env()

    log.setLevel(cfg.log_level)
    configure_debug_log(cfg.debug_log_path)

    app = FastAPI(title="Cargo Relay", version="0.1")
    app.state.cfg = cfg

    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(AccessLogMiddleware)
    # Outermost, so preflight requests never reach routing.
    app.add_middleware(CorsPreflightMiddleware)

    @app.get("/health", response_model=HealthOut)
    def health() -> HealthOut:
        return HealthOut(ok=True, webhook_configured=cfg.webhook_configured)

    @app.post(SUBMIT_PATH)
    async def submit_endpoint(request: Request) -> JSONResponse:
        """Relay one cargo submission to the configured webhook.

        Every branch answers with a JSON envelope; nothing is retried.

        """

        try:
            raw = _decode_submission(await request.body())
        except InvalidInput as e:
            request.state.relay_outcome = e.kind
            return _json(ApiError(error=str(e), error_kind=e.kind), status_code=400)

        now = datetime.now()
        try:
            outcome = await run_in_threadpool(
                relay_submission,
                raw,
                cfg,
                caller=_caller_context(request),
                now=now,
                forwarder_factory=forwarder_factory,
            )
        except MisconfiguredDestination as e:
            request.state.relay_outcome = e.kind
            return _json(
                RelayFailureOut(
                    error_kind=e.kind,
                    error=str(e),
                    received_data=raw,
                    timestamp=format_timestamp(now),
                )
            )
        except DeliveryFailure as e:
            request.state.relay_outcome = e.kind
            return _json(
                RelayFailureOut(
                    error_kind=e.kind,
                    error=f"Failed to send cargo data to webhook: {e}",
                    webhook_error=str(e),
                    webhook_response=e.response,
                    http_code=e.http_code,
                    received_data=raw,
                    timestamp=format_timestamp(now),
                )
            )

        request.state.relay_outcome = "delivered"
        return _json(
            RelaySuccessOut(
                webhook_response=outcome.result.response,
                http_code=outcome.result.http_code,
                timestamp=format_timestamp(now),
                cargo_id=_new_cargo_id(),
            )
        )

    @app.get(SUBMIT_PATH)
    async def diagnostic_page_endpoint(request: Request):
        """Serve the diagnostic form; a GET that carries a body is refused."""

        if await request.body():
            return _method_not_allowed()
        page = render_diagnostic_page(SUBMIT_PATH, webhook_configured=cfg.webhook_configured)
        return HTMLResponse(page)

    @app.api_route(SUBMIT_PATH, methods=["PUT", "PATCH", "DELETE"])
    def other_methods_endpoint() -> JSONResponse:
        return _method_not_allowed()

    return app


def _method_not_allowed() -> JSONResponse:
    return _json(ApiError(error="Only POST method allowed", error_kind="method_not_allowed"), 405)


def app_from_env() -> FastAPI:
    """Factory used by Uvicorn entrypoints (reads CARGO_* env vars)."""

    return create_app(RelayConfig.from_env())
