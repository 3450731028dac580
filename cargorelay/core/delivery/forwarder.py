from __future__ import annotations

import json
import logging
from typing import Any, Mapping

from cargorelay.client.http import TransportError, post_json
from cargorelay.config import DEFAULT_TIMEOUT_SEC, DEFAULT_USER_AGENT
from cargorelay.utils import debug_log

from .results import DeliveryResult, classify_response, transport_failure

log = logging.getLogger("cargorelay.delivery")


class WebhookForwarder:
    """Deliver enriched payloads to one downstream webhook.

    Exactly one POST per call: no retries, no backoff. Redirects are not
    followed, so a 3xx answer is classified like any other status.

    Security notes:
    - TLS peer and hostname verification stay ON.
    - The destination comes from server configuration, never from the
      submission.

    """

    def __init__(
        self,
        url: str,
        *,
        timeout: float = DEFAULT_TIMEOUT_SEC,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        if not url:
            raise ValueError("webhook url is required")
        self.url = url
        self.timeout = timeout
        self.user_agent = user_agent

    def forward(self, payload: Mapping[str, Any]) -> DeliveryResult:
        """POST payload as JSON and classify the outcome. Never raises."""

        body = dict(payload)
        http_code = None
        raw_text = None
        try:
            resp = post_json(
                self.url,
                body,
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout,
                follow_redirects=False,
            )
        except TransportError as e:
            result = transport_failure(str(e))
        else:
            http_code = resp.status
            raw_text = resp.text
            result = classify_response(resp.status, raw_text)

        debug_log.record(
            "Cargo data sent to webhook:",
            {
                "url": self.url,
                "payload_size": len(json.dumps(body, ensure_ascii=False).encode("utf-8")),
                "http_code": http_code,
                "response": raw_text,
                "error": result.error,
            },
        )
        log.info(
            "webhook_delivery",
            extra={
                "success": result.success,
                "http_code": http_code,
                "transport_failure": result.is_transport_failure,
            },
        )
        return result


def forward(url: str, payload: Mapping[str, Any], **kwargs: Any) -> DeliveryResult:
    """One-shot helper: build a WebhookForwarder for url and forward payload."""

    return WebhookForwarder(url, **kwargs).forward(payload)
