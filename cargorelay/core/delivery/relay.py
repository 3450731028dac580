from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Mapping, Optional

from cargorelay.config import RelayConfig
from cargorelay.core.cargo import CallerContext, build_payload
from cargorelay.utils import debug_log

from .exceptions import DeliveryFailure, MisconfiguredDestination
from .forwarder import WebhookForwarder
from .results import DeliveryResult

log = logging.getLogger("cargorelay.delivery")

ForwarderFactory = Callable[[RelayConfig], WebhookForwarder]


def default_forwarder(config: RelayConfig) -> WebhookForwarder:
    return WebhookForwarder(
        config.webhook_url, timeout=config.timeout_sec, user_agent=config.user_agent
    )


@dataclass(frozen=True)
class RelayOutcome:
    """A delivered submission: what was sent and how the webhook answered."""

    payload: Dict[str, Any]
    result: DeliveryResult


def relay_submission(
    raw: Mapping[str, Any],
    config: RelayConfig,
    *,
    caller: Optional[CallerContext] = None,
    now: Optional[datetime] = None,
    forwarder_factory: ForwarderFactory = default_forwarder,
) -> RelayOutcome:
    """Enrich one submission and forward it once.

    Raises:
      MisconfiguredDestination: webhook URL empty or a placeholder. The
        forwarder is never built in that case.
      DeliveryFailure: transport or HTTP-level failure.

    """

    debug_log.record("Cargo info received:", raw)

    if not config.webhook_configured:
        log.warning("webhook_not_configured")
        raise MisconfiguredDestination("Webhook URL not configured", received_data=raw)

    payload = build_payload(raw, caller=caller, now=now)
    result = forwarder_factory(config).forward(payload)

    if not result.success:
        raise DeliveryFailure(
            result.error or "delivery failed",
            http_code=result.http_code,
            response=result.response,
            received_data=raw,
        )
    return RelayOutcome(payload=payload, result=result)
