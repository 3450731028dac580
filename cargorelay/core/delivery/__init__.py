"""Outbound delivery of enriched cargo payloads.

Security notes:
- One synchronous attempt per submission, bounded by a hard timeout.
- Webhook answers are untrusted input.
"""

from .exceptions import CargoRelayError, DeliveryFailure, InvalidInput, MisconfiguredDestination
from .forwarder import WebhookForwarder, forward
from .relay import RelayOutcome, default_forwarder, relay_submission
from .results import DeliveryResult, classify_response, transport_failure

__all__ = [
    "WebhookForwarder",
    "forward",
    "DeliveryResult",
    "classify_response",
    "transport_failure",
    "relay_submission",
    "default_forwarder",
    "RelayOutcome",
    "CargoRelayError",
    "InvalidInput",
    "MisconfiguredDestination",
    "DeliveryFailure",
]
