from __future__ import annotations

from typing import Any, Mapping, Optional


class CargoRelayError(Exception):
    """
    Base exception for terminal relay outcomes.

    Each subclass maps to one structured response envelope; none is retried.
    `received_data` carries the original submission back to the caller.
    """

    kind: str = "relay_error"

    def __init__(self, message: str, *, received_data: Optional[Mapping[str, Any]] = None):
        super().__init__(message)
        self.received_data = received_data


class InvalidInput(CargoRelayError):
    """
    Raised when the request body is not a non-empty JSON object.
    """

    kind = "invalid_input"


class MisconfiguredDestination(CargoRelayError):
    """
    Raised when the webhook URL is empty or still a template placeholder.
    """

    kind = "misconfigured_destination"


class DeliveryFailure(CargoRelayError):
    """
    Raised when the single forwarding attempt failed (transport or HTTP).
    """

    kind = "delivery_failure"

    def __init__(
        self,
        message: str,
        *,
        http_code: Optional[int] = None,
        response: Any = None,
        received_data: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__(message, received_data=received_data)
        self.http_code = http_code
        self.response = response
