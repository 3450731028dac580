from __future__ import annotations

from pydantic import BaseModel, Field
from typing import Any, Dict, Literal, Optional


class ApiError(BaseModel):
    """Standard error envelope for requests rejected before processing."""

    success: Literal[False] = False
    error: str
    error_kind: Optional[str] = None


class RelaySuccessOut(BaseModel):
    """The webhook accepted the enriched payload."""

    success: Literal[True] = True
    message: str = "Cargo data sent to webhook successfully"
    webhook_response: Any = None
    http_code: Optional[int] = None
    timestamp: str
    cargo_id: str


class RelayFailureOut(BaseModel):
    """Processing ended without a successful delivery.

    `error_kind` tells a configuration problem (misconfigured_destination)
    apart from a failed attempt (delivery_failure).
    """

    success: Literal[False] = False
    error_kind: str
    error: str
    webhook_error: Optional[str] = None
    webhook_response: Any = None
    http_code: Optional[int] = None
    received_data: Dict[str, Any] = Field(default_factory=dict)
    timestamp: str


class HealthOut(BaseModel):
    ok: bool = True
    webhook_configured: bool
