from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from cargorelay.utils.json_safe import loads_strict


@dataclass(frozen=True)
class DeliveryResult:
    """
    Outcome of a single forwarding attempt.

    Invariants
    - success=True implies http_code in [200, 400) and error is None
    - a transport failure has no http_code
    """

    success: bool
    http_code: Optional[int] = None
    response: Any = None
    error: Optional[str] = None

    @property
    def is_transport_failure(self) -> bool:
        return not self.success and self.http_code is None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"success": self.success}
        if self.http_code is not None:
            out["http_code"] = self.http_code
        if self.response is not None:
            out["response"] = self.response
        if self.error is not None:
            out["error"] = self.error
        return out


def transport_failure(error: str) -> DeliveryResult:
    return DeliveryResult(success=False, error=error or "transport error")


def _decode_body(text: str) -> Any:
    try:
        return loads_strict(text)
    except ValueError:
        return text


def classify_response(status: int, body_text: str) -> DeliveryResult:
    """Classify an HTTP answer from the webhook.

    - 2xx and 3xx: success, body JSON-decoded when possible, raw text otherwise
    - anything else: failure reported as "HTTP <code>" with the raw body

    """

    if 200 <= status < 400:
        return DeliveryResult(success=True, http_code=status, response=_decode_body(body_text))
    return DeliveryResult(
        success=False, http_code=status, response=body_text, error=f"HTTP {status}"
    )
