from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple

DEFAULT_TIMEOUT_SEC: int = 30
DEFAULT_USER_AGENT: str = "Cargo-Relay-Webhook/1.0"

# Substrings that mark a webhook URL copied from a template and never edited.
PLACEHOLDER_MARKERS: Tuple[str, ...] = ("your-n8n-domain", "your-webhook-domain")


@dataclass(frozen=True, slots=True)
class RelayConfig:
    """Configuration for the relay service.

    Security notes:
    - Values come from trusted server configuration (constructor or env).
    - The webhook URL is handed to the forwarder explicitly; core code never
      reads it from the environment.

    """

    webhook_url: str = ""
    timeout_sec: int = DEFAULT_TIMEOUT_SEC
    user_agent: str = DEFAULT_USER_AGENT
    debug_log_path: Optional[str] = None
    log_level: str = "INFO"

    @property
    def webhook_configured(self) -> bool:
        return is_webhook_configured(self.webhook_url)

    @staticmethod
    def from_env() -> "RelayConfig":
        """Create a config from environment variables.

        - CARGO_WEBHOOK_URL (default: empty, i.e. not configured)
        - CARGO_WEBHOOK_TIMEOUT_SEC (default 30)
        - CARGO_WEBHOOK_USER_AGENT (default Cargo-Relay-Webhook/1.0)
        - CARGO_DEBUG_LOG_PATH (default: side-file disabled)
        - CARGO_LOG_LEVEL (default INFO)

        """

        return RelayConfig(
            webhook_url=os.environ.get("CARGO_WEBHOOK_URL", "").strip(),
            timeout_sec=_env_int("CARGO_WEBHOOK_TIMEOUT_SEC", DEFAULT_TIMEOUT_SEC),
            user_agent=(
                os.environ.get("CARGO_WEBHOOK_USER_AGENT", "").strip() or DEFAULT_USER_AGENT
            ),
            debug_log_path=(os.environ.get("CARGO_DEBUG_LOG_PATH", "").strip() or None),
            log_level=(os.environ.get("CARGO_LOG_LEVEL", "").strip() or "INFO").upper(),
        )


def is_webhook_configured(url: Optional[str]) -> bool:
    """Return True if url is non-empty and not a template placeholder."""

    u = (url or "").strip()
    if not u:
        return False
    return not any(marker in u for marker in PLACEHOLDER_MARKERS)


def _env_int(name: str, default: int) -> int:
    """Read a positive integer environment variable.

    Security notes:
    - Env vars are treated as trusted server configuration.

    """

    raw = os.environ.get(name, "").strip()
    if not raw:
        return int(default)
    try:
        value = int(raw)
    except ValueError:
        return int(default)
    return value if value > 0 else int(default)
