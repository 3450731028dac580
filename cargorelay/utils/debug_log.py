from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Optional

from cargorelay.utils.json_safe import to_jsonable

DEBUG_LOGGER_NAME = "cargorelay.debug"
SEPARATOR = "-" * 80

log = logging.getLogger(DEBUG_LOGGER_NAME)
# Side-file only; entries must not leak into the service logs.
log.propagate = False


class QuietFileHandler(logging.FileHandler):
    """File handler that drops records it cannot write.

    Security notes:
    - A full disk or unwritable path must never surface to the HTTP caller.

    """

    def emit(self, record: logging.LogRecord) -> None:
        # FileHandler opens a delayed stream outside its own error handling.
        try:
            super().emit(record)
        except OSError:
            self.handleError(record)

    def handleError(self, record: logging.LogRecord) -> None:
        return None


def configure_debug_log(path: Optional[str]) -> None:
    """Point the debug side-file at `path` (None disables it).

    Replaces any handler installed by a previous call.
    """

    for h in list(log.handlers):
        log.removeHandler(h)
        h.close()

    if not path:
        log.setLevel(logging.CRITICAL + 1)
        return

    handler = QuietFileHandler(path, mode="a", encoding="utf-8", delay=True)
    handler.setFormatter(logging.Formatter("%(message)s"))
    log.addHandler(handler)
    log.setLevel(logging.DEBUG)


def format_entry(message: str, data: Any, *, now: Optional[datetime] = None) -> str:
    stamp = (now or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
    body = json.dumps(to_jsonable(data), indent=2, ensure_ascii=False, sort_keys=True)
    return f"{stamp} - {message}\n{body}\n{SEPARATOR}"


def record(message: str, data: Any) -> None:
    """Append a debug entry to the side-file, if one is configured."""

    if not log.isEnabledFor(logging.DEBUG):
        return
    try:
        entry = format_entry(message, data)
    except (TypeError, ValueError):
        entry = f"{message}\n<unserializable: {type(data).__name__}>\n{SEPARATOR}"
    log.debug(entry)
