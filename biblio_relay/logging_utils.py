"""
Logging setup for the relay and a request-scoped adapter that tags each line
with the request id.
"""

from __future__ import annotations

import logging
import os
from typing import Any, MutableMapping, Tuple

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Names both the stdlib and uvicorn accept.
LEVEL_NAMES = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

_STDLIB_LOG_KWARGS = frozenset({"exc_info", "stack_info", "stacklevel", "extra"})

_configured = False


def resolve_level(level: str | None) -> str:
    """Upper-case level name, or INFO when the value is missing or unknown."""
    name = (level or "").strip().upper()
    return name if name in LEVEL_NAMES else "INFO"


def setup_logging(level: str | None = None) -> None:
    """
    Install the root handler. Only the first call has an effect.
    """

    global _configured
    if _configured:
        return
    logging.basicConfig(level=resolve_level(level or os.getenv("LOG_LEVEL")), format=LOG_FORMAT)
    _configured = True


class RequestLogAdapter(logging.LoggerAdapter):
    """
    Prefixes messages with `[request_id]` and renders keyword arguments as
    `key=value` pairs after the message. The id is also set on each record
    as `record.request_id`. Nothing is retained after the call.
    """

    def __init__(self, logger: logging.Logger, request_id: str) -> None:
        super().__init__(logger, {"request_id": request_id})

    @property
    def request_id(self) -> str:
        return self.extra["request_id"]

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        metadata = {key: kwargs.pop(key) for key in list(kwargs) if key not in _STDLIB_LOG_KWARGS}
        kwargs["extra"] = {**(kwargs.get("extra") or {}), **self.extra}
        line = f"[{self.request_id}] {msg}"
        if metadata:
            line += " | " + " ".join(f"{key}={value}" for key, value in metadata.items())
        return line, kwargs


def request_logger(request_id: str, name: str = "biblio_relay.relay") -> RequestLogAdapter:
    return RequestLogAdapter(logging.getLogger(name), request_id)


__all__ = ["LEVEL_NAMES", "RequestLogAdapter", "request_logger", "resolve_level", "setup_logging"]
