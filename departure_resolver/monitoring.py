from __future__ import annotations

import json
import logging
from typing import Any, Optional

from .config import ObservabilityConfig, get_config

logger = logging.getLogger("departure_resolver")

# Attributes every LogRecord has; anything else came in through ``extra``.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({})).keys()) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """One JSON object per line, ``extra`` fields included."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS:
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def setup_logging(config: Optional[ObservabilityConfig] = None) -> logging.Handler:
    """Attach a stream handler to the package logger according to ``config``.

    Calling it again replaces the handler installed by the previous call.
    """
    cfg = config or get_config().observability
    handler = logging.StreamHandler()
    if cfg.structured:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(cfg.format))

    for existing in list(logger.handlers):
        if getattr(existing, "_departure_resolver", False):
            logger.removeHandler(existing)
    handler._departure_resolver = True  # type: ignore[attr-defined]

    logger.addHandler(handler)
    logger.setLevel(cfg.level.upper())
    return handler
