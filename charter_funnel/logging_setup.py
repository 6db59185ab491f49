"""Process-wide logging setup driven by ObservabilityConfig."""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict, Optional

from .config import ObservabilityConfig, get_config

_LOGGING_CONFIGURED = False
_HANDLER: Optional[logging.Handler] = None

# Attributes every LogRecord carries; anything else came in through extra=.
_RECORD_FIELDS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__.keys()
) | {"message", "asctime"}


class JsonLinesFormatter(logging.Formatter):
    """One JSON object per record, with the extra= context flattened in."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RECORD_FIELDS and not key.startswith("_"):
                entry[key] = value
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def configure_logging(config: Optional[ObservabilityConfig] = None) -> None:
    """Configure root logging once per process. Safe to call multiple times."""
    global _LOGGING_CONFIGURED, _HANDLER
    if _LOGGING_CONFIGURED:
        return

    config = config or get_config().observability
    handler = logging.StreamHandler(sys.stdout)
    if config.structured:
        handler.setFormatter(JsonLinesFormatter())
    else:
        handler.setFormatter(logging.Formatter(config.format))

    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(getattr(logging, config.level.upper(), logging.INFO))

    _HANDLER = handler
    _LOGGING_CONFIGURED = True


def reset_logging() -> None:
    """Detach the configured handler so tests can configure again."""
    global _LOGGING_CONFIGURED, _HANDLER
    if _HANDLER is not None:
        logging.getLogger().removeHandler(_HANDLER)
        _HANDLER = None
    _LOGGING_CONFIGURED = False
