"""Logging helpers."""
from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict

# Attributes pipeline code attaches through ``extra=``.
CONTEXT_FIELDS = ("message_id", "subject", "operation", "identifier", "path", "reason")

PLAIN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def log_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra=`` mapping, dropping unknown and empty fields."""
    return {key: value for key, value in fields.items() if key in CONTEXT_FIELDS and value not in (None, "")}


class JsonFormatter(logging.Formatter):
    """Single-line JSON records including message/operation context."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%S%z", time.localtime(record.created)),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in CONTEXT_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                payload[key] = str(value)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def configure_logging(level: str | None = None, structured: bool = False) -> None:
    resolved = getattr(logging, (level or "INFO").upper(), logging.INFO)
    logging.basicConfig(level=resolved, force=True)
    formatter = JsonFormatter() if structured else logging.Formatter(PLAIN_FORMAT)
    for handler in logging.getLogger().handlers:
        handler.setFormatter(formatter)
    # googleapiclient logs every discovery lookup at INFO.
    logging.getLogger("googleapiclient.discovery_cache").setLevel(logging.ERROR)
