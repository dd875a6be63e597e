"""Runtime helpers shared by CLI entrypoints."""
from __future__ import annotations

from typing import Any

from oldnews.config import AppConfig, load_settings
from oldnews.logging import configure_logging


def configure_runtime(log_level: str | None = None, *, structured: bool | None = None, **overrides: Any) -> AppConfig:
    config = load_settings(log_level=log_level, **overrides)
    effective_structured = structured if structured is not None else config.structured_logging
    configure_logging(config.log_level, structured=effective_structured)
    return config
