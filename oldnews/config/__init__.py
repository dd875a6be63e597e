"""Application configuration utilities for oldnews."""
from __future__ import annotations

import configparser
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict


DEFAULT_CONFIG_LOCATIONS = (
    Path("oldnews.ini"),
    Path("config/oldnews.ini"),
)

DEFAULT_QUERY = "label:newsletter after:2021/05/17"


@dataclass
class AppConfig:
    query: str = DEFAULT_QUERY
    credentials_path: Path = Path("credentials.json")
    token_path: Path = Path("token.json")
    user_id: str = "me"
    page_size: int = 100
    output_dir: Path = Path("archive")
    index_filename: str = "index.html"
    title: str = "Newsletters"
    host: str = "127.0.0.1"
    port: int = 8080
    log_level: str = "INFO"
    structured_logging: bool = False
    config_source: Path | None = None


def _load_config_file(config_path: Path | None) -> Dict[str, Any]:
    if config_path is None:
        for candidate in DEFAULT_CONFIG_LOCATIONS:
            if candidate.exists():
                config_path = candidate
                break
    if config_path is None or not config_path.exists():
        return {}

    parser = configparser.ConfigParser(interpolation=None)
    parser.read(config_path)
    data: Dict[str, Any] = {"__path__": config_path}
    if parser.has_section("gmail"):
        data["query"] = parser.get("gmail", "query", fallback=None)
        data["credentials_path"] = parser.get("gmail", "credentials", fallback=None)
        data["token_path"] = parser.get("gmail", "token", fallback=None)
        data["user_id"] = parser.get("gmail", "user_id", fallback=None)
        data["page_size"] = parser.get("gmail", "page_size", fallback=None)
    if parser.has_section("output"):
        data["output_dir"] = parser.get("output", "directory", fallback=None)
        data["index_filename"] = parser.get("output", "index_filename", fallback=None)
        data["title"] = parser.get("output", "title", fallback=None)
    if parser.has_section("server"):
        data["host"] = parser.get("server", "host", fallback=None)
        data["port"] = parser.get("server", "port", fallback=None)
    if parser.has_section("logging"):
        data["log_level"] = parser.get("logging", "level", fallback=None)
        structured = parser.get("logging", "structured", fallback=None)
        if structured is not None:
            data["structured_logging"] = parser.getboolean("logging", "structured", fallback=False)
    return {key: value for key, value in data.items() if value is not None}


def _normalize_bool(value: str | None) -> bool | None:
    if value is None:
        return None
    lowered = value.strip().lower()
    if lowered in {"1", "true", "yes", "on"}:
        return True
    if lowered in {"0", "false", "no", "off"}:
        return False
    return None


def _resolve(env_name: str, config_data: Dict[str, Any], key: str, default: Any) -> Any:
    value = os.getenv(env_name)
    if value:
        return value
    return config_data.get(key, default)


def load_settings(**overrides: Any) -> AppConfig:
    """Resolve configuration from overrides, env vars, an INI file and defaults.

    ``None`` overrides are ignored so argparse namespaces can be passed through.
    """
    config_file_env = os.getenv("OLDNEWS_CONFIG_FILE")
    config_data = _load_config_file(Path(config_file_env)) if config_file_env else _load_config_file(None)
    defaults = AppConfig()

    values: Dict[str, Any] = {
        "query": _resolve("OLDNEWS_QUERY", config_data, "query", defaults.query),
        "credentials_path": _resolve("OLDNEWS_CREDENTIALS", config_data, "credentials_path", defaults.credentials_path),
        "token_path": _resolve("OLDNEWS_TOKEN", config_data, "token_path", defaults.token_path),
        "user_id": _resolve("OLDNEWS_USER_ID", config_data, "user_id", defaults.user_id),
        "page_size": _resolve("OLDNEWS_PAGE_SIZE", config_data, "page_size", defaults.page_size),
        "output_dir": _resolve("OLDNEWS_OUTPUT_DIR", config_data, "output_dir", defaults.output_dir),
        "index_filename": _resolve("OLDNEWS_INDEX_FILENAME", config_data, "index_filename", defaults.index_filename),
        "title": _resolve("OLDNEWS_TITLE", config_data, "title", defaults.title),
        "host": _resolve("OLDNEWS_HOST", config_data, "host", defaults.host),
        "port": _resolve("OLDNEWS_PORT", config_data, "port", defaults.port),
        "log_level": _resolve("OLDNEWS_LOG_LEVEL", config_data, "log_level", defaults.log_level),
    }
    structured_logging_env = _normalize_bool(os.getenv("OLDNEWS_STRUCTURED_LOGGING"))
    if structured_logging_env is None:
        values["structured_logging"] = bool(config_data.get("structured_logging", False))
    else:
        values["structured_logging"] = structured_logging_env

    for key, value in overrides.items():
        if key not in values:
            raise TypeError(f"Unknown setting '{key}'")
        if value is not None:
            values[key] = value

    return AppConfig(
        query=str(values["query"]),
        credentials_path=Path(values["credentials_path"]),
        token_path=Path(values["token_path"]),
        user_id=str(values["user_id"]),
        page_size=int(values["page_size"]),
        output_dir=Path(values["output_dir"]),
        index_filename=str(values["index_filename"]),
        title=str(values["title"]),
        host=str(values["host"]),
        port=int(values["port"]),
        log_level=str(values["log_level"]).upper(),
        structured_logging=bool(values["structured_logging"]),
        config_source=config_data.get("__path__") if config_data else None,
    )
