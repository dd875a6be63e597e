"""CLI entry point serving a previously generated newsletter archive."""
from __future__ import annotations

try:  # pragma: no cover - import fallback for script execution
    from cli._bootstrap import ensure_project_root
except ModuleNotFoundError:  # pragma: no cover
    from _bootstrap import ensure_project_root

ensure_project_root()

import argparse
import logging

from oldnews.cli import configure_runtime
from oldnews.publishing.server import create_app

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Archive directory to serve (default: archive)",
    )
    parser.add_argument("--host", default=None, help="Bind address (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=None, help="Port (default: 8080)")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Optional log level override (e.g. INFO, DEBUG)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    config = configure_runtime(
        args.log_level,
        output_dir=args.output_dir,
        host=args.host,
        port=args.port,
    )
    app = create_app(
        config.output_dir,
        index_filename=config.index_filename,
        protected_filenames=[config.credentials_path.name, config.token_path.name],
    )
    logger.info("Serving %s on http://%s:%s/", config.output_dir, config.host, config.port)
    app.run(host=config.host, port=config.port)


if __name__ == "__main__":
    main()
