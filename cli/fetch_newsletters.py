"""CLI entry point for archiving Gmail newsletters as HTML pages."""
from __future__ import annotations

try:  # pragma: no cover - import fallback for script execution
    from cli._bootstrap import ensure_project_root
except ModuleNotFoundError:  # pragma: no cover
    from _bootstrap import ensure_project_root

ensure_project_root()

import argparse
import logging
import sys

from oldnews.cli import configure_runtime
from oldnews.ingestion.common.errors import FileSystemError, TransportError
from oldnews.ingestion.common.pipelines import archive_messages
from oldnews.ingestion.gmail.service import GmailService
from oldnews.logging import log_context
from oldnews.publishing.server import create_app
from oldnews.publishing.store import ArtifactStore

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--query",
        default=None,
        help="Gmail search query (fallback: OLDNEWS_QUERY or 'label:newsletter after:2021/05/17')",
    )
    parser.add_argument(
        "--credentials",
        default=None,
        help="Path to Google OAuth client credentials JSON (default: credentials.json)",
    )
    parser.add_argument(
        "--token",
        default=None,
        help="Path to store the OAuth token JSON (default: token.json)",
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory receiving the archived pages and index (default: archive)",
    )
    parser.add_argument(
        "--title",
        default=None,
        help="Title of the generated index page",
    )
    parser.add_argument(
        "--user-id",
        default=None,
        help="Gmail user id (default: me)",
    )
    parser.add_argument(
        "--page-size",
        type=int,
        default=None,
        help="Number of message ids per listing request (1-500, default: 100)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Optional log level override (e.g. INFO, DEBUG)",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Serve the archive over HTTP once the run completes",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    config = configure_runtime(
        args.log_level,
        query=args.query,
        credentials_path=args.credentials,
        token_path=args.token,
        output_dir=args.output_dir,
        title=args.title,
        user_id=args.user_id,
        page_size=args.page_size,
    )
    if not 1 <= config.page_size <= 500:
        logger.error("Invalid page size %s: must be between 1 and 500", config.page_size)
        sys.exit(2)
    service = GmailService(
        credentials_path=str(config.credentials_path),
        token_path=str(config.token_path),
        user_id=config.user_id,
    )
    store = ArtifactStore(config.output_dir, index_filename=config.index_filename)
    logger.info("Archiving Gmail messages for query '%s' into %s", config.query, config.output_dir)
    try:
        result = archive_messages(
            service,
            config.query,
            store,
            title=config.title,
            page_size=config.page_size,
        )
    except TransportError as exc:
        logger.error(
            "Aborting: Gmail %s",
            exc,
            extra=log_context(operation=exc.operation, identifier=exc.identifier, reason=exc.detail),
        )
        sys.exit(1)
    except FileSystemError as exc:
        logger.error("Aborting: %s", exc, extra=log_context(path=exc.path, reason=exc.detail))
        sys.exit(1)

    logger.info(
        "Archive complete: %s page(s) written, %s skipped, index at %s",
        result.persisted,
        result.skipped,
        result.index_path,
    )
    if args.serve:
        app = create_app(
            config.output_dir,
            index_filename=config.index_filename,
            protected_filenames=[config.credentials_path.name, config.token_path.name],
        )
        app.run(host=config.host, port=config.port)


if __name__ == "__main__":
    main()
