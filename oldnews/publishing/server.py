"""Minimal Flask application serving an archive directory."""
from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from typing import Iterable

from flask import Flask, abort, send_from_directory

from oldnews.publishing.store import DEFAULT_INDEX_FILENAME

logger = logging.getLogger(__name__)

PROTECTED_FILENAMES = frozenset({"credentials.json", "token.json"})


def create_app(
    output_dir: Path | str,
    *,
    index_filename: str = DEFAULT_INDEX_FILENAME,
    protected_filenames: Iterable[str] = (),
) -> Flask:
    root = Path(output_dir).resolve()
    # Case-insensitive filesystems resolve TOKEN.JSON to token.json.
    protected = {name.casefold() for name in PROTECTED_FILENAMES}
    protected |= {Path(name).name.casefold() for name in protected_filenames}
    app = Flask(__name__)

    @app.route("/")
    def index():
        return send_from_directory(root, index_filename)

    @app.route("/<path:name>")
    def page(name: str):
        if PurePosixPath(name).name.casefold() in protected:
            logger.warning("Refusing to serve protected file %s", name)
            abort(403)
        logger.info("Serving %s", name)
        return send_from_directory(root, name)

    return app
