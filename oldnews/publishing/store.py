"""Filesystem storage for archived newsletter pages."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

from oldnews.ingestion.common.errors import FileSystemError
from oldnews.ingestion.common.models import ExtractedMessage, FullMessage, StoredArtifact

logger = logging.getLogger(__name__)

DEFAULT_PAGES_DIRNAME = "html"
DEFAULT_INDEX_FILENAME = "index.html"


def artifact_filename(internal_date: int) -> str:
    """Human-readable, deterministic file name for an epoch-milliseconds timestamp."""
    stamp = datetime.fromtimestamp(internal_date / 1000, tz=timezone.utc)
    return f"{stamp:%Y-%m-%d_%H-%M-%S}-{internal_date % 1000:03d}.html"


class ArtifactStore:
    """Writes one page per message under ``output_dir`` plus a single index file."""

    def __init__(
        self,
        output_dir: Path | str,
        *,
        pages_dirname: str = DEFAULT_PAGES_DIRNAME,
        index_filename: str = DEFAULT_INDEX_FILENAME,
    ) -> None:
        self.output_dir = Path(output_dir)
        self.pages_dir = self.output_dir / pages_dirname
        self.index_path = self.output_dir / index_filename

    def persist(self, extracted: ExtractedMessage, message: FullMessage) -> StoredArtifact:
        path = self.pages_dir / artifact_filename(message.internal_date)
        self._write(path, extracted.body_html)
        link = path.relative_to(self.output_dir).as_posix()
        logger.debug("Stored message %s (%s) at %s", message.id, extracted.subject, path)
        return StoredArtifact(path=path, link=link)

    def write_index(self, page: bytes) -> Path:
        self._write(self.index_path, page)
        logger.info("Wrote index to %s", self.index_path)
        return self.index_path

    @staticmethod
    def _write(path: Path, content: bytes) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except OSError as exc:
            raise FileSystemError(path, exc.strerror or str(exc)) from exc
