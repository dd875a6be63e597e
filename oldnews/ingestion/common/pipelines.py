"""Archiving pipeline: fetch, extract, persist, index."""
from __future__ import annotations

import logging

from oldnews.ingestion.common.errors import DecodeError, PayloadMissing
from oldnews.ingestion.common.extractor import MessageExtractor
from oldnews.ingestion.common.fetcher import MessageSource, PaginatedFetcher
from oldnews.ingestion.common.models import ArchiveResult
from oldnews.logging import log_context
from oldnews.publishing.index import IndexAccumulator
from oldnews.publishing.store import ArtifactStore

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Newsletters"


def archive_messages(
    source: MessageSource,
    query: str,
    store: ArtifactStore,
    index: IndexAccumulator | None = None,
    *,
    title: str = DEFAULT_TITLE,
    page_size: int | None = None,
) -> ArchiveResult:
    """Archive every message matching ``query`` and write the index page.

    Messages without a decodable HTML body are logged and skipped. Transport
    and filesystem errors propagate to the caller.
    """
    index = index if index is not None else IndexAccumulator()
    fetcher = PaginatedFetcher(source, page_size=page_size)
    extractor = MessageExtractor(source)
    result = ArchiveResult()

    for message in fetcher.fetch_all(query):
        result.total_size += message.size_estimate
        try:
            extracted = extractor.extract(message)
        except (DecodeError, PayloadMissing) as exc:
            subject = message.header("Subject")
            logger.warning(
                "Skipping %r: %s",
                subject or message.id,
                exc,
                extra=log_context(message_id=message.id, subject=subject, reason=type(exc).__name__),
            )
            result.skipped += 1
            continue
        if not extracted.body_html:
            logger.warning(
                "Skipping %r: no HTML body",
                extracted.subject or message.id,
                extra=log_context(message_id=message.id, subject=extracted.subject, reason="no_html"),
            )
            result.skipped += 1
            continue
        artifact = store.persist(extracted, message)
        index.append(artifact.link)
        result.persisted += 1

    result.index_path = store.write_index(index.render(title))
    logger.info(
        "Archived %s message(s) across %s page(s); skipped %s; total size %s bytes",
        result.persisted,
        fetcher.pages_fetched,
        result.skipped,
        result.total_size,
    )
    return result
