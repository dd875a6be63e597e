"""Paginated enumeration of messages matching a provider query."""
from __future__ import annotations

import enum
import logging
from typing import Iterator, Optional, Protocol

from oldnews.ingestion.common.models import FullMessage, MessagePage

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100


class MessageSource(Protocol):
    def list_messages(
        self,
        query: str,
        page_token: str | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> MessagePage:
        ...

    def get_message(self, message_id: str) -> FullMessage:
        ...

    def get_attachment(self, message_id: str, attachment_id: str) -> str:
        ...


class FetchState(enum.Enum):
    START = "start"
    PAGING = "paging"
    DONE = "done"


class PaginatedFetcher:
    """Walks every result page of a query and yields full messages.

    Each message in a page is retrieved before the next page is listed. The
    fetcher is single-use: once :meth:`fetch_all` has started, calling it again
    raises ``RuntimeError``.
    """

    def __init__(self, source: MessageSource, *, page_size: int | None = None) -> None:
        max_results = DEFAULT_PAGE_SIZE if page_size is None else page_size
        if max_results <= 0 or max_results > 500:
            raise ValueError("page_size must be between 1 and 500")
        self.source = source
        self.page_size = max_results
        self.state = FetchState.START
        self.pages_fetched = 0
        self.messages_fetched = 0

    def fetch_all(self, query: str) -> Iterator[FullMessage]:
        if self.state is not FetchState.START:
            raise RuntimeError("PaginatedFetcher is single-use; create a new one to query again")
        self.state = FetchState.PAGING
        return self._iterate(query)

    def _iterate(self, query: str) -> Iterator[FullMessage]:
        page_token: Optional[str] = None
        while self.state is FetchState.PAGING:
            page = self.source.list_messages(query, page_token=page_token, page_size=self.page_size)
            self.pages_fetched += 1
            logger.info("Processing %s message(s) from page %s", len(page.messages), self.pages_fetched)
            for summary in page.messages:
                message = self.source.get_message(summary.id)
                self.messages_fetched += 1
                yield message
            if page.next_page_token:
                page_token = page.next_page_token
            else:
                self.state = FetchState.DONE
