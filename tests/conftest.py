from __future__ import annotations

import base64
from typing import Callable, Dict, List, Optional, Tuple

import pytest

from oldnews.ingestion.common.models import (
    AttachmentBody,
    ContentNode,
    FullMessage,
    Header,
    InlineBody,
    MessagePage,
    MessageSummary,
)


def encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii")


class FakeMessageSource:
    """In-memory stand-in for the Gmail capability."""

    def __init__(
        self,
        pages: List[List[FullMessage]],
        attachments: Dict[Tuple[str, str], str] | None = None,
    ) -> None:
        self.pages = pages
        self.messages = {message.id: message for page in pages for message in page}
        self.attachments = attachments or {}
        self.calls: List[tuple] = []

    def list_messages(self, query, page_token=None, page_size=100) -> MessagePage:
        self.calls.append(("list", query, page_token))
        index = int(page_token) if page_token else 0
        next_token = str(index + 1) if index + 1 < len(self.pages) else None
        return MessagePage(
            messages=[MessageSummary(message.id) for message in self.pages[index]],
            next_page_token=next_token,
        )

    def get_message(self, message_id: str) -> FullMessage:
        self.calls.append(("get", message_id))
        return self.messages[message_id]

    def get_attachment(self, message_id: str, attachment_id: str) -> str:
        self.calls.append(("attachment", message_id, attachment_id))
        return self.attachments[(message_id, attachment_id)]


@pytest.fixture
def make_leaf() -> Callable[..., ContentNode]:
    def _factory(mime_type: str = "text/plain", content: bytes = b"hello", attachment_id: str | None = None) -> ContentNode:
        if attachment_id:
            return ContentNode(mime_type, body=AttachmentBody(attachment_id, size=len(content)))
        return ContentNode(mime_type, body=InlineBody(encode(content)))

    return _factory


@pytest.fixture
def make_message() -> Callable[..., FullMessage]:
    def _factory(
        message_id: str = "msg-1",
        payload: Optional[ContentNode] = None,
        subject: str = "Weekly digest",
        internal_date: int = 1621240200123,
        size_estimate: int = 1024,
    ) -> FullMessage:
        return FullMessage(
            id=message_id,
            internal_date=internal_date,
            payload=payload,
            headers=[
                Header("From", "news@example.com"),
                Header("To", "reader@example.com"),
                Header("Subject", subject),
            ],
            size_estimate=size_estimate,
            snippet=subject,
        )

    return _factory


@pytest.fixture
def fake_source_factory() -> Callable[..., FakeMessageSource]:
    return FakeMessageSource
