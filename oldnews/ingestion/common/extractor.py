"""Extract header fields and the HTML body from a full message."""
from __future__ import annotations

import logging

from oldnews.ingestion.common.content_tree import find_part_by_mime_type
from oldnews.ingestion.common.decoder import decode_body
from oldnews.ingestion.common.errors import PayloadMissing
from oldnews.ingestion.common.fetcher import MessageSource
from oldnews.ingestion.common.models import (
    AttachmentBody,
    BodyRef,
    ExtractedMessage,
    FullMessage,
    InlineBody,
)

logger = logging.getLogger(__name__)

HTML_MIME_TYPE = "text/html"


class MessageExtractor:
    def __init__(self, source: MessageSource, mime_type: str = HTML_MIME_TYPE) -> None:
        self.source = source
        self.mime_type = mime_type

    def extract(self, message: FullMessage) -> ExtractedMessage:
        """Return headers and the decoded body of the first matching part.

        Raises :class:`PayloadMissing` when the message has no content tree and
        :class:`DecodeError` when the matching part cannot be decoded. A message
        without a matching part yields an empty ``body_html``.
        """
        if message.payload is None:
            raise PayloadMissing(message.id)

        extracted = ExtractedMessage(
            sender=message.header("From"),
            recipients=message.header("To"),
            subject=message.header("Subject"),
        )
        part = find_part_by_mime_type(message.payload, self.mime_type)
        if part is None:
            logger.debug("Message %s has no %s part", message.id, self.mime_type)
            return extracted

        encoded = self.resolve(message.id, part.body)
        extracted.body_html = decode_body(encoded, message_id=message.id)
        return extracted

    def resolve(self, message_id: str, body: BodyRef | None) -> str:
        """Return the encoded data behind a body reference."""
        if isinstance(body, AttachmentBody):
            logger.debug("Fetching out-of-line body %s for message %s", body.attachment_id, message_id)
            return self.source.get_attachment(message_id, body.attachment_id)
        if isinstance(body, InlineBody):
            return body.data
        return ""
