"""Gmail service implementation for listing and fetching messages."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import httplib2
from google.auth.exceptions import TransportError as AuthTransportError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from oldnews.ingestion.common.errors import TransportError
from oldnews.ingestion.common.fetcher import DEFAULT_PAGE_SIZE
from oldnews.ingestion.common.models import (
    AttachmentBody,
    ContentNode,
    FullMessage,
    Header,
    InlineBody,
    MessagePage,
    MessageSummary,
    MULTIPART_PREFIX,
)

SCOPES = ["https://www.googleapis.com/auth/gmail.readonly"]

# Socket timeouts and connection resets surface as OSError.
TRANSPORT_ERRORS = (HttpError, httplib2.HttpLib2Error, AuthTransportError, OSError)

logger = logging.getLogger(__name__)


class GmailService:
    def __init__(
        self,
        credentials_path: str,
        token_path: str,
        user_id: str = "me",
        *,
        service=None,
    ) -> None:
        self.credentials_path = Path(credentials_path)
        self.token_path = Path(token_path)
        self.user_id = user_id
        self._service = service

    @property
    def service(self):
        if self._service is None:
            self._service = self._authorize()
        return self._service

    def _authorize(self):
        creds = None
        if self.token_path.exists():
            creds = Credentials.from_authorized_user_file(str(self.token_path), SCOPES)
        if not creds or not creds.valid:
            if creds and creds.expired and creds.refresh_token:
                creds.refresh(Request())
            else:
                flow = InstalledAppFlow.from_client_secrets_file(
                    str(self.credentials_path), SCOPES
                )
                creds = flow.run_local_server(port=0)
            self.token_path.parent.mkdir(parents=True, exist_ok=True)
            self.token_path.write_text(creds.to_json(), encoding="utf-8")
            logger.info("Saved OAuth token to %s", self.token_path)
        return build("gmail", "v1", credentials=creds)

    def list_messages(
        self,
        query: str,
        page_token: str | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> MessagePage:
        params: Dict[str, Any] = {"userId": self.user_id, "q": query, "maxResults": page_size}
        if page_token:
            params["pageToken"] = page_token
        try:
            response = self.service.users().messages().list(**params).execute()
        except TRANSPORT_ERRORS as exc:
            raise TransportError("list messages", query, str(exc)) from exc
        return MessagePage(
            messages=[
                MessageSummary(id=ref["id"], thread_id=ref.get("threadId"))
                for ref in response.get("messages", [])
            ],
            next_page_token=response.get("nextPageToken") or None,
        )

    def get_message(self, message_id: str) -> FullMessage:
        try:
            message_data = (
                self.service.users()
                .messages()
                .get(userId=self.user_id, id=message_id, format="full")
                .execute()
            )
        except TRANSPORT_ERRORS as exc:
            raise TransportError("get message", message_id, str(exc)) from exc
        return self.parse_message(message_data)

    def get_attachment(self, message_id: str, attachment_id: str) -> str:
        try:
            attachment_data = (
                self.service.users()
                .messages()
                .attachments()
                .get(userId=self.user_id, messageId=message_id, id=attachment_id)
                .execute()
            )
        except TRANSPORT_ERRORS as exc:
            raise TransportError("get attachment", f"{message_id}/{attachment_id}", str(exc)) from exc
        return attachment_data.get("data", "")

    @staticmethod
    def parse_message(message_data: Dict[str, Any]) -> FullMessage:
        payload_data = message_data.get("payload")
        payload = parse_payload(payload_data) if payload_data else None
        return FullMessage(
            id=message_data["id"],
            internal_date=int(message_data.get("internalDate", "0")),
            payload=payload,
            headers=payload.headers if payload is not None else [],
            size_estimate=int(message_data.get("sizeEstimate", 0)),
            snippet=message_data.get("snippet", ""),
            thread_id=message_data.get("threadId"),
        )


def parse_payload(payload: Dict[str, Any]) -> ContentNode:
    """Convert a Gmail ``MessagePart`` resource into a ``ContentNode`` tree."""
    root: Optional[ContentNode] = None
    stack: List[Tuple[Dict[str, Any], Optional[ContentNode]]] = [(payload, None)]
    while stack:
        part, parent = stack.pop()
        node = _build_node(part)
        if parent is None:
            root = node
        else:
            parent.parts.append(node)
        if node.is_multipart:
            for child in reversed(part.get("parts", [])):
                stack.append((child, node))
    return root


def _build_node(part: Dict[str, Any]) -> ContentNode:
    mime_type = part.get("mimeType", "")
    headers = [Header(h["name"], h.get("value", "")) for h in part.get("headers", [])]
    filename = part.get("filename", "")
    if mime_type.startswith(MULTIPART_PREFIX):
        return ContentNode(mime_type, parts=[], filename=filename, headers=headers)
    body = part.get("body", {})
    if body.get("attachmentId"):
        ref = AttachmentBody(body["attachmentId"], size=int(body.get("size", 0)))
    else:
        ref = InlineBody(body.get("data", ""))
    return ContentNode(mime_type, body=ref, filename=filename, headers=headers)
