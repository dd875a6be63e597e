"""Dataclasses describing provider messages, their content trees and archive output."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

MULTIPART_PREFIX = "multipart"


@dataclass(frozen=True)
class Header:
    name: str
    value: str


@dataclass(frozen=True)
class InlineBody:
    """Body carried inside the message payload as transport-encoded text."""

    data: str


@dataclass(frozen=True)
class AttachmentBody:
    """Body stored out of line; needs a secondary attachment retrieval."""

    attachment_id: str
    size: int = 0


BodyRef = Union[InlineBody, AttachmentBody]


@dataclass
class ContentNode:
    """One part of a message's content tree.

    Multipart nodes carry ordered ``parts`` and no body of their own. Every
    other node is a leaf and carries exactly one body reference.
    """

    mime_type: str
    body: Optional[BodyRef] = None
    parts: Optional[List["ContentNode"]] = None
    filename: str = ""
    headers: List[Header] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.is_multipart:
            if self.body is not None:
                raise ValueError(f"multipart node {self.mime_type!r} cannot carry a body")
            if self.parts is None:
                self.parts = []
        else:
            if self.parts:
                raise ValueError(f"leaf node {self.mime_type!r} cannot have child parts")
            self.parts = None
            if self.body is None:
                self.body = InlineBody("")

    @property
    def is_multipart(self) -> bool:
        return self.mime_type.startswith(MULTIPART_PREFIX)


@dataclass(frozen=True)
class MessageSummary:
    id: str
    thread_id: Optional[str] = None


@dataclass
class MessagePage:
    messages: List[MessageSummary] = field(default_factory=list)
    next_page_token: Optional[str] = None


@dataclass
class FullMessage:
    id: str
    internal_date: int
    payload: Optional[ContentNode]
    headers: List[Header] = field(default_factory=list)
    size_estimate: int = 0
    snippet: str = ""
    thread_id: Optional[str] = None

    def header(self, name: str) -> str:
        """Return the first header whose name matches exactly, or an empty string."""
        for header in self.headers:
            if header.name == name:
                return header.value
        return ""


@dataclass
class ExtractedMessage:
    sender: str
    recipients: str
    subject: str
    body_html: bytes = b""


@dataclass(frozen=True)
class StoredArtifact:
    path: Path
    link: str


@dataclass
class ArchiveResult:
    persisted: int = 0
    skipped: int = 0
    total_size: int = 0
    index_path: Optional[Path] = None
