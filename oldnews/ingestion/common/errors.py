"""Exception hierarchy for the archiving pipeline."""
from __future__ import annotations

from pathlib import Path


class OldNewsError(Exception):
    """Base class for pipeline errors."""


class TransportError(OldNewsError):
    """A listing, message or attachment call to the provider failed.

    Fatal for the run; nothing is retried.
    """

    def __init__(self, operation: str, identifier: str | None = None, detail: str | None = None) -> None:
        self.operation = operation
        self.identifier = identifier
        self.detail = detail
        message = f"{operation} failed"
        if identifier:
            message += f" for {identifier}"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class DecodeError(OldNewsError):
    """An encoded body could not be decoded. Skips the affected message."""

    def __init__(self, detail: str, message_id: str | None = None) -> None:
        self.detail = detail
        self.message_id = message_id
        if message_id:
            super().__init__(f"Cannot decode body of message {message_id}: {detail}")
        else:
            super().__init__(f"Cannot decode body: {detail}")


class PayloadMissing(OldNewsError):
    """A message arrived without any content tree."""

    def __init__(self, message_id: str) -> None:
        self.message_id = message_id
        super().__init__(f"No payload in message {message_id}")


class FileSystemError(OldNewsError):
    """An artifact or the index could not be written. Fatal for the run."""

    def __init__(self, path: Path | str, detail: str | None = None) -> None:
        self.path = Path(path)
        self.detail = detail
        message = f"Cannot write {self.path}"
        if detail:
            message += f": {detail}"
        super().__init__(message)
