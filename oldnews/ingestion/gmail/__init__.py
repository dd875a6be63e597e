"""Gmail provider integration."""

from oldnews.ingestion.gmail.service import GmailService, parse_payload

__all__ = ["GmailService", "parse_payload"]
