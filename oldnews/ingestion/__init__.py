"""Message ingestion for the newsletter archive."""
