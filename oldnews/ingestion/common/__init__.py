"""Provider-agnostic ingestion pieces."""
