"""CLI support for oldnews entry points."""

from oldnews.cli.runtime import configure_runtime

__all__ = ["configure_runtime"]
