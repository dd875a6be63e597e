"""CLI entry points for oldnews."""

from ._bootstrap import ensure_project_root

ensure_project_root()
