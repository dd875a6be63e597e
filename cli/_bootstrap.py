"""Make the ``oldnews`` package importable from scripts in this directory."""
from __future__ import annotations

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def ensure_project_root() -> None:
    """Put the repository root on ``sys.path``.

    ``python cli/fetch_newsletters.py`` starts with ``sys.path[0]`` pointing
    at ``cli/``, one level below the ``oldnews`` package.
    """
    root = str(PROJECT_ROOT)
    if root not in sys.path:
        sys.path.insert(0, root)
