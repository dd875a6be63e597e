"""Search helpers over a message's content tree."""
from __future__ import annotations

from typing import List, Optional

from oldnews.ingestion.common.models import ContentNode


def find_part_by_mime_type(root: ContentNode, mime_type: str) -> Optional[ContentNode]:
    """Return the first node of ``mime_type`` in pre-order, or ``None``.

    Only multipart nodes are descended into; other non-matching nodes are dead
    ends. Uses an explicit stack so deeply nested trees do not hit the
    recursion limit.
    """
    stack: List[ContentNode] = [root]
    while stack:
        node = stack.pop()
        if node.mime_type == mime_type:
            return node
        if node.is_multipart and node.parts:
            # Reversed so the first child is popped first.
            stack.extend(reversed(node.parts))
    return None
