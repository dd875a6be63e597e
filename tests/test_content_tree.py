from __future__ import annotations

import pytest

from oldnews.ingestion.common.content_tree import find_part_by_mime_type
from oldnews.ingestion.common.models import ContentNode, InlineBody


def test_root_leaf_matches_itself(make_leaf):
    leaf = make_leaf("text/html")
    assert find_part_by_mime_type(leaf, "text/html") is leaf


@pytest.mark.parametrize("position", [0, 1, 3])
def test_finds_single_html_leaf_among_siblings(make_leaf, position):
    html = make_leaf("text/html", b"<p>hi</p>")
    siblings = [make_leaf("text/plain"), make_leaf("image/png"), make_leaf("text/calendar")]
    siblings.insert(position, html)
    root = ContentNode("multipart/mixed", parts=siblings)
    assert find_part_by_mime_type(root, "text/html") is html


def test_finds_deeply_nested_leaf(make_leaf):
    html = make_leaf("text/html")
    node = ContentNode("multipart/alternative", parts=[make_leaf("text/plain"), html])
    for depth in range(2000):
        node = ContentNode("multipart/mixed", parts=[make_leaf("image/gif"), node])
    assert find_part_by_mime_type(node, "text/html") is html


def test_first_match_in_preorder_wins(make_leaf):
    first = make_leaf("text/html", b"first")
    second = make_leaf("text/html", b"second")
    root = ContentNode(
        "multipart/mixed",
        parts=[
            ContentNode("multipart/alternative", parts=[make_leaf("text/plain"), first]),
            second,
        ],
    )
    assert find_part_by_mime_type(root, "text/html") is first


def test_non_multipart_nodes_are_not_descended(make_leaf):
    root = ContentNode("multipart/mixed", parts=[make_leaf("message/rfc822"), make_leaf("text/plain")])
    assert find_part_by_mime_type(root, "text/html") is None


def test_no_match_returns_none(make_leaf):
    root = ContentNode("multipart/alternative", parts=[make_leaf("text/plain")])
    assert find_part_by_mime_type(root, "text/html") is None


def test_multipart_node_rejects_body():
    with pytest.raises(ValueError):
        ContentNode("multipart/mixed", body=InlineBody("abc"), parts=[])


def test_leaf_always_has_body():
    leaf = ContentNode("text/plain")
    assert leaf.body == InlineBody("")
    assert leaf.parts is None
