from __future__ import annotations

import pytest

from oldnews.publishing.index import IndexAccumulator


def test_render_preserves_order_without_dedup():
    index = IndexAccumulator()
    for link in ["html/b.html", "html/a.html", "html/b.html"]:
        index.append(link)

    page = index.render("My page").decode("utf-8")

    assert len(index) == 3
    assert index.links == ["html/b.html", "html/a.html", "html/b.html"]
    assert page.count('<a href="html/b.html">') == 2
    assert page.index('href="html/b.html"') < page.index('href="html/a.html"')
    assert "<title>My page</title>" in page


def test_render_empty_listing():
    page = IndexAccumulator().render("Empty").decode("utf-8")
    assert page.startswith("<!DOCTYPE html>")
    assert "<a " not in page
    assert "<ul>" in page and "</ul>" in page


def test_render_escapes_links_and_title():
    index = IndexAccumulator()
    index.append('html/"quoted".html')
    page = index.render("<Digest>").decode("utf-8")
    assert "&lt;Digest&gt;" in page
    assert "&#34;quoted&#34;" in page


def test_render_happens_once():
    index = IndexAccumulator()
    index.render("t")
    with pytest.raises(RuntimeError):
        index.render("t")
    with pytest.raises(RuntimeError):
        index.append("html/late.html")
