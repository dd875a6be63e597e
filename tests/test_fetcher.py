from __future__ import annotations

import pytest

from oldnews.ingestion.common.errors import TransportError
from oldnews.ingestion.common.fetcher import FetchState, PaginatedFetcher


def test_fetches_every_page_depth_first(make_message, fake_source_factory):
    pages = [[make_message("m1"), make_message("m2")], [make_message("m3")]]
    source = fake_source_factory(pages)
    fetcher = PaginatedFetcher(source)

    ids = [message.id for message in fetcher.fetch_all("label:newsletter")]

    assert ids == ["m1", "m2", "m3"]
    assert source.calls == [
        ("list", "label:newsletter", None),
        ("get", "m1"),
        ("get", "m2"),
        ("list", "label:newsletter", "1"),
        ("get", "m3"),
    ]
    assert fetcher.state is FetchState.DONE
    assert fetcher.pages_fetched == 2
    assert fetcher.messages_fetched == 3


def test_empty_result_set(fake_source_factory):
    fetcher = PaginatedFetcher(fake_source_factory([[]]))
    assert list(fetcher.fetch_all("label:none")) == []
    assert fetcher.state is FetchState.DONE
    assert fetcher.pages_fetched == 1


def test_fetcher_is_single_use(make_message, fake_source_factory):
    fetcher = PaginatedFetcher(fake_source_factory([[make_message("m1")]]))
    assert len(list(fetcher.fetch_all("q"))) == 1
    with pytest.raises(RuntimeError):
        fetcher.fetch_all("q")


def test_listing_is_lazy(make_message, fake_source_factory):
    source = fake_source_factory([[make_message("m1")]])
    iterator = PaginatedFetcher(source).fetch_all("q")
    assert source.calls == []
    next(iterator)
    assert source.calls == [("list", "q", None), ("get", "m1")]


def test_transport_error_propagates(make_message, fake_source_factory):
    source = fake_source_factory([[make_message("m1"), make_message("m2")]])

    def _fail(message_id):
        raise TransportError("get message", message_id)

    source.get_message = _fail
    with pytest.raises(TransportError) as excinfo:
        list(PaginatedFetcher(source).fetch_all("q"))
    assert excinfo.value.identifier == "m1"


@pytest.mark.parametrize("page_size", [0, 501, -1])
def test_rejects_invalid_page_size(fake_source_factory, page_size):
    with pytest.raises(ValueError):
        PaginatedFetcher(fake_source_factory([[]]), page_size=page_size)


def test_default_page_size_is_used_when_unset(fake_source_factory):
    fetcher = PaginatedFetcher(fake_source_factory([[]]))
    assert fetcher.page_size == 100
