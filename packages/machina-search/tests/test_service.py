"""Tests for SearchService."""
import threading

import pytest

from machina_search import FeedError, FeedItem, MockFeedClient, SearchService

CATS = [FeedItem("Tabby", "l1", "m1"), FeedItem("Calico", "l2", "m2")]


class BlockingClient:
    """Feed client that waits for a release signal before answering."""

    def __init__(self):
        self.started = threading.Event()
        self.release = threading.Event()

    def fetch(self, query):
        self.started.set()
        self.release.wait(5.0)
        return [FeedItem(query, "l", "m")]


class TestSearchService:

    def test_search_returns_results(self):
        service = SearchService(MockFeedClient({"cats": CATS}))
        try:
            assert service.search("cats").result(timeout=2.0) == CATS
        finally:
            service.shutdown()

    def test_search_error_propagates(self):
        service = SearchService(MockFeedClient({}, error=FeedError("offline")))
        try:
            future = service.search("cats")
            with pytest.raises(FeedError, match="offline"):
                future.result(timeout=2.0)
        finally:
            service.shutdown()

    def test_cancel_in_flight(self):
        client = BlockingClient()
        service = SearchService(client)
        try:
            future = service.search("cats")
            assert client.started.wait(2.0)
            assert service.busy

            service.cancel()
            client.release.set()

            assert future.cancelled()
            assert not service.busy
        finally:
            service.shutdown()

    def test_new_search_cancels_previous(self):
        client = BlockingClient()
        service = SearchService(client)
        try:
            first = service.search("cats")
            second = service.search("dogs")
            client.release.set()

            assert first.cancelled()
            assert second.result(timeout=2.0)[0].title == "dogs"
        finally:
            service.shutdown()

    def test_cancel_without_search(self):
        service = SearchService(MockFeedClient({}))
        service.cancel()
        assert not service.busy
        service.shutdown()

    def test_search_after_shutdown(self):
        service = SearchService(MockFeedClient({}))
        service.shutdown()
        with pytest.raises(RuntimeError):
            service.search("cats")
