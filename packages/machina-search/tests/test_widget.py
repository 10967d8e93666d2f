"""Tests for SearchWidget driving the search statechart."""
import time
from concurrent.futures import Future

import pytest

from machina import InterpreterDisposedError, VirtualClock

from machina_search import (
    FeedError,
    FeedItem,
    MockFeedClient,
    SearchConfig,
    SearchService,
    SearchWidget,
)

CATS = [FeedItem("Tabby", "l1", "m1"), FeedItem("Calico", "l2", "m2")]


class ManualService:
    """Search service whose futures the test resolves by hand."""

    def __init__(self, config=None):
        self.config = config or SearchConfig(search_timeout=5.0)
        self.queries = []
        self.futures = []
        self.cancels = 0

    def search(self, query):
        self.queries.append(query)
        future = Future()
        self.futures.append(future)
        return future

    def cancel(self):
        self.cancels += 1


def make_widget():
    service = ManualService()
    clock = VirtualClock()
    widget = SearchWidget(service, scheduler=clock)
    return widget, service, clock


def pump_until(widget, predicate, timeout=2.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        widget.pump()
        if predicate():
            return True
        time.sleep(0.005)
    return False


class TestWidgetFlow:

    def test_starts_in_initial(self):
        widget, _, _ = make_widget()
        assert widget.state == "initial"
        assert widget.mode == "none"

    def test_search_enters_loading(self):
        widget, service, _ = make_widget()
        widget.change("cats")
        widget.search()

        assert widget.state == "searching"
        assert widget.mode == "loading"
        assert service.queries == ["cats"]

    def test_results_delivered_by_pump(self):
        widget, service, _ = make_widget()
        widget.change("cats")
        widget.search()

        service.futures[0].set_result(CATS)
        assert widget.state == "searching"

        assert widget.pump() == 1
        assert widget.state == "displaying_results"
        assert widget.mode == "results"
        assert widget.results == CATS

    def test_zoom_and_zoom_out(self):
        widget, service, _ = make_widget()
        widget.change("cats")
        widget.search()
        service.futures[0].set_result(CATS)
        widget.pump()

        widget.zoom(CATS[1])
        assert widget.mode == "zoomed"
        assert widget.selected == CATS[1]

        widget.zoom_out()
        assert widget.mode == "results"

    def test_change_returns_to_initial(self):
        widget, service, _ = make_widget()
        widget.change("cats")
        widget.search()
        service.futures[0].set_result(CATS)
        widget.pump()

        widget.change("dogs")

        assert widget.state == "initial"
        assert widget.mode == "none"
        assert widget.text == "dogs"

    def test_typing_while_searching_keeps_search(self):
        widget, _, _ = make_widget()
        widget.change("cats")
        widget.search()
        widget.change("cats and dogs")
        assert widget.state == "searching"


class TestCancellation:

    def test_cancel_returns_to_initial(self):
        widget, service, _ = make_widget()
        widget.change("cats")
        widget.search()

        widget.cancel()

        assert widget.state == "initial"
        assert service.cancels == 1

    def test_stale_result_ignored_after_cancel(self):
        widget, service, _ = make_widget()
        widget.change("cats")
        widget.search()
        widget.cancel()

        service.futures[0].set_result(CATS)
        widget.pump()

        assert widget.state == "initial"
        assert widget.results == []

    def test_cancel_disarms_timeout(self):
        widget, _, clock = make_widget()
        widget.change("cats")
        widget.search()
        widget.cancel()

        clock.advance(10.0)

        assert widget.state == "initial"
        assert widget.machine.pending_timers() == []


class TestErrors:

    def test_timeout_enters_error(self):
        widget, service, clock = make_widget()
        widget.change("cats")
        widget.search()

        clock.advance(5.0)

        assert widget.state == "error"
        assert widget.mode == "error"
        assert widget.error == "Search timed out"
        assert service.cancels == 1

    def test_late_result_after_timeout_ignored(self):
        widget, service, clock = make_widget()
        widget.change("cats")
        widget.search()
        clock.advance(5.0)

        service.futures[0].set_result(CATS)
        widget.pump()

        assert widget.state == "error"
        assert widget.results == []

    def test_failed_search(self):
        widget, service, _ = make_widget()
        widget.change("cats")
        widget.search()

        service.futures[0].set_exception(FeedError("offline"))
        widget.pump()

        assert widget.state == "error"
        assert widget.error == "offline"

    def test_search_again_after_error(self):
        widget, service, _ = make_widget()
        widget.change("cats")
        widget.search()
        service.futures[0].set_exception(FeedError("offline"))
        widget.pump()

        widget.search()
        assert widget.error is None
        service.futures[1].set_result(CATS)
        widget.pump()

        assert widget.state == "displaying_results"


class TestClose:

    def test_close_disposes_machine(self):
        widget, service, clock = make_widget()
        widget.change("cats")
        widget.search()

        widget.close()
        clock.advance(10.0)
        service.futures[0].set_result(CATS)
        widget.pump()

        assert widget.machine.disposed
        assert widget.state == "searching"
        assert widget.results == []
        with pytest.raises(InterpreterDisposedError):
            widget.search()


class TestWithSearchService:
    """End to end with the thread-pool service and real timer threads."""

    def test_results_from_mock_client(self):
        service = SearchService(MockFeedClient({"cats": CATS}), SearchConfig(search_timeout=5.0))
        widget = SearchWidget(service)
        try:
            widget.change("cats")
            widget.search()
            assert pump_until(widget, lambda: widget.state == "displaying_results")
            assert widget.results == CATS
        finally:
            widget.close()
            service.shutdown()

    def test_timeout_from_slow_client(self):
        service = SearchService(
            MockFeedClient({"cats": CATS}, latency=1.0),
            SearchConfig(search_timeout=0.05),
        )
        widget = SearchWidget(service)
        try:
            widget.change("cats")
            widget.search()
            assert pump_until(widget, lambda: widget.state == "error")
            assert widget.error == "Search timed out"
        finally:
            widget.close()
            service.shutdown()
