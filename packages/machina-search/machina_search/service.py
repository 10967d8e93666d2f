"""Background search service: runs feed queries on a thread pool."""
from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor

from machina_search.config import SearchConfig
from machina_search.feed import FeedClient, FeedItem

logger = logging.getLogger("machina_search.service")


class SearchService:
    """Runs one feed query at a time in the background.

    ``search`` returns a Future; ``cancel`` cancels the most recent one.
    A query already running on a worker cannot be interrupted, but its
    future is marked cancelled so callers can discard the result.
    """

    def __init__(self, client: FeedClient, config: SearchConfig | None = None) -> None:
        self.config: SearchConfig = config if config is not None else SearchConfig()
        self._client = client
        self._executor = ThreadPoolExecutor(
            max_workers=self.config.max_workers,
            thread_name_prefix="search",
        )
        self._lock = threading.Lock()
        self._current: Future[list[FeedItem]] | None = None
        self._shutdown = False

    def search(self, query: str) -> Future[list[FeedItem]]:
        """Start a query. Any previous in-flight query is cancelled first."""
        if self._shutdown:
            raise RuntimeError("SearchService is shut down")
        outer: Future[list[FeedItem]] = Future()
        with self._lock:
            previous, self._current = self._current, outer
        if previous is not None:
            previous.cancel()

        logger.info("Searching feed for %r", query)
        inner = self._executor.submit(self._client.fetch, query)
        inner.add_done_callback(lambda done: _settle(outer, done))
        return outer

    def cancel(self) -> None:
        with self._lock:
            current, self._current = self._current, None
        if current is not None and current.cancel():
            logger.info("Search cancelled")

    @property
    def busy(self) -> bool:
        with self._lock:
            return self._current is not None and not self._current.done()

    def shutdown(self) -> None:
        """Cancel the pending query and stop the worker pool."""
        self._shutdown = True
        self.cancel()
        self._executor.shutdown(wait=False, cancel_futures=True)


def _settle(outer: Future[list[FeedItem]], inner: Future[list[FeedItem]]) -> None:
    # ``outer`` stays pending until the worker finishes, so it can still be
    # cancelled while the query runs.
    if inner.cancelled():
        outer.cancel()
        return
    if not outer.set_running_or_notify_cancel():
        return
    exc = inner.exception()
    if exc is not None:
        outer.set_exception(exc)
    else:
        outer.set_result(inner.result())
