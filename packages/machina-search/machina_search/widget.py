"""SearchWidget - host object for the search statechart."""
from __future__ import annotations

import logging
import queue
from concurrent.futures import Future
from typing import Callable

from machina import Interpreter, Scheduler, ThreadScheduler

from machina_search.chart import search_definition
from machina_search.config import SearchConfig
from machina_search.feed import FeedItem
from machina_search.service import SearchService

logger = logging.getLogger("machina_search.widget")


class SearchWidget:
    """UI-facing state of the image search widget.

    UI code calls the event handlers (``change``, ``search``, ``cancel``,
    ``zoom``, ``zoom_out``) and renders from ``mode``, ``results``,
    ``selected`` and ``error``. The statechart calls back into the action
    methods. Search completions and delayed events arrive from other
    threads; they are queued and delivered by ``pump()``, which the owner
    loop must call regularly.
    """

    def __init__(
        self,
        service: SearchService,
        config: SearchConfig | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self.config: SearchConfig = config if config is not None else service.config
        self._service = service
        self._inbox: queue.SimpleQueue[Callable[[], None]] = queue.SimpleQueue()
        self._generation = 0

        self.mode = "none"
        self.text = ""
        self.results: list[FeedItem] = []
        self.selected: FeedItem | None = None
        self.error: str | None = None

        self.machine = Interpreter(
            search_definition(self.config.search_timeout),
            self,
            scheduler if scheduler is not None else ThreadScheduler(dispatch=self._post),
            strict=True,
            on_transition=self._on_transition,
            on_error=self._on_machine_error,
        )
        # Enter the initial state before reacting to real input.
        self.machine.submit("enter")

    # --- UI event handlers ---

    def change(self, text: str) -> None:
        self.text = text
        self.machine.submit("change")

    def search(self) -> None:
        self.machine.submit("search")

    def cancel(self) -> None:
        self.machine.submit("cancel")

    def zoom(self, item: FeedItem) -> None:
        self.selected = item
        self.machine.submit("zoom")

    def zoom_out(self) -> None:
        self.machine.submit("zoom_out")

    @property
    def state(self) -> str | None:
        return self.machine.state

    # --- Owner loop ---

    def pump(self) -> int:
        """Run queued callbacks on the calling thread. Returns how many ran."""
        ran = 0
        while True:
            try:
                callback = self._inbox.get_nowait()
            except queue.Empty:
                return ran
            callback()
            ran += 1

    def close(self) -> None:
        """Dispose the statechart and cancel any running search."""
        self.machine.dispose()
        self._generation += 1
        self._service.cancel()

    def _post(self, callback: Callable[[], None]) -> None:
        self._inbox.put(callback)

    # --- Statechart actions ---

    def idle_mode(self) -> None:
        self.mode = "none"

    def loading_mode(self) -> None:
        self.mode = "loading"

    def results_mode(self) -> None:
        self.mode = "results"

    def zoomed_mode(self) -> None:
        self.mode = "zoomed"

    def error_mode(self) -> None:
        if self.error is None:
            self.error = "Search timed out"
        self.mode = "error"

    def start_search(self) -> None:
        self._generation += 1
        generation = self._generation
        self.error = None
        future = self._service.search(self.text)
        future.add_done_callback(
            lambda done: self._post(lambda: self._search_done(generation, done))
        )

    def cancel_search(self) -> None:
        # Any result still in flight is now stale.
        self._generation += 1
        self._service.cancel()

    def _search_done(self, generation: int, future: Future[list[FeedItem]]) -> None:
        if generation != self._generation or future.cancelled() or self.machine.disposed:
            logger.debug("Discarding stale search result")
            return
        exc = future.exception()
        if exc is not None:
            logger.warning("Search for %r failed: %s", self.text, exc)
            self.error = str(exc) or type(exc).__name__
            self.machine.submit("failed")
            return
        self.results = future.result()
        logger.info("Search for %r returned %d item(s)", self.text, len(self.results))
        self.machine.submit("results")

    def _on_transition(self, source: str | None, target: str, event: str | None) -> None:
        logger.debug("Widget %s --%s--> %s", source, event, target)

    def _on_machine_error(self, event: str, exc: Exception) -> None:
        self.error = str(exc)
