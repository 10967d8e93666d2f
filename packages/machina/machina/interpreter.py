"""Interpreter - current state, transitions and delayed events."""
from __future__ import annotations

import logging
from collections import deque
from typing import Callable

from machina.clock import Scheduler, ThreadScheduler
from machina.definition import MachineDefinition
from machina.dispatch import ActionDispatcher, Host
from machina.timers import TimerRegistry
from machina.types import InterpreterDisposedError, MissingActionError

logger = logging.getLogger("machina.interpreter")

TransitionHook = Callable[[str | None, str, str | None], None]
ErrorHook = Callable[[str, Exception], None]


class Interpreter:
    """Runs a MachineDefinition against a host object.

    The first ``submit`` settles the machine in the initial state and runs
    its entry actions; the event passed to that call is ignored. After
    that, ``submit(event)`` follows the transition table: exit actions of
    the current state, state swap, entry actions of the target. Events
    with no transition in the current state are ignored.

    Within an action list, timer actions run before host calls. A failing
    action does not roll back the state change; the error is raised from
    ``submit``. If an exit action fails the machine still moves to the
    target, but the target's entry actions are not run. Events submitted
    while a transition is running are queued and processed, in order,
    before the outermost ``submit`` returns. A failure of any kind drops
    whatever is still queued.

    Not thread-safe: all ``submit`` calls, including the ones made by fired
    timers, must come from one thread or event loop. Use
    ``ThreadScheduler(dispatch=...)`` to marshal timer callbacks.
    """

    def __init__(
        self,
        definition: MachineDefinition,
        host: Host,
        scheduler: Scheduler | None = None,
        *,
        strict: bool = False,
        on_transition: TransitionHook | None = None,
        on_error: ErrorHook | None = None,
    ) -> None:
        self._definition = definition
        self._state: str | None = None
        self._timers = TimerRegistry(scheduler if scheduler is not None else ThreadScheduler())
        self._dispatcher = ActionDispatcher(host, self._timers, self._fire_timer)
        self._on_transition = on_transition
        self._on_error = on_error
        self._queue: deque[str | None] = deque()
        self._running = False
        self._disposed = False

        missing = self._dispatcher.bind(definition.call_names())
        if missing:
            if strict:
                raise MissingActionError(missing[0])
            logger.warning("Host is missing actions: %s", ", ".join(missing))

    @property
    def definition(self) -> MachineDefinition:
        return self._definition

    @property
    def state(self) -> str | None:
        """Current state name, or None before the first submit."""
        return self._state

    @property
    def started(self) -> bool:
        return self._state is not None

    @property
    def disposed(self) -> bool:
        return self._disposed

    def pending_timers(self) -> list[str]:
        return self._timers.names()

    def submit(self, event: str | None = None) -> None:
        """Feed one event to the machine.

        Raises EngineError subclasses when an action fails, and lets host
        exceptions through unchanged; either way the machine stays in the
        state it had already moved to.
        """
        if self._disposed:
            raise InterpreterDisposedError(f"Cannot submit {event!r}: interpreter disposed")

        self._queue.append(event)
        if self._running:
            logger.debug("Queued re-entrant event %r", event)
            return

        self._running = True
        try:
            while self._queue and not self._disposed:
                self._step(self._queue.popleft())
        finally:
            self._running = False
            # Only a failed step leaves events behind.
            if self._queue:
                logger.warning(
                    "Dropping %d queued event(s) after failure: %s",
                    len(self._queue), list(self._queue),
                )
                self._queue.clear()

    def dispose(self) -> None:
        """Cancel all pending timers. Further submits raise."""
        if self._disposed:
            return
        self._disposed = True
        self._timers.cancel_all()
        self._queue.clear()
        logger.debug("Interpreter disposed in state %r", self._state)

    def _step(self, event: str | None) -> None:
        definition = self._definition

        if self._state is None:
            self._state = definition.initial
            logger.debug("Entering initial state %r", self._state)
            self._notify(None, self._state, event)
            self._dispatcher.run(definition.lookup(self._state).entry)
            return

        if event is None:
            return
        target = definition.transition_target(self._state, event)
        if target is None:
            logger.debug("Event %r ignored in state %r", event, self._state)
            return

        source = self._state
        try:
            self._dispatcher.run(definition.lookup(source).exit)
        except Exception:
            # The move still happens; the target's entry actions are skipped.
            self._state = target
            logger.debug("Exit of %r failed, moved to %r without entry", source, target)
            self._notify(source, target, event)
            raise
        self._state = target
        logger.debug("Transition %r --%s--> %r", source, event, target)
        self._notify(source, target, event)
        self._dispatcher.run(definition.lookup(target).entry)

    def _notify(self, source: str | None, target: str, event: str | None) -> None:
        if self._on_transition is not None:
            self._on_transition(source, target, event)

    def _fire_timer(self, name: str) -> None:
        if self._disposed:
            logger.debug("Ignoring delayed event %r after dispose", name)
            return
        logger.info("Sending delayed event %r", name)
        # No caller to raise to: host errors are reported here as well.
        try:
            self.submit(name)
        except Exception as exc:
            logger.exception("Delayed event %r failed in state %r", name, self._state)
            if self._on_error is not None:
                self._on_error(name, exc)
