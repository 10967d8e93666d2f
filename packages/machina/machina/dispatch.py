"""Action dispatcher: routes actions to host callables or the timer registry."""
from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping, Sequence, Union

from machina.actions import Action, Call, CancelTimer, ScheduleAfter, is_timer_action
from machina.timers import TimerRegistry
from machina.types import MissingActionError

# Either an object exposing zero-argument methods, or an explicit mapping of
# action name to bound callback.
Host = Union[Mapping[str, Callable[[], Any]], Any]


class ActionDispatcher:
    """Executes actions against a host and a TimerRegistry.

    ``Call`` names are resolved to callables once, by ``bind``; actions
    that were never bound, or that the host could not satisfy, raise
    MissingActionError when executed.
    """

    def __init__(
        self,
        host: Host,
        timers: TimerRegistry,
        resubmit: Callable[[str], None],
    ) -> None:
        self._host = host
        self._timers = timers
        self._resubmit = resubmit
        self._bound: dict[str, Callable[[], Any]] = {}
        self._missing: list[str] = []

    def bind(self, names: Iterable[str]) -> tuple[str, ...]:
        """Resolve host callables for ``names``. Returns unresolvable names."""
        missing = []
        for name in sorted(names):
            fn = self._resolve(name)
            if fn is None:
                missing.append(name)
            else:
                self._bound[name] = fn
        self._missing = missing
        return tuple(missing)

    @property
    def missing(self) -> tuple[str, ...]:
        return tuple(self._missing)

    def _resolve(self, name: str) -> Callable[[], Any] | None:
        if isinstance(self._host, Mapping):
            fn = self._host.get(name)
        else:
            fn = getattr(self._host, name, None)
        return fn if callable(fn) else None

    def execute(self, action: Action) -> None:
        if isinstance(action, Call):
            fn = self._bound.get(action.method)
            if fn is None:
                raise MissingActionError(action.method)
            fn()
        elif isinstance(action, ScheduleAfter):
            timer = action.timer
            self._timers.schedule(timer, action.seconds, lambda: self._resubmit(timer))
        elif isinstance(action, CancelTimer):
            self._timers.cancel(action.timer)
        else:
            raise TypeError(f"Not an action: {action!r}")

    def run(self, actions: Sequence[Action]) -> None:
        """Run timer actions first, then host calls, each in declared order."""
        for action in actions:
            if is_timer_action(action):
                self.execute(action)
        for action in actions:
            if not is_timer_action(action):
                self.execute(action)
