"""Timer registry: named, cancelable delayed tasks."""
from __future__ import annotations

import logging
from typing import Callable

from machina.clock import Scheduler, TimerHandle

logger = logging.getLogger("machina.timers")


class _Slot:
    __slots__ = ("handle",)

    def __init__(self) -> None:
        self.handle: TimerHandle | None = None


class TimerRegistry:
    """Tracks pending delayed tasks by name, one slot per name.

    Scheduling a name that is still pending does not cancel the earlier
    task: both fire, and the slot (and so ``cancel``) tracks the newest.
    """

    def __init__(self, scheduler: Scheduler) -> None:
        self._scheduler = scheduler
        self._slots: dict[str, _Slot] = {}

    def schedule(self, name: str, delay: float, on_fire: Callable[[], None]) -> None:
        if name in self._slots:
            logger.warning(
                "Timer %r scheduled while still pending; the earlier task will also fire",
                name,
            )

        slot = _Slot()
        self._slots[name] = slot

        def _fire() -> None:
            if self._slots.get(name) is slot:
                del self._slots[name]
            on_fire()

        slot.handle = self._scheduler.call_later(delay, _fire)
        logger.debug("Timer %r scheduled in %.3fs", name, delay)

    def cancel(self, name: str) -> None:
        slot = self._slots.pop(name, None)
        if slot is not None and slot.handle is not None:
            slot.handle.cancel()
            logger.debug("Timer %r cancelled", name)

    def cancel_all(self) -> None:
        for name in list(self._slots):
            self.cancel(name)

    def pending(self, name: str) -> bool:
        return name in self._slots

    def names(self) -> list[str]:
        """Names of tracked pending timers."""
        return list(self._slots)

    def __len__(self) -> int:
        return len(self._slots)
