"""Entry/exit action variants and the action-string parser."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

from machina.types import DefinitionError, InvalidTimerSpecError

_AFTER = "after "
_CANCEL = "cancel "


@dataclass(frozen=True, slots=True)
class Call:
    """Invoke the zero-argument host callable named ``method``."""

    method: str


@dataclass(frozen=True, slots=True)
class ScheduleAfter:
    """Submit ``timer`` as an event once ``seconds`` elapse, unless cancelled."""

    seconds: float
    timer: str


@dataclass(frozen=True, slots=True)
class CancelTimer:
    """Cancel the pending delayed event named ``timer``. No-op if none."""

    timer: str


Action = Union[Call, ScheduleAfter, CancelTimer]


def parse_action(text: str) -> Action:
    """Translate one action string into an Action.

    ``"after 2.5 timeout"`` (or ``"after 2.5s timeout"``) becomes
    ``ScheduleAfter(2.5, "timeout")``, ``"cancel timeout"`` becomes
    ``CancelTimer("timeout")``, anything else is a ``Call``.
    """
    if not text or not text.strip():
        raise DefinitionError("Action string must not be empty")

    if text.startswith(_AFTER):
        parts = text[len(_AFTER):].split()
        if len(parts) != 2:
            raise InvalidTimerSpecError(text, "expected 'after <seconds> <timer>'")
        raw_seconds, timer = parts
        return ScheduleAfter(seconds=_parse_seconds(text, raw_seconds), timer=timer)

    if text.startswith(_CANCEL):
        parts = text[len(_CANCEL):].split()
        if len(parts) != 1:
            raise InvalidTimerSpecError(text, "expected 'cancel <timer>'")
        return CancelTimer(timer=parts[0])

    return Call(method=text.strip())


def _parse_seconds(text: str, raw: str) -> float:
    value = raw[:-1] if raw.endswith("s") else raw
    try:
        seconds = float(value)
    except ValueError:
        raise InvalidTimerSpecError(text, f"delay {raw!r} is not a number") from None
    if math.isnan(seconds) or math.isinf(seconds):
        raise InvalidTimerSpecError(text, f"delay {raw!r} is not finite")
    if seconds < 0:
        raise InvalidTimerSpecError(text, f"delay {raw!r} is negative")
    return seconds


def coerce_action(value: object) -> Action:
    """Return ``value`` if it already is an Action, else parse it as text."""
    if isinstance(value, (Call, ScheduleAfter, CancelTimer)):
        return value
    if isinstance(value, str):
        return parse_action(value)
    raise DefinitionError(f"Cannot build an action from {value!r}")


def is_timer_action(action: Action) -> bool:
    return isinstance(action, (ScheduleAfter, CancelTimer))
