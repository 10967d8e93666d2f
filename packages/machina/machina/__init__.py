"""machina - A small finite-state-machine interpreter with delayed events."""
from __future__ import annotations

from machina.actions import (
    Action,
    Call,
    CancelTimer,
    ScheduleAfter,
    coerce_action,
    is_timer_action,
    parse_action,
)
from machina.clock import AsyncioScheduler, Scheduler, ThreadScheduler, TimerHandle, VirtualClock
from machina.definition import MachineDefinition, State
from machina.dispatch import ActionDispatcher, Host
from machina.interpreter import Interpreter
from machina.timers import TimerRegistry
from machina.types import (
    DefinitionError,
    EngineError,
    InterpreterDisposedError,
    InvalidTimerSpecError,
    MissingActionError,
    UnknownTargetStateError,
)

__all__ = [
    "Action",
    "ActionDispatcher",
    "AsyncioScheduler",
    "Call",
    "CancelTimer",
    "DefinitionError",
    "EngineError",
    "Host",
    "Interpreter",
    "InterpreterDisposedError",
    "InvalidTimerSpecError",
    "MachineDefinition",
    "MissingActionError",
    "ScheduleAfter",
    "Scheduler",
    "State",
    "ThreadScheduler",
    "TimerHandle",
    "TimerRegistry",
    "UnknownTargetStateError",
    "VirtualClock",
    "coerce_action",
    "is_timer_action",
    "parse_action",
]
