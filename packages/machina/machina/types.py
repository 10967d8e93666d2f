"""Error types shared across the machina interpreter."""
from __future__ import annotations


class EngineError(Exception):
    """Base class for every error raised by the interpreter."""


class DefinitionError(EngineError):
    """Raised when a machine definition is structurally invalid."""


class UnknownTargetStateError(DefinitionError):
    """Raised when a transition or the initial state names an undefined state."""

    def __init__(self, state_name: str, message: str | None = None) -> None:
        self.state_name = state_name
        super().__init__(message or f"Unknown state {state_name!r}")


class InvalidTimerSpecError(DefinitionError):
    """Raised on a malformed ``after ...`` or ``cancel ...`` action string."""

    def __init__(self, raw_spec: str, reason: str) -> None:
        self.raw_spec = raw_spec
        super().__init__(f"Invalid timer action {raw_spec!r}: {reason}")


class MissingActionError(EngineError):
    """Raised when the host cannot satisfy a ``Call`` action."""

    def __init__(self, method_name: str) -> None:
        self.method_name = method_name
        super().__init__(f"Host has no action {method_name!r}")


class InterpreterDisposedError(EngineError):
    """Raised when submitting to an interpreter after ``dispose()``."""
