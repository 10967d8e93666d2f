"""Immutable machine definitions: states, transitions and action lists."""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from machina.actions import Action, Call, CancelTimer, ScheduleAfter, coerce_action
from machina.types import DefinitionError, UnknownTargetStateError


@dataclass(frozen=True)
class State:
    """One named state. ``transitions`` maps event names to target state names."""

    name: str
    transitions: Mapping[str, str] = field(default_factory=dict)
    entry: tuple[Action, ...] = ()
    exit: tuple[Action, ...] = ()

    def __post_init__(self) -> None:
        # Freeze the containers so a State can be shared between interpreters.
        object.__setattr__(self, "transitions", MappingProxyType(dict(self.transitions)))
        object.__setattr__(self, "entry", tuple(coerce_action(a) for a in self.entry))
        object.__setattr__(self, "exit", tuple(coerce_action(a) for a in self.exit))


class MachineDefinition:
    """Validated, read-only description of a state machine.

    Every transition target and the initial state must name a defined state;
    otherwise construction raises UnknownTargetStateError.
    """

    def __init__(self, initial: str, states: Iterable[State]) -> None:
        table: dict[str, State] = {}
        for state in states:
            if state.name in table:
                raise DefinitionError(f"Duplicate state {state.name!r}")
            table[state.name] = state

        if initial not in table:
            raise UnknownTargetStateError(initial, f"Initial state {initial!r} is not defined")
        for state in table.values():
            for event, target in state.transitions.items():
                if target not in table:
                    raise UnknownTargetStateError(
                        target,
                        f"State {state.name!r} event {event!r} targets undefined state {target!r}",
                    )

        self._initial = initial
        self._states = MappingProxyType(table)

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> MachineDefinition:
        """Build a definition from a statechart-style mapping.

        ``{"initial": "idle", "states": {"idle": {"on": {"start": "busy"},
        "onEntry": [...], "onExit": [...]}}}``. ``entry``/``exit`` are accepted
        as aliases, and a single action string stands for a one-item list.
        """
        try:
            initial = config["initial"]
            raw_states = config["states"]
        except (TypeError, KeyError) as exc:
            raise DefinitionError("Definition needs 'initial' and 'states'") from exc
        if not isinstance(raw_states, Mapping):
            raise DefinitionError("'states' must be a mapping of state name to state")

        states = []
        for name, raw in raw_states.items():
            raw = raw or {}
            if not isinstance(raw, Mapping):
                raise DefinitionError(f"State {name!r} must be a mapping")
            states.append(State(
                name=name,
                transitions=dict(raw.get("on") or {}),
                entry=_action_list(raw, "onEntry", "entry"),
                exit=_action_list(raw, "onExit", "exit"),
            ))
        return cls(initial=initial, states=states)

    @property
    def initial(self) -> str:
        return self._initial

    def state_names(self) -> list[str]:
        """List state names in definition order."""
        return list(self._states)

    def lookup(self, name: str) -> State | None:
        """Look up a state by name. None if undefined."""
        return self._states.get(name)

    def transition_target(self, state: str, event: str) -> str | None:
        """Target of ``event`` in ``state``, or None when the event is ignored.

        Raises KeyError if ``state`` is not defined.
        """
        return self._states[state].transitions.get(event)

    def call_names(self) -> set[str]:
        """Every host action name referenced by a Call."""
        return {
            action.method
            for state in self._states.values()
            for action in state.entry + state.exit
            if isinstance(action, Call)
        }

    def timer_names(self) -> set[str]:
        return {
            action.timer
            for state in self._states.values()
            for action in state.entry + state.exit
            if isinstance(action, (ScheduleAfter, CancelTimer))
        }

    def __contains__(self, name: object) -> bool:
        return name in self._states

    def __len__(self) -> int:
        return len(self._states)

    def __repr__(self) -> str:
        return f"MachineDefinition(initial={self._initial!r}, states={list(self._states)!r})"


def _action_list(raw: Mapping[str, Any], key: str, alias: str) -> tuple[Action, ...]:
    value = raw.get(key, raw.get(alias))
    if value is None:
        return ()
    if isinstance(value, (str, Call, ScheduleAfter, CancelTimer)):
        value = [value]
    return tuple(coerce_action(item) for item in value)
