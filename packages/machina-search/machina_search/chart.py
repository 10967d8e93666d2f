"""The search widget's statechart, as data for the interpreter."""
from __future__ import annotations

from typing import Any

from machina import MachineDefinition

SEARCH_TIMEOUT_EVENT = "search_timeout"


def search_chart(search_timeout: float = 15.0) -> dict[str, Any]:
    """Return the widget's transition table.

    ``searching`` arms a delayed ``search_timeout`` event on entry and
    cancels it on exit, so a stalled request ends in ``error``.
    """
    return {
        "initial": "initial",
        "states": {
            "initial": {
                "on": {
                    "search": "searching",
                    "change": "initial",
                },
                "onEntry": "idle_mode",
            },
            "searching": {
                "on": {
                    "results": "displaying_results",
                    "cancel": "initial",
                    "failed": "error",
                    SEARCH_TIMEOUT_EVENT: "error",
                },
                "onEntry": [
                    f"after {search_timeout} {SEARCH_TIMEOUT_EVENT}",
                    "start_search",
                    "loading_mode",
                ],
                "onExit": [
                    f"cancel {SEARCH_TIMEOUT_EVENT}",
                    "cancel_search",
                ],
            },
            "displaying_results": {
                "on": {
                    "zoom": "zoomed_in",
                    "search": "searching",
                    "change": "initial",
                },
                "onEntry": "results_mode",
            },
            "zoomed_in": {
                "on": {
                    "zoom_out": "displaying_results",
                },
                "onEntry": "zoomed_mode",
            },
            "error": {
                "on": {
                    "search": "searching",
                    "change": "initial",
                },
                "onEntry": "error_mode",
            },
        },
    }


def search_definition(search_timeout: float = 15.0) -> MachineDefinition:
    return MachineDefinition.from_dict(search_chart(search_timeout))
