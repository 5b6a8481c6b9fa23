# tests/helpers.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from enum import Enum
from typing import Any, Callable, List, Tuple


class State(Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"


class Trigger(Enum):
    X = "X"
    Y = "Y"
    Z = "Z"


class ActionRecorder:
    """Collects (label, payload) pairs in the order actions ran."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, Any]] = []

    @property
    def labels(self) -> List[str]:
        return [label for label, _ in self.calls]

    def entry(self, label: str) -> Callable:
        """Entry action for StateConfiguration.on_entry."""

        def _action(transition):
            self.calls.append((label, transition))

        return _action

    def entry_with_args(self, label: str) -> Callable:
        """Entry action for StateConfiguration.on_entry_from."""

        def _action(transition, *args):
            self.calls.append((label, args))

        return _action

    def exit(self, label: str) -> Callable:
        """Exit action for StateConfiguration.on_exit."""

        def _action(transition):
            self.calls.append((label, transition))

        return _action
