# trigstate/core/actions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Callable, Hashable

from trigstate.core.transition import TransitionInfo
from trigstate.core.types import Args, TriggerFilter


class EntryAction:
    """
    Callback run when its owning state is entered. An entry action registered
    with a trigger filter only fires when the transition was caused by that
    trigger.
    """

    def __init__(
        self, action_fn: Callable[[TransitionInfo, Args], None], trigger: TriggerFilter = None
    ) -> None:
        """
        :param action_fn: Function taking the transition and the argument vector.
        :param trigger: Optional trigger filter; None fires on every entry.
        """
        if not callable(action_fn):
            raise TypeError("Entry action must be callable")
        self._action_fn = action_fn
        self._trigger = trigger
        self._filtered = trigger is not None

    @property
    def trigger(self) -> TriggerFilter:
        return self._trigger

    def applies_to(self, trigger: Hashable) -> bool:
        return not self._filtered or self._trigger == trigger

    def run(self, transition: TransitionInfo, args: Args) -> None:
        self._action_fn(transition, args)


class ExitAction:
    """
    Callback run on every exit of its owning state. Exit actions are never
    filtered by trigger.
    """

    def __init__(self, action_fn: Callable[[TransitionInfo], None]) -> None:
        if not callable(action_fn):
            raise TypeError("Exit action must be callable")
        self._action_fn = action_fn

    def run(self, transition: TransitionInfo) -> None:
        self._action_fn(transition)


class _ActionExecutor:
    """
    Internal helper running entry and exit actions in registration order.
    Exceptions raised by an action propagate unchanged; actions already run
    are not undone.
    """

    def execute_exit(self, actions, transition: TransitionInfo) -> None:
        for a in actions:
            a.run(transition)

    def execute_entry(self, actions, transition: TransitionInfo, args: Args) -> None:
        for a in actions:
            if a.applies_to(transition.trigger):
                a.run(transition, args)
