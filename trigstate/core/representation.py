# trigstate/core/representation.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict, FrozenSet, Hashable, Iterator, List, Optional, Set, Tuple
from weakref import ReferenceType, ref

from trigstate.core.actions import EntryAction, ExitAction, _ActionExecutor
from trigstate.core.errors import ConfigurationError, HSMError
from trigstate.core.transition import TransitionInfo
from trigstate.core.triggers import TriggerBehaviour
from trigstate.core.types import Args

if TYPE_CHECKING:
    from trigstate.core.graph import StateGraph


class StateRepresentation:
    """
    Owns every behaviour, entry action and exit action configured for one
    state identity, plus its place in the superstate hierarchy.

    Hierarchy links are stored as state identities and resolved through the
    owning StateGraph, so representations never hold each other directly.
    """

    def __init__(self, state: Hashable, graph: "StateGraph") -> None:
        """
        :param state: The state identity this representation configures.
        :param graph: The arena that owns this representation.
        """
        self._state = state
        self._graph: ReferenceType["StateGraph"] = ref(graph)
        self._behaviours: Dict[Hashable, List[TriggerBehaviour]] = {}
        self._entry_actions: List[EntryAction] = []
        self._exit_actions: List[ExitAction] = []
        self._superstate: Optional[Hashable] = None
        self._has_superstate = False
        self._substates: Set[Hashable] = set()
        self._executor = _ActionExecutor()

    def __repr__(self) -> str:
        return f"StateRepresentation({self._state!r})"

    @property
    def state(self) -> Hashable:
        """The underlying state identity."""
        return self._state

    @property
    def graph(self) -> "StateGraph":
        graph = self._graph()
        if graph is None:
            raise HSMError(f"The configuration owning state {self._state!r} no longer exists")
        return graph

    # ------------------------------------------------------------------
    # Behaviours and actions
    # ------------------------------------------------------------------

    def add_trigger_behaviour(self, behaviour: TriggerBehaviour) -> None:
        """
        Append a behaviour to the bucket for its trigger. Several behaviours may
        share a trigger; they are evaluated in registration order.
        """
        self._behaviours.setdefault(behaviour.trigger, []).append(behaviour)

    def add_entry_action(
        self, action_fn: Callable[[TransitionInfo, Args], None], trigger: Optional[Hashable] = None
    ) -> None:
        """
        Append an entry action, optionally restricted to entries caused by ``trigger``.
        """
        self._entry_actions.append(EntryAction(action_fn, trigger))

    def add_exit_action(self, action_fn: Callable[[TransitionInfo], None]) -> None:
        """Append an exit action."""
        self._exit_actions.append(ExitAction(action_fn))

    def find_behaviours(self, trigger: Hashable) -> List[TriggerBehaviour]:
        """
        Return this representation's own bucket for the trigger. Ancestors are
        not searched.
        """
        return list(self._behaviours.get(trigger, ()))

    def owns_trigger(self, trigger: Hashable) -> bool:
        return bool(self._behaviours.get(trigger))

    @property
    def triggers(self) -> List[Hashable]:
        """Triggers with at least one behaviour on this representation, in registration order."""
        return [t for t, bucket in self._behaviours.items() if bucket]

    @property
    def behaviours(self) -> Dict[Hashable, Tuple[TriggerBehaviour, ...]]:
        return {t: tuple(bucket) for t, bucket in self._behaviours.items()}

    @property
    def entry_actions(self) -> Tuple[EntryAction, ...]:
        return tuple(self._entry_actions)

    @property
    def exit_actions(self) -> Tuple[ExitAction, ...]:
        return tuple(self._exit_actions)

    def enter(self, transition: TransitionInfo, args: Args) -> None:
        """Run this state's own entry actions that apply to the transition's trigger."""
        self._executor.execute_entry(self._entry_actions, transition, args)

    def exit(self, transition: TransitionInfo) -> None:
        """Run this state's own exit actions."""
        self._executor.execute_exit(self._exit_actions, transition)

    # ------------------------------------------------------------------
    # Hierarchy
    # ------------------------------------------------------------------

    @property
    def superstate(self) -> Optional["StateRepresentation"]:
        if not self._has_superstate:
            return None
        return self.graph.get(self._superstate)

    @property
    def superstate_state(self) -> Optional[Hashable]:
        return self._superstate

    @property
    def has_superstate(self) -> bool:
        return self._has_superstate

    @property
    def substates(self) -> List["StateRepresentation"]:
        graph = self.graph
        return [graph.get(s) for s in self._substates]

    @property
    def substate_states(self) -> FrozenSet[Hashable]:
        return frozenset(self._substates)

    def set_superstate(self, parent: "StateRepresentation") -> None:
        """
        Make ``parent`` the superstate of this representation and register this
        representation as one of its substates.

        Setting the same superstate again is a no-op. Re-parenting to a
        different superstate, or linking a state under one of its own
        descendants, raises ConfigurationError.
        """
        if parent.graph is not self.graph:
            raise ConfigurationError(
                f"State {parent.state!r} belongs to a different configuration than {self._state!r}", self._state
            )
        if self._has_superstate:
            if self._superstate == parent.state:
                return
            raise ConfigurationError(
                f"Cannot re-parent state {self._state!r} from {self._superstate!r} to {parent.state!r}. "
                "Re-parenting is disallowed.",
                self._state,
                {"current": self._superstate, "requested": parent.state},
            )
        if parent.state == self._state or self.is_ancestor_of(parent):
            raise ConfigurationError(
                f"Making {parent.state!r} the superstate of {self._state!r} would create a cycle", self._state
            )
        self._superstate = parent.state
        self._has_superstate = True
        parent._substates.add(self._state)

    def add_substate(self, child: "StateRepresentation") -> None:
        """Register ``child`` as a substate; equivalent to ``child.set_superstate(self)``."""
        child.set_superstate(self)

    def iter_chain(self) -> Iterator["StateRepresentation"]:
        """Yield this representation, then its superstate, up to the root."""
        current: Optional[StateRepresentation] = self
        while current is not None:
            yield current
            current = current.superstate

    def includes(self, state: Hashable) -> bool:
        """True when ``state`` is this state or one of its descendants."""
        return state == self._state or any(self.graph.get(s).includes(state) for s in self._substates)

    def is_ancestor_of(self, other: "StateRepresentation") -> bool:
        """True when this representation is a strict ancestor of ``other``."""
        return any(r.state == self._state for r in other.iter_chain() if r is not other)

    def is_in_state(self, state: Hashable) -> bool:
        """True when ``state`` is this state or one of its ancestors."""
        return any(r.state == state for r in self.iter_chain())

    def common_ancestor_with(self, other: "StateRepresentation") -> Optional["StateRepresentation"]:
        """
        Return the lowest representation that is this one or an ancestor of it,
        and also ``other`` or an ancestor of it. None when the two sit in
        disjoint trees.
        """
        mine = {r.state for r in self.iter_chain()}
        for candidate in other.iter_chain():
            if candidate.state in mine:
                return candidate
        return None
