# trigstate/core/engine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import logging
from typing import Hashable, List, Optional, Tuple

from trigstate.core.errors import (
    AmbiguousTransitionError,
    GuardNotSatisfiedError,
    InvalidTriggerError,
    UnknownDestinationError,
)
from trigstate.core.graph import StateGraph
from trigstate.core.representation import StateRepresentation
from trigstate.core.transition import TransitionInfo
from trigstate.core.triggers import TriggerBehaviour
from trigstate.core.types import Args, BehaviourKind

logger = logging.getLogger(__name__)


class _GuardEvaluator:
    """
    Internal helper selecting the single behaviour whose guard holds. Every
    guard in the bucket is evaluated, in registration order.
    """

    def select(
        self, state: Hashable, trigger: Hashable, owner: StateRepresentation, args: Args
    ) -> TriggerBehaviour:
        """
        :raises GuardNotSatisfiedError: If no guard in the bucket holds.
        :raises AmbiguousTransitionError: If more than one guard holds.
        """
        bucket = owner.find_behaviours(trigger)
        satisfied = [b for b in bucket if b.is_guard_satisfied(args)]
        if not satisfied:
            raise GuardNotSatisfiedError(state, trigger, owner.state)
        if len(satisfied) > 1:
            raise AmbiguousTransitionError(state, trigger, owner.state, len(satisfied))
        return satisfied[0]


class TransitionEngine:
    """
    Resolves ``fire(trigger, args)`` in a given state into at most one
    transition and runs the exit and entry actions it implies.

    The engine never stores the current state; callers pass it in and commit
    the returned state themselves.
    """

    def __init__(self, graph: StateGraph, validate_dynamic_destinations: bool = False) -> None:
        """
        :param graph: Arena holding every configured state representation.
        :param validate_dynamic_destinations: Reject dynamic destinations that
            were never configured instead of accepting them.
        """
        self._graph = graph
        self._validate_dynamic_destinations = validate_dynamic_destinations
        self._guard_evaluator = _GuardEvaluator()

    @property
    def graph(self) -> StateGraph:
        return self._graph

    def _representation(self, state: Hashable) -> StateRepresentation:
        # Unconfigured states (e.g. a dynamic destination) behave as empty roots.
        rep = self._graph.find(state)
        if rep is None:
            rep = StateRepresentation(state, self._graph)
        return rep

    def find_owner(self, state: Hashable, trigger: Hashable) -> Optional[StateRepresentation]:
        """
        Return the innermost representation in ``state``'s superstate chain with
        a non-empty bucket for ``trigger``, or None.
        """
        for rep in self._representation(state).iter_chain():
            if rep.owns_trigger(trigger):
                return rep
        return None

    def resolve(self, state: Hashable, trigger: Hashable, args: Args = ()) -> Tuple[StateRepresentation, TriggerBehaviour]:
        """
        Select the behaviour that firing ``trigger`` in ``state`` would apply.

        :return: The owning representation and the selected behaviour.
        :raises InvalidTriggerError: If no representation in the chain owns the trigger.
        :raises GuardNotSatisfiedError: If every guard at the owning level is false.
        :raises AmbiguousTransitionError: If several guards at the owning level hold.
        """
        owner = self.find_owner(state, trigger)
        if owner is None:
            raise InvalidTriggerError(state, trigger)
        return owner, self._guard_evaluator.select(state, trigger, owner, args)

    def fire(self, state: Hashable, trigger: Hashable, args: Args = ()) -> Hashable:
        """
        Fire ``trigger`` with ``args`` while in ``state`` and return the new state.

        Exit actions run innermost first, then entry actions outermost first.
        Exceptions from guards, selectors or actions propagate unchanged; in that
        case the caller must keep its pre-fire state.

        :param state: The current state.
        :param trigger: The trigger identity.
        :param args: The argument vector, passed opaquely to guards, selectors and actions.
        :return: The destination state, or ``state`` for an ignored trigger.
        """
        args = tuple(args)
        owner, behaviour = self.resolve(state, trigger, args)
        logger.debug("Trigger %r in state %r handled by %r on %r", trigger, state, behaviour, owner.state)

        if behaviour.kind is BehaviourKind.IGNORED:
            logger.debug("Trigger %r ignored in state %r", trigger, state)
            return state

        # None is a legal state; only the ignored variant is a no-op
        destination = behaviour.resolve(state, args)
        if (
            behaviour.kind is BehaviourKind.DYNAMIC
            and self._validate_dynamic_destinations
            and destination not in self._graph
        ):
            raise UnknownDestinationError(state, trigger, destination)

        transition = TransitionInfo(state, destination, trigger)
        exits, entries = self.plan(transition, reentry=behaviour.is_reentry)

        for rep in exits:
            rep.exit(transition)
        for rep in entries:
            rep.enter(transition, args)

        logger.debug("Transitioned from %r to %r on %r", state, destination, trigger)
        return destination

    def plan(
        self, transition: TransitionInfo, reentry: bool = False
    ) -> Tuple[List[StateRepresentation], List[StateRepresentation]]:
        """
        Compute the representations to exit (innermost first) and to enter
        (outermost first) for a transition.

        A reentry exits and enters only the source. Otherwise both chains stop
        just below the lowest common ancestor of source and destination.
        """
        source = self._representation(transition.source)
        if reentry and transition.is_reentry:
            return [source], [source]

        destination = self._representation(transition.destination)
        lca = source.common_ancestor_with(destination)
        exits = self._chain_below(source, lca)
        entries = self._chain_below(destination, lca)
        entries.reverse()
        return exits, entries

    @staticmethod
    def _chain_below(rep: StateRepresentation, stop: Optional[StateRepresentation]) -> List[StateRepresentation]:
        chain = []
        for r in rep.iter_chain():
            if stop is not None and r.state == stop.state:
                break
            chain.append(r)
        return chain

    def get_permitted_triggers(self, state: Hashable, args: Args = ()) -> List[Hashable]:
        """
        Triggers with at least one guard satisfied by ``args`` anywhere in
        ``state``'s chain, innermost first, without duplicates.
        """
        args = tuple(args)
        permitted: List[Hashable] = []
        seen = set()
        for rep in self._representation(state).iter_chain():
            for trigger in rep.triggers:
                # An inner bucket shadows the same trigger on every ancestor.
                if trigger in seen:
                    continue
                seen.add(trigger)
                if any(b.is_guard_satisfied(args) for b in rep.find_behaviours(trigger)):
                    permitted.append(trigger)
        return permitted
