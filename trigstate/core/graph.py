"""Arena of state representations keyed by state identity."""

import logging
from typing import Dict, Hashable, Iterator, List, Optional

from trigstate.core.errors import StateNotFoundError
from trigstate.core.representation import StateRepresentation
from trigstate.core.triggers import TransitioningTriggerBehaviour

logger = logging.getLogger(__name__)


class StateGraph:
    """
    Owns the StateRepresentation of every configured state. Representations
    are created lazily on first reference and live as long as the graph.
    """

    def __init__(self) -> None:
        self._representations: Dict[Hashable, StateRepresentation] = {}

    def __contains__(self, state: Hashable) -> bool:
        return state in self._representations

    def __iter__(self) -> Iterator[StateRepresentation]:
        return iter(list(self._representations.values()))

    def __len__(self) -> int:
        return len(self._representations)

    def get_or_create(self, state: Hashable) -> StateRepresentation:
        """Return the representation for a state, creating it on first reference."""
        rep = self._representations.get(state)
        if rep is None:
            rep = StateRepresentation(state, self)
            self._representations[state] = rep
            logger.debug("Created representation for state %r", state)
        return rep

    def get(self, state: Hashable) -> StateRepresentation:
        """Return the representation for a configured state.

        :raises StateNotFoundError: If the state was never referenced.
        """
        try:
            return self._representations[state]
        except KeyError:
            raise StateNotFoundError(state) from None

    def find(self, state: Hashable) -> Optional[StateRepresentation]:
        return self._representations.get(state)

    def get_states(self) -> List[Hashable]:
        """Get all configured states in creation order."""
        return list(self._representations.keys())

    def get_root_states(self) -> List[Hashable]:
        """Get all states that have no superstate."""
        return [s for s, rep in self._representations.items() if not rep.has_superstate]

    def get_ancestors(self, state: Hashable) -> List[Hashable]:
        """Get all ancestor states in order from immediate superstate to root."""
        return [r.state for r in self.get(state).iter_chain()][1:]

    def set_superstate(self, state: Hashable, superstate: Hashable) -> None:
        """Link ``state`` under ``superstate``, creating either representation as needed."""
        self.get_or_create(state).set_superstate(self.get_or_create(superstate))

    def validate(self) -> List[str]:
        """
        Report structural problems without raising: fixed destinations that were
        never configured as states, and hierarchy links that are not mirrored.
        """
        errors = []
        for rep in self._representations.values():
            for trigger, bucket in rep.behaviours.items():
                for behaviour in bucket:
                    if (
                        isinstance(behaviour, TransitioningTriggerBehaviour)
                        and behaviour.destination not in self._representations
                    ):
                        errors.append(
                            f"State {rep.state!r} permits {trigger!r} to unconfigured state {behaviour.destination!r}"
                        )
            if rep.has_superstate:
                parent = rep.superstate_state
                if parent not in self._representations:
                    errors.append(f"State {rep.state!r} has unknown superstate {parent!r}")
                elif rep.state not in self._representations[parent].substate_states:
                    errors.append(f"Superstate {parent!r} does not list {rep.state!r} as a substate")
            for child in rep.substate_states:
                child_rep = self._representations.get(child)
                if child_rep is None or not child_rep.has_superstate or child_rep.superstate_state != rep.state:
                    errors.append(f"Substate {child!r} of {rep.state!r} does not point back to it")
        return errors
