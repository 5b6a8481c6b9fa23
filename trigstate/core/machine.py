# trigstate/core/machine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import logging
from typing import Any, Callable, Hashable, List, Optional, Tuple

from trigstate.core.config import StateMachineConfig
from trigstate.core.errors import GuardNotSatisfiedError, InvalidTriggerError, TransitionError, TriggerArgumentError
from trigstate.core.triggers import TriggerWithParameters, trigger_identity

logger = logging.getLogger(__name__)


class StateMachine:
    """
    Owns the current state of a machine configured by a StateMachineConfig and
    fires triggers against it.

    Firing is synchronous and runs every resolved action before returning. The
    current state changes only after all exit and entry actions have completed.
    """

    def __init__(
        self,
        initial_state: Hashable,
        config: StateMachineConfig,
        on_unhandled_trigger: Optional[Callable[[Hashable, Hashable], None]] = None,
    ) -> None:
        """
        :param initial_state: The state in which this machine begins.
        :param config: The configuration to fire against.
        :param on_unhandled_trigger: Optional ``handler(state, trigger)`` called
            instead of raising InvalidTriggerError or GuardNotSatisfiedError.
        """
        self._current_state = initial_state
        self._init(config, self._get_current_state, self._set_current_state, on_unhandled_trigger)

    @classmethod
    def with_external_storage(
        cls,
        config: StateMachineConfig,
        state_accessor: Callable[[], Hashable],
        state_mutator: Callable[[Hashable], None],
        on_unhandled_trigger: Optional[Callable[[Hashable, Hashable], None]] = None,
    ) -> "StateMachine":
        """
        Create a machine whose current state is read and written through the
        given callables, e.g. a field on a domain object.
        """
        machine = cls.__new__(cls)
        machine._init(config, state_accessor, state_mutator, on_unhandled_trigger)
        return machine

    def _init(self, config, state_accessor, state_mutator, on_unhandled_trigger) -> None:
        if not callable(state_accessor) or not callable(state_mutator):
            raise TypeError("State accessor and mutator must be callable")
        self._config = config
        self._engine = config.create_engine()
        self._state_accessor = state_accessor
        self._state_mutator = state_mutator
        self._on_unhandled_trigger = on_unhandled_trigger

    def _get_current_state(self) -> Hashable:
        return self._current_state

    def _set_current_state(self, state: Hashable) -> None:
        self._current_state = state

    def _validate_arguments(self, trigger: Any, args: Tuple[Any, ...]) -> Hashable:
        identity = trigger_identity(trigger)
        parameters = self._config.get_trigger_parameters(identity)
        if parameters is None and isinstance(trigger, TriggerWithParameters):
            parameters = trigger
        if parameters is not None:
            parameters.validate(args)
        return identity

    @property
    def state(self) -> Hashable:
        """The current state."""
        return self._state_accessor()

    @property
    def config(self) -> StateMachineConfig:
        return self._config

    def fire(self, trigger: Any, *args: Any) -> Hashable:
        """
        Fire a trigger with the given arguments.

        :param trigger: Trigger identity or TriggerWithParameters.
        :param args: Arguments passed to guards, selectors and entry actions.
        :return: The state after firing.
        :raises TriggerArgumentError: If the trigger declares parameters that ``args`` do not match.
        :raises TransitionError: If the trigger cannot be resolved and no unhandled-trigger handler is set.
        """
        identity = self._validate_arguments(trigger, args)
        source = self.state
        try:
            destination = self._engine.fire(source, identity, args)
        except (InvalidTriggerError, GuardNotSatisfiedError):
            if self._on_unhandled_trigger is None:
                raise
            logger.debug("Unhandled trigger %r in state %r passed to handler", identity, source)
            self._on_unhandled_trigger(source, identity)
            return source

        if destination != source:
            self._state_mutator(destination)
        return destination

    def can_fire(self, trigger: Any, *args: Any) -> bool:
        """
        True when firing ``trigger`` with ``args`` would resolve to exactly one
        behaviour. Guards are evaluated; no action runs.
        """
        try:
            identity = self._validate_arguments(trigger, args)
            self._engine.resolve(self.state, identity, args)
        except (TransitionError, TriggerArgumentError):
            return False
        return True

    def is_in_state(self, state: Hashable) -> bool:
        """True when ``state`` is the current state or one of its superstates."""
        current = self.state
        if current == state:
            return True
        rep = self._config.graph.find(current)
        return rep is not None and rep.is_in_state(state)

    def get_permitted_triggers(self, *args: Any) -> List[Hashable]:
        """Triggers that could currently be fired with ``args``."""
        return self._engine.get_permitted_triggers(self.state, args)

    def __repr__(self) -> str:
        return f"StateMachine(state={self.state!r})"
