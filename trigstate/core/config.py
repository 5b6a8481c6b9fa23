"""
Configuration surface used to populate state representations.

Architecture:
- StateMachineConfig owns the StateGraph arena and the declared trigger
  signatures, and builds the TransitionEngine that fires against them
- StateConfiguration is a fluent adapter over one StateRepresentation; it
  converts user callables taking unpacked arguments into the argument-vector
  form the core works with

Validation:
- Plain permits to the owning state are rejected; reentry is the dedicated path
- Hierarchy cycles and re-parenting are rejected when linking substates
- Guards, selectors and actions must be callable
"""

import inspect
from typing import Any, Callable, Dict, Hashable, List, Optional

from trigstate.core.engine import TransitionEngine
from trigstate.core.errors import ConfigurationError
from trigstate.core.graph import StateGraph
from trigstate.core.guards import NO_GUARD, to_guard, unpacked
from trigstate.core.representation import StateRepresentation
from trigstate.core.transition import TransitionInfo
from trigstate.core.triggers import (
    DynamicTriggerBehaviour,
    IgnoredTriggerBehaviour,
    TransitioningTriggerBehaviour,
    TriggerWithParameters,
    trigger_identity,
)


def _require_callable(obj: Any, what: str, state: Hashable) -> None:
    if not callable(obj):
        raise ConfigurationError(f"{what} for state {state!r} must be callable, got {obj!r}", state)


def _takes_transition(action: Callable[..., None]) -> bool:
    """True unless ``action`` can only be called without arguments."""
    try:
        parameters = inspect.signature(action).parameters.values()
    except (TypeError, ValueError):
        # Signature not introspectable, assume the documented one-argument form
        return True
    return any(
        p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD, p.VAR_POSITIONAL) for p in parameters
    )


class StateMachineConfig:
    """Holds the configured states and trigger signatures of a state machine.

    A single configuration may back any number of StateMachine instances.
    Configuration happens-before firing; the graph is read-only while firing.
    """

    def __init__(self, validate_dynamic_destinations: bool = False) -> None:
        """Initialize a StateMachineConfig instance.

        Args:
            validate_dynamic_destinations: If True, a dynamic selector returning
                a state that was never configured raises UnknownDestinationError
                at fire time. Defaults to accepting any destination.
        """
        self._graph = StateGraph()
        self._trigger_parameters: Dict[Hashable, TriggerWithParameters] = {}
        self._validate_dynamic_destinations = validate_dynamic_destinations

    @property
    def graph(self) -> StateGraph:
        return self._graph

    @property
    def validate_dynamic_destinations(self) -> bool:
        return self._validate_dynamic_destinations

    def create_or_get_representation(self, state: Hashable) -> StateRepresentation:
        """Return the representation for ``state``, creating it on first reference."""
        return self._graph.get_or_create(state)

    def get_representation(self, state: Hashable) -> StateRepresentation:
        """
        Raises:
            StateNotFoundError: If ``state`` was never configured
        """
        return self._graph.get(state)

    def is_configured(self, state: Hashable) -> bool:
        return state in self._graph

    def configure(self, state: Hashable) -> "StateConfiguration":
        """Begin (or continue) configuring ``state``."""
        return StateConfiguration(self.create_or_get_representation(state), self)

    def set_trigger_parameters(self, trigger: Hashable, *arg_types: type) -> TriggerWithParameters:
        """Declare the argument signature of a trigger.

        Raises:
            ConfigurationError: If the trigger's parameters were already declared
        """
        if trigger in self._trigger_parameters:
            raise ConfigurationError(
                f"Parameters for trigger {trigger!r} have already been configured",
                details={"trigger": trigger, "declared": self._trigger_parameters[trigger].arg_types},
            )
        try:
            configuration = TriggerWithParameters(trigger, *arg_types)
        except TypeError as e:
            raise ConfigurationError(str(e), details={"trigger": trigger}) from e
        self._trigger_parameters[trigger] = configuration
        return configuration

    def get_trigger_parameters(self, trigger: Hashable) -> Optional[TriggerWithParameters]:
        return self._trigger_parameters.get(trigger_identity(trigger))

    def register_trigger(self, trigger: Any) -> Hashable:
        """Return the identity of ``trigger``, recording its signature if it carries one."""
        if isinstance(trigger, TriggerWithParameters):
            known = self._trigger_parameters.get(trigger.trigger)
            if known is None:
                self._trigger_parameters[trigger.trigger] = trigger
            elif known.arg_types != trigger.arg_types:
                raise ConfigurationError(
                    f"Trigger {trigger.trigger!r} was declared with different parameters",
                    details={"declared": known.arg_types, "given": trigger.arg_types},
                )
        return trigger_identity(trigger)

    def create_engine(self) -> TransitionEngine:
        return TransitionEngine(self._graph, validate_dynamic_destinations=self._validate_dynamic_destinations)

    def validate(self) -> List[str]:
        """Report structural problems in the configured graph without raising."""
        return self._graph.validate()


class StateConfiguration:
    """Fluent configuration of one state.

    Guards and selectors receive the trigger's arguments unpacked, i.e.
    ``guard(*args)`` and ``selector(*args)``; a Guard instance is used as-is
    and sees the argument vector. Every method returns the configuration so
    calls can be chained.
    """

    def __init__(self, representation: StateRepresentation, config: StateMachineConfig) -> None:
        self._representation = representation
        self._config = config

    @property
    def state(self) -> Hashable:
        return self._representation.state

    @property
    def representation(self) -> StateRepresentation:
        return self._representation

    def _enforce_not_identity_transition(self, destination: Hashable) -> None:
        if destination == self.state:
            raise ConfigurationError(
                "permit() and permit_if() require that the destination state is not equal to the source state. "
                "To accept a trigger without changing state, use either ignore() or permit_reentry().",
                self.state,
                {"destination": destination},
            )

    def _add_transition(self, trigger: Any, destination: Hashable, guard: Callable[..., bool], reentry: bool):
        _require_callable(guard, "Guard", self.state)
        identity = self._config.register_trigger(trigger)
        self._representation.add_trigger_behaviour(
            TransitioningTriggerBehaviour(identity, destination, to_guard(guard), reentry=reentry)
        )
        return self

    def permit(self, trigger: Any, destination: Hashable) -> "StateConfiguration":
        """Transition to ``destination`` when ``trigger`` fires.

        Raises:
            ConfigurationError: If ``destination`` is this state
        """
        self._enforce_not_identity_transition(destination)
        return self._add_transition(trigger, destination, NO_GUARD, reentry=False)

    def permit_if(self, trigger: Any, destination: Hashable, guard: Callable[..., bool]) -> "StateConfiguration":
        """Transition to ``destination`` when ``trigger`` fires and ``guard(*args)`` holds."""
        self._enforce_not_identity_transition(destination)
        return self._add_transition(trigger, destination, guard, reentry=False)

    def permit_reentry(self, trigger: Any) -> "StateConfiguration":
        """Exit and re-enter this state when ``trigger`` fires."""
        return self._add_transition(trigger, self.state, NO_GUARD, reentry=True)

    def permit_reentry_if(self, trigger: Any, guard: Callable[..., bool]) -> "StateConfiguration":
        return self._add_transition(trigger, self.state, guard, reentry=True)

    def permit_dynamic(self, trigger: Any, selector: Callable[..., Hashable]) -> "StateConfiguration":
        """Transition to ``selector(*args)`` when ``trigger`` fires."""
        return self.permit_dynamic_if(trigger, selector, NO_GUARD)

    def permit_dynamic_if(
        self, trigger: Any, selector: Callable[..., Hashable], guard: Callable[..., bool]
    ) -> "StateConfiguration":
        _require_callable(selector, "Destination selector", self.state)
        _require_callable(guard, "Guard", self.state)
        identity = self._config.register_trigger(trigger)
        self._representation.add_trigger_behaviour(
            DynamicTriggerBehaviour(identity, unpacked(selector), to_guard(guard))
        )
        return self

    def ignore(self, trigger: Any) -> "StateConfiguration":
        """Accept ``trigger`` without transitioning or running any action."""
        return self.ignore_if(trigger, NO_GUARD)

    def ignore_if(self, trigger: Any, guard: Callable[..., bool]) -> "StateConfiguration":
        _require_callable(guard, "Guard", self.state)
        identity = self._config.register_trigger(trigger)
        self._representation.add_trigger_behaviour(IgnoredTriggerBehaviour(identity, to_guard(guard)))
        return self

    def on_entry(self, action: Callable[..., None]) -> "StateConfiguration":
        """Run ``action`` on every entry into this state.

        ``action`` is called as ``action(transition)``, or as ``action()`` when
        it takes no positional parameters.
        """
        _require_callable(action, "Entry action", self.state)
        if _takes_transition(action):

            def _entry(transition, args):
                action(transition)

        else:

            def _entry(transition, args):
                action()

        self._representation.add_entry_action(_entry)
        return self

    def on_entry_from(self, trigger: Any, action: Callable[..., None]) -> "StateConfiguration":
        """Run ``action(transition, *args)`` when this state is entered via ``trigger``."""
        _require_callable(action, "Entry action", self.state)
        identity = self._config.register_trigger(trigger)

        def _entry(transition, args):
            action(transition, *args)

        self._representation.add_entry_action(_entry, identity)
        return self

    def on_exit(self, action: Callable[..., None]) -> "StateConfiguration":
        """Run ``action`` on every exit from this state.

        ``action`` is called as ``action(transition)``, or as ``action()`` when
        it takes no positional parameters.
        """
        _require_callable(action, "Exit action", self.state)
        if _takes_transition(action):
            self._representation.add_exit_action(action)
        else:
            self._representation.add_exit_action(lambda transition: action())
        return self

    def substate_of(self, superstate: Hashable) -> "StateConfiguration":
        """Make this state a substate of ``superstate``.

        Raises:
            ConfigurationError: If this state already has a different
                superstate or the link would create a cycle
        """
        self._representation.set_superstate(self._config.create_or_get_representation(superstate))
        return self
