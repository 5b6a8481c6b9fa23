# trigstate/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Any, Dict, Hashable, Optional


class HSMError(Exception):
    """
    Base exception class for errors within the hierarchical state machine library.

    :param message: Human readable description of the failure.
    :param details: Optional dictionary of extra context for diagnostics.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(HSMError):
    """
    Raised synchronously while a machine is being configured, e.g. for an
    identity permit, a hierarchy cycle or an attempt to re-parent a state.
    """

    def __init__(
        self, message: str, state: Optional[Hashable] = None, details: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(message, details)
        self.state = state


class StateNotFoundError(HSMError):
    """
    Raised when a requested state does not exist in the machine or hierarchy.
    """

    def __init__(self, state: Hashable) -> None:
        super().__init__(f"State {state!r} has not been configured", {"state": state})
        self.state = state


class TransitionError(HSMError):
    """
    Base class for the errors raised when a fired trigger cannot be resolved
    into exactly one behaviour.
    """

    def __init__(
        self, message: str, state: Hashable, trigger: Hashable, details: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(message, details)
        self.state = state
        self.trigger = trigger


class InvalidTriggerError(TransitionError):
    """
    Raised when no state in the current state's superstate chain permits the trigger.
    """

    def __init__(self, state: Hashable, trigger: Hashable) -> None:
        super().__init__(
            f"No valid leaving transitions are permitted from state {state!r} for trigger {trigger!r}. "
            "Consider ignoring the trigger.",
            state,
            trigger,
        )


class GuardNotSatisfiedError(TransitionError):
    """
    Raised when the trigger is configured but every guard at the owning level is false.
    """

    def __init__(self, state: Hashable, trigger: Hashable, owner: Hashable) -> None:
        super().__init__(
            f"Trigger {trigger!r} is valid for transition from state {state!r} "
            f"but no guard condition configured on {owner!r} is met",
            state,
            trigger,
            {"owner": owner},
        )
        self.owner = owner


class AmbiguousTransitionError(TransitionError):
    """
    Raised when more than one guard is satisfied at the owning level. This is
    always a configuration bug; the engine never picks one silently.
    """

    def __init__(self, state: Hashable, trigger: Hashable, owner: Hashable, count: int) -> None:
        super().__init__(
            f"Multiple permitted exit transitions are configured from state {state!r} for trigger {trigger!r} "
            f"({count} guards on {owner!r} are met). Guard clauses must be mutually exclusive.",
            state,
            trigger,
            {"owner": owner, "count": count},
        )
        self.owner = owner
        self.count = count


class UnknownDestinationError(TransitionError):
    """
    Raised when destination validation is enabled and a dynamic selector
    returns a state that was never configured.
    """

    def __init__(self, state: Hashable, trigger: Hashable, destination: Hashable) -> None:
        super().__init__(
            f"Trigger {trigger!r} from state {state!r} selected unconfigured destination {destination!r}",
            state,
            trigger,
            {"destination": destination},
        )
        self.destination = destination


class TriggerArgumentError(HSMError):
    """
    Raised when the arguments supplied to a trigger with declared parameters
    do not match the declared arity or types.
    """

    def __init__(self, message: str, trigger: Hashable, expected: Any, received: Any) -> None:
        super().__init__(message, {"trigger": trigger, "expected": expected, "received": received})
        self.trigger = trigger
        self.expected = expected
        self.received = received
