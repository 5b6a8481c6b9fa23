"""trigstate: embeddable hierarchical finite-state-machine engine

Application code declares, per state, which triggers are legal, under what
guard conditions, to which destination (fixed or computed), and which
callbacks fire on entry and exit. The engine resolves "fire trigger T with
arguments A while in state S" into at most one transition and runs exit and
entry actions in hierarchical order.

Responsibilities:
    - Trigger behaviours: fixed, reentrant, dynamic and ignored
    - Guard resolution with ambiguity detection
    - Superstate/substate hierarchy with inherited triggers
    - Exit/entry ordering bounded by the lowest common ancestor

Cross-cutting Concerns:
    Thread Safety:
        - None built in; a machine has a single logical owner and callers
          serialize concurrent firing themselves

    Error Handling:
        - Structured error hierarchy rooted at HSMError
        - Resolution failures are raised, never swallowed or logged
        - Exceptions from user callables propagate unchanged

    Logging:
        - Standard library logging under the ``trigstate`` logger namespace
        - Resolution and committed transitions at DEBUG level
"""

from trigstate.core import (
    AmbiguousTransitionError,
    ConfigurationError,
    Guard,
    GuardNotSatisfiedError,
    HSMError,
    InvalidTriggerError,
    StateConfiguration,
    StateMachine,
    StateMachineConfig,
    StateNotFoundError,
    TransitionError,
    TransitionInfo,
    TriggerArgumentError,
    TriggerWithParameters,
    UnknownDestinationError,
    invert_guard,
)

__version__ = "0.1.0"

__all__ = [
    "AmbiguousTransitionError",
    "ConfigurationError",
    "Guard",
    "GuardNotSatisfiedError",
    "HSMError",
    "InvalidTriggerError",
    "StateConfiguration",
    "StateMachine",
    "StateMachineConfig",
    "StateNotFoundError",
    "TransitionError",
    "TransitionInfo",
    "TriggerArgumentError",
    "TriggerWithParameters",
    "UnknownDestinationError",
    "invert_guard",
]
