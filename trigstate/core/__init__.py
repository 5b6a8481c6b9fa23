"""
Core package providing the trigger-behaviour model and transition resolution.

Architecture:
- Leaf-first: guards, trigger behaviours, actions, state representations
- StateGraph is the arena of representations keyed by state identity
- TransitionEngine resolves a fired trigger and runs exit/entry actions
- StateMachineConfig/StateConfiguration populate the graph
- StateMachine owns the current-state pointer

Data flows one way: configuration populates representations, firing reads them.
"""

# Import order matters to avoid circular dependencies
from .errors import (
    AmbiguousTransitionError,
    ConfigurationError,
    GuardNotSatisfiedError,
    HSMError,
    InvalidTriggerError,
    StateNotFoundError,
    TransitionError,
    TriggerArgumentError,
    UnknownDestinationError,
)
from .types import BehaviourKind
from .guards import NO_GUARD, Guard, invert_guard
from .transition import TransitionInfo
from .actions import EntryAction, ExitAction
from .triggers import (
    DynamicTriggerBehaviour,
    IgnoredTriggerBehaviour,
    TransitioningTriggerBehaviour,
    TriggerBehaviour,
    TriggerWithParameters,
)
from .representation import StateRepresentation
from .graph import StateGraph
from .engine import TransitionEngine
from .config import StateConfiguration, StateMachineConfig
from .machine import StateMachine

__all__ = [
    # Errors
    "AmbiguousTransitionError",
    "ConfigurationError",
    "GuardNotSatisfiedError",
    "HSMError",
    "InvalidTriggerError",
    "StateNotFoundError",
    "TransitionError",
    "TriggerArgumentError",
    "UnknownDestinationError",
    # Behaviour model
    "BehaviourKind",
    "Guard",
    "NO_GUARD",
    "invert_guard",
    "TransitionInfo",
    "EntryAction",
    "ExitAction",
    "TriggerBehaviour",
    "TransitioningTriggerBehaviour",
    "DynamicTriggerBehaviour",
    "IgnoredTriggerBehaviour",
    "TriggerWithParameters",
    # Hierarchy and firing
    "StateRepresentation",
    "StateGraph",
    "TransitionEngine",
    "StateConfiguration",
    "StateMachineConfig",
    "StateMachine",
]
