"""
Type definitions and enums shared by the trigger-behaviour model.

Design:
- No runtime dependencies on other modules
- Only contains type definitions and enums
- Used by guards.py, triggers.py, actions.py and the engine
"""

from enum import Enum, auto
from typing import Any, Callable, Hashable, Optional, Sequence


class BehaviourKind(Enum):
    """Tags the trigger-behaviour variants.

    Used by the engine to decide whether a matched behaviour leaves the state,
    re-enters it, or is consumed without a transition.
    """
    TRANSITION = auto()  # Fixed destination
    REENTRY = auto()     # Fixed destination equal to the owning state
    DYNAMIC = auto()     # Destination computed from the arguments
    IGNORED = auto()     # Consumed, no transition


# Type aliases for common types
Args = Sequence[Any]
GuardFunction = Callable[[Args], bool]
SelectorFunction = Callable[[Args], Any]
TriggerFilter = Optional[Hashable]
