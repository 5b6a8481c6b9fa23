"""
Trigger behaviours and typed trigger parameters.

Architecture:
- A TriggerBehaviour is attached to one (state, trigger) pair and decides
  whether firing the trigger results in a transition and, if so, where to
- Three variants: fixed (optionally reentrant), dynamic and ignored
- Behaviours are pure data plus the guard/selector closures supplied at
  configuration time

Error Handling:
- Exceptions raised by guards or selectors propagate to the caller of fire
  uninterpreted
- Argument mismatches for typed triggers are reported as TriggerArgumentError
  before any guard runs
"""

from abc import ABC, abstractmethod
from typing import Any, Hashable, Optional, Tuple

from trigstate.core.errors import TriggerArgumentError
from trigstate.core.guards import NO_GUARD, Guard
from trigstate.core.types import Args, BehaviourKind, SelectorFunction


class TriggerBehaviour(ABC):
    """Base class for the behaviour of one trigger in one state.

    Class Invariants:
    1. The trigger identity never changes after construction
    2. Guard evaluation has no side effects
    3. resolve() returns None only for behaviours that do not transition
    """

    kind: BehaviourKind

    def __init__(self, trigger: Hashable, guard: Optional[Guard] = None) -> None:
        """Initialize a TriggerBehaviour.

        Args:
            trigger: Trigger identity this behaviour responds to
            guard: Guard over the argument vector, defaults to always true
        """
        self._trigger = trigger
        self._guard = guard if guard is not None else NO_GUARD

    @property
    def trigger(self) -> Hashable:
        """Get the trigger identity."""
        return self._trigger

    @property
    def guard(self) -> Guard:
        """Get the guard."""
        return self._guard

    @property
    def is_reentry(self) -> bool:
        """Whether this behaviour was explicitly configured as a reentry."""
        return False

    def is_guard_satisfied(self, args: Args = ()) -> bool:
        """Evaluate the guard against the argument vector.

        Args:
            args: Arguments the trigger was fired with

        Returns:
            True if the guard holds, False otherwise
        """
        return self._guard(args)

    @abstractmethod
    def resolve(self, source: Hashable, args: Args = ()) -> Optional[Hashable]:
        """Resolve the destination of firing this behaviour from source.

        Args:
            source: State the trigger was fired in
            args: Arguments the trigger was fired with

        Returns:
            The destination state, or None when no transition results
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}(trigger={self._trigger!r}, guard={self._guard!r})"


class TransitioningTriggerBehaviour(TriggerBehaviour):
    """Transition to a fixed destination.

    A reentry behaviour is a fixed transition whose destination is the owning
    state, flagged so the engine exits and re-enters only that state.
    """

    def __init__(
        self, trigger: Hashable, destination: Hashable, guard: Optional[Guard] = None, reentry: bool = False
    ) -> None:
        super().__init__(trigger, guard)
        self._destination = destination
        self._reentry = reentry
        self.kind = BehaviourKind.REENTRY if reentry else BehaviourKind.TRANSITION

    @property
    def destination(self) -> Hashable:
        """Get the fixed destination."""
        return self._destination

    @property
    def is_reentry(self) -> bool:
        return self._reentry

    def resolve(self, source: Hashable, args: Args = ()) -> Optional[Hashable]:
        return self._destination


class DynamicTriggerBehaviour(TriggerBehaviour):
    """Transition to a destination computed from the arguments at fire time.

    The selector is called at most once per resolution and its result is not
    checked against the configured states here.
    """

    kind = BehaviourKind.DYNAMIC

    def __init__(self, trigger: Hashable, selector: SelectorFunction, guard: Optional[Guard] = None) -> None:
        if not callable(selector):
            raise TypeError("Destination selector must be callable")
        super().__init__(trigger, guard)
        self._selector = selector

    def resolve(self, source: Hashable, args: Args = ()) -> Optional[Hashable]:
        return self._selector(args)


class IgnoredTriggerBehaviour(TriggerBehaviour):
    """Consume the trigger without transitioning or running any action."""

    kind = BehaviourKind.IGNORED

    def resolve(self, source: Hashable, args: Args = ()) -> Optional[Hashable]:
        return None


class TriggerWithParameters:
    """A trigger with a declared argument signature.

    Instances may be passed anywhere a plain trigger is accepted; the
    underlying trigger identity is what gets registered and matched.
    """

    def __init__(self, trigger: Hashable, *arg_types: type) -> None:
        """Initialize a TriggerWithParameters instance.

        Args:
            trigger: Underlying trigger identity
            *arg_types: Expected type of each positional argument

        Raises:
            TypeError: If any declared parameter type is not a type
        """
        for t in arg_types:
            if not isinstance(t, type):
                raise TypeError(f"Parameter type {t!r} for trigger {trigger!r} is not a type")
        self._trigger = trigger
        self._arg_types: Tuple[type, ...] = arg_types

    @property
    def trigger(self) -> Hashable:
        return self._trigger

    @property
    def arg_types(self) -> Tuple[type, ...]:
        return self._arg_types

    def validate(self, args: Args) -> None:
        """Check the argument vector against the declared signature.

        Raises:
            TriggerArgumentError: If the arity or any argument type differs
        """
        if len(args) != len(self._arg_types):
            raise TriggerArgumentError(
                f"Trigger {self._trigger!r} takes {len(self._arg_types)} argument(s), {len(args)} given",
                self._trigger,
                len(self._arg_types),
                len(args),
            )
        for position, (arg, expected) in enumerate(zip(args, self._arg_types)):
            if not isinstance(arg, expected):
                raise TriggerArgumentError(
                    f"Argument {position} of trigger {self._trigger!r} must be "
                    f"{expected.__name__}, got {type(arg).__name__}",
                    self._trigger,
                    expected,
                    type(arg),
                )

    def __repr__(self) -> str:
        names = ", ".join(t.__name__ for t in self._arg_types)
        return f"TriggerWithParameters({self._trigger!r}, [{names}])"


def trigger_identity(trigger: Any) -> Hashable:
    """Unwrap a TriggerWithParameters to its trigger identity."""
    if isinstance(trigger, TriggerWithParameters):
        return trigger.trigger
    return trigger
