# trigstate/core/guards.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Any, Callable

from trigstate.core.types import Args, GuardFunction


class Guard:
    """
    A predicate over a trigger's argument vector. Guards gate whether a trigger
    behaviour applies and must be side-effect free.

    Guards compose with ``&``, ``|`` and ``~``; a plain callable on either
    side of ``&`` or ``|`` is taken in the argument-vector form.
    """

    def __init__(self, condition: GuardFunction, description: str = "") -> None:
        """
        :param condition: Callable taking the argument vector and returning bool.
        :param description: Optional label used in reprs and diagnostics.
        """
        if not callable(condition):
            raise TypeError("Guard condition must be callable")
        self._condition = condition
        self._description = description or getattr(condition, "__name__", "guard")

    @property
    def description(self) -> str:
        return self._description

    def __call__(self, args: Args) -> bool:
        return bool(self._condition(args))

    def __and__(self, other: GuardFunction) -> "Guard":
        other = _as_guard(other)
        return Guard(lambda args: self(args) and other(args), f"({self._description} and {other.description})")

    def __or__(self, other: GuardFunction) -> "Guard":
        other = _as_guard(other)
        return Guard(lambda args: self(args) or other(args), f"({self._description} or {other.description})")

    def __rand__(self, other: GuardFunction) -> "Guard":
        return _as_guard(other) & self

    def __ror__(self, other: GuardFunction) -> "Guard":
        return _as_guard(other) | self

    def __invert__(self) -> "Guard":
        return Guard(lambda args: not self(args), f"not {self._description}")

    def __repr__(self) -> str:
        return f"Guard({self._description})"


NO_GUARD = Guard(lambda args: True, "always")


def _as_guard(condition: GuardFunction) -> Guard:
    # Plain callables are taken in the argument-vector form
    if isinstance(condition, Guard):
        return condition
    return Guard(condition)


def unpacked(fn: Callable[..., Any]) -> Callable[[Args], Any]:
    """
    Adapt a callable written against the trigger's parameters, ``fn(*args)``,
    to the argument-vector form used by the core.
    """
    if not callable(fn):
        raise TypeError("Expected a callable")

    def _call(args: Args) -> Any:
        return fn(*args)

    _call.__name__ = getattr(fn, "__name__", "callable")
    return _call


def to_guard(fn: Callable[..., bool]) -> Guard:
    """Wrap a user guard taking unpacked arguments into a core Guard."""
    if isinstance(fn, Guard):
        return fn
    return Guard(unpacked(fn), getattr(fn, "__name__", "guard"))


def invert_guard(guard: Callable[..., bool]) -> Callable[..., bool]:
    """
    Return the logical negation of a guard written against unpacked arguments,
    so ``invert_guard(invert_guard(g))(*a) == g(*a)``. A Guard instance is
    negated in its own argument-vector form.
    """
    if isinstance(guard, Guard):
        return ~guard

    def _inverted(*args: Any) -> bool:
        return not guard(*args)

    _inverted.__name__ = f"not_{getattr(guard, '__name__', 'guard')}"
    return _inverted
