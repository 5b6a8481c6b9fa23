# trigstate/core/transition.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from dataclasses import dataclass
from typing import Hashable


@dataclass(frozen=True)
class TransitionInfo:
    """
    Describes the transition currently being executed. Passed to entry and
    exit actions for introspection.

    :param source: State the machine is leaving.
    :param destination: State the machine is entering.
    :param trigger: Trigger that caused the transition.
    """

    source: Hashable
    destination: Hashable
    trigger: Hashable

    @property
    def is_reentry(self) -> bool:
        """True when the transition leaves and re-enters the same state."""
        return self.source == self.destination
