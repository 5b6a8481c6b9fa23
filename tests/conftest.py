# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import pytest

from tests.helpers import ActionRecorder


def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "property: mark test as a property-based test")
    config.addinivalue_line("markers", "integration: mark test as an end-to-end scenario")


@pytest.fixture
def config():
    """An empty machine configuration with permissive dynamic destinations."""
    from trigstate.core.config import StateMachineConfig

    return StateMachineConfig()


@pytest.fixture
def strict_config():
    """A configuration that rejects unconfigured dynamic destinations."""
    from trigstate.core.config import StateMachineConfig

    return StateMachineConfig(validate_dynamic_destinations=True)


@pytest.fixture
def graph():
    """An empty representation arena."""
    from trigstate.core.graph import StateGraph

    return StateGraph()


@pytest.fixture
def recorder():
    """Records action invocations in call order."""
    return ActionRecorder()


@pytest.fixture
def true_guard():
    """A guard over the argument vector that always passes."""
    return lambda args: True


@pytest.fixture
def false_guard():
    """A guard over the argument vector that always fails."""
    return lambda args: False


@pytest.fixture
def error_classes():
    """Provides a tuple of error classes for quick reference."""
    from trigstate.core.errors import (
        AmbiguousTransitionError,
        ConfigurationError,
        GuardNotSatisfiedError,
        HSMError,
        InvalidTriggerError,
        TransitionError,
    )

    return (
        HSMError,
        ConfigurationError,
        TransitionError,
        InvalidTriggerError,
        GuardNotSatisfiedError,
        AmbiguousTransitionError,
    )
