# tests/unit/test_machine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from unittest.mock import MagicMock

import pytest

from tests.helpers import State, Trigger
from trigstate.core.errors import (
    AmbiguousTransitionError,
    GuardNotSatisfiedError,
    InvalidTriggerError,
    TriggerArgumentError,
    UnknownDestinationError,
)
from trigstate.core.machine import StateMachine


@pytest.fixture
def machine_factory(config):
    """Returns a factory creating machines over the shared config."""

    def _factory(initial=State.A, **kwargs):
        return StateMachine(initial, config, **kwargs)

    return _factory


def test_initial_state(machine_factory):
    assert machine_factory().state == State.A
    assert machine_factory(State.B).state == State.B


def test_fire_commits_destination(config, machine_factory):
    config.configure(State.A).permit(Trigger.X, State.B)
    machine = machine_factory()
    assert machine.fire(Trigger.X) == State.B
    assert machine.state == State.B


def test_fire_commits_none_state(config, machine_factory):
    config.configure(State.A).permit(Trigger.X, None)
    config.configure(None).permit(Trigger.Y, State.A)
    machine = machine_factory()
    assert machine.fire(Trigger.X) is None
    assert machine.state is None
    assert machine.fire(Trigger.Y) == State.A


def test_dynamic_selector_returning_none_rejected_when_validated(strict_config):
    strict_config.configure(State.A).permit_dynamic(Trigger.X, lambda: None)
    machine = StateMachine(State.A, strict_config)
    with pytest.raises(UnknownDestinationError):
        machine.fire(Trigger.X)
    assert machine.state == State.A


def test_invalid_trigger_leaves_state(machine_factory):
    machine = machine_factory()
    with pytest.raises(InvalidTriggerError):
        machine.fire(Trigger.X)
    assert machine.state == State.A


def test_action_failure_leaves_state(config, machine_factory):
    def failing(transition):
        raise RuntimeError("boom")

    config.configure(State.A).permit(Trigger.X, State.B)
    config.configure(State.B).on_entry(failing)
    machine = machine_factory()
    with pytest.raises(RuntimeError):
        machine.fire(Trigger.X)
    assert machine.state == State.A


def test_unhandled_trigger_handler(config, machine_factory):
    handler = MagicMock()
    config.configure(State.A).permit_if(Trigger.Y, State.B, lambda: False)
    machine = machine_factory(on_unhandled_trigger=handler)
    assert machine.fire(Trigger.X) == State.A
    assert machine.fire(Trigger.Y) == State.A
    assert handler.call_args_list[0].args == (State.A, Trigger.X)
    assert handler.call_args_list[1].args == (State.A, Trigger.Y)


def test_ambiguous_transition_bypasses_unhandled_handler(config, machine_factory):
    handler = MagicMock()
    config.configure(State.A).permit(Trigger.X, State.B).permit(Trigger.X, State.C)
    machine = machine_factory(on_unhandled_trigger=handler)
    with pytest.raises(AmbiguousTransitionError):
        machine.fire(Trigger.X)
    handler.assert_not_called()


def test_typed_trigger_arguments_validated_before_guards(config, machine_factory):
    guard = MagicMock(return_value=True)
    typed = config.set_trigger_parameters(Trigger.X, int)
    config.configure(State.A).permit_if(typed, State.B, guard)
    machine = machine_factory()

    with pytest.raises(TriggerArgumentError):
        machine.fire(Trigger.X, "not an int")
    with pytest.raises(TriggerArgumentError):
        machine.fire(typed)
    guard.assert_not_called()

    assert machine.fire(typed, 3) == State.B
    guard.assert_called_once_with(3)


def test_entry_and_exit_actions_without_parameters(config, machine_factory, recorder):
    calls = []
    config.configure(State.A).permit(Trigger.X, State.B).on_exit(lambda: calls.append("exit A"))
    config.configure(State.B).on_entry(lambda: calls.append("enter B")).on_entry(recorder.entry("B"))
    machine_factory().fire(Trigger.X)
    assert calls == ["exit A", "enter B"]
    assert recorder.labels == ["B"]
    assert recorder.calls[0][1].source == State.A


def test_on_entry_from_receives_arguments(config, machine_factory, recorder):
    typed = config.set_trigger_parameters(Trigger.X, str, int)
    config.configure(State.A).permit(typed, State.B)
    config.configure(State.B).on_entry_from(typed, recorder.entry_with_args("B from X"))
    machine_factory().fire(Trigger.X, "order", 2)
    assert recorder.calls == [("B from X", ("order", 2))]


def test_can_fire(config, machine_factory):
    config.configure(State.A).permit_if(Trigger.X, State.B, lambda n: n > 0).ignore(Trigger.Z)
    machine = machine_factory()
    assert machine.can_fire(Trigger.X, 1)
    assert not machine.can_fire(Trigger.X, 0)
    assert machine.can_fire(Trigger.Z)
    assert not machine.can_fire(Trigger.Y)
    assert machine.state == State.A


def test_can_fire_runs_no_actions(config, machine_factory, recorder):
    config.configure(State.A).permit(Trigger.X, State.B).on_exit(recorder.exit("exit A"))
    assert machine_factory().can_fire(Trigger.X)
    assert recorder.calls == []


def test_is_in_state_includes_superstates(config, machine_factory):
    config.configure(State.C).substate_of(State.B)
    config.configure(State.B).substate_of(State.A)
    machine = machine_factory(State.C)
    assert machine.is_in_state(State.C)
    assert machine.is_in_state(State.B)
    assert machine.is_in_state(State.A)
    assert not machine.is_in_state(State.D)


def test_is_in_state_for_unconfigured_state(machine_factory):
    machine = machine_factory(State.D)
    assert machine.is_in_state(State.D)
    assert not machine.is_in_state(State.A)


def test_permitted_triggers(config, machine_factory):
    config.configure(State.B).permit(Trigger.Z, State.A)
    config.configure(State.C).substate_of(State.B).permit(Trigger.X, State.A).permit_if(
        Trigger.Y, State.A, lambda: False
    )
    assert machine_factory(State.C).get_permitted_triggers() == [Trigger.X, Trigger.Z]


def test_external_storage(config):
    class Order:
        status = State.A

    order = Order()
    config.configure(State.A).permit(Trigger.X, State.B)
    machine = StateMachine.with_external_storage(
        config, lambda: order.status, lambda s: setattr(order, "status", s)
    )
    assert machine.state == State.A
    machine.fire(Trigger.X)
    assert order.status == State.B


def test_external_storage_requires_callables(config):
    with pytest.raises(TypeError):
        StateMachine.with_external_storage(config, State.A, None)


def test_machines_share_configuration(config, machine_factory):
    config.configure(State.A).permit(Trigger.X, State.B)
    first, second = machine_factory(), machine_factory()
    first.fire(Trigger.X)
    assert first.state == State.B
    assert second.state == State.A
