# tests/unit/test_actions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import pytest

from trigstate.core.actions import EntryAction, ExitAction, _ActionExecutor
from trigstate.core.transition import TransitionInfo


@pytest.fixture
def transition():
    return TransitionInfo(source="A", destination="B", trigger="go")


def test_unfiltered_entry_action_applies_to_every_trigger():
    action = EntryAction(lambda t, args: None)
    assert action.applies_to("go")
    assert action.applies_to("other")
    assert action.trigger is None


def test_filtered_entry_action_applies_only_to_its_trigger():
    action = EntryAction(lambda t, args: None, "go")
    assert action.applies_to("go")
    assert not action.applies_to("other")


def test_entry_action_receives_transition_and_args(transition):
    received = []
    EntryAction(lambda t, args: received.append((t, args))).run(transition, (1, 2))
    assert received == [(transition, (1, 2))]


def test_exit_action_receives_transition(transition):
    received = []
    ExitAction(received.append).run(transition)
    assert received == [transition]


def test_actions_require_callables():
    with pytest.raises(TypeError):
        EntryAction(None)
    with pytest.raises(TypeError):
        ExitAction("exit")


def test_executor_runs_in_order_and_filters(transition):
    order = []
    entries = [
        EntryAction(lambda t, a: order.append("first")),
        EntryAction(lambda t, a: order.append("filtered-out"), "other"),
        EntryAction(lambda t, a: order.append("second"), "go"),
    ]
    _ActionExecutor().execute_entry(entries, transition, ())
    assert order == ["first", "second"]


def test_executor_stops_at_first_failure(transition):
    order = []

    def failing(t):
        raise ValueError("exit failed")

    exits = [ExitAction(lambda t: order.append("ran")), ExitAction(failing), ExitAction(lambda t: order.append("skipped"))]
    with pytest.raises(ValueError):
        _ActionExecutor().execute_exit(exits, transition)
    assert order == ["ran"]


def test_transition_info_reentry_flag():
    assert TransitionInfo("A", "A", "go").is_reentry
    assert not TransitionInfo("A", "B", "go").is_reentry
