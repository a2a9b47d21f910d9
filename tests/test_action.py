from __future__ import annotations

import pytest

from undoredo import Action


def _noop() -> None:
    pass


def test_action_defaults_to_empty_description() -> None:
    action = Action(_noop, _noop)
    assert action.description == ""


def test_action_description_can_be_set_after_construction() -> None:
    action = Action(_noop, _noop)
    action.description = "rename layer"
    assert action.description == "rename layer"


def test_action_operations_are_read_only() -> None:
    action = Action(_noop, _noop, "a")
    with pytest.raises(AttributeError):
        action.forward = _noop  # type: ignore[misc]
    with pytest.raises(AttributeError):
        action.reverse = _noop  # type: ignore[misc]


def test_action_equality_is_by_value() -> None:
    assert Action(_noop, _noop, "a") == Action(_noop, _noop, "a")
    assert Action(_noop, _noop, "a") != Action(_noop, _noop, "b")
    assert Action(_noop, _noop) != "not an action"


def test_action_exposes_its_operations() -> None:
    calls: list[str] = []
    action = Action(lambda: calls.append("f"), lambda: calls.append("r"))
    action.forward()
    action.reverse()
    assert calls == ["f", "r"]
