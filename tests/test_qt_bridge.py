from __future__ import annotations

import pytest

pytest.importorskip("PyQt5.QtCore")

from undoredo import Action, HistoryEngine  # noqa: E402
from undoredo.qt_bridge import HistorySignals, bind_actions  # noqa: E402


def _noop() -> None:
    pass


class FakeAction:
    """Stands in for QAction, recording the state set on it."""

    def __init__(self) -> None:
        self.enabled: bool | None = None
        self.text = ""

    def setEnabled(self, enabled: bool) -> None:
        self.enabled = enabled

    def setText(self, text: str) -> None:
        self.text = text


def test_history_signals_reemit_changes() -> None:
    engine = HistoryEngine()
    signals = HistorySignals(engine)
    received: list[tuple[str, object]] = []
    signals.undo_description_changed.connect(lambda v: received.append(("undo", v)))
    signals.can_undo_changed.connect(lambda v: received.append(("can_undo", v)))
    signals.dirty_changed.connect(lambda v: received.append(("dirty", v)))

    engine.execute(Action(_noop, _noop, "move"))
    engine.execute(Action(_noop, _noop, "move"))

    assert received == [("undo", "move"), ("dirty", True), ("can_undo", True)]


def test_detach_stops_reemitting() -> None:
    engine = HistoryEngine()
    signals = HistorySignals(engine)
    received: list[bool] = []
    signals.dirty_changed.connect(received.append)

    signals.detach()
    engine.execute(Action(_noop, _noop))

    assert received == []


def test_bind_actions_tracks_engine() -> None:
    engine = HistoryEngine()
    undo_act, redo_act, save_act = FakeAction(), FakeAction(), FakeAction()
    signals = bind_actions(engine, undo_act, redo_act, save_act)

    assert (undo_act.enabled, redo_act.enabled, save_act.enabled) == (False, False, False)
    assert undo_act.text == "&Undo"
    assert redo_act.text == "&Redo"

    engine.execute(Action(_noop, _noop, "Paint"))
    assert undo_act.enabled is True
    assert undo_act.text == "&Undo Paint"
    assert save_act.enabled is True

    engine.undo()
    assert undo_act.enabled is False
    assert undo_act.text == "&Undo"
    assert redo_act.enabled is True
    assert redo_act.text == "&Redo Paint"

    engine.acknowledge_save()
    assert save_act.enabled is False
    assert signals.engine is engine


def test_bind_actions_with_qactions() -> None:
    QtWidgets = pytest.importorskip("PyQt5.QtWidgets")
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    assert app is not None

    engine = HistoryEngine()
    undo_act = QtWidgets.QAction("&Undo")
    redo_act = QtWidgets.QAction("&Redo")
    signals = bind_actions(engine, undo_act, redo_act)

    engine.execute(Action(_noop, _noop, "Fill"))

    assert undo_act.isEnabled()
    assert undo_act.text() == "&Undo Fill"
    assert not redo_act.isEnabled()
    assert signals is not None
