# qt_bridge.py
from typing import Any, Optional

from PyQt5.QtCore import QObject, pyqtSignal

from .history_engine import HistoryEngine


class HistorySignals(QObject):
    """Re-emits HistoryEngine changes as Qt signals."""

    undo_description_changed = pyqtSignal(str)
    redo_description_changed = pyqtSignal(str)
    undo_empty_changed = pyqtSignal(bool)
    redo_empty_changed = pyqtSignal(bool)
    dirty_changed = pyqtSignal(bool)
    can_undo_changed = pyqtSignal(bool)
    can_redo_changed = pyqtSignal(bool)
    can_save_changed = pyqtSignal(bool)

    def __init__(self, engine: HistoryEngine, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.engine = engine
        self._unsubscribers = [
            engine.subscribe("undo_description", self.undo_description_changed.emit),
            engine.subscribe("redo_description", self.redo_description_changed.emit),
            engine.subscribe("undo_empty", self.undo_empty_changed.emit),
            engine.subscribe("redo_empty", self.redo_empty_changed.emit),
            engine.subscribe("is_dirty", self.dirty_changed.emit),
            engine.subscribe("can_undo", self.can_undo_changed.emit),
            engine.subscribe("can_redo", self.can_redo_changed.emit),
            engine.subscribe("can_save", self.can_save_changed.emit),
        ]

    def detach(self):
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []


def _label(text: str, description: str) -> str:
    return f"{text} {description}" if description else text


def bind_actions(
    engine: HistoryEngine,
    undo_action: Any,
    redo_action: Any,
    save_action: Any = None,
) -> HistorySignals:
    """
    Keep QActions for Undo/Redo/Save enabled and labelled from the engine.

    The returned HistorySignals must be kept alive by the caller.
    """
    signals = HistorySignals(engine)

    undo_action.setEnabled(engine.can_undo())
    undo_action.setText(_label("&Undo", engine.undo_description))
    signals.can_undo_changed.connect(undo_action.setEnabled)
    signals.undo_description_changed.connect(
        lambda description: undo_action.setText(_label("&Undo", description))
    )

    redo_action.setEnabled(engine.can_redo())
    redo_action.setText(_label("&Redo", engine.redo_description))
    signals.can_redo_changed.connect(redo_action.setEnabled)
    signals.redo_description_changed.connect(
        lambda description: redo_action.setText(_label("&Redo", description))
    )

    if save_action is not None:
        save_action.setEnabled(engine.can_save())
        signals.can_save_changed.connect(save_action.setEnabled)

    return signals
