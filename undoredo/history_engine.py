# history_engine.py
import logging
from collections import deque
from typing import Any, Callable, Optional

from .action import Action

DEFAULT_MAX_HISTORY = 100

logger = logging.getLogger(__name__)


class EmptyHistoryError(IndexError):
    """Raised by undo()/redo() when there is nothing to undo or redo."""


class HistoryEngine:
    """
    Bounded undo/redo history.

    The undo stack keeps at most ``max_history`` actions, dropping the oldest
    one on overflow. The redo stack is unbounded and is flushed whenever a new
    action is executed.

    Observable fields (``undo_description``, ``redo_description``,
    ``undo_empty``, ``redo_empty``, ``is_dirty``) and the guards
    (``can_undo``, ``can_redo``, ``can_save``) can be watched with
    ``subscribe``. Listeners are called only when a value actually changes.

    Calling undo() or redo() on an empty stack is a usage error and raises
    EmptyHistoryError; check can_undo()/can_redo() first.
    """

    OBSERVABLES = (
        "undo_description",
        "redo_description",
        "undo_empty",
        "redo_empty",
        "is_dirty",
        "can_undo",
        "can_redo",
        "can_save",
    )

    def __init__(
        self,
        max_history: int = DEFAULT_MAX_HISTORY,
        save_state: Optional[Callable[[], Any]] = None,
    ):
        if max_history < 0:
            logger.debug(
                f"max_history={max_history} is negative, using {DEFAULT_MAX_HISTORY}"
            )
            max_history = DEFAULT_MAX_HISTORY
        self._max_history = max_history
        self._save_state = save_state
        self.undo_stack = deque[Action](maxlen=max_history)
        self.redo_stack = deque[Action]()
        self._dirty = False
        self._listeners: dict[str, list[Callable[[Any], Any]]] = {
            name: [] for name in self.OBSERVABLES
        }
        self._state = self._snapshot()
        # Last value handed to the listeners of each observable
        self._delivered = dict(self._state)

    # Status
    @property
    def max_history(self) -> int:
        return self._max_history

    @property
    def undo_empty(self) -> bool:
        return self._state["undo_empty"]

    @property
    def redo_empty(self) -> bool:
        return self._state["redo_empty"]

    @property
    def undo_description(self) -> str:
        return self._state["undo_description"]

    @property
    def redo_description(self) -> str:
        return self._state["redo_description"]

    @property
    def is_dirty(self) -> bool:
        return self._state["is_dirty"]

    @property
    def undo_actions(self) -> tuple[Action, ...]:
        return tuple(self.undo_stack)

    @property
    def redo_actions(self) -> tuple[Action, ...]:
        return tuple(self.redo_stack)

    def can_undo(self) -> bool:
        return not self.undo_empty

    def can_redo(self) -> bool:
        return not self.redo_empty

    def can_save(self) -> bool:
        return self.is_dirty

    # Operations
    def execute(self, action: Action, skip_execution: bool = False):
        logger.debug(f"execute {action!r} (skip_execution={skip_execution})")
        self.redo_stack.clear()
        try:
            self._execute(action, skip_execution)
        finally:
            self._refresh()

    def undo(self):
        if not self.undo_stack:
            raise EmptyHistoryError("nothing to undo")
        action = self.undo_stack.pop()
        logger.debug(f"undo {action!r}")
        try:
            action.reverse()
            self.redo_stack.append(action)
            self._dirty = True
        finally:
            self._refresh()

    def redo(self):
        if not self.redo_stack:
            raise EmptyHistoryError("nothing to redo")
        action = self.redo_stack.pop()
        logger.debug(f"redo {action!r}")
        try:
            self._execute(action)
        finally:
            self._refresh()

    def clear_history(self):
        logger.debug("clear history")
        self.undo_stack.clear()
        self.redo_stack.clear()
        self._dirty = False
        self._refresh()

    def acknowledge_save(self):
        """
        Mark the current state as saved.

        The ``save_state`` callable given at construction (if any) is called
        first; the dirty flag is cleared only when it returns without raising.
        """
        if self._save_state is not None:
            self._save_state()
        logger.debug("save acknowledged")
        self._dirty = False
        self._refresh()

    # Listeners
    def subscribe(
        self, name: str, callback: Callable[[Any], Any]
    ) -> Callable[[], None]:
        if name not in self._listeners:
            raise ValueError(
                f"Unknown observable {name!r}, allowed names are {self.OBSERVABLES}"
            )
        self._listeners[name].append(callback)

        def unsubscribe() -> None:
            self.unsubscribe(name, callback)

        return unsubscribe

    def unsubscribe(self, name: str, callback: Callable[[Any], Any]):
        listeners = self._listeners.get(name, [])
        if callback in listeners:
            listeners.remove(callback)

    # Internals
    def _execute(self, action: Action, skip_execution: bool = False):
        if not skip_execution:
            action.forward()
        # deque(maxlen=...) drops the leftmost (oldest) entry on overflow
        self.undo_stack.append(action)
        self._dirty = True

    def _snapshot(self) -> dict[str, Any]:
        undo_empty = len(self.undo_stack) == 0
        redo_empty = len(self.redo_stack) == 0
        return {
            "undo_description": "" if undo_empty else self.undo_stack[-1].description,
            "redo_description": "" if redo_empty else self.redo_stack[-1].description,
            "undo_empty": undo_empty,
            "redo_empty": redo_empty,
            "is_dirty": self._dirty,
            "can_undo": not undo_empty,
            "can_redo": not redo_empty,
            "can_save": self._dirty,
        }

    def _refresh(self):
        self._state = self._snapshot()
        for name in self.OBSERVABLES:
            # Read the live state, a listener may have mutated the engine
            value = self._state[name]
            if value == self._delivered[name]:
                continue
            self._delivered[name] = value
            for callback in list(self._listeners[name]):
                callback(value)
                if self._state[name] != value:
                    # A nested refresh already delivered the newer value
                    break
