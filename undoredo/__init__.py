from .action import Action
from .history_engine import DEFAULT_MAX_HISTORY, EmptyHistoryError, HistoryEngine

__all__ = ["Action", "DEFAULT_MAX_HISTORY", "EmptyHistoryError", "HistoryEngine"]
