"""Linear undo/redo history for retreat."""

from retreat.history.buffer import HistoryBuffer
from retreat.history.config import CLEANUP_ERROR_POLICIES, HistoryConfig

__all__ = [
    "CLEANUP_ERROR_POLICIES",
    "HistoryBuffer",
    "HistoryConfig",
]
