"""Fixed-capacity ring-buffer undo/redo history."""

from retreat.errors import ConfigurationError, RetreatError
from retreat.history import HistoryBuffer, HistoryConfig

__all__ = [
    "ConfigurationError",
    "HistoryBuffer",
    "HistoryConfig",
    "RetreatError",
]

__version__ = "0.1.0"
