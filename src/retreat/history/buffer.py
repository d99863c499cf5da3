"""HistoryBuffer — fixed-capacity ring buffer with linear undo/redo."""

from __future__ import annotations

import logging
from typing import Callable, Generic, TypeVar

from retreat.errors import ConfigurationError
from retreat.history.config import CLEANUP_ERROR_POLICIES, HistoryConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Marks a slot that holds no value; never a member of T.
_EMPTY = object()


class HistoryBuffer(Generic[T]):
    """Linear undo/redo history backed by a fixed-size ring of slots.

    Three logical cursors drive everything:

    * ``_max_idx`` — highest logical index ever written (write frontier).
    * ``_current_idx`` — logical index of the value in view.
    * ``_oldest_idx`` — oldest logical index still retrievable.

    Logical index ``i`` lives in slot ``i % capacity``.  All cursors are -1
    while the history is empty.  Pushing after an undo abandons the redo-able
    future; abandoned values stay in their slots until a later push
    overwrites them (or :meth:`clear` runs), which is when *cleanup* sees them.

    *cleanup* is called exactly once for every value that leaves the history
    through eviction or :meth:`clear`.  It must not call back into the same
    buffer.  The buffer does no locking; callers sharing one across threads
    must serialise access themselves.

    With ``on_cleanup_error="propagate"`` a failing hook re-raises after the
    buffer has finished its own state change.  With ``"log"`` the error is
    logged and swallowed.
    """

    def __init__(
        self,
        capacity: int = 10,
        cleanup: Callable[[T], None] | None = None,
        *,
        on_cleanup_error: str = "propagate",
    ) -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, int):
            raise ConfigurationError(f"capacity must be an int, got {capacity!r}")
        if capacity < 1:
            raise ConfigurationError(f"capacity must be >= 1, got {capacity}")
        if on_cleanup_error not in CLEANUP_ERROR_POLICIES:
            raise ConfigurationError(
                f"on_cleanup_error must be one of {CLEANUP_ERROR_POLICIES}, "
                f"got {on_cleanup_error!r}"
            )
        self._capacity = capacity
        self._cleanup = cleanup
        self._on_cleanup_error = on_cleanup_error
        self._slots: list = [_EMPTY] * capacity
        self._max_idx = -1
        self._current_idx = -1
        self._oldest_idx = -1

    @classmethod
    def from_config(
        cls, config: HistoryConfig, cleanup: Callable[[T], None] | None = None
    ) -> HistoryBuffer[T]:
        return cls(
            config.capacity,
            cleanup,
            on_cleanup_error=config.on_cleanup_error,
        )

    @property
    def capacity(self) -> int:
        return self._capacity

    def _slot(self, index: int) -> int:
        return index % self._capacity

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def push(self, value: T) -> None:
        """Make *value* current, dropping any redo-able future.

        If the target slot still holds a value (oldest entry of a full ring,
        or an abandoned future entry), that value is evicted and handed to
        the cleanup hook.
        """
        self._current_idx += 1
        slot = self._slot(self._current_idx)

        evicted = self._slots[slot]
        self._slots[slot] = value
        self._max_idx = self._current_idx

        if self._current_idx >= self._capacity:
            self._oldest_idx = self._current_idx - self._capacity + 1
        elif self._oldest_idx == -1:
            self._oldest_idx = 0

        if evicted is not _EMPTY:
            logger.debug(
                "Evicted slot %d for history index %d",
                slot,
                self._current_idx,
            )
            self._release(evicted)

    def clear(self) -> None:
        """Drop every value, calling the cleanup hook once per live slot."""
        live = [value for value in self._slots if value is not _EMPTY]
        self._slots = [_EMPTY] * self._capacity
        self._max_idx = -1
        self._current_idx = -1
        self._oldest_idx = -1
        logger.debug("Cleared history (%d values discarded)", len(live))

        if self._cleanup is None:
            return
        first_error: Exception | None = None
        for value in live:
            try:
                self._release(value)
            except Exception as exc:
                if first_error is None:
                    first_error = exc
        if first_error is not None:
            raise first_error

    def _release(self, value: T) -> None:
        if self._cleanup is None:
            return
        try:
            self._cleanup(value)
        except Exception:
            if self._on_cleanup_error == "propagate":
                raise
            logger.exception("Cleanup hook failed for %r", value)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def get(self) -> T | None:
        """Return the current value, or *None* if nothing is in view."""
        if self._current_idx == -1:
            return None
        return self._slots[self._slot(self._current_idx)]

    def undo(self) -> bool:
        """Step back one entry.  Returns False at the oldest retained entry."""
        if self._current_idx <= self._oldest_idx:
            return False
        self._current_idx -= 1
        return True

    def redo(self) -> bool:
        """Step forward one entry.  Returns False at the newest entry."""
        if self._current_idx >= self._max_idx:
            return False
        self._current_idx += 1
        return True

    def can_undo(self) -> bool:
        return self._current_idx > self._oldest_idx

    def can_redo(self) -> bool:
        return self._current_idx < self._max_idx

    # ------------------------------------------------------------------
    # Size
    # ------------------------------------------------------------------

    def get_size(self) -> int:
        """Number of retained entries, including any redo-able future."""
        if self._max_idx == -1:
            return 0
        return self._max_idx - self._oldest_idx + 1

    def __len__(self) -> int:
        return self.get_size()

    def __repr__(self) -> str:
        return (
            f"HistoryBuffer(capacity={self._capacity}, size={self.get_size()}, "
            f"current={self._current_idx})"
        )
