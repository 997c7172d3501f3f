"""Bounded undo/redo history."""

from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Generic, List, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_HISTORY_LIMIT = 50


class UndoHistory(Generic[T]):
    """Past/future stacks of snapshots, each capped at ``limit`` entries.

    The caller owns the current state and passes it in on undo/redo so it can
    be stored on the opposite stack. Pushing a new state invalidates redo.

    Example:
        history = UndoHistory()
        history.push(v1)
        previous = history.undo(v2)   # -> v1, future == [v2]
        restored = history.redo(v1)   # -> v2, future == []
    """

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT):
        """Initialize an empty history.

        Args:
            limit: Maximum number of snapshots kept on each stack; the oldest
                are dropped silently once it is reached.
        """
        if limit < 1:
            raise ValueError("History limit must be at least 1")
        self.limit = limit
        self._past: Deque[T] = deque(maxlen=limit)
        self._future: Deque[T] = deque(maxlen=limit)

    @property
    def past(self) -> List[T]:
        return list(self._past)

    @property
    def future(self) -> List[T]:
        return list(self._future)

    @property
    def can_undo(self) -> bool:
        return bool(self._past)

    @property
    def can_redo(self) -> bool:
        return bool(self._future)

    def push(self, state: T) -> None:
        """Record *state* as the latest undo point and clear redo."""
        self._past.append(state)
        self._future.clear()
        logger.debug("History push: %d past", len(self._past))

    def undo(self, current: T) -> Optional[T]:
        """Return the previous state, stashing *current* for redo.

        Returns ``None`` when there is nothing to undo.
        """
        if not self._past:
            return None
        previous = self._past.pop()
        self._future.append(current)
        return previous

    def redo(self, current: T) -> Optional[T]:
        """Return the most recently undone state, stashing *current* for undo."""
        if not self._future:
            return None
        following = self._future.pop()
        self._past.append(current)
        return following

    def clear(self) -> None:
        self._past.clear()
        self._future.clear()

    def __len__(self) -> int:
        return len(self._past)
