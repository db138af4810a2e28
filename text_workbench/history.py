"""Bounded undo/redo history of whole-buffer snapshots."""

from __future__ import annotations

from collections import deque

DEFAULT_MAX_HISTORY = 50


class HistoryStack:
    """Undo and redo stacks of document snapshots.

    ``push_to_history`` skips a snapshot equal to the current top, always
    clears the redo stack, and evicts the oldest entry past ``max_size``.
    ``undo``/``redo`` return ``None`` when there is nothing to step to.
    """

    def __init__(self, max_size: int = DEFAULT_MAX_HISTORY):
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self._undo: deque[str] = deque(maxlen=max_size)
        self._redo: deque[str] = deque(maxlen=max_size)

    def push_to_history(self, content: str) -> None:
        if not self._undo or self._undo[-1] != content:
            self._undo.append(content)
        self._redo.clear()

    def undo(self, current_content: str) -> str | None:
        if not self._undo:
            return None
        self._redo.append(current_content)
        return self._undo.pop()

    def redo(self, current_content: str) -> str | None:
        if not self._redo:
            return None
        self._undo.append(current_content)
        return self._redo.pop()

    def can_undo(self) -> bool:
        return bool(self._undo)

    def can_redo(self) -> bool:
        return bool(self._redo)

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()
