"""Unit tests for the bounded undo/redo history."""

import pytest

from text_workbench.history import DEFAULT_MAX_HISTORY
from text_workbench.history import HistoryStack


class TestHistoryStack:
    """Tests for HistoryStack push/undo/redo behaviour."""

    def test_empty_history(self):
        history = HistoryStack()

        assert history.max_size == DEFAULT_MAX_HISTORY
        assert history.undo("current") is None
        assert history.redo("current") is None
        assert not history.can_undo()
        assert not history.can_redo()

    def test_undo_returns_snapshots_in_reverse_order(self):
        history = HistoryStack()
        history.push_to_history("a")
        history.push_to_history("b")

        assert history.undo("c") == "b"
        assert history.undo("b") == "a"
        assert history.undo("a") is None

    def test_capacity_evicts_oldest(self):
        """With capacity 2, pushing a, b, c keeps only b and c."""
        history = HistoryStack(max_size=2)
        for snapshot in ("a", "b", "c"):
            history.push_to_history(snapshot)

        assert history.undo_depth == 2
        assert history.undo("d") == "c"
        assert history.undo("c") == "b"
        assert history.undo("b") is None

    def test_duplicate_of_top_is_skipped(self):
        history = HistoryStack()
        history.push_to_history("same")
        history.push_to_history("same")

        assert history.undo_depth == 1

    def test_non_adjacent_duplicates_are_kept(self):
        history = HistoryStack()
        for snapshot in ("a", "b", "a"):
            history.push_to_history(snapshot)

        assert history.undo_depth == 3

    def test_redo_after_undo(self):
        history = HistoryStack()
        history.push_to_history("before")

        previous = history.undo("after")
        assert previous == "before"
        assert history.can_redo()
        assert history.redo(previous) == "after"
        assert history.undo_depth == 1

    def test_push_clears_redo(self):
        history = HistoryStack()
        history.push_to_history("a")
        history.undo("b")
        assert history.can_redo()

        history.push_to_history("c")

        assert not history.can_redo()

    def test_push_of_top_still_clears_redo(self):
        history = HistoryStack()
        history.push_to_history("a")
        history.push_to_history("b")
        history.undo("c")

        history.push_to_history("a")

        assert history.redo_depth == 0
        assert history.undo_depth == 1

    def test_clear(self):
        history = HistoryStack()
        history.push_to_history("a")
        history.undo("b")

        history.clear()

        assert history.undo_depth == 0
        assert history.redo_depth == 0

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            HistoryStack(max_size=0)
