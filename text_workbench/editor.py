"""Editor collaborator: the host document the engine reads and writes."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol
from typing import runtime_checkable


@runtime_checkable
class Editor(Protocol):
    def get_selection(self) -> str: ...

    def get_value(self) -> str: ...

    def set_value(self, text: str) -> None: ...

    def replace_selection(self, text: str) -> None: ...


def something_selected(editor: Editor) -> bool:
    return bool(editor.get_selection())


class TextBufferEditor:
    """In-memory document with an optional ``[start, end)`` selection."""

    def __init__(self, text: str = "", selection: tuple[int, int] | None = None):
        self._text = text
        self._selection: tuple[int, int] | None = None
        if selection is not None:
            self.select(*selection)

    def select(self, start: int, end: int) -> None:
        if not 0 <= start <= end <= len(self._text):
            raise ValueError(f"Selection {start}:{end} outside buffer of length {len(self._text)}")
        self._selection = (start, end) if start != end else None

    def select_text(self, fragment: str) -> None:
        """Select the first occurrence of ``fragment``."""
        start = self._text.find(fragment)
        if start < 0:
            raise ValueError(f"{fragment!r} not in buffer")
        self.select(start, start + len(fragment))

    def clear_selection(self) -> None:
        self._selection = None

    def get_selection(self) -> str:
        if self._selection is None:
            return ""
        start, end = self._selection
        return self._text[start:end]

    def get_value(self) -> str:
        return self._text

    def set_value(self, text: str) -> None:
        self._text = text
        self._selection = None

    def replace_selection(self, text: str) -> None:
        if self._selection is None:
            # no selection: insert at the start, as a collapsed cursor would
            start = end = 0
        else:
            start, end = self._selection
        self._text = self._text[:start] + text + self._text[end:]
        self._selection = (start, start + len(text)) if text else None


class FileEditor(TextBufferEditor):
    """A whole-file buffer; ``save`` writes it back only when it changed."""

    def __init__(self, path: str | Path, encoding: str = "utf-8"):
        self.path = Path(path)
        self.encoding = encoding
        self.original = self.path.read_text(encoding=encoding)
        super().__init__(self.original)

    @property
    def changed(self) -> bool:
        return self.get_value() != self.original

    def save(self) -> bool:
        if not self.changed:
            return False
        self.path.write_text(self.get_value(), encoding=self.encoding)
        self.original = self.get_value()
        return True
