"""Editing a saved batch through an in-progress copy."""

from __future__ import annotations

import uuid

from ..exceptions import ValidationError
from ..models.config import WorkbenchConfig
from ..models.operations import BatchProcess


def new_batch_id() -> str:
    return uuid.uuid4().hex


class BatchEditSession:
    """Holds an editable copy of a batch next to the copy it was loaded from.

    Changes touch only the working copy until ``save_changes`` or
    ``save_as_new``. Unsaved-change detection compares values, not identity.
    """

    def __init__(self, batch: BatchProcess):
        self.original = batch.model_copy(deep=True)
        self.working = batch.model_copy(deep=True)

    @property
    def has_unsaved_changes(self) -> bool:
        return self.working != self.original

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.working.operations):
            raise ValidationError(f"No step at position {index}", field="index", value=index)

    def add_step(self, operation, index: int | None = None) -> None:
        if index is None:
            self.working.operations.append(operation)
        else:
            self.working.operations.insert(index, operation)

    def remove_step(self, index: int) -> None:
        self._check_index(index)
        del self.working.operations[index]

    def move_step(self, from_index: int, to_index: int) -> None:
        self._check_index(from_index)
        self._check_index(to_index)
        operation = self.working.operations.pop(from_index)
        self.working.operations.insert(to_index, operation)

    def rename(self, name: str) -> None:
        self.working.name = name

    def discard_changes(self) -> None:
        self.working = self.original.model_copy(deep=True)

    def save_changes(self, config: WorkbenchConfig) -> BatchProcess:
        """Replace the stored batch with the working copy, in place."""
        saved = self.working.model_copy(deep=True)
        for i, batch in enumerate(config.saved_batches):
            if batch.id == saved.id:
                config.saved_batches[i] = saved
                break
        else:
            config.saved_batches.append(saved)
        self.original = saved.model_copy(deep=True)
        return saved

    def save_as_new(self, config: WorkbenchConfig, name: str) -> BatchProcess:
        """Store the working copy under a fresh id and ``name``.

        The batch this session was opened on is left untouched.
        """
        if not name.strip():
            raise ValidationError("A batch name is required", field="name", value=name)
        clone = self.working.model_copy(update={"id": new_batch_id(), "name": name}, deep=True)
        config.saved_batches.append(clone)
        return clone
