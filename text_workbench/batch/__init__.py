"""Batch execution for the text workbench.

- dispatcher.py: resolves and runs a single operation
- executor.py: runs batches on text, an editor, or files
- editing.py: in-progress edits of a saved batch
- shortcuts.py: per-batch shortcut enablement
- models.py: execution results
"""

from .dispatcher import OperationDispatcher
from .dispatcher import settings_for_scope
from .editing import BatchEditSession
from .executor import BatchSequencer
from .executor import BatchStepError
from .models import BatchApplyResult
from .models import OperationResult
from .shortcuts import batch_command_ids
from .shortcuts import disable_shortcut
from .shortcuts import enable_shortcut
from .shortcuts import enabled_shortcut_ids
from .shortcuts import is_shortcut_enabled
from .shortcuts import sync_shortcuts

__all__ = [
    "BatchApplyResult",
    "BatchEditSession",
    "BatchSequencer",
    "BatchStepError",
    "OperationDispatcher",
    "OperationResult",
    "batch_command_ids",
    "disable_shortcut",
    "enable_shortcut",
    "enabled_shortcut_ids",
    "is_shortcut_enabled",
    "settings_for_scope",
    "sync_shortcuts",
]
