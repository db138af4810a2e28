"""One editing session: an editor, its history and the engine around it.

The session owns the live ``SettingsState`` and injects it into every
operation it starts. Its entry points share one ``asyncio.Lock``, so a
second trigger waits for the first to finish instead of racing it on the
same buffer.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from .ai.client import AIClientFactory
from .ai.manager import AIManager
from .batch.dispatcher import OperationDispatcher
from .batch.editing import BatchEditSession
from .batch.executor import BatchSequencer
from .batch.models import BatchApplyResult
from .batch.shortcuts import disable_shortcut
from .batch.shortcuts import sync_shortcuts
from .editor import Editor
from .editor import something_selected
from .exceptions import BatchNotFoundError
from .exceptions import ScriptExecutionError
from .exceptions import SelectionRequiredError
from .exceptions import ValidationError
from .history import DEFAULT_MAX_HISTORY
from .history import HistoryStack
from .logger_config import log_tool_call
from .messages import t
from .models.config import WorkbenchConfig
from .models.operations import BatchProcess
from .models.operations import Scope
from .models.operations import operation_from_tool_id
from .notifications import LoggingNotifier
from .notifications import Notifier
from .scripting.executor import ScriptHost
from .scripting.manager import ScriptManager
from .storage.base import ConfigStore
from .tools.ai_tools import register_ai_tools
from .tools.base import ToolExecutionOptions
from .tools.registry import ToolRegistry
from .tools.registry import create_default_registry

logger = logging.getLogger(__name__)


class EditingSession:
    """Single-user editing session over one editor.

    Args:
        config: persisted workbench configuration
        editor: the document being edited
        notifier: where user-facing notices go
        ai_client_factory: builds the AI client for a resolved ``AIConfig``
        registry: strategy registry; the AI tools are added to it
        store: optional store that configuration changes are saved to
    """

    def __init__(
        self,
        config: WorkbenchConfig,
        editor: Editor,
        notifier: Notifier | None = None,
        ai_client_factory: AIClientFactory | None = None,
        registry: ToolRegistry | None = None,
        store: ConfigStore | None = None,
        history_max_size: int = DEFAULT_MAX_HISTORY,
        script_host: ScriptHost | None = None,
    ):
        self.config = config
        self.editor = editor
        self.notifier = notifier or LoggingNotifier()
        self.store = store
        self.settings = config.tool_defaults.snapshot()
        self.history = HistoryStack(history_max_size)

        self.registry = registry or create_default_registry()
        self.ai_manager = AIManager(lambda: self.config.ai, ai_client_factory)
        register_ai_tools(self.registry, self.ai_manager)
        self.script_manager = ScriptManager(script_host or ScriptHost(notifier=self.notifier))
        self.dispatcher = OperationDispatcher(
            self.registry, lambda: self.config, self.script_manager, self.ai_manager, self.notifier
        )
        self.sequencer = BatchSequencer(self.dispatcher, self.notifier)
        self._lock = asyncio.Lock()

    @classmethod
    async def from_store(cls, store: ConfigStore, editor: Editor, **kwargs) -> EditingSession:
        """Load configuration from ``store`` and drop stale batch shortcuts."""
        config = await store.load()
        if sync_shortcuts(config):
            await store.save(config)
        return cls(config, editor, store=store, **kwargs)

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    def _notify(self, key: str, *args, success: bool = True) -> None:
        self.notifier.notify(t(key, *args), success)

    def _write(self, new_text: str, scope: Scope) -> str:
        """Record the current buffer in history, then write ``new_text``."""
        self.history.push_to_history(self.editor.get_value())
        if scope == "selection":
            self.editor.replace_selection(new_text)
        else:
            self.editor.set_value(new_text)
        return self.editor.get_value()

    def _batch_missing(self, batch_id: str) -> None:
        error = BatchNotFoundError(batch_id)
        logger.warning(error.message, extra=error.details)
        self._notify("NOTICE_BATCH_NOT_FOUND", success=False)

    def _current_scope(self) -> Scope:
        return "selection" if something_selected(self.editor) else "note"

    async def save_config(self) -> None:
        if self.store is not None:
            await self.store.save(self.config)

    # === Settings ===

    def set_setting(self, path: str, value: Any) -> None:
        try:
            self.settings.set_value(path, value)
        except (AttributeError, PydanticValidationError) as e:
            raise ValidationError(f"Cannot set {path}: {e}", field=path, value=value) from e

    def capture_operation(self, tool_id: str):
        """Build an operation carrying a snapshot of the live settings."""
        return operation_from_tool_id(tool_id, self.settings)

    # === Single operations ===

    @log_tool_call
    async def apply_tool(self, tool_id: str, scope: Scope | None = None) -> str | None:
        """Apply one tool (builtin, ``custom-script:`` or ``custom-ai:``).

        Without an explicit scope the selection is used when there is one.
        Returns the new buffer, or ``None`` when nothing was written.
        """
        async with self._lock:
            scope = scope or self._current_scope()
            if scope == "selection" and not something_selected(self.editor):
                self._notify("NOTICE_NO_SELECTION", success=False)
                return None
            source = self.editor.get_selection() if scope == "selection" else self.editor.get_value()
            try:
                result = await self.dispatcher.apply(self.capture_operation(tool_id), source, scope)
            except ScriptExecutionError as e:
                self._notify("NOTICE_SCRIPT_ERROR", e.original_error, success=False)
                return None
            if result == source:
                return None
            return self._write(result, scope)

    @log_tool_call
    async def run_script(self, script_id: str) -> str | None:
        """Run a saved script on the selection, or on the whole note without one."""
        async with self._lock:
            script = self.config.get_script(script_id)
            if script is None:
                self._notify("NOTICE_SCRIPT_NOT_FOUND", success=False)
                return None

            content = self.editor.get_value()
            selection = self.editor.get_selection()
            try:
                result = await self.script_manager.run(script, content, selection, self.settings, self.notifier)
            except SelectionRequiredError:
                self._notify("NOTICE_NO_SELECTION", success=False)
                return None
            except ScriptExecutionError as e:
                self._notify("NOTICE_SCRIPT_ERROR", e.original_error, success=False)
                return None

            self._notify("NOTICE_SCRIPT_SUCCESS")
            return self._write(result, "selection" if selection else "note")

    @log_tool_call
    async def run_custom_ai_action(self, action_id: str) -> str | None:
        async with self._lock:
            action = self.config.get_action(action_id)
            if action is None:
                self._notify("NOTICE_PROMPT_NOT_FOUND", success=False)
                return None

            selection = self.editor.get_selection()
            if action.apply_to_selection and selection:
                scope: Scope = "selection"
                source, settings = selection, self.settings.for_selection_scope()
            else:
                scope = "note"
                source, settings = self.editor.get_value(), self.settings
            options = ToolExecutionOptions(notifier=self.notifier)
            result = await self.ai_manager.apply_custom_action_to_text(action, source, settings, options)
            if result == source:
                return None
            return self._write(result, scope)

    # === History ===

    async def undo(self) -> str | None:
        async with self._lock:
            previous = self.history.undo(self.editor.get_value())
            if previous is None:
                self._notify("NOTICE_NOTHING_TO_UNDO", success=False)
                return None
            self.editor.set_value(previous)
            return previous

    async def redo(self) -> str | None:
        async with self._lock:
            following = self.history.redo(self.editor.get_value())
            if following is None:
                self._notify("NOTICE_NOTHING_TO_REDO", success=False)
                return None
            self.editor.set_value(following)
            return following

    # === Batches ===

    @log_tool_call
    async def run_batch(self, batch_id: str, scope: Scope = "note") -> BatchApplyResult | None:
        """Run a saved batch on the editor.

        A batch that no longer exists is reported and its shortcut cleared.
        """
        async with self._lock:
            batch = self.config.get_batch(batch_id)
            if batch is None:
                self._batch_missing(batch_id)
                if disable_shortcut(self.config, batch_id):
                    await self.save_config()
                return None

            before = self.editor.get_value()
            result = await self.sequencer.apply_to_editor(batch, scope, self.editor)
            if result.success and self.editor.get_value() != before:
                self.history.push_to_history(before)
            return result

    async def run_batch_on_files(self, batch_id: str, paths: Iterable[str | Path]) -> tuple[int, int] | None:
        async with self._lock:
            batch = self.config.get_batch(batch_id)
            if batch is None:
                self._batch_missing(batch_id)
                return None
            return await self.sequencer.run_on_files(batch, paths)

    async def save_batch(self, edit: BatchEditSession, new_name: str | None = None) -> BatchProcess:
        """Store an edited batch, in place or as a copy named ``new_name``."""
        async with self._lock:
            saved = edit.save_as_new(self.config, new_name) if new_name is not None else edit.save_changes(self.config)
            await self.save_config()
            self._notify("NOTICE_BATCH_SAVED")
            return saved
