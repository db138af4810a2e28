"""Resolve one tool operation and run it on a piece of text."""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..ai.manager import AIManager
from ..exceptions import ActionNotFoundError
from ..exceptions import ReferenceNotFoundError
from ..exceptions import ScriptNotFoundError
from ..exceptions import SelectionRequiredError
from ..exceptions import ToolNotFoundError
from ..logger_config import ErrorCategory
from ..logger_config import log_structured_error
from ..models.config import WorkbenchConfig
from ..models.operations import BuiltinOperation
from ..models.operations import CustomAIActionOperation
from ..models.operations import CustomScriptOperation
from ..models.operations import Scope
from ..models.settings_state import SettingsState
from ..notifications import LoggingNotifier
from ..notifications import Notifier
from ..scripting.manager import ScriptManager
from ..tools.base import ToolExecutionOptions
from ..tools.registry import ToolRegistry
from ..utils.protection import apply_protected

logger = logging.getLogger(__name__)

_NOT_FOUND_NOTICES = {
    ToolNotFoundError: "NOTICE_TOOL_NOT_FOUND",
    ScriptNotFoundError: "NOTICE_SCRIPT_NOT_FOUND",
    ActionNotFoundError: "NOTICE_PROMPT_NOT_FOUND",
}


def settings_for_scope(snapshot: SettingsState, scope: Scope) -> SettingsState:
    """Working copy of ``snapshot``; selection scope never protects frontmatter or the header."""
    return snapshot.for_selection_scope() if scope == "selection" else snapshot.snapshot()


class OperationDispatcher:
    """Runs builtin tools, user scripts and custom AI actions.

    A reference that no longer resolves is reported and the input is
    returned unchanged. Script failures propagate as
    ``ScriptExecutionError``.
    """

    def __init__(
        self,
        registry: ToolRegistry,
        config_source: Callable[[], WorkbenchConfig],
        script_manager: ScriptManager,
        ai_manager: AIManager,
        notifier: Notifier | None = None,
    ):
        self.registry = registry
        self._config_source = config_source
        self.script_manager = script_manager
        self.ai_manager = ai_manager
        self.notifier = notifier or LoggingNotifier()

    @property
    def config(self) -> WorkbenchConfig:
        return self._config_source()

    async def apply(self, operation, text: str, scope: Scope, hide_notice: bool = False) -> str:
        settings = settings_for_scope(operation.settings_snapshot, scope)
        options = ToolExecutionOptions(hide_notice=hide_notice, notifier=self.notifier)

        try:
            if isinstance(operation, BuiltinOperation):
                return await self._apply_builtin(operation, text, settings, options)
            if isinstance(operation, CustomScriptOperation):
                return await self._apply_script(operation, text, scope, settings, options)
            if isinstance(operation, CustomAIActionOperation):
                return await self._apply_ai_action(operation, text, settings, options)
        except ReferenceNotFoundError as e:
            log_structured_error(
                ErrorCategory.WARNING,
                e.message,
                context=e.details,
                operation="dispatch",
                error_code=e.error_code,
            )
            options.warn(_NOT_FOUND_NOTICES.get(type(e), "NOTICE_TOOL_NOT_FOUND"), e.reference_id)
            return text
        raise TypeError(f"Unsupported operation: {operation!r}")

    async def _apply_builtin(
        self, operation: BuiltinOperation, text: str, settings: SettingsState, options: ToolExecutionOptions
    ) -> str:
        strategy = self.registry.get(operation.builtin_id)
        if strategy is None:
            raise ToolNotFoundError(operation.builtin_id)
        return await apply_protected(strategy, text, settings, options)

    async def _apply_script(
        self,
        operation: CustomScriptOperation,
        text: str,
        scope: Scope,
        settings: SettingsState,
        options: ToolExecutionOptions,
    ) -> str:
        script = self.config.get_script(operation.script_id)
        if script is None:
            raise ScriptNotFoundError(operation.script_id)
        try:
            result = await self.script_manager.apply_custom_script_to_text(
                script, text, scope, settings, notifier=self.notifier
            )
        except SelectionRequiredError as e:
            logger.info(e.message)
            options.warn("NOTICE_NO_SELECTION")
            return text
        options.notify("NOTICE_SCRIPT_SUCCESS")
        return result

    async def _apply_ai_action(
        self,
        operation: CustomAIActionOperation,
        text: str,
        settings: SettingsState,
        options: ToolExecutionOptions,
    ) -> str:
        action = self.config.get_action(operation.action_id)
        if action is None:
            raise ActionNotFoundError(operation.action_id)
        return await self.ai_manager.apply_custom_action_to_text(action, text, settings, options)
