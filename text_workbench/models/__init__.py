"""Domain-organized models for the text workbench.

- settings_state: per-tool settings and the legacy migration
- scripts: user script definitions
- ai: AI provider configuration and custom AI actions
- operations: tagged tool operations and batches
- config: the persisted workbench configuration
"""

from .ai import AIConfig
from .ai import AIResponse
from .ai import CustomAIAction
from .config import WorkbenchConfig
from .operations import BatchProcess
from .operations import BuiltinOperation
from .operations import CustomAIActionOperation
from .operations import CustomScriptOperation
from .operations import Scope
from .operations import ToolOperation
from .operations import operation_from_tool_id
from .operations import parse_operation
from .scripts import CustomScript
from .scripts import ScriptParam
from .settings_state import SettingsState
from .settings_state import migrate_to_nested_settings

__all__ = [
    "AIConfig",
    "AIResponse",
    "BatchProcess",
    "BuiltinOperation",
    "CustomAIActionOperation",
    "CustomScriptOperation",
    "CustomAIAction",
    "CustomScript",
    "Scope",
    "ScriptParam",
    "SettingsState",
    "ToolOperation",
    "WorkbenchConfig",
    "migrate_to_nested_settings",
    "operation_from_tool_id",
    "parse_operation",
]
