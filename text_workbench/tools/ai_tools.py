"""AI-backed tools.

These need an ``AIManager``, so they are not in the default registry; a
session registers them with ``register_ai_tools``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..models.settings_state import SettingsState
from .base import ToolExecutionOptions
from .base import ToolStrategy
from .registry import ToolRegistry

if TYPE_CHECKING:
    from ..ai.manager import AIManager

AI_TOOL_NAMES = {
    "ai-extract-keypoints": "Extract key points",
    "ai-summarize": "Summarize",
    "ai-translate": "Translate",
    "ai-polish": "Polish",
}


class AIToolStrategy(ToolStrategy):
    def __init__(self, tool_id: str, manager: AIManager):
        self.id = tool_id
        self.name = AI_TOOL_NAMES[tool_id]
        self.manager = manager

    async def execute(self, text: str, settings: SettingsState, options: ToolExecutionOptions) -> str:
        return await self.manager.apply_builtin_tool_to_text(self.id, text, settings, options)


def register_ai_tools(registry: ToolRegistry, manager: AIManager) -> None:
    for tool_id in AI_TOOL_NAMES:
        registry.register(AIToolStrategy(tool_id, manager))
