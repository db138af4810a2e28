"""AI collaborator client and the manager that wraps it with protection."""

from .client import AIClient
from .client import PydanticAIClient
from .client import build_user_prompt
from .client import default_client_factory
from .manager import AI_TOOL_PROMPTS
from .manager import AIManager

__all__ = [
    "AIClient",
    "AIManager",
    "AI_TOOL_PROMPTS",
    "PydanticAIClient",
    "build_user_prompt",
    "default_client_factory",
]
