"""AI-backed rewrites: custom prompt actions and the built-in AI tools.

Every failure path (incomplete configuration, blank input, transport error)
is reported through the notifier and hands the input back untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..exceptions import AIConfigurationError
from ..exceptions import AITransportError
from ..logger_config import ErrorCategory
from ..logger_config import log_structured_error
from ..logger_config import log_tool_call
from ..models.ai import AIConfig
from ..models.ai import CustomAIAction
from ..models.settings_state import SettingsState
from ..tools.base import ToolExecutionOptions
from ..utils.protection import extract_protected
from ..utils.protection import protection_notice
from .client import AIClientFactory
from .client import build_user_prompt
from .client import default_client_factory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AIToolPrompt:
    prompt: str
    system_prompt: str


AI_TOOL_PROMPTS: dict[str, AIToolPrompt] = {
    "ai-extract-keypoints": AIToolPrompt(
        "Extract the key points of the following text as a list, one point per line:",
        "You are a text analysis assistant who extracts the core points of a text concisely and accurately.",
    ),
    "ai-summarize": AIToolPrompt(
        "Summarize the following text clearly and concisely:",
        "You are a summarization assistant who condenses the main content of a text into a few sentences.",
    ),
    "ai-translate": AIToolPrompt(
        "Translate the following text into {target_language}:",
        "You are a translation assistant. Translate accurately and fluently while keeping the tone and style.",
    ),
    "ai-polish": AIToolPrompt(
        "Polish the following text so it reads more fluently and professionally without changing its meaning:",
        "You are an editing assistant who improves wording and clarity.",
    ),
}


class AIManager:
    """Runs prompts against the AI collaborator for one session.

    Args:
        ai_config_source: returns the current global ``AIConfig``; read on
            every call so configuration edits apply immediately
        client_factory: builds an ``AIClient`` for a resolved configuration
    """

    def __init__(
        self,
        ai_config_source: Callable[[], AIConfig],
        client_factory: AIClientFactory | None = None,
    ):
        self._ai_config_source = ai_config_source
        self._client_factory = client_factory or default_client_factory

    @property
    def ai_config(self) -> AIConfig:
        return self._ai_config_source()

    async def request(
        self,
        text: str,
        prompt: str,
        system_prompt: str,
        options: ToolExecutionOptions,
        ai_config: AIConfig | None = None,
    ) -> str | None:
        """Send ``text`` with the instruction; ``None`` means the call failed and was reported."""
        config = ai_config or self.ai_config
        if not config.is_configured:
            error = AIConfigurationError(config.missing_fields)
            logger.warning(error.message, extra=error.details)
            options.warn("AI_CONFIG_INCOMPLETE")
            return None
        if not text.strip():
            options.warn("NOTICE_NO_TEXT")
            return None

        options.notify("NOTICE_AI_PROCESSING")
        client = self._client_factory(config)
        response = await client.send(system_prompt, build_user_prompt(prompt, text))
        if not response.ok:
            failure = AITransportError(response.error or "", details={"model": config.model, "provider": config.provider})
            log_structured_error(
                ErrorCategory.WARNING,
                failure.message,
                context=failure.details,
                operation="ai_request",
                error_code=failure.error_code,
            )
            options.warn("NOTICE_AI_ERROR", response.error)
            return None
        return response.content

    @log_tool_call
    async def apply_custom_action_to_text(
        self,
        action: CustomAIAction,
        text: str,
        settings: SettingsState,
        options: ToolExecutionOptions,
    ) -> str:
        """Run a saved action on ``text`` with frontmatter/header protection.

        Prompt overrides on ``settings`` win over the action's own prompts.
        """
        prompt = settings.custom_ai_prompt if settings.custom_ai_prompt is not None else action.prompt
        system_prompt = (
            settings.custom_ai_system_prompt if settings.custom_ai_system_prompt is not None else action.system_prompt
        )
        protected = extract_protected(text, settings.preserve_frontmatter, settings.preserve_header)
        content = await self.request(
            protected.body, prompt, system_prompt, options, ai_config=action.resolve_ai_config(self.ai_config)
        )
        if content is None:
            return text

        notice = protection_notice(protected)
        if notice:
            options.notify(notice)
        options.notify("NOTICE_AI_DONE")
        return protected.reassemble(content)

    async def apply_builtin_tool_to_text(
        self,
        tool_id: str,
        text: str,
        settings: SettingsState,
        options: ToolExecutionOptions,
    ) -> str:
        """Run one of the built-in AI tools on ``text`` as given.

        Protection is left to the caller, which runs these tools through
        the same wrapper as every other strategy.
        """
        preset = AI_TOOL_PROMPTS[tool_id]
        prompt = preset.prompt.format(target_language=settings.ai_tools.target_language)
        content = await self.request(text, prompt, preset.system_prompt, options)
        if content is None:
            return text
        options.notify("NOTICE_AI_DONE")
        return content
