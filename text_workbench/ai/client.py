"""AI collaborator: one system/user prompt pair in, one reply out.

Transport errors never raise out of ``send``; they come back as
``AIResponse.error`` so callers can report them and keep the text as it was.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol
from typing import runtime_checkable

from pydantic_ai import Agent
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.openai import OpenAIProvider
from pydantic_ai.settings import ModelSettings

from ..logger_config import ErrorCategory
from ..logger_config import log_structured_error
from ..models.ai import AIConfig
from ..models.ai import AIResponse

logger = logging.getLogger(__name__)

TEXT_LABEL = "Text to process:"


def build_user_prompt(prompt: str, text: str) -> str:
    """Prefix ``text`` with the instruction, or return it alone when there is none."""
    return f"{prompt}\n\n{TEXT_LABEL}\n{text}" if prompt else text


@runtime_checkable
class AIClient(Protocol):
    async def send(self, system_prompt: str, user_prompt: str) -> AIResponse: ...


AIClientFactory = Callable[[AIConfig], AIClient]


class PydanticAIClient:
    """OpenAI-compatible chat completion client built on ``pydantic_ai``."""

    def __init__(self, config: AIConfig):
        self.config = config
        self._model: OpenAIChatModel | None = None

    def _get_model(self) -> OpenAIChatModel:
        if self._model is None:
            provider = OpenAIProvider(base_url=self.config.base_url, api_key=self.config.api_key)
            self._model = OpenAIChatModel(self.config.model, provider=provider)
        return self._model

    async def send(self, system_prompt: str, user_prompt: str) -> AIResponse:
        if not self.config.is_configured:
            return AIResponse(error=f"AI configuration incomplete: missing {', '.join(self.config.missing_fields)}")

        agent = Agent(self._get_model(), system_prompt=system_prompt or ())
        settings = ModelSettings(max_tokens=self.config.max_tokens, temperature=self.config.temperature)
        try:
            result = await agent.run(user_prompt, model_settings=settings)
        except Exception as e:
            log_structured_error(
                ErrorCategory.ERROR,
                "AI request failed",
                exception=e,
                context={"provider": self.config.provider, "model": self.config.model},
                operation="ai_send",
            )
            return AIResponse(error=f"Request failed: {e}")

        content = (result.output or "").strip()
        if not content:
            return AIResponse(error="The AI returned empty content")
        logger.debug("AI reply received", extra={"model": self.config.model, "chars": len(content)})
        return AIResponse(content=content)


def default_client_factory(config: AIConfig) -> AIClient:
    return PydanticAIClient(config)
