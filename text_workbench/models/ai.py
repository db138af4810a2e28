"""AI provider configuration and custom AI actions."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel
from pydantic import Field

AIProvider = Literal["deepseek", "openai", "custom"]


class AIConfig(BaseModel):
    """Global configuration for the chat completion endpoint."""

    provider: AIProvider = "deepseek"
    api_key: str = ""
    base_url: str = "https://api.deepseek.com/v1"
    model: str = "deepseek-chat"
    max_tokens: int = Field(default=2000, ge=1)
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)

    @property
    def missing_fields(self) -> list[str]:
        return [name for name in ("api_key", "base_url", "model") if not getattr(self, name).strip()]

    @property
    def is_configured(self) -> bool:
        return not self.missing_fields


class AIResponse(BaseModel):
    """Result of one request to the AI collaborator."""

    content: str = ""
    error: str | None = None

    @property
    def ok(self) -> bool:
        return not self.error


class CustomAIAction(BaseModel):
    """A saved prompt, optionally overriding parts of the global AI config."""

    id: str
    name: str = ""
    prompt: str = ""
    system_prompt: str = ""
    apply_to_selection: bool = False

    override_provider: AIProvider | None = None
    override_base_url: str | None = None
    override_api_key: str | None = None
    override_model: str | None = None
    override_max_tokens: int | None = None
    override_temperature: float | None = None

    def resolve_ai_config(self, base: AIConfig) -> AIConfig:
        """Apply the overrides that are set on top of ``base``."""
        overrides = {
            "provider": self.override_provider,
            "base_url": self.override_base_url,
            "api_key": self.override_api_key,
            "model": self.override_model,
            "max_tokens": self.override_max_tokens,
            "temperature": self.override_temperature,
        }
        return base.model_copy(update={k: v for k, v in overrides.items() if v is not None})
