"""Centralized configuration management for the text workbench.

Environment-driven settings (``TEXT_WORKBENCH_*`` variables or a ``.env``
file). These seed the persisted workbench configuration; they are not the
per-session tool settings, which live in ``SettingsState``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field
from pydantic import field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict

PROVIDER_DEFAULTS: dict[str, dict[str, str]] = {
    "deepseek": {"base_url": "https://api.deepseek.com/v1", "model": "deepseek-chat"},
    "openai": {"base_url": "https://api.openai.com/v1", "model": "gpt-4.1-mini"},
    "custom": {"base_url": "", "model": ""},
}


class Settings(BaseSettings):
    """Process-level settings for the text workbench."""

    # === Persisted configuration ===
    config_path: str = Field(
        default=".text_workbench/config.yaml", description="Path of the persisted workbench configuration"
    )

    # === Editing session ===
    history_max_size: int = Field(default=50, ge=1, description="Undo history capacity")

    # === Logging Configuration ===
    log_level: str = Field(default="INFO", description="Logging level")
    structured_logging: bool = Field(default=False, description="Emit JSON log lines")
    log_file: str | None = Field(default=None, description="Optional rotating log file path")

    # === AI defaults ===
    ai_provider: Literal["deepseek", "openai", "custom"] = Field(default="deepseek")
    ai_api_key: str | None = Field(default=None, description="API key for the chat completion endpoint")
    ai_base_url: str | None = Field(default=None, description="Override for the provider base URL")
    ai_model: str | None = Field(default=None, description="Override for the provider model")
    ai_max_tokens: int = Field(default=2000, ge=1)
    ai_temperature: float = Field(default=0.7, ge=0.0, le=2.0)

    model_config = SettingsConfigDict(
        env_prefix="TEXT_WORKBENCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.upper()

    @property
    def config_file(self) -> Path:
        return Path(self.config_path).expanduser()

    @property
    def ai_configured(self) -> bool:
        """Check if an API key is available."""
        return bool(self.ai_api_key and self.ai_api_key.strip())

    def default_ai_config(self):
        """Build the global AI configuration seeded from the environment."""
        from ..models.ai import AIConfig

        defaults = PROVIDER_DEFAULTS[self.ai_provider]
        return AIConfig(
            provider=self.ai_provider,
            api_key=self.ai_api_key or "",
            base_url=self.ai_base_url or defaults["base_url"],
            model=self.ai_model or defaults["model"],
            max_tokens=self.ai_max_tokens,
            temperature=self.ai_temperature,
        )


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        load_dotenv()
        _settings = Settings()
    return _settings


def reset_settings():
    """Reset the global settings instance (primarily for testing)."""
    global _settings
    _settings = None
