"""Persisted workbench configuration."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel
from pydantic import Field

from .ai import AIConfig
from .ai import CustomAIAction
from .operations import BatchProcess
from .scripts import CustomScript
from .settings_state import SettingsState
from .settings_state import migrate_to_nested_settings

# legacy flat AI keys -> AIConfig field
_LEGACY_AI_KEYS = {
    "aiProvider": "provider",
    "aiApiKey": "api_key",
    "aiApiUrl": "base_url",
    "aiModel": "model",
    "aiMaxTokens": "max_tokens",
    "aiTemperature": "temperature",
}

_CHAT_COMPLETIONS_SUFFIX = "/chat/completions"


class WorkbenchConfig(BaseModel):
    """Tool defaults, user scripts, AI actions, saved batches and shortcuts."""

    ai: AIConfig = Field(default_factory=AIConfig)
    tool_defaults: SettingsState = Field(default_factory=SettingsState)
    custom_scripts: list[CustomScript] = Field(default_factory=list)
    custom_actions: list[CustomAIAction] = Field(default_factory=list)
    saved_batches: list[BatchProcess] = Field(default_factory=list)
    batch_shortcuts: dict[str, bool] = Field(default_factory=dict)

    def get_script(self, script_id: str) -> CustomScript | None:
        return next((s for s in self.custom_scripts if s.id == script_id), None)

    def get_action(self, action_id: str) -> CustomAIAction | None:
        return next((a for a in self.custom_actions if a.id == action_id), None)

    def get_batch(self, batch_id: str) -> BatchProcess | None:
        return next((b for b in self.saved_batches if b.id == batch_id), None)

    @classmethod
    def from_persisted(cls, data: dict[str, Any] | None, ai_defaults: AIConfig | None = None) -> WorkbenchConfig:
        """Load persisted data, upgrading the legacy flat layout.

        ``ai_defaults`` fills AI fields that the persisted data leaves unset.
        """
        data = dict(data or {})

        ai_data: dict[str, Any] = ai_defaults.model_dump() if ai_defaults else {}
        # blank persisted values leave the environment defaults in place
        ai_data.update({k: v for k, v in (data.pop("ai", None) or {}).items() if v not in ("", None)})
        for legacy_key, field in _LEGACY_AI_KEYS.items():
            if legacy_key in data:
                ai_data[field] = data.pop(legacy_key)
        base_url = ai_data.get("base_url")
        if isinstance(base_url, str) and base_url.endswith(_CHAT_COMPLETIONS_SUFFIX):
            # legacy configs stored the full endpoint URL
            ai_data["base_url"] = base_url[: -len(_CHAT_COMPLETIONS_SUFFIX)]

        scripts = data.pop("custom_scripts", None) or data.pop("customScripts", None) or []
        actions = data.pop("custom_actions", None) or data.pop("customActions", None) or []
        batches = data.pop("saved_batches", None) or data.pop("savedBatches", None) or []
        shortcuts = data.pop("batch_shortcuts", None) or data.pop("batchShortcuts", None) or {}
        tool_defaults = data.pop("tool_defaults", None)

        return cls(
            ai=AIConfig.model_validate(ai_data),
            tool_defaults=migrate_to_nested_settings(tool_defaults),
            custom_scripts=[CustomScript.model_validate(s) for s in scripts],
            custom_actions=[CustomAIAction.model_validate(a) for a in actions],
            saved_batches=[BatchProcess.from_persisted(b) for b in batches],
            batch_shortcuts={k: bool(v) for k, v in shortcuts.items()},
        )

    def to_persisted(self) -> dict[str, Any]:
        return self.model_dump(mode="json")
