"""Local filesystem configuration store.

``.yaml``/``.yml`` paths are written as YAML, anything else as JSON.
"""

from __future__ import annotations

import json
from pathlib import Path

import yaml  # type: ignore[import-untyped]

from ..exceptions import ValidationError
from ..logger_config import ErrorCategory
from ..logger_config import safe_operation
from ..models.ai import AIConfig
from .base import ConfigStore

YAML_SUFFIXES = {".yaml", ".yml"}


class LocalConfigStore(ConfigStore):
    """Configuration store backed by a single file.

    Args:
        path: File holding the configuration; parent directories are
              created on first save.
    """

    def __init__(self, path: str | Path, ai_defaults: AIConfig | None = None):
        super().__init__(ai_defaults)
        self.path = Path(path).expanduser()

    @property
    def backend_type(self) -> str:
        return "local"

    @property
    def is_yaml(self) -> bool:
        return self.path.suffix.lower() in YAML_SUFFIXES

    async def read_raw(self) -> dict | None:
        if not self.path.exists():
            return None
        content = self.path.read_text(encoding="utf-8")
        if not content.strip():
            return None
        parser = yaml.safe_load if self.is_yaml else json.loads
        ok, data, error = safe_operation(
            "parse_config", parser, content, error_category=ErrorCategory.ERROR, context={"path": str(self.path)}
        )
        if not ok:
            raise ValidationError(f"Cannot parse configuration file {self.path}: {error}", field="path", value=str(self.path))
        if not isinstance(data, dict):
            raise ValidationError(f"Configuration file {self.path} must contain a mapping", field="path", value=str(self.path))
        return data

    async def write_raw(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if self.is_yaml:
            content = yaml.safe_dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)
        else:
            content = json.dumps(data, indent=2, ensure_ascii=False)
        self.path.write_text(content, encoding="utf-8")
