"""Abstract Base Class for configuration stores.

Defines the interface every persisted-configuration backend implements.
"""

from __future__ import annotations

from abc import ABC
from abc import abstractmethod

from ..models.ai import AIConfig
from ..models.config import WorkbenchConfig


class ConfigStore(ABC):
    """Loads and saves the ``WorkbenchConfig``.

    A missing configuration loads as defaults; persisted data is migrated
    on load through ``WorkbenchConfig.from_persisted``.
    """

    def __init__(self, ai_defaults: AIConfig | None = None):
        self.ai_defaults = ai_defaults

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Return the backend type identifier (e.g., 'local', 'memory')."""
        pass

    @abstractmethod
    async def read_raw(self) -> dict | None:
        """Return the persisted mapping, or ``None`` when nothing is stored."""
        pass

    @abstractmethod
    async def write_raw(self, data: dict) -> None:
        pass

    async def load(self) -> WorkbenchConfig:
        return WorkbenchConfig.from_persisted(await self.read_raw(), ai_defaults=self.ai_defaults)

    async def save(self, config: WorkbenchConfig) -> None:
        await self.write_raw(config.to_persisted())
