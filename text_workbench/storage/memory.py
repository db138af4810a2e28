"""In-memory configuration store, for tests and throwaway sessions."""

from __future__ import annotations

import copy

from ..models.ai import AIConfig
from .base import ConfigStore


class MemoryConfigStore(ConfigStore):
    def __init__(self, data: dict | None = None, ai_defaults: AIConfig | None = None):
        super().__init__(ai_defaults)
        self._data = copy.deepcopy(data) if data is not None else None
        self.save_count = 0

    @property
    def backend_type(self) -> str:
        return "memory"

    @property
    def data(self) -> dict | None:
        return copy.deepcopy(self._data)

    async def read_raw(self) -> dict | None:
        return copy.deepcopy(self._data)

    async def write_raw(self, data: dict) -> None:
        self._data = copy.deepcopy(data)
        self.save_count += 1
