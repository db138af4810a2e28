"""Configuration store factory."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .base import ConfigStore


class StoreType(Enum):
    """Available configuration store types."""

    LOCAL = "local"
    MEMORY = "memory"


def create_config_store(
    path: str | Path | None = None,
    store_type: StoreType | None = None,
    **kwargs,
) -> ConfigStore:
    """Create a configuration store.

    Args:
        path: Configuration file; defaults to ``Settings.config_file``
        store_type: Explicit store type; defaults to LOCAL
        **kwargs: ``ai_defaults`` and, for MEMORY, initial ``data``

    Returns:
        Configured ConfigStore instance
    """
    ai_defaults = kwargs.get("ai_defaults")
    if store_type == StoreType.MEMORY:
        from .memory import MemoryConfigStore

        return MemoryConfigStore(data=kwargs.get("data"), ai_defaults=ai_defaults)

    from .local import LocalConfigStore

    if path is None or ai_defaults is None:
        from ..config import get_settings

        settings = get_settings()
        path = path or settings.config_file
        ai_defaults = ai_defaults or settings.default_ai_config()
    return LocalConfigStore(path, ai_defaults=ai_defaults)
