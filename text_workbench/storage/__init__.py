"""Persisted configuration storage.

Usage:
    from text_workbench.storage import create_config_store

    store = create_config_store("~/.text_workbench/config.yaml")
    config = await store.load()
    await store.save(config)
"""

from .base import ConfigStore
from .factory import StoreType
from .factory import create_config_store
from .local import LocalConfigStore
from .memory import MemoryConfigStore

__all__ = ["ConfigStore", "LocalConfigStore", "MemoryConfigStore", "StoreType", "create_config_store"]
