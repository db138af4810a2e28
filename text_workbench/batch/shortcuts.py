"""Shortcut enablement for saved batches.

The map lives in ``WorkbenchConfig.batch_shortcuts``; an enabled batch
exposes one command per scope.
"""

from __future__ import annotations

from ..models.config import WorkbenchConfig


def batch_command_ids(batch_id: str) -> dict[str, str]:
    return {"note": f"batch-{batch_id}-note", "selection": f"batch-{batch_id}-selection"}


def is_shortcut_enabled(config: WorkbenchConfig, batch_id: str) -> bool:
    return bool(config.batch_shortcuts.get(batch_id))


def enabled_shortcut_ids(config: WorkbenchConfig) -> list[str]:
    return [batch_id for batch_id, enabled in config.batch_shortcuts.items() if enabled]


def enable_shortcut(config: WorkbenchConfig, batch_id: str) -> bool:
    """Enable the shortcut if the batch exists; returns whether it is enabled."""
    if config.get_batch(batch_id) is None:
        disable_shortcut(config, batch_id)
        return False
    config.batch_shortcuts[batch_id] = True
    return True


def disable_shortcut(config: WorkbenchConfig, batch_id: str) -> bool:
    """Returns True when an entry was removed."""
    return config.batch_shortcuts.pop(batch_id, None) is not None


def sync_shortcuts(config: WorkbenchConfig) -> bool:
    """Drop shortcut entries whose batch was deleted; True if any were."""
    stale = [batch_id for batch_id in config.batch_shortcuts if config.get_batch(batch_id) is None]
    for batch_id in stale:
        del config.batch_shortcuts[batch_id]
    return bool(stale)
