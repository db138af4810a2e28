"""
Registry for tool strategies.

Maps a tool identifier to its strategy object. Registering an id twice
replaces the earlier strategy in place, so ``get_all`` keeps first
insertion order.
"""

from __future__ import annotations

from .base import ToolStrategy

_builtin_strategies: list[type[ToolStrategy]] = []


class ToolRegistry:
    """Simple registry for tool strategies."""

    def __init__(self):
        self._strategies: dict[str, ToolStrategy] = {}

    def register(self, strategy: ToolStrategy) -> None:
        if not strategy.id:
            raise ValueError(f"{strategy!r} has no id")
        self._strategies[strategy.id] = strategy

    def get(self, tool_id: str) -> ToolStrategy | None:
        return self._strategies.get(tool_id)

    def get_all(self) -> list[ToolStrategy]:
        return list(self._strategies.values())

    def ids(self) -> list[str]:
        return list(self._strategies)

    def __contains__(self, tool_id: object) -> bool:
        return tool_id in self._strategies

    def __len__(self) -> int:
        return len(self._strategies)


def builtin_strategy(cls: type[ToolStrategy]) -> type[ToolStrategy]:
    """Decorator marking a strategy class for the default registry."""
    _builtin_strategies.append(cls)
    return cls


def create_default_registry(extra: list[ToolStrategy] | None = None) -> ToolRegistry:
    """Build a registry holding every built-in strategy, then ``extra``."""
    # Importing the implementation modules runs their @builtin_strategy decorators
    from . import analysis_tools  # noqa: F401
    from . import column_tools  # noqa: F401
    from . import line_tools  # noqa: F401
    from . import text_tools  # noqa: F401

    registry = ToolRegistry()
    for cls in sorted(_builtin_strategies, key=_builtin_order):
        registry.register(cls())
    for strategy in extra or []:
        registry.register(strategy)
    return registry


BUILTIN_ORDER = [
    "regex",
    "regex-extract",
    "remove-whitespace",
    "dedupe",
    "empty-line",
    "trim-empty-lines",
    "add-wrap",
    "remove-string",
    "number-list",
    "line-break-tools",
    "extract-column",
    "swap-columns",
    "extract-between",
    "word-frequency",
    "clear-format",
    "combination-generator",
]


def _builtin_order(cls: type[ToolStrategy]) -> int:
    try:
        return BUILTIN_ORDER.index(cls.id)
    except ValueError:
        return len(BUILTIN_ORDER)
