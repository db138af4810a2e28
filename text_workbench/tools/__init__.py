"""Tool strategies and their registry.

Built-in tools are grouped by what they operate on:
- text_tools.py: find/replace, extraction, whitespace, formatting
- line_tools.py: dedupe, empty lines, wrapping, filtering, numbering, line breaks
- column_tools.py: column extraction and swapping
- analysis_tools.py: extract-between, word frequency, combinations
- ai_tools.py: AI-backed tools, bound to an ``AIManager`` per session
"""

from .base import ToolExecutionOptions
from .base import ToolStrategy
from .registry import BUILTIN_ORDER
from .registry import ToolRegistry
from .registry import builtin_strategy
from .registry import create_default_registry

__all__ = [
    "BUILTIN_ORDER",
    "ToolExecutionOptions",
    "ToolRegistry",
    "ToolStrategy",
    "builtin_strategy",
    "create_default_registry",
]
