"""User script execution.

- executor.py: builds and runs scripts with restricted bindings
- params.py: parameter normalization
- manager.py: applies saved scripts with the selection pre-check
"""

from .executor import ALLOWED_MODULES
from .executor import ScriptApp
from .executor import ScriptHost
from .executor import requires_selection
from .manager import ScriptManager
from .params import normalize_params

__all__ = [
    "ALLOWED_MODULES",
    "ScriptApp",
    "ScriptHost",
    "ScriptManager",
    "normalize_params",
    "requires_selection",
]
