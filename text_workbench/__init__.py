"""Text Workbench.

A text transformation engine for Markdown notes: built-in tools, user
scripts, AI-backed rewrites and saved batches, with frontmatter and header
protection and bounded undo history.
"""

from .editor import FileEditor
from .editor import TextBufferEditor
from .models import WorkbenchConfig
from .notifications import CollectingNotifier
from .session import EditingSession

__version__ = "0.1.0"

__all__ = [
    "CollectingNotifier",
    "EditingSession",
    "FileEditor",
    "TextBufferEditor",
    "WorkbenchConfig",
    "__version__",
]
