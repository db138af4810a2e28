"""Strategy contract shared by every registered tool."""

from __future__ import annotations

import logging
import re
from abc import ABC
from abc import abstractmethod
from collections.abc import Awaitable
from dataclasses import dataclass
from dataclasses import field

from ..exceptions import PatternError
from ..messages import t
from ..models.settings_state import SettingsState
from ..notifications import LoggingNotifier
from ..notifications import Notifier

logger = logging.getLogger(__name__)


@dataclass
class ToolExecutionOptions:
    """Per-call options: where notices go and whether to emit them.

    ``hide_notice`` silences success notices only; failures are always
    reported.
    """

    hide_notice: bool = False
    notifier: Notifier = field(default_factory=LoggingNotifier)

    def notify(self, key: str, *args) -> None:
        if not self.hide_notice:
            self.notifier.notify(t(key, *args), True)

    def warn(self, key: str, *args) -> None:
        self.notifier.notify(t(key, *args), False)

    def pattern_error(self, tool_id: str, error: re.error | IndexError, pattern: str | None = None) -> None:
        """Log a malformed user pattern or replacement and report it."""
        if pattern is None:
            pattern = getattr(error, "pattern", None) or ""
        failure = PatternError(str(pattern), str(error), tool_id=tool_id)
        logger.warning(failure.message, extra=failure.details)
        self.warn("NOTICE_REGEX_ERROR", error)


class ToolStrategy(ABC):
    """A named text transformation.

    ``execute`` may return the text directly or an awaitable resolving to
    it. Malformed user input embedded in settings is reported through
    ``options`` and the input is returned unchanged.
    """

    id: str = ""
    name: str = ""

    @abstractmethod
    def execute(
        self, text: str, settings: SettingsState, options: ToolExecutionOptions
    ) -> str | Awaitable[str]: ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"


def split_lines(text: str) -> list[str]:
    return text.split("\n")


def join_lines(lines: list[str]) -> str:
    return "\n".join(lines)
