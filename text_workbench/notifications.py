"""Notification sink used by the engine to surface discrete events."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol
from typing import runtime_checkable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notice:
    message: str
    success: bool = True


@runtime_checkable
class Notifier(Protocol):
    """Anything that can show a short message to the user."""

    def notify(self, message: str, success: bool = True) -> None: ...


class LoggingNotifier:
    """Sends notices to the package logger."""

    def notify(self, message: str, success: bool = True) -> None:
        logger.log(logging.INFO if success else logging.WARNING, message)


class CollectingNotifier:
    """Keeps every notice in memory, in emission order."""

    def __init__(self) -> None:
        self.notices: list[Notice] = []

    def notify(self, message: str, success: bool = True) -> None:
        self.notices.append(Notice(message, success))

    @property
    def messages(self) -> list[str]:
        return [n.message for n in self.notices]

    @property
    def failures(self) -> list[Notice]:
        return [n for n in self.notices if not n.success]

    def clear(self) -> None:
        self.notices.clear()
