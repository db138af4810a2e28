"""Shield frontmatter and the first line around a strategy run.

Protection is computed from the text passed in on every call, so a
frontmatter block removed by an earlier step is never brought back.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass

from ..models.settings_state import SettingsState
from .frontmatter import split_frontmatter
from .frontmatter import split_header


@dataclass(frozen=True)
class ProtectedText:
    frontmatter: str
    header: str
    body: str

    @property
    def shielded(self) -> bool:
        return bool(self.frontmatter or self.header)

    def reassemble(self, body: str | None = None) -> str:
        """Frontmatter, then header, then ``body`` (the original body by default)."""
        return self.frontmatter + self.header + (self.body if body is None else body)


def extract_protected(text: str, preserve_frontmatter: bool, preserve_header: bool) -> ProtectedText:
    frontmatter, body = split_frontmatter(text) if preserve_frontmatter else ("", text)
    header, body = split_header(body) if preserve_header else ("", body)
    return ProtectedText(frontmatter, header, body)


def protection_notice(protected: ProtectedText) -> str | None:
    """Message key for the notice to show, or ``None`` when nothing was shielded."""
    if protected.frontmatter and protected.header:
        return "NOTICE_SKIP_FM_AND_HEADER"
    if protected.frontmatter:
        return "NOTICE_SKIP_FRONTMATTER"
    if protected.header:
        return "NOTICE_SKIP_HEADER"
    return None


async def apply_protected(strategy, text: str, settings: SettingsState, options) -> str:
    """Run ``strategy`` on the unprotected body of ``text`` and reassemble.

    ``strategy`` is a ``ToolStrategy``; sync and async ``execute`` both
    work. The shielded-content notice honours ``options.hide_notice``.
    """
    protected = extract_protected(text, settings.preserve_frontmatter, settings.preserve_header)
    processed = strategy.execute(protected.body, settings, options)
    if inspect.isawaitable(processed):
        processed = await processed

    notice = protection_notice(protected)
    if notice:
        options.notify(notice)
    return protected.reassemble(processed)
