"""Apply saved user scripts to text."""

from __future__ import annotations

from typing import Any

from ..exceptions import SelectionRequiredError
from ..models.operations import Scope
from ..models.scripts import CustomScript
from ..models.settings_state import SettingsState
from ..notifications import Notifier
from .executor import ScriptHost
from .executor import requires_selection
from .params import normalize_params


class ScriptManager:
    def __init__(self, host: ScriptHost | None = None):
        self.host = host or ScriptHost()

    def get_script_params(self, script: CustomScript, settings: SettingsState) -> dict[str, Any]:
        return normalize_params(script, settings.script_params.get(script.id))

    def check_selection(self, script: CustomScript, selection: str) -> None:
        """Raise ``SelectionRequiredError`` for selection-only scripts run without one."""
        if not selection and requires_selection(script.code):
            raise SelectionRequiredError(script.name or script.id)

    async def run(
        self,
        script: CustomScript,
        full_text: str,
        selection: str,
        settings: SettingsState,
        notifier: Notifier | None = None,
    ) -> str:
        self.check_selection(script, selection)
        return await self.host.execute(
            script.code,
            full_text,
            selection,
            self.get_script_params(script, settings),
            name=script.name or script.id,
            notifier=notifier,
        )

    async def apply_custom_script_to_text(
        self,
        script: CustomScript,
        text: str,
        scope: Scope,
        settings: SettingsState,
        notifier: Notifier | None = None,
    ) -> str:
        """Run ``script`` on one pipeline input.

        At selection scope the input is both ``text`` and ``selection``; at
        note scope ``selection`` is empty.
        """
        selection = text if scope == "selection" else ""
        return await self.run(script, text, selection, settings, notifier)
