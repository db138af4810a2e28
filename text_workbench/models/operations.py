"""Tool operations and batches.

A batch is an ordered list of tool operations, each carrying the settings
snapshot captured when the step was authored.
"""

from typing import Annotated
from typing import Any
from typing import Literal
from typing import Union

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import TypeAdapter

from .settings_state import SettingsState
from .settings_state import migrate_to_nested_settings

Scope = Literal["note", "selection"]

CUSTOM_SCRIPT_PREFIX = "custom-script:"
CUSTOM_AI_PREFIX = "custom-ai:"


class _Operation(BaseModel):
    """Fields shared by every operation kind.

    ``frozen`` covers the operation's own fields only; the nested snapshot
    is a plain ``SettingsState``. Build operations from ``snapshot()``
    copies and treat ``settings_snapshot`` as read-only; the dispatcher runs
    tools against a copy of it.
    """

    model_config = ConfigDict(frozen=True)

    settings_snapshot: SettingsState = Field(default_factory=SettingsState)


class BuiltinOperation(_Operation):
    """A registered strategy, looked up by id."""

    kind: Literal["builtin"] = "builtin"
    builtin_id: str

    @property
    def reference(self) -> str:
        return self.builtin_id

    @property
    def tool_id(self) -> str:
        return self.builtin_id


class CustomScriptOperation(_Operation):
    """A user script, looked up by id at run time."""

    kind: Literal["custom-script"] = "custom-script"
    script_id: str

    @property
    def reference(self) -> str:
        return self.script_id

    @property
    def tool_id(self) -> str:
        return f"{CUSTOM_SCRIPT_PREFIX}{self.script_id}"


class CustomAIActionOperation(_Operation):
    """A saved AI prompt, looked up by id at run time."""

    kind: Literal["custom-ai"] = "custom-ai"
    action_id: str

    @property
    def reference(self) -> str:
        return self.action_id

    @property
    def tool_id(self) -> str:
        return f"{CUSTOM_AI_PREFIX}{self.action_id}"


ToolOperation = Annotated[
    Union[BuiltinOperation, CustomScriptOperation, CustomAIActionOperation],
    Field(discriminator="kind"),
]

_operation_adapter = TypeAdapter(ToolOperation)


def operation_from_tool_id(tool_id: str, settings_snapshot: SettingsState | None = None):
    """Build the tagged operation for a flat ``toolId`` string."""
    snapshot = settings_snapshot.snapshot() if settings_snapshot else SettingsState()
    if tool_id.startswith(CUSTOM_SCRIPT_PREFIX):
        return CustomScriptOperation(script_id=tool_id[len(CUSTOM_SCRIPT_PREFIX):], settings_snapshot=snapshot)
    if tool_id.startswith(CUSTOM_AI_PREFIX):
        return CustomAIActionOperation(action_id=tool_id[len(CUSTOM_AI_PREFIX):], settings_snapshot=snapshot)
    return BuiltinOperation(builtin_id=tool_id, settings_snapshot=snapshot)


def parse_operation(data: Any):
    """Validate a persisted step, accepting the legacy ``toolId`` shape."""
    if isinstance(data, dict) and "kind" not in data and "toolId" in data:
        snapshot = migrate_to_nested_settings(data.get("settingsSnapshot"))
        return operation_from_tool_id(data["toolId"], snapshot)
    if isinstance(data, dict) and "settings_snapshot" in data:
        data = {**data, "settings_snapshot": migrate_to_nested_settings(data["settings_snapshot"])}
    return _operation_adapter.validate_python(data)


class BatchProcess(BaseModel):
    """A saved, named, ordered list of operations.

    Equality is structural, which is what unsaved-change detection relies on.
    """

    id: str
    name: str
    operations: list[ToolOperation] = Field(default_factory=list)

    @classmethod
    def from_persisted(cls, data: dict[str, Any]) -> "BatchProcess":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            operations=[parse_operation(op) for op in data.get("operations", [])],
        )


