"""User-authored script definitions."""

from __future__ import annotations

from typing import Any
from typing import Literal

from pydantic import BaseModel
from pydantic import Field

ParamType = Literal["text", "number", "boolean", "select", "array"]


class ScriptParam(BaseModel):
    """A declared script parameter with its default value."""

    key: str
    type: ParamType = "text"
    default: Any = None
    label: str | None = None
    options: list[str] | None = None  # only meaningful for "select"


class CustomScript(BaseModel):
    """A named user script; ``code`` is a Python function body."""

    id: str
    name: str
    code: str
    params: list[ScriptParam] = Field(default_factory=list)
    description: str = ""
