"""Resolve script parameter values before each run."""

from __future__ import annotations

import re
from typing import Any

from ..models.scripts import CustomScript

_ESCAPES = (("\\n", "\n"), ("\\t", "\t"), ("\\r", "\r"))


def unescape_control_sequences(value: str) -> str:
    r"""Turn literal ``\n``, ``\t`` and ``\r`` into the real characters."""
    for literal, char in _ESCAPES:
        value = value.replace(literal, char)
    return value


def normalize_params(script: CustomScript, overrides: dict[str, Any] | None = None) -> dict[str, Any]:
    """Build the ``params`` mapping a script sees.

    Each declared parameter takes its runtime override when one is set,
    otherwise its default. Text values have escape sequences expanded and
    array values given as one string are split into lines.
    """
    overrides = overrides or {}
    params: dict[str, Any] = {}
    for param in script.params:
        value = overrides.get(param.key)
        if value is None:
            value = param.default

        if param.type == "text" and isinstance(value, str):
            value = unescape_control_sequences(value)
        elif param.type == "array" and isinstance(value, str):
            value = re.split(r"\r?\n", value)

        params[param.key] = value
    return params
