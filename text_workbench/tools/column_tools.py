"""Delimiter-separated column tools."""

from ..models.settings_state import SettingsState
from .base import ToolExecutionOptions
from .base import ToolStrategy
from .base import join_lines
from .base import split_lines
from .registry import builtin_strategy

CUSTOM_DELIMITER = "custom"
_NAMED_DELIMITERS = {"tab": "\t", "\\t": "\t", "space": " "}


def resolve_delimiter(delimiter: str, custom_delimiter: str) -> str:
    if delimiter == CUSTOM_DELIMITER:
        return custom_delimiter
    return _NAMED_DELIMITERS.get(delimiter, delimiter)


@builtin_strategy
class ExtractColumnStrategy(ToolStrategy):
    """Keep one column per line; lines without it are dropped."""

    id = "extract-column"
    name = "Extract column"

    def execute(self, text: str, settings: SettingsState, options: ToolExecutionOptions) -> str:
        column = settings.column
        delimiter = resolve_delimiter(column.delimiter, column.custom_delimiter)
        if not delimiter:
            options.warn("NOTICE_CUSTOM_DELIM" if column.delimiter == CUSTOM_DELIMITER else "NOTICE_DELIM_REQUIRED")
            return text

        index = column.number - 1
        values = []
        for line in split_lines(text):
            parts = line.split(delimiter)
            value = parts[index].strip() if len(parts) > index else ""
            if value:
                values.append(value)
        options.notify("NOTICE_EXTRACT_COL_DONE", column.number)
        return join_lines(values)


@builtin_strategy
class SwapColumnsStrategy(ToolStrategy):
    """Swap two columns on every line that has both."""

    id = "swap-columns"
    name = "Swap columns"

    def execute(self, text: str, settings: SettingsState, options: ToolExecutionOptions) -> str:
        swap = settings.swap
        delimiter = resolve_delimiter(swap.delimiter, swap.custom_delimiter)
        if not delimiter:
            options.warn("NOTICE_DELIM_REQUIRED")
            return text

        first, second = swap.col1 - 1, swap.col2 - 1
        lines = []
        for line in split_lines(text):
            parts = line.split(delimiter)
            if len(parts) > max(first, second):
                parts[first], parts[second] = parts[second], parts[first]
            lines.append(delimiter.join(parts))
        options.notify("NOTICE_SWAP_DONE", swap.col1, swap.col2)
        return join_lines(lines)
