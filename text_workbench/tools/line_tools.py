"""Line-oriented tools."""

import re

from ..models.settings_state import SettingsState
from .base import ToolExecutionOptions
from .base import ToolStrategy
from .base import join_lines
from .base import split_lines
from .registry import builtin_strategy

_ANY_BREAK = r"(?:\r\n|\n|\r)"


@builtin_strategy
class DedupeStrategy(ToolStrategy):
    """Drop repeated lines, keeping the first occurrence.

    Blank lines are kept as-is unless ``dedupe.include_empty`` is set.
    """

    id = "dedupe"
    name = "Remove duplicate lines"

    def execute(self, text: str, settings: SettingsState, options: ToolExecutionOptions) -> str:
        include_empty = settings.dedupe.include_empty
        seen: set[str] = set()
        kept: list[str] = []
        for line in split_lines(text):
            if not include_empty and not line.strip():
                kept.append(line)
                continue
            if line not in seen:
                seen.add(line)
                kept.append(line)
        options.notify("NOTICE_DEDUPE")
        return join_lines(kept)


@builtin_strategy
class EmptyLineStrategy(ToolStrategy):
    id = "empty-line"
    name = "Empty lines"

    def execute(self, text: str, settings: SettingsState, options: ToolExecutionOptions) -> str:
        if settings.empty_line.mode == "all":
            options.notify("NOTICE_EMPTY_LINE")
            return _drop_blank_lines(text)

        kept: list[str] = []
        previous_blank = False
        for line in split_lines(text):
            if line.strip():
                kept.append(line)
                previous_blank = False
            elif not previous_blank:
                kept.append("")
                previous_blank = True
        options.notify("NOTICE_EMPTY_LINE_MERGED")
        return join_lines(kept)


@builtin_strategy
class TrimEmptyLinesStrategy(ToolStrategy):
    """Remove every blank line regardless of ``empty_line.mode``."""

    id = "trim-empty-lines"
    name = "Trim empty lines"

    def execute(self, text: str, settings: SettingsState, options: ToolExecutionOptions) -> str:
        options.notify("NOTICE_EMPTY_LINE")
        return _drop_blank_lines(text)


def _drop_blank_lines(text: str) -> str:
    return join_lines([line for line in split_lines(text) if line.strip()])


@builtin_strategy
class AddWrapStrategy(ToolStrategy):
    id = "add-wrap"
    name = "Wrap lines"

    def execute(self, text: str, settings: SettingsState, options: ToolExecutionOptions) -> str:
        wrap = settings.wrap
        lines = [
            line if wrap.exclude_empty_lines and not line.strip() else f"{wrap.prefix}{line}{wrap.suffix}"
            for line in split_lines(text)
        ]
        options.notify("NOTICE_WRAP_DONE")
        return join_lines(lines)


@builtin_strategy
class RemoveStringStrategy(ToolStrategy):
    """Filter lines by a substring or pattern.

    Mode ``containing`` removes matching lines, ``not-containing`` keeps
    only them.
    """

    id = "remove-string"
    name = "Filter lines"

    def execute(self, text: str, settings: SettingsState, options: ToolExecutionOptions) -> str:
        flt = settings.filter
        if not flt.text:
            options.warn("NOTICE_FILTER_INPUT")
            return text

        if flt.use_regex:
            try:
                pattern = re.compile(flt.text, 0 if flt.case_sensitive else re.IGNORECASE)
            except re.error as e:
                options.pattern_error(self.id, e)
                return text

            def matches(line: str) -> bool:
                return pattern.search(line) is not None

        else:
            needle = flt.text if flt.case_sensitive else flt.text.lower()

            def matches(line: str) -> bool:
                return needle in (line if flt.case_sensitive else line.lower())

        remove_matching = flt.mode == "containing"
        kept = [line for line in split_lines(text) if matches(line) != remove_matching]
        options.notify("NOTICE_FILTER_DONE")
        return join_lines(kept)


@builtin_strategy
class NumberListStrategy(ToolStrategy):
    id = "number-list"
    name = "Number lines"

    def execute(self, text: str, settings: SettingsState, options: ToolExecutionOptions) -> str:
        numbering = settings.number_list
        lines = [
            f"{numbering.prefix}{numbering.start_number + i * numbering.step_number}{numbering.separator}{line}"
            for i, line in enumerate(split_lines(text))
        ]
        options.notify("NOTICE_NUMBER_DONE")
        return join_lines(lines)


@builtin_strategy
class LineBreakToolsStrategy(ToolStrategy):
    """Add or remove line breaks around a trigger string or pattern."""

    id = "line-break-tools"
    name = "Line breaks"

    def execute(self, text: str, settings: SettingsState, options: ToolExecutionOptions) -> str:
        lb = settings.line_break
        if lb.action == "remove-all":
            options.notify("NOTICE_LB_DONE")
            return re.sub(_ANY_BREAK, "", text)

        if not lb.trigger:
            options.warn("NOTICE_LB_TRIGGER")
            return text

        eol = _line_ending(text, lb.style)
        trigger = lb.trigger if lb.use_regex else re.escape(lb.trigger)
        try:
            if lb.action == "add-after":
                result = re.sub(trigger, lambda m: m.group(0) + eol, text)
            elif lb.action == "add-before":
                result = re.sub(trigger, lambda m: eol + m.group(0), text)
            elif lb.action == "remove-after":
                result = re.sub(
                    f"(?:{trigger}){_ANY_BREAK}",
                    lambda m: re.sub(f"{_ANY_BREAK}\\Z", "", m.group(0)),
                    text,
                )
            else:
                result = re.sub(
                    f"{_ANY_BREAK}(?:{trigger})",
                    lambda m: re.sub(f"\\A{_ANY_BREAK}", "", m.group(0)),
                    text,
                )
        except re.error as e:
            options.pattern_error(self.id, e)
            return text

        if lb.merge_empty:
            result = re.sub(f"{_ANY_BREAK}{{2,}}", eol, result)
        options.notify("NOTICE_LB_DONE")
        return result


def _line_ending(text: str, style: str) -> str:
    if style == "LF":
        return "\n"
    if style == "CRLF":
        return "\r\n"
    if "\r\n" in text:
        return "\r\n"
    if "\r" in text and "\n" not in text:
        return "\r"
    return "\n"
