"""Character-level tools: find/replace, extraction, whitespace and formatting."""

import re

from ..models.settings_state import SettingsState
from .base import ToolExecutionOptions
from .base import ToolStrategy
from .base import join_lines
from .base import split_lines
from .registry import builtin_strategy

_EXTRACT_SEPARATORS = {"newline": "\n", "hyphen": " - ", "space": " "}


@builtin_strategy
class RegexStrategy(ToolStrategy):
    """Find and replace with a regular expression.

    Replacement strings use ``re.sub`` syntax (``\\1``, ``\\g<name>``).
    """

    id = "regex"
    name = "Find and replace"

    def execute(self, text: str, settings: SettingsState, options: ToolExecutionOptions) -> str:
        regex = settings.regex
        flags = 0
        if regex.case_insensitive:
            flags |= re.IGNORECASE
        if regex.multiline:
            flags |= re.MULTILINE
        try:
            result = re.sub(regex.find_text, regex.replace_text, text, flags=flags)
        except re.error as e:
            options.pattern_error(self.id, e)
            return text
        except IndexError as e:
            # unknown group name in the replacement template
            options.pattern_error(self.id, e, regex.replace_text)
            return text
        options.notify("NOTICE_REGEX_DONE")
        return result


@builtin_strategy
class RegexExtractStrategy(ToolStrategy):
    id = "regex-extract"
    name = "Extract matches"

    def execute(self, text: str, settings: SettingsState, options: ToolExecutionOptions) -> str:
        extract = settings.regex_extract
        if not extract.rule:
            options.warn("NOTICE_REGEX_EXTRACT_EMPTY")
            return text
        try:
            pattern = re.compile(extract.rule, 0 if extract.case_sensitive else re.IGNORECASE)
        except re.error as e:
            options.pattern_error(self.id, e)
            return text

        matches = [m.group(0) for m in pattern.finditer(text)]
        if not matches:
            options.notify("NOTICE_NO_MATCH")
            return text
        options.notify("NOTICE_REGEX_EXTRACT_DONE", len(matches))
        return _EXTRACT_SEPARATORS[extract.separator].join(matches)


@builtin_strategy
class RemoveWhitespaceStrategy(ToolStrategy):
    id = "remove-whitespace"
    name = "Clean whitespace"

    def execute(self, text: str, settings: SettingsState, options: ToolExecutionOptions) -> str:
        ws = settings.whitespace
        result = text
        if ws.remove_tabs:
            result = result.replace("\t", "")
        if ws.remove_all:
            result = result.replace(" ", "")
        else:
            if ws.compress:
                result = re.sub(r" +", " ", result)
            if ws.trim:
                result = join_lines([line.strip() for line in split_lines(result)])
        options.notify("NOTICE_WS_DONE")
        return result


# Private-use markers; they cannot occur in ordinary note text
_PH_OPEN = "\ue000"
_PH_CLOSE = "\ue001"
_PLACEHOLDER = re.compile(f"{_PH_OPEN}\\d+{_PH_CLOSE}")
_ITALIC_LINK = re.compile(r"\*\[([^\]]*?)\]\(([^)]+)\)\*")
_URL = re.compile(r"(?:https?|ftps?|file)://[^\s<>'\"{}|\\^`\[\]]+|www\.[^\s<>'\"{}|\\^`\[\]]+", re.IGNORECASE)
_BOLD = re.compile(r"(\*\*|__)(.*?)\1")
_STAR_ITALIC = re.compile(r"(^|[^*])\*([^*]+)\*(?=[^*]|$)")
_UNDERSCORE_ITALIC = re.compile(r"(^|[^_])_([^_]+)_(?=[^_]|$)")
_HIGHLIGHT = re.compile(r"==(.*?)==")
_STRIKE = re.compile(r"~~(.*?)~~")
_CODE = re.compile(r"`(.*?)`")
_WIKI_LINK = re.compile(r"\[\[(?:[^\]|]*\|)?([^\]]*)\]\]")
_MD_LINK = re.compile(r"!?\[([^\]]*)\]\([^)]*\)")


@builtin_strategy
class ClearFormatStrategy(ToolStrategy):
    """Strip Markdown emphasis, highlights, code spans and links.

    URLs are shielded while italics are stripped so that underscores and
    asterisks inside them survive.
    """

    id = "clear-format"
    name = "Clear formatting"

    def execute(self, text: str, settings: SettingsState, options: ToolExecutionOptions) -> str:
        fmt = settings.clear_format
        result = text
        shielded: list[str] = []

        def shield(match: re.Match) -> str:
            shielded.append(match.group(0))
            return f"{_PH_OPEN}{len(shielded) - 1}{_PH_CLOSE}"

        if fmt.italic:
            result = _ITALIC_LINK.sub(shield, result)
            result = _URL.sub(shield, result)
        if fmt.bold:
            result = _BOLD.sub(r"\2", result)
        if fmt.italic:
            result = _STAR_ITALIC.sub(r"\1\2", result)
            result = _UNDERSCORE_ITALIC.sub(r"\1\2", result)
        if fmt.highlight:
            result = _HIGHLIGHT.sub(r"\1", result)
        if fmt.strikethrough:
            result = _STRIKE.sub(r"\1", result)
        if fmt.code:
            result = _CODE.sub(r"\1", result)
        if shielded:
            result = _PLACEHOLDER.sub(lambda m: shielded[int(m.group(0)[1:-1])], result)
        if fmt.links:
            result = _WIKI_LINK.sub(r"\1", result)
            result = _MD_LINK.sub(r"\1", result)

        options.notify("NOTICE_CLEAR_FORMAT_DONE")
        return result
