"""Tool settings: one sub-record per tool family plus the protection flags.

Every field has a default, so partial persisted data is backfilled on
validation. ``migrate_to_nested_settings`` upgrades the legacy flat layout
(camelCase keys at the top level) into the nested shape.
"""

from __future__ import annotations

import copy
from typing import Any
from typing import Literal

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

SETTINGS_VERSION = 2


class _ToolSettings(BaseModel):
    model_config = ConfigDict(extra="ignore", validate_assignment=True)


class RegexSettings(_ToolSettings):
    find_text: str = ""
    replace_text: str = ""
    case_insensitive: bool = False
    multiline: bool = False


class RegexExtractSettings(_ToolSettings):
    rule: str = ""
    case_sensitive: bool = False
    separator: Literal["newline", "hyphen", "space"] = "newline"


class WhitespaceSettings(_ToolSettings):
    compress: bool = True
    trim: bool = True
    remove_all: bool = False
    remove_tabs: bool = False


class FilterSettings(_ToolSettings):
    text: str = ""
    mode: Literal["containing", "not-containing"] = "containing"
    case_sensitive: bool = False
    use_regex: bool = False


class ColumnSettings(_ToolSettings):
    delimiter: str = ","
    custom_delimiter: str = ""
    number: int = Field(default=1, ge=1)


class SwapSettings(_ToolSettings):
    delimiter: str = ","
    custom_delimiter: str = ""
    col1: int = Field(default=1, ge=1)
    col2: int = Field(default=2, ge=1)


class WrapSettings(_ToolSettings):
    prefix: str = ""
    suffix: str = ""
    exclude_empty_lines: bool = False


class NumberListSettings(_ToolSettings):
    start_number: int = 1
    step_number: int = 1
    separator: str = ". "
    prefix: str = ""


class LineBreakSettings(_ToolSettings):
    trigger: str = ""
    action: Literal["add-after", "add-before", "remove-after", "remove-before", "remove-all"] = "add-after"
    use_regex: bool = False
    style: Literal["auto", "LF", "CRLF"] = "auto"
    merge_empty: bool = False


class ExtractBetweenSettings(_ToolSettings):
    start: str = ""
    end: str = ""
    use_regex: bool = False
    join_separator: str = "\n"


class FrequencySettings(_ToolSettings):
    min_word_length: int = Field(default=1, ge=0)
    include_numbers: bool = False
    sort_order: Literal["asc", "desc"] = "desc"


class ClearFormatSettings(_ToolSettings):
    bold: bool = True
    italic: bool = True
    highlight: bool = True
    strikethrough: bool = True
    code: bool = False
    links: bool = False


class DedupeSettings(_ToolSettings):
    include_empty: bool = False


class EmptyLineSettings(_ToolSettings):
    mode: Literal["all", "merge"] = "all"


class CombinationSettings(_ToolSettings):
    inputs: list[str] = Field(default_factory=list)


class AIToolSettings(_ToolSettings):
    target_language: str = "English"


class SettingsState(BaseModel):
    """Fully populated configuration for every tool family."""

    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    version: int = SETTINGS_VERSION

    regex: RegexSettings = Field(default_factory=RegexSettings)
    regex_extract: RegexExtractSettings = Field(default_factory=RegexExtractSettings)
    whitespace: WhitespaceSettings = Field(default_factory=WhitespaceSettings)
    filter: FilterSettings = Field(default_factory=FilterSettings)
    column: ColumnSettings = Field(default_factory=ColumnSettings)
    swap: SwapSettings = Field(default_factory=SwapSettings)
    wrap: WrapSettings = Field(default_factory=WrapSettings)
    number_list: NumberListSettings = Field(default_factory=NumberListSettings)
    line_break: LineBreakSettings = Field(default_factory=LineBreakSettings)
    extract_between: ExtractBetweenSettings = Field(default_factory=ExtractBetweenSettings)
    frequency: FrequencySettings = Field(default_factory=FrequencySettings)
    clear_format: ClearFormatSettings = Field(default_factory=ClearFormatSettings)
    dedupe: DedupeSettings = Field(default_factory=DedupeSettings)
    empty_line: EmptyLineSettings = Field(default_factory=EmptyLineSettings)
    combination: CombinationSettings = Field(default_factory=CombinationSettings)
    ai_tools: AIToolSettings = Field(default_factory=AIToolSettings)

    # script_id -> {param_key: runtime value}
    script_params: dict[str, dict[str, Any]] = Field(default_factory=dict)

    custom_ai_prompt: str | None = None
    custom_ai_system_prompt: str | None = None

    preserve_frontmatter: bool = True
    preserve_header: bool = False

    def snapshot(self) -> SettingsState:
        """Return an independent deep copy for storing on an operation."""
        return self.model_copy(deep=True)

    def for_selection_scope(self) -> SettingsState:
        """Copy with frontmatter/header protection disabled."""
        return self.model_copy(update={"preserve_frontmatter": False, "preserve_header": False}, deep=True)

    def set_value(self, path: str, value: Any) -> None:
        """Assign a dotted path such as ``regex.find_text``."""
        target: Any = self
        *parents, leaf = path.split(".")
        for part in parents:
            if not hasattr(target, part):
                raise AttributeError(f"Unknown settings section: {part}")
            target = getattr(target, part)
        if not isinstance(target, BaseModel) or leaf not in type(target).model_fields:
            raise AttributeError(f"Unknown setting: {path}")
        setattr(target, leaf, value)


# legacy flat key -> (section, field); section None means top level
LEGACY_FLAT_KEYS: dict[str, tuple[str | None, str]] = {
    "findText": ("regex", "find_text"),
    "replaceText": ("regex", "replace_text"),
    "prefix": ("wrap", "prefix"),
    "suffix": ("wrap", "suffix"),
    "filterText": ("filter", "text"),
    "filterMode": ("filter", "mode"),
    "filterCase": ("filter", "case_sensitive"),
    "filterRegex": ("filter", "use_regex"),
    "columnDelimiter": ("column", "delimiter"),
    "columnNumber": ("column", "number"),
    "customDelimiter": ("column", "custom_delimiter"),
    "swapCol1": ("swap", "col1"),
    "swapCol2": ("swap", "col2"),
    "columnDelimiterSC": ("swap", "delimiter"),
    "customDelimiterSC": ("swap", "custom_delimiter"),
    "minWordLength": ("frequency", "min_word_length"),
    "includeNumbers": ("frequency", "include_numbers"),
    "sortOrder": ("frequency", "sort_order"),
    "startNumber": ("number_list", "start_number"),
    "stepNumber": ("number_list", "step_number"),
    "listSeparator": ("number_list", "separator"),
    "listPrefix": ("number_list", "prefix"),
    "extractStart": ("extract_between", "start"),
    "extractEnd": ("extract_between", "end"),
    "extractRegex": ("extract_between", "use_regex"),
    "extractJoin": ("extract_between", "join_separator"),
    "wsCompress": ("whitespace", "compress"),
    "wsTrim": ("whitespace", "trim"),
    "wsAll": ("whitespace", "remove_all"),
    "wsTabs": ("whitespace", "remove_tabs"),
    "lbTrigger": ("line_break", "trigger"),
    "lbAction": ("line_break", "action"),
    "lbRegex": ("line_break", "use_regex"),
    "dedupeIncludeEmpty": ("dedupe", "include_empty"),
    "emptyLineMode": ("empty_line", "mode"),
    "clearBold": ("clear_format", "bold"),
    "clearItalic": ("clear_format", "italic"),
    "clearHighlight": ("clear_format", "highlight"),
    "clearStrikethrough": ("clear_format", "strikethrough"),
    "clearCode": ("clear_format", "code"),
    "clearLinks": ("clear_format", "links"),
    "preserveFrontmatter": (None, "preserve_frontmatter"),
    "preserveHeader": (None, "preserve_header"),
    "customAiPrompt": (None, "custom_ai_prompt"),
    "customAiSystemPrompt": (None, "custom_ai_system_prompt"),
    "combinationInputs": ("combination", "inputs"),
}


def migrate_to_nested_settings(data: dict[str, Any] | SettingsState | None) -> SettingsState:
    """Upgrade persisted settings into a fully populated ``SettingsState``.

    Legacy flat keys only fill nested fields that are not already present,
    and data already at the current version is validated untouched. The
    input is never mutated.
    """
    if data is None:
        return SettingsState()
    if isinstance(data, SettingsState):
        return data.snapshot()

    raw = copy.deepcopy(data)
    if raw.get("version", 1) >= SETTINGS_VERSION:
        return SettingsState.model_validate(raw)

    nested: dict[str, Any] = {
        key: value for key, value in raw.items() if key not in LEGACY_FLAT_KEYS
    }
    for legacy_key, (section, field) in LEGACY_FLAT_KEYS.items():
        if legacy_key not in raw:
            continue
        value = raw[legacy_key]
        if section is None:
            nested.setdefault(field, value)
            continue
        # "wrap"/"filter"/... may already be dicts in partially migrated data
        section_data = nested.get(section)
        if not isinstance(section_data, dict):
            section_data = {}
            nested[section] = section_data
        section_data.setdefault(field, value)

    nested["version"] = SETTINGS_VERSION
    return SettingsState.model_validate(nested)
