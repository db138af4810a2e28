"""User-facing notice texts.

Keys are stable identifiers; ``t`` formats positional ``{0}``-style
placeholders.
"""

MESSAGES: dict[str, str] = {
    # protection
    "NOTICE_SKIP_FRONTMATTER": "Done. Frontmatter was left untouched",
    "NOTICE_SKIP_HEADER": "Done. The first line was left untouched",
    "NOTICE_SKIP_FM_AND_HEADER": "Done. Frontmatter and the first line were left untouched",
    # builtin tools
    "NOTICE_REGEX_DONE": "Find and replace finished",
    "NOTICE_REGEX_ERROR": "Invalid regular expression: {0}",
    "NOTICE_REGEX_EXTRACT_DONE": "Extracted {0} matches",
    "NOTICE_REGEX_EXTRACT_EMPTY": "Enter an extraction pattern first",
    "NOTICE_NO_MATCH": "No matches found",
    "NOTICE_WS_DONE": "Whitespace cleaned",
    "NOTICE_DEDUPE": "Duplicate lines removed",
    "NOTICE_EMPTY_LINE": "Empty lines removed",
    "NOTICE_EMPTY_LINE_MERGED": "Consecutive empty lines merged",
    "NOTICE_WRAP_DONE": "Lines wrapped",
    "NOTICE_FILTER_INPUT": "Enter the text to filter by first",
    "NOTICE_FILTER_DONE": "Lines filtered",
    "NOTICE_NUMBER_DONE": "Lines numbered",
    "NOTICE_LB_TRIGGER": "Enter a line break trigger first",
    "NOTICE_LB_DONE": "Line breaks updated",
    "NOTICE_CUSTOM_DELIM": "Enter a custom delimiter first",
    "NOTICE_DELIM_REQUIRED": "A delimiter is required",
    "NOTICE_EXTRACT_COL_DONE": "Column {0} extracted",
    "NOTICE_SWAP_DONE": "Columns {0} and {1} swapped",
    "NOTICE_EXTRACT_BOUNDS": "Enter a start or end marker first",
    "NOTICE_EXTRACT_DONE": "Extracted {0} segments",
    "NOTICE_FREQ_DONE": "Counted {0} distinct words",
    "NOTICE_CLEAR_FORMAT_DONE": "Formatting cleared",
    "NOTICE_COMBINATION_DONE": "Combinations generated",
    "NOTICE_TOOL_NOT_FOUND": "Tool not found: {0}",
    # scripts
    "NOTICE_SCRIPT_SUCCESS": "Script finished",
    "NOTICE_SCRIPT_ERROR": "Script error: {0}",
    "NOTICE_SCRIPT_NOT_FOUND": "Script not found",
    # AI
    "NOTICE_PROMPT_NOT_FOUND": "Prompt not found",
    "AI_CONFIG_INCOMPLETE": "AI configuration is incomplete. Set the API key, URL and model.",
    "NOTICE_AI_PROCESSING": "AI is processing...",
    "NOTICE_AI_DONE": "AI processing finished",
    "NOTICE_AI_ERROR": "AI error: {0}",
    "NOTICE_NO_TEXT": "There is no text to process",
    # batches
    "NOTICE_BATCH_APPLIED": "Batch applied",
    "NOTICE_BATCH_FAILED": "Batch stopped at step {0}: {1}",
    "NOTICE_BATCH_NOT_FOUND": "Batch not found",
    "NOTICE_BATCH_APPLIED_FILES": "Batch changed {0} of {1} files",
    "NOTICE_BATCH_SAVED": "Batch saved",
    # editor
    "NOTICE_NO_SELECTION": "Select some text first",
    "NOTICE_NOTHING_TO_UNDO": "Nothing to undo",
    "NOTICE_NOTHING_TO_REDO": "Nothing to redo",
}


def t(key: str, *args) -> str:
    """Look up a message and fill its positional placeholders."""
    template = MESSAGES.get(key, key)
    return template.format(*args) if args else template
