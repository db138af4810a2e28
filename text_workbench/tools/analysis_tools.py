"""Extraction, counting and generation tools."""

import itertools
import re
from collections import Counter

from ..models.settings_state import SettingsState
from .base import ToolExecutionOptions
from .base import ToolStrategy
from .base import join_lines
from .registry import builtin_strategy

_NON_WORD = re.compile(r"[^a-zA-Z\u4e00-\u9fa5]+")
_NON_WORD_OR_DIGIT = re.compile(r"[^a-zA-Z0-9\u4e00-\u9fa5]+")


@builtin_strategy
class ExtractBetweenStrategy(ToolStrategy):
    """Collect every span found between a start and an end marker."""

    id = "extract-between"
    name = "Extract between markers"

    def execute(self, text: str, settings: SettingsState, options: ToolExecutionOptions) -> str:
        between = settings.extract_between
        if not between.start and not between.end:
            options.warn("NOTICE_EXTRACT_BOUNDS")
            return text

        start, end = between.start, between.end
        if not between.use_regex:
            start, end = re.escape(start), re.escape(end)
        try:
            pattern = re.compile(f"(?:{start})(?P<between>.*?)(?:{end})")
        except re.error as e:
            options.pattern_error(self.id, e)
            return text

        found = [m.group("between") for m in pattern.finditer(text)]
        if not found:
            options.notify("NOTICE_NO_MATCH")
            return text
        options.notify("NOTICE_EXTRACT_DONE", len(found))
        return (between.join_separator or "\n").join(found)


@builtin_strategy
class WordFrequencyStrategy(ToolStrategy):
    """Replace the text with a ``word (count)`` table.

    Words are case-folded; ties keep first-seen order.
    """

    id = "word-frequency"
    name = "Word frequency"

    def execute(self, text: str, settings: SettingsState, options: ToolExecutionOptions) -> str:
        freq = settings.frequency
        splitter = _NON_WORD_OR_DIGIT if freq.include_numbers else _NON_WORD
        words = [
            word.lower()
            for word in splitter.sub(" ", text).split()
            if len(word) >= freq.min_word_length
        ]
        counts = Counter(words)
        ranked = sorted(counts.items(), key=lambda item: item[1], reverse=freq.sort_order == "desc")
        options.notify("NOTICE_FREQ_DONE", len(ranked))
        return join_lines([f"{word} ({count})" for word, count in ranked])


@builtin_strategy
class CombinationGeneratorStrategy(ToolStrategy):
    """Cartesian product of the configured input lists.

    Each input is a block of lines; one output line is produced per
    combination, concatenated in input order. The current text is ignored
    unless no inputs are configured, in which case it is returned as-is.
    """

    id = "combination-generator"
    name = "Combination generator"

    def execute(self, text: str, settings: SettingsState, options: ToolExecutionOptions) -> str:
        inputs = settings.combination.inputs
        if not inputs:
            return text
        pools = [re.split(r"\r?\n", block) for block in inputs]
        combos = ["".join(parts) for parts in itertools.product(*pools)]
        options.notify("NOTICE_COMBINATION_DONE")
        return join_lines(combos)
