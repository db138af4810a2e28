"""Unit tests for operation dispatch and batch sequencing.

The dispatcher and sequencer run with a fake AI client and in-memory
editors, so no external calls are made.
"""

from pathlib import Path

import pytest

from text_workbench.ai import AIManager
from text_workbench.batch import BatchSequencer
from text_workbench.batch import BatchStepError
from text_workbench.batch import OperationDispatcher
from text_workbench.batch import settings_for_scope
from text_workbench.editor import TextBufferEditor
from text_workbench.exceptions import ScriptExecutionError
from text_workbench.exceptions import SelectionRequiredError
from text_workbench.messages import t
from text_workbench.models import BatchProcess
from text_workbench.models import SettingsState
from text_workbench.models import operation_from_tool_id
from text_workbench.scripting import ScriptHost
from text_workbench.scripting import ScriptManager
from text_workbench.tools import ToolStrategy
from text_workbench.tools import create_default_registry


@pytest.fixture
def dispatcher(workbench_config, fake_ai, notifier):
    return OperationDispatcher(
        create_default_registry(),
        lambda: workbench_config,
        ScriptManager(ScriptHost(notifier=notifier)),
        AIManager(lambda: workbench_config.ai, fake_ai.factory),
        notifier,
    )


@pytest.fixture
def sequencer(dispatcher, notifier):
    return BatchSequencer(dispatcher, notifier)


def make_batch(*tool_ids, settings=None):
    return BatchProcess(
        id="b1", name="Batch", operations=[operation_from_tool_id(tool_id, settings) for tool_id in tool_ids]
    )


class TestSettingsForScope:
    def test_selection_disables_protection(self):
        snapshot = SettingsState(preserve_header=True)

        scoped = settings_for_scope(snapshot, "selection")

        assert not scoped.preserve_frontmatter
        assert not scoped.preserve_header

    def test_note_returns_copy_of_snapshot(self):
        snapshot = SettingsState(preserve_header=True)

        scoped = settings_for_scope(snapshot, "note")

        assert scoped == snapshot
        assert scoped is not snapshot
        assert scoped.regex is not snapshot.regex


class TestOperationDispatcher:
    """Tests for OperationDispatcher.apply."""

    @pytest.mark.asyncio
    async def test_builtin_with_snapshot_settings(self, dispatcher):
        settings = SettingsState()
        settings.wrap.prefix = "- "

        result = await dispatcher.apply(operation_from_tool_id("add-wrap", settings), "a\nb", "note")

        assert result == "- a\n- b"

    @pytest.mark.asyncio
    async def test_note_scope_protects_frontmatter(self, dispatcher):
        settings = SettingsState()
        settings.wrap.prefix = "- "

        result = await dispatcher.apply(operation_from_tool_id("add-wrap", settings), "---\na: 1\n---\nb", "note")

        assert result == "---\na: 1\n---\n- b"

    @pytest.mark.asyncio
    async def test_selection_scope_ignores_protection(self, dispatcher):
        settings = SettingsState()
        settings.wrap.prefix = "- "

        result = await dispatcher.apply(operation_from_tool_id("add-wrap", settings), "---\nb", "selection")

        assert result == "- ---\n- b"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("tool_id", "key"),
        [
            ("no-such-tool", "NOTICE_TOOL_NOT_FOUND"),
            ("custom-script:gone", "NOTICE_SCRIPT_NOT_FOUND"),
            ("custom-ai:gone", "NOTICE_PROMPT_NOT_FOUND"),
        ],
    )
    async def test_missing_reference_is_a_noop(self, dispatcher, notifier, tool_id, key):
        result = await dispatcher.apply(operation_from_tool_id(tool_id), "text", "note", hide_notice=True)

        assert result == "text"
        assert notifier.failures[0].message == t(key, tool_id.split(":")[-1])

    @pytest.mark.asyncio
    async def test_script(self, dispatcher, notifier):
        result = await dispatcher.apply(operation_from_tool_id("custom-script:shout"), "hey", "note")

        assert result == "hey!"
        assert t("NOTICE_SCRIPT_SUCCESS") in notifier.messages

    @pytest.mark.asyncio
    async def test_selection_script_without_selection(self, dispatcher, notifier):
        result = await dispatcher.apply(operation_from_tool_id("custom-script:upper"), "hey", "note")

        assert result == "hey"
        assert notifier.failures[0].message == t("NOTICE_NO_SELECTION")

    @pytest.mark.asyncio
    async def test_script_failure_propagates(self, dispatcher):
        with pytest.raises(ScriptExecutionError):
            await dispatcher.apply(operation_from_tool_id("custom-script:broken"), "hey", "note")

    @pytest.mark.asyncio
    async def test_custom_ai_action(self, dispatcher, fake_ai):
        result = await dispatcher.apply(operation_from_tool_id("custom-ai:rewrite"), "body", "note")

        assert result == "AI reply"
        assert fake_ai.calls[0][0] == "You edit text"

    @pytest.mark.asyncio
    async def test_tool_cannot_change_stored_snapshot(self, dispatcher):
        class Rewriting(ToolStrategy):
            id = "rewriting"
            name = "Rewriting"

            def execute(self, text, settings, options):
                settings.regex.find_text = "changed"
                return text.upper()

        dispatcher.registry.register(Rewriting())
        operation = operation_from_tool_id("rewriting")

        assert await dispatcher.apply(operation, "abc", "note") == "ABC"
        assert operation.settings_snapshot.regex.find_text == ""

    @pytest.mark.asyncio
    async def test_unsupported_operation(self, dispatcher):
        class Fake:
            settings_snapshot = SettingsState()

        with pytest.raises(TypeError):
            await dispatcher.apply(Fake(), "text", "note")


class TestBatchSequencer:
    """Tests for BatchSequencer."""

    @pytest.mark.asyncio
    async def test_steps_feed_each_other(self, sequencer):
        batch = make_batch("dedupe", "trim-empty-lines")

        assert await sequencer.run(batch, "note", "a\na\n\nb\n") == "a\nb"

    @pytest.mark.asyncio
    async def test_empty_batch_is_identity(self, sequencer):
        assert await sequencer.run(make_batch(), "note", "same") == "same"

    @pytest.mark.asyncio
    async def test_batch_hides_success_notices(self, sequencer, notifier):
        await sequencer.run(make_batch("dedupe"), "note", "a\na")

        assert notifier.notices == []

    @pytest.mark.asyncio
    async def test_selection_scope_requires_text(self, sequencer):
        with pytest.raises(SelectionRequiredError):
            await sequencer.run(make_batch("dedupe"), "selection", "")

    @pytest.mark.asyncio
    async def test_missing_step_is_skipped(self, sequencer):
        batch = make_batch("gone", "dedupe")

        assert await sequencer.run(batch, "note", "a\na") == "a"

    @pytest.mark.asyncio
    async def test_failing_step_aborts(self, sequencer):
        batch = make_batch("dedupe", "custom-script:broken", "trim-empty-lines")

        with pytest.raises(BatchStepError) as exc_info:
            await sequencer.run(batch, "note", "a\na")

        error = exc_info.value
        assert error.index == 1
        assert [r.success for r in error.results] == [True, False]
        assert isinstance(error.cause, ScriptExecutionError)

    @pytest.mark.asyncio
    async def test_apply_to_editor_note(self, sequencer, notifier):
        editor = TextBufferEditor("a\na\n\nb\n")

        result = await sequencer.apply_to_editor(make_batch("dedupe", "trim-empty-lines"), "note", editor)

        assert result.success
        assert result.successful_operations == 2
        assert editor.get_value() == "a\nb"
        assert notifier.messages == [t("NOTICE_BATCH_APPLIED")]

    @pytest.mark.asyncio
    async def test_apply_to_editor_selection(self, sequencer):
        editor = TextBufferEditor("keep x\nx\n")
        editor.select(5, 9)

        result = await sequencer.apply_to_editor(make_batch("dedupe"), "selection", editor)

        assert result.text == "x\n"
        assert editor.get_value() == "keep x\n"

    @pytest.mark.asyncio
    async def test_apply_to_editor_without_selection(self, sequencer, notifier):
        editor = TextBufferEditor("text")

        result = await sequencer.apply_to_editor(make_batch("dedupe"), "selection", editor)

        assert not result.success
        assert editor.get_value() == "text"
        assert notifier.failures[0].message == t("NOTICE_NO_SELECTION")

    @pytest.mark.asyncio
    async def test_failed_run_writes_nothing(self, sequencer, notifier):
        editor = TextBufferEditor("a\na")

        result = await sequencer.apply_to_editor(make_batch("dedupe", "custom-script:broken"), "note", editor)

        assert not result.success
        assert result.successful_operations == 1
        assert result.failed_operations == 1
        assert editor.get_value() == "a\na"
        assert notifier.failures[-1].message.startswith("Batch stopped at step 2")

    @pytest.mark.asyncio
    async def test_run_on_files(self, sequencer, tmp_path: Path, notifier):
        changed = tmp_path / "changed.md"
        changed.write_text("a\na\n", encoding="utf-8")
        untouched = tmp_path / "untouched.md"
        untouched.write_text("a\nb", encoding="utf-8")
        missing = tmp_path / "missing.md"

        outcome = await sequencer.run_on_files(make_batch("dedupe"), [changed, untouched, missing])

        assert outcome == (1, 3)
        assert changed.read_text(encoding="utf-8") == "a\n"
        assert notifier.messages[-1] == t("NOTICE_BATCH_APPLIED_FILES", 1, 3)

    @pytest.mark.asyncio
    async def test_bad_replacement_step_does_not_abort(self, sequencer, notifier):
        settings = SettingsState()
        settings.regex.find_text = "a"
        settings.regex.replace_text = r"\g<missing>"

        result = await sequencer.run(make_batch("regex", "dedupe", settings=settings), "note", "a\na")

        assert result == "a"
        assert notifier.failures[0].message.startswith("Invalid regular expression")


class TestBatchComposition:
    """Running [A, B] then [C] matches running [A, B, C]."""

    TEXT = "---\ntitle: t\n---\nb, 2\na, 1\n\nb, 2\n  c, 3  \n"

    @pytest.fixture
    def composed_settings(self):
        settings = SettingsState()
        settings.wrap.prefix = "* "
        settings.column.number = 2
        return settings

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "tool_ids",
        [
            ("dedupe", "trim-empty-lines", "add-wrap"),
            ("remove-whitespace", "extract-column", "number-list"),
            ("add-wrap", "dedupe", "swap-columns"),
        ],
    )
    async def test_split_run_equals_single_run(self, sequencer, composed_settings, tool_ids):
        *head, last = tool_ids

        whole = await sequencer.run(make_batch(*tool_ids, settings=composed_settings), "note", self.TEXT)
        first = await sequencer.run(make_batch(*head, settings=composed_settings), "note", self.TEXT)
        split = await sequencer.run(make_batch(last, settings=composed_settings), "note", first)

        assert split == whole
        assert whole != self.TEXT
