"""Unit tests for the command-line interface."""

import argparse

import pytest

from text_workbench import cli
from text_workbench.models import WorkbenchConfig
from text_workbench.storage import MemoryConfigStore


@pytest.fixture
def memory_store(mocker, workbench_config):
    store = MemoryConfigStore(data=workbench_config.to_persisted())
    mocker.patch.object(cli, "create_config_store", return_value=store)
    mocker.patch.object(cli, "configure_logging")
    return store


class TestParseOverride:
    def test_typed_values(self):
        assert cli.parse_override("column.number=3") == ("column.number", 3)
        assert cli.parse_override("preserve_header=true") == ("preserve_header", True)
        assert cli.parse_override("regex.find_text=foo") == ("regex.find_text", "foo")

    def test_empty_value(self):
        assert cli.parse_override("regex.replace_text=") == ("regex.replace_text", "")

    def test_missing_separator(self):
        with pytest.raises(argparse.ArgumentTypeError):
            cli.parse_override("novalue")


class TestMain:
    """Tests for cli.main with an in-memory configuration store."""

    def test_no_command_prints_help(self, capsys):
        assert cli.main([]) == 2

    def test_apply_writes_file(self, memory_store, tmp_path):
        note = tmp_path / "note.md"
        note.write_text("a\na\nb", encoding="utf-8")

        assert cli.main(["apply", "dedupe", str(note)]) == 0
        assert note.read_text(encoding="utf-8") == "a\nb"

    def test_apply_dry_run_with_override(self, memory_store, tmp_path, capsys):
        note = tmp_path / "note.md"
        note.write_text("a\nb", encoding="utf-8")

        assert cli.main(["apply", "add-wrap", str(note), "--set", "wrap.suffix=;", "--dry-run"]) == 0
        assert capsys.readouterr().out == "a;\nb;"
        assert note.read_text(encoding="utf-8") == "a\nb"

    def test_unknown_setting_fails(self, memory_store, tmp_path):
        note = tmp_path / "note.md"
        note.write_text("a", encoding="utf-8")

        assert cli.main(["apply", "dedupe", str(note), "--set", "nope=1"]) == 1

    def test_missing_tool_reports_failure(self, memory_store, tmp_path):
        note = tmp_path / "note.md"
        note.write_text("a", encoding="utf-8")

        assert cli.main(["apply", "no-such-tool", str(note)]) == 1

    def test_batch_on_files(self, memory_store, tmp_path):
        note = tmp_path / "note.md"
        note.write_text("a\na\n\nb\n", encoding="utf-8")

        assert cli.main(["batch", "cleanup", str(note)]) == 0
        assert note.read_text(encoding="utf-8") == "a\nb"

    def test_missing_batch(self, memory_store, tmp_path):
        assert cli.main(["batch", "gone", str(tmp_path / "x.md")]) == 1

    def test_script(self, memory_store, tmp_path):
        note = tmp_path / "note.md"
        note.write_text("hey", encoding="utf-8")

        assert cli.main(["script", "shout", str(note)]) == 0
        assert note.read_text(encoding="utf-8") == "hey!"

    def test_check_config(self, memory_store, capsys):
        assert cli.main(["--check-config"]) == 0
        assert "Configured: [OK]" in capsys.readouterr().out

    def test_handle_config_check_lists_missing(self, capsys):
        cli.handle_config_check(WorkbenchConfig())

        assert "Missing: api_key" in capsys.readouterr().out
