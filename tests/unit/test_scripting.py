"""Unit tests for user script hosting and parameter normalization."""

import pytest

from text_workbench.exceptions import ScriptExecutionError
from text_workbench.exceptions import SelectionRequiredError
from text_workbench.models import CustomScript
from text_workbench.models import ScriptParam
from text_workbench.models import SettingsState
from text_workbench.scripting import ScriptHost
from text_workbench.scripting import ScriptManager
from text_workbench.scripting import normalize_params
from text_workbench.scripting import requires_selection
from text_workbench.scripting.executor import ScriptApp
from text_workbench.scripting.params import unescape_control_sequences


class TestParams:
    """Tests for parameter normalization."""

    def test_defaults_and_overrides(self):
        script = CustomScript(
            id="s",
            name="S",
            code="return text",
            params=[ScriptParam(key="a", default="x"), ScriptParam(key="b", type="number", default=1)],
        )

        assert normalize_params(script, {"b": 5}) == {"a": "x", "b": 5}

    def test_none_override_falls_back_to_default(self):
        script = CustomScript(id="s", name="S", code="", params=[ScriptParam(key="a", default="x")])

        assert normalize_params(script, {"a": None}) == {"a": "x"}

    def test_text_escapes(self):
        script = CustomScript(id="s", name="S", code="", params=[ScriptParam(key="sep", default="\\n")])

        assert normalize_params(script) == {"sep": "\n"}

    def test_array_string_is_split(self):
        script = CustomScript(id="s", name="S", code="", params=[ScriptParam(key="items", type="array")])

        assert normalize_params(script, {"items": "x\r\ny"}) == {"items": ["x", "y"]}

    def test_array_list_kept(self):
        script = CustomScript(id="s", name="S", code="", params=[ScriptParam(key="items", type="array")])

        assert normalize_params(script, {"items": ["a"]}) == {"items": ["a"]}

    def test_unescape(self):
        assert unescape_control_sequences("a\\tb\\r\\n") == "a\tb\r\n"


class TestRequiresSelection:
    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            ("return selection.upper()", True),
            ("return text.upper()", False),
            ("return (selection or text).upper()", False),
            ("return 'selections'", False),
        ],
    )
    def test_detection(self, code, expected):
        assert requires_selection(code) is expected


class TestScriptHost:
    """Tests for ScriptHost.execute."""

    @pytest.fixture
    def host(self, notifier):
        return ScriptHost(notifier=notifier)

    @pytest.mark.asyncio
    async def test_string_result(self, host):
        assert await host.execute("return selection.upper()", "full hi", "hi") == "HI"

    @pytest.mark.asyncio
    async def test_none_result_returns_target(self, host):
        assert await host.execute("x = 1", "full", "part") == "part"
        assert await host.execute("pass", "full", "") == "full"

    @pytest.mark.asyncio
    async def test_other_result_is_stringified(self, host):
        assert await host.execute("return len(text)", "abcd", "") == "4"

    @pytest.mark.asyncio
    async def test_params_and_await(self, host):
        code = "await app.sleep(0)\nreturn params['prefix'] + text"

        assert await host.execute(code, "body", "", {"prefix": "> "}) == "> body"

    @pytest.mark.asyncio
    async def test_notice_binding(self, host, notifier):
        await host.execute("notice('hello')\nreturn text", "t", "")

        assert notifier.messages == ["hello"]

    @pytest.mark.asyncio
    async def test_notice_goes_to_call_notifier(self, host, notifier):
        from text_workbench.notifications import CollectingNotifier

        other = CollectingNotifier()
        await host.execute("notice('x')", "t", "", notifier=other)

        assert other.messages == ["x"]
        assert notifier.messages == []

    @pytest.mark.asyncio
    async def test_allowed_import(self, host):
        code = "import re\nreturn re.sub(r'\\d', '#', text)"

        assert await host.execute(code, "a1b2", "") == "a#b#"

    @pytest.mark.asyncio
    async def test_from_import_of_allowed_submodule(self, host):
        code = "from urllib.parse import quote\nreturn quote(text)"

        assert await host.execute(code, "a b", "") == "a%20b"

    @pytest.mark.asyncio
    async def test_dotted_import_of_allowed_submodule(self, host):
        code = "import urllib.parse\nreturn urllib.parse.quote(text)"

        assert await host.execute(code, "a b", "") == "a%20b"

    @pytest.mark.asyncio
    async def test_app_helpers(self, host):
        code = "meta, body = app.parse_frontmatter(app.get_text())\nreturn meta['title'] + '|' + body"

        assert await host.execute(code, "---\ntitle: T\n---\nbody", "") == "T|body"

    @pytest.mark.asyncio
    async def test_print_goes_to_console(self, host):
        assert await host.execute("print('logged')\nreturn text", "t", "") == "t"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "code",
        [
            "import os\nreturn text",
            "return text.__class__",
            "def gen():\n    yield 1\nreturn str(gen().gi_frame.f_back.f_globals)",
            "async def inner():\n    return 1\nreturn str(inner().cr_frame)",
            "import urllib.parse\nreturn str(urllib.request)",
            "return open('x').read()",
            "raise ValueError('boom')",
            "return (",
        ],
    )
    async def test_failures_raise_script_error(self, host, code):
        with pytest.raises(ScriptExecutionError) as exc_info:
            await host.execute(code, "t", "", name="bad")

        assert exc_info.value.script_name == "bad"
        assert exc_info.value.__cause__ is exc_info.value.original_error

    @pytest.mark.asyncio
    async def test_request_uses_requests(self, mocker):
        response = mocker.Mock(status_code=200, ok=True, headers={"a": "b"}, text='{"v": 1}', url="https://x")
        request = mocker.patch("text_workbench.scripting.executor.requests.request", return_value=response)
        app = ScriptApp("full", "", request_timeout=5)

        reply = await app.request("get", "https://x", params={"q": "1"})

        assert reply.status == 200
        assert reply.json() == {"v": 1}
        request.assert_called_once_with(
            "GET", "https://x", params={"q": "1"}, headers=None, json=None, data=None, timeout=5
        )


class TestScriptManager:
    """Tests for ScriptManager."""

    @pytest.mark.asyncio
    async def test_selection_required(self):
        script = CustomScript(id="up", name="Up", code="return selection.upper()")

        with pytest.raises(SelectionRequiredError):
            await ScriptManager().run(script, "text", "", SettingsState())

    @pytest.mark.asyncio
    async def test_runtime_params_from_settings(self):
        script = CustomScript(
            id="s", name="S", code="return text + params['tail']", params=[ScriptParam(key="tail", default="!")]
        )
        settings = SettingsState(script_params={"s": {"tail": "?"}})

        assert await ScriptManager().run(script, "a", "", settings) == "a?"

    @pytest.mark.asyncio
    async def test_selection_scope_sees_text_as_selection(self):
        script = CustomScript(id="up", name="Up", code="return selection.upper()")

        result = await ScriptManager().apply_custom_script_to_text(script, "part", "selection", SettingsState())

        assert result == "PART"
