"""The pytest configuration for text workbench testing.

Provides an in-memory editor, a notice collector, a scripted AI client
and a populated workbench configuration so unit and integration tests can
drive the engine without network access or files.
"""

import pytest

from text_workbench.config import reset_settings
from text_workbench.editor import TextBufferEditor
from text_workbench.models import AIConfig
from text_workbench.models import AIResponse
from text_workbench.models import BatchProcess
from text_workbench.models import CustomAIAction
from text_workbench.models import CustomScript
from text_workbench.models import ScriptParam
from text_workbench.models import SettingsState
from text_workbench.models import WorkbenchConfig
from text_workbench.models import operation_from_tool_id
from text_workbench.notifications import CollectingNotifier
from text_workbench.tools.base import ToolExecutionOptions


class FakeAIClient:
    """AI client double that records every request and replays canned replies."""

    def __init__(self, reply: str = "AI reply", error: str | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[tuple[str, str]] = []
        self.configs: list[AIConfig] = []

    def factory(self, config: AIConfig) -> "FakeAIClient":
        self.configs.append(config)
        return self

    async def send(self, system_prompt: str, user_prompt: str) -> AIResponse:
        self.calls.append((system_prompt, user_prompt))
        if self.error:
            return AIResponse(error=self.error)
        return AIResponse(content=self.reply)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Keep environment-driven settings from leaking between tests."""
    for name in ("TEXT_WORKBENCH_AI_API_KEY", "TEXT_WORKBENCH_CONFIG_PATH", "TEXT_WORKBENCH_AI_PROVIDER"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def notifier():
    return CollectingNotifier()


@pytest.fixture
def options(notifier):
    """Tool options that collect notices instead of logging them."""
    return ToolExecutionOptions(notifier=notifier)


@pytest.fixture
def settings():
    """Default settings with frontmatter protection off, for plain strategy tests."""
    return SettingsState(preserve_frontmatter=False)


@pytest.fixture
def editor():
    return TextBufferEditor()


@pytest.fixture
def fake_ai():
    return FakeAIClient()


@pytest.fixture
def ai_config():
    return AIConfig(api_key="sk-test", base_url="https://api.example.com/v1", model="test-model")


@pytest.fixture
def workbench_config(ai_config):
    """A configuration with one script of each kind, one AI action and one batch."""
    upper = CustomScript(id="upper", name="Upper", code="return selection.upper()")
    shout = CustomScript(
        id="shout",
        name="Shout",
        code="return text + params['mark'] * params['times']",
        params=[
            ScriptParam(key="mark", type="text", default="!"),
            ScriptParam(key="times", type="number", default=1),
        ],
    )
    broken = CustomScript(id="broken", name="Broken", code="raise ValueError('boom')\nreturn text")
    action = CustomAIAction(id="rewrite", name="Rewrite", prompt="Rewrite this", system_prompt="You edit text")
    cleanup = BatchProcess(
        id="cleanup",
        name="Cleanup",
        operations=[operation_from_tool_id("dedupe"), operation_from_tool_id("trim-empty-lines")],
    )
    return WorkbenchConfig(
        ai=ai_config,
        custom_scripts=[upper, shout, broken],
        custom_actions=[action],
        saved_batches=[cleanup],
    )
