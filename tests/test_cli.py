"""Tests for the command-line front end."""
import httpx
import pytest
from rich.console import Console
from typer.testing import CliRunner

from clippy.chat import (
    AnnouncementMessage,
    AssistantMessage,
    ChatService,
    ConversationEvent,
    ConversationStore,
    ReplyState,
    UserMessage,
)
from clippy.cli import app as cli_app
from clippy.cli.render import ConversationRenderer
from clippy.settings import InMemoryKeyService, InMemorySettingsService

from .conftest import TEST_ENDPOINT, RecordingHandler, completion

runner = CliRunner()


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("CLIPPY_API_ENDPOINT", "CLIPPY_MAX_TOKENS", "CLIPPY_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def _patch_service(monkeypatch, handler, key="sk-test"):
    def fake_get_service(console=None, store=None):
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        settings = InMemorySettingsService(api_endpoint=TEST_ENDPOINT, has_key=key is not None)
        return ChatService(settings, InMemoryKeyService(key), http_client=client, store=store)

    monkeypatch.setattr(cli_app, "get_service", fake_get_service)


class TestConfigCommand:
    """Tests for `clippy config`."""

    def test_shows_settings_without_key(self, clean_env):
        clean_env.setenv("CLIPPY_API_ENDPOINT", "https://api.example.test")
        clean_env.setenv("CLIPPY_API_KEY", "sk-secret")

        result = runner.invoke(cli_app.app, ["config"])

        assert result.exit_code == 0
        assert "https://api.example.test" in result.output
        assert "sk-secret" not in result.output

    def test_invalid_tokens(self, clean_env):
        clean_env.setenv("CLIPPY_MAX_TOKENS", "lots")

        result = runner.invoke(cli_app.app, ["config"])

        assert result.exit_code == 1
        assert "CLIPPY_MAX_TOKENS" in result.output


class TestAskCommand:
    """Tests for `clippy ask`."""

    def test_prints_reply(self, monkeypatch):
        _patch_service(monkeypatch, RecordingHandler(completion("Looks like a letter!")))

        result = runner.invoke(cli_app.app, ["ask", "help me"])

        assert result.exit_code == 0
        assert "Looks like a letter!" in result.output

    def test_api_error_exits_nonzero(self, monkeypatch):
        response = httpx.Response(503, extensions={"reason_phrase": b"Busy"})
        _patch_service(monkeypatch, RecordingHandler(response))

        result = runner.invoke(cli_app.app, ["ask", "help me"])

        assert result.exit_code == 1
        assert "API error: Busy" in result.output

    def test_missing_credentials(self, monkeypatch):
        handler = RecordingHandler()
        _patch_service(monkeypatch, handler, key=None)

        result = runner.invoke(cli_app.app, ["ask", "help me"])

        assert result.exit_code == 1
        assert "API key" in result.output
        assert handler.requests == []


class TestChatCommand:
    """Tests for `clippy chat`."""

    def test_conversation_round_trip(self, monkeypatch):
        _patch_service(monkeypatch, RecordingHandler(completion("Sure thing!")))

        result = runner.invoke(cli_app.app, ["chat"], input="hello\n/reset\nq\n")

        assert result.exit_code == 0
        assert "Sure thing!" in result.output
        assert "New conversation" in result.output
        assert "Goodbye!" in result.output


class TestConversationRenderer:
    """Tests for ConversationRenderer."""

    @pytest.fixture
    def console(self):
        return Console(record=True, width=120)

    def test_pending_reply_rendered_once_settled(self, console):
        store = ConversationStore()
        store.subscribe(ConversationRenderer(console))
        reply = AssistantMessage.placeholder()

        store.append(reply)
        store.update(reply, text="Done!", state=ReplyState.FULFILLED)

        output = console.export_text()
        assert "thinking" in output
        assert output.count("Done!") == 1

    def test_flag_clear_does_not_rerender(self, console):
        store = ConversationStore()
        renderer = ConversationRenderer(console)
        greeting = AssistantMessage(text="Hello!", is_latest_editable=True)
        store.append(greeting)
        store.subscribe(renderer)

        store.append(AnnouncementMessage(text="Heads up"))

        output = console.export_text()
        assert "Heads up" in output
        assert "Hello!" not in output

    def test_echoed_user_text_is_not_markup(self, console):
        store = ConversationStore()
        store.subscribe(ConversationRenderer(console, echo_user=True))

        store.append(UserMessage(text="what does [/bold] mean?"))

        assert "what does [/bold] mean?" in console.export_text()

    def test_cleared(self, console):
        renderer = ConversationRenderer(console)
        renderer(ConversationEvent("cleared"))

        assert "New conversation" in console.export_text()
