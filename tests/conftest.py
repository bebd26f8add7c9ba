"""Pytest configuration and shared fixtures."""
import json
import os

import httpx
import pytest

from clippy.chat import ChatService, ConversationStore
from clippy.settings import InMemoryKeyService, InMemorySettingsService

TEST_ENDPOINT = "https://chat.example.test/v1/chat/completions"
TEST_KEY = "sk-test"


class RecordingHandler:
    """MockTransport handler that records requests and replays a canned response."""

    def __init__(self, response: httpx.Response | None = None, error: Exception | None = None):
        self.response = response or httpx.Response(200, json={"choices": []})
        self.error = error
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response

    @property
    def last_body(self) -> dict:
        return json.loads(self.requests[-1].content)


def completion(content: str) -> httpx.Response:
    """Build a successful chat-completion response with one choice."""
    return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})


@pytest.fixture(scope="session")
def api_config():
    """Return real endpoint settings from environment, for integration tests."""
    return {
        "endpoint": os.getenv("CLIPPY_API_ENDPOINT"),
        "key": os.getenv("CLIPPY_API_KEY"),
    }


@pytest.fixture
def settings():
    """Settings with an endpoint and a stored key."""
    return InMemorySettingsService(api_endpoint=TEST_ENDPOINT, tokens=128, has_key=True)


@pytest.fixture
def keys():
    """Key storage holding a test key."""
    return InMemoryKeyService(TEST_KEY)


@pytest.fixture
def handler():
    """Recording handler answering with a single choice."""
    return RecordingHandler(completion("Hi!"))


@pytest.fixture
def store():
    return ConversationStore()


@pytest.fixture
def make_service(settings, keys, handler, store):
    """Factory building a ChatService on top of a mock transport."""
    def _make(**overrides):
        client = httpx.AsyncClient(transport=httpx.MockTransport(overrides.pop("handler", handler)))
        return ChatService(
            overrides.pop("settings", settings),
            overrides.pop("keys", keys),
            http_client=client,
            store=overrides.pop("store", store),
            instruction=overrides.pop("instruction", "Be Clippy."),
        )
    return _make
