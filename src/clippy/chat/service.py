"""Chat service: dispatch to the chat-completion API and reconciliation.

Hidden design decisions:
- Which steps run synchronously on ``send`` and which wait on the network
- How the pending reply is created and later overwritten
- How every failure is turned into reply text instead of an exception
"""

import asyncio
from typing import Any

import httpx

from ..logging import get_logger
from ..prompts import get_greeting
from ..settings import KeyService, SettingsService
from .gate import CredentialGate
from .models import (
    AssistantMessage,
    ChatCompletionResponse,
    DispatchOutcome,
    Message,
    ReplyState,
    TranscriptEntry,
    UserMessage,
)
from .store import ConversationStore
from .transcript import build_payload, build_transcript

logger = get_logger(__name__)

NO_RESPONSE_TEXT = "No response received from the API."
API_ERROR_PREFIX = "API error: "
TRANSPORT_ERROR_PREFIX = "An error occurred: "


class ChatService:
    """Bridge between the local conversation and a remote chat model.

    ``send`` runs the credential check, enqueues the user message, builds
    the transcript and appends an empty placeholder reply before returning a
    task. The task performs the single POST and writes the outcome into
    the placeholder. No exception crosses ``send``; failures become reply
    text.

    Supports async context manager protocol for cleanup of an owned client:
        async with ChatService(settings, keys) as service:
            await service.ask("Hello")
    """

    def __init__(
        self,
        settings: SettingsService,
        keys: KeyService,
        http_client: httpx.AsyncClient | None = None,
        store: ConversationStore | None = None,
        instruction: str | None = None,
    ):
        """Initialize the service and seed the conversation.

        Args:
            settings: Endpoint, token budget and key flag
            keys: API key storage
            http_client: Client used for the POST (created and owned if omitted)
            store: Conversation to operate on (a new one if omitted)
            instruction: Persona instruction (defaults to the packaged system prompt)
        """
        self.settings = settings
        self.keys = keys
        self.store = store if store is not None else ConversationStore()
        self.instruction = instruction
        self.gate = CredentialGate(settings, keys, self.store)
        self._owns_client = http_client is None
        self._http = http_client if http_client is not None else httpx.AsyncClient()
        self._in_flight: set[asyncio.Task[DispatchOutcome]] = set()

        self._seed()

    @property
    def messages(self) -> tuple[Message, ...]:
        """Snapshot of the conversation in insertion order."""
        return self.store.messages

    def reset(self) -> None:
        """Clear the conversation and greet again when credentials are present."""
        self.store.clear()
        self._seed()

    def send(self, user_message: UserMessage) -> "asyncio.Future[DispatchOutcome]":
        """Dispatch a user message.

        Must be called from a running event loop. Everything up to the
        placeholder happens before this returns; the returned task only
        waits on the network and reconciles.

        Returns:
            Awaitable resolving to the outcome of this send
        """
        loop = asyncio.get_running_loop()

        if not self.gate.check_ready():
            done: asyncio.Future[DispatchOutcome] = loop.create_future()
            done.set_result(DispatchOutcome.MISSING_CREDENTIALS)
            return done

        self.store.append(user_message)
        transcript = build_transcript(self.store, user_message, self.instruction)

        reply = AssistantMessage.placeholder()
        self.store.append(reply)

        task = loop.create_task(
            self._transmit(reply, transcript, dict(self.gate.auth_headers)),
            name=f"clippy-send-{reply.id}",
        )
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        return task

    async def send_async(self, user_message: UserMessage) -> DispatchOutcome:
        """Dispatch a user message and wait for the outcome."""
        return await self.send(user_message)

    async def ask(self, text: str) -> DispatchOutcome:
        """Send plain text as a user message and wait for the outcome."""
        return await self.send(UserMessage(text=text))

    async def aclose(self) -> None:
        """Wait for in-flight sends, then close the HTTP client if this service created it."""
        if self._in_flight:
            await asyncio.gather(*self._in_flight)
        if self._owns_client:
            await self._http.aclose()

    async def __aenter__(self) -> "ChatService":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()

    def _seed(self) -> None:
        if self.gate.check_ready() or self._has_stored_key():
            self.store.append(
                AssistantMessage(text=get_greeting(), is_latest_editable=True)
            )

    def _has_stored_key(self) -> bool:
        try:
            return bool(self.settings.has_key)
        except Exception as e:
            logger.warning("Settings lookup failed: %s", e)
            return False

    async def _transmit(
        self,
        reply: AssistantMessage,
        transcript: list[TranscriptEntry],
        headers: dict[str, str],
    ) -> DispatchOutcome:
        try:
            endpoint = self.settings.api_endpoint
            payload = build_payload(transcript, self.settings.tokens)
            logger.debug(
                "POST %s with %d transcript entries (max_tokens=%s)",
                endpoint, len(transcript), payload["max_tokens"]
            )
            response = await self._http.post(endpoint, json=payload, headers=headers)

            if response.is_success:
                body = response.json()
                content = None
                if body is not None:
                    content = ChatCompletionResponse.model_validate(body).first_content()

                if content is not None:
                    self._settle(reply, content, ReplyState.FULFILLED)
                    return DispatchOutcome.FULFILLED

                logger.warning("Chat API response contained no choices")
                self._settle(reply, NO_RESPONSE_TEXT, ReplyState.EMPTY_RESULT, editable=False)
                return DispatchOutcome.EMPTY_RESULT

            logger.warning("Chat API returned %s %s", response.status_code, response.reason_phrase)
            self._settle(
                reply, f"{API_ERROR_PREFIX}{response.reason_phrase}", ReplyState.API_ERROR, editable=False
            )
            return DispatchOutcome.API_ERROR

        except Exception as e:
            logger.warning("Chat request failed: %s", e)
            self._settle(reply, f"{TRANSPORT_ERROR_PREFIX}{e}", ReplyState.TRANSPORT_ERROR, editable=False)
            return DispatchOutcome.TRANSPORT_ERROR

    def _settle(
        self,
        reply: AssistantMessage,
        text: str,
        state: ReplyState,
        editable: bool | None = None,
    ) -> None:
        """Write the final text into the placeholder.

        A reply dropped by ``reset`` while in flight is updated detached,
        without notifying observers of the new conversation.
        """
        if reply in self.store:
            self.store.update(reply, text=text, is_latest_editable=editable, state=state)
            return

        logger.debug("Reply %s settled after the conversation was reset", reply.id)
        reply.text = text
        reply.state = state
        if editable is not None:
            reply.is_latest_editable = editable
