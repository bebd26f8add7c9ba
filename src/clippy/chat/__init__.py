"""Conversation core: messages, store, transcript, credential gate and dispatch."""

from .gate import CredentialGate
from .models import (
    AnnouncementMessage,
    AssistantMessage,
    ChatCompletionResponse,
    DispatchOutcome,
    Message,
    ReplyState,
    TranscriptEntry,
    UserMessage,
    message_adapter,
)
from .service import ChatService
from .store import ConversationEvent, ConversationStore
from .transcript import build_payload, build_transcript

__all__ = [
    "AnnouncementMessage",
    "AssistantMessage",
    "ChatCompletionResponse",
    "ChatService",
    "ConversationEvent",
    "ConversationStore",
    "CredentialGate",
    "DispatchOutcome",
    "Message",
    "ReplyState",
    "TranscriptEntry",
    "UserMessage",
    "build_payload",
    "build_transcript",
    "message_adapter",
]
