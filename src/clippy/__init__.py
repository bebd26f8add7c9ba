"""
Clippy: a conversational bridge between a local message timeline and a
remote chat-completion API.

Each subpackage hides one design decision: how settings and keys are
stored, where the fixed prompts come from, and how the conversation is
kept, projected and dispatched.
"""

__version__ = "0.1.0"

from .chat import (
    AnnouncementMessage,
    AssistantMessage,
    ChatService,
    ConversationStore,
    DispatchOutcome,
    ReplyState,
    UserMessage,
)
from .settings import create_key_service, create_settings_service

__all__ = [
    "AnnouncementMessage",
    "AssistantMessage",
    "ChatService",
    "ConversationStore",
    "DispatchOutcome",
    "ReplyState",
    "UserMessage",
    "create_key_service",
    "create_settings_service",
]
