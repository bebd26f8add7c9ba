"""Projection of the conversation into the transcript the model expects."""

from collections.abc import Iterable
from typing import Any

from ..prompts import get_system_prompt
from .models import (
    AnnouncementMessage,
    AssistantMessage,
    Message,
    TranscriptEntry,
    UserMessage,
)


def build_transcript(
    conversation: Iterable[Message],
    pending_user_message: UserMessage,
    instruction: str | None = None,
) -> list[TranscriptEntry]:
    """Build the role-tagged transcript for one dispatch.

    The persona instruction comes first, then every user and assistant
    message in insertion order. Announcements are UI-only and skipped.
    The pending user message is appended last even when the conversation
    already holds it, so the newest user turn appears twice.

    Args:
        conversation: Messages in insertion order
        pending_user_message: The message being sent
        instruction: Persona instruction (defaults to the packaged system prompt)

    Returns:
        Transcript entries in send order
    """
    transcript = [
        TranscriptEntry(role="system", content=instruction if instruction is not None else get_system_prompt())
    ]

    for message in conversation:
        match message:
            case AssistantMessage():
                transcript.append(TranscriptEntry(role="assistant", content=message.text))
            case UserMessage():
                transcript.append(TranscriptEntry(role="user", content=message.text))
            case AnnouncementMessage():
                continue

    transcript.append(TranscriptEntry(role="user", content=pending_user_message.text))
    return transcript


def build_payload(transcript: Iterable[TranscriptEntry], max_tokens: int) -> dict[str, Any]:
    """Serialize a transcript into the request body."""
    return {
        "messages": [entry.model_dump() for entry in transcript],
        "max_tokens": max_tokens,
    }
