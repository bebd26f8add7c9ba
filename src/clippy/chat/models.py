"""Data models for the conversation.

Messages form a closed set of variants discriminated by ``kind``.
Transcript entries and the completion response describe the wire format,
independent of the transport used to carry it.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


class ReplyState(str, Enum):
    """Where an assistant reply sits in the dispatch lifecycle."""

    PENDING = "pending"
    FULFILLED = "fulfilled"
    EMPTY_RESULT = "empty_result"
    API_ERROR = "api_error"
    TRANSPORT_ERROR = "transport_error"


class DispatchOutcome(str, Enum):
    """Terminal result of a single send."""

    MISSING_CREDENTIALS = "missing_credentials"
    FULFILLED = "fulfilled"
    EMPTY_RESULT = "empty_result"
    API_ERROR = "api_error"
    TRANSPORT_ERROR = "transport_error"


class UserMessage(BaseModel):
    """A message authored by the human. Immutable once sent."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["user"] = "user"
    text: str = Field(description="Message body")
    id: str = Field(default_factory=lambda: str(uuid4()))
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def role(self) -> str:
        return "user"


class AssistantMessage(BaseModel):
    """A reply from the assistant.

    The text is filled in after the network call completes, so the model
    stays mutable. ``is_latest_editable`` marks the single reply the UI may
    edit or regenerate.
    """

    model_config = ConfigDict(validate_assignment=True)

    kind: Literal["assistant"] = "assistant"
    text: str = Field(default="", description="Message body")
    is_latest_editable: bool = Field(default=False)
    state: ReplyState = Field(default=ReplyState.FULFILLED)
    id: str = Field(default_factory=lambda: str(uuid4()))
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def role(self) -> str:
        return "assistant"

    @classmethod
    def placeholder(cls) -> "AssistantMessage":
        """Create the empty, editable reply shown while a request is in flight."""
        return cls(text="", is_latest_editable=True, state=ReplyState.PENDING)


class AnnouncementMessage(BaseModel):
    """A notice from the application itself. Never sent to the model."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["announcement"] = "announcement"
    text: str = Field(description="Message body")
    id: str = Field(default_factory=lambda: str(uuid4()))
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def role(self) -> str:
        return "announcement"


Message = Annotated[
    UserMessage | AssistantMessage | AnnouncementMessage,
    Field(discriminator="kind"),
]

message_adapter: TypeAdapter[Message] = TypeAdapter(Message)


class TranscriptEntry(BaseModel):
    """One role-tagged turn of the transcript sent to the model."""

    model_config = ConfigDict(frozen=True)

    role: Literal["system", "user", "assistant"] = Field(
        description="Role of the message sender: 'system', 'user', or 'assistant'"
    )
    content: str = Field(description="Content of the turn")


class CompletionContent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    content: str = ""

    @field_validator("content", mode="before")
    @classmethod
    def _none_as_empty(cls, value: object) -> object:
        return "" if value is None else value


class CompletionChoice(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: CompletionContent


class ChatCompletionResponse(BaseModel):
    """Inbound body of a successful chat-completion call.

    Only the first choice is ever consulted.
    """

    model_config = ConfigDict(extra="ignore")

    choices: list[CompletionChoice] = Field(default_factory=list)

    @field_validator("choices", mode="before")
    @classmethod
    def _none_as_empty(cls, value: object) -> object:
        return [] if value is None else value

    def first_content(self) -> str | None:
        """Content of the first choice, or None when there are no choices."""
        if not self.choices:
            return None
        return self.choices[0].message.content
