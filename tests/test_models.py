"""Unit tests for the message and wire models."""
import pytest
from pydantic import ValidationError

from clippy.chat import (
    AnnouncementMessage,
    AssistantMessage,
    ChatCompletionResponse,
    ReplyState,
    TranscriptEntry,
    UserMessage,
    message_adapter,
)


class TestMessages:
    """Tests for the message variants."""

    def test_user_message_is_immutable(self):
        """Test that a sent user message cannot be edited."""
        message = UserMessage(text="hello")

        with pytest.raises(ValidationError):
            message.text = "changed"  # type: ignore[misc]

    def test_announcement_is_immutable(self):
        """Test that announcements cannot be edited."""
        message = AnnouncementMessage(text="configure me")

        with pytest.raises(ValidationError):
            message.text = "changed"  # type: ignore[misc]

    def test_assistant_message_is_mutable(self):
        """Test that replies can be filled in after creation."""
        message = AssistantMessage()
        message.text = "Hi!"
        message.is_latest_editable = True

        assert message.text == "Hi!"
        assert message.is_latest_editable

    def test_placeholder_defaults(self):
        """Test that a placeholder is empty, editable and pending."""
        placeholder = AssistantMessage.placeholder()

        assert placeholder.text == ""
        assert placeholder.is_latest_editable
        assert placeholder.state == ReplyState.PENDING

    def test_roles(self):
        """Test that each variant reports its role tag."""
        assert UserMessage(text="a").role == "user"
        assert AssistantMessage(text="b").role == "assistant"
        assert AnnouncementMessage(text="c").role == "announcement"

    def test_ids_are_unique(self):
        """Test that every message gets its own id."""
        assert UserMessage(text="a").id != UserMessage(text="a").id

    @pytest.mark.parametrize(
        "kind,cls",
        [
            ("user", UserMessage),
            ("assistant", AssistantMessage),
            ("announcement", AnnouncementMessage),
        ],
    )
    def test_discriminated_union(self, kind, cls):
        """Test that the kind tag selects the variant."""
        message = message_adapter.validate_python({"kind": kind, "text": "x"})
        assert isinstance(message, cls)

    def test_unknown_kind_rejected(self):
        """Test that the variant set is closed."""
        with pytest.raises(ValidationError):
            message_adapter.validate_python({"kind": "tool", "text": "x"})


class TestTranscriptEntry:
    """Tests for TranscriptEntry."""

    def test_rejects_unknown_role(self):
        """Test that only system, user and assistant roles are allowed."""
        with pytest.raises(ValidationError):
            TranscriptEntry(role="announcement", content="x")  # type: ignore[arg-type]


class TestChatCompletionResponse:
    """Tests for parsing the inbound body."""

    def test_first_choice_is_used(self):
        """Test that only the first choice is consulted."""
        response = ChatCompletionResponse.model_validate({
            "choices": [
                {"message": {"content": "first"}},
                {"message": {"content": "second"}},
            ]
        })
        assert response.first_content() == "first"

    def test_missing_choices(self):
        """Test that an absent choices list counts as empty."""
        assert ChatCompletionResponse.model_validate({}).first_content() is None
        assert ChatCompletionResponse.model_validate({"choices": None}).first_content() is None

    def test_null_content_is_empty_string(self):
        """Test that a null content still counts as a choice."""
        response = ChatCompletionResponse.model_validate({"choices": [{"message": {"content": None}}]})
        assert response.first_content() == ""

    def test_choice_requires_message(self):
        """Test that a choice without its message does not validate."""
        with pytest.raises(ValidationError):
            ChatCompletionResponse.model_validate({"choices": [{}]})

    def test_extra_fields_ignored(self):
        """Test that provider-specific fields do not break parsing."""
        response = ChatCompletionResponse.model_validate({
            "id": "cmpl-1",
            "usage": {"total_tokens": 3},
            "choices": [{"index": 0, "finish_reason": "stop", "message": {"role": "assistant", "content": "ok"}}],
        })
        assert response.first_content() == "ok"
