"""Ordered, observable store for the conversation.

This module hides how messages are kept and how observers are told about
changes. Everything else goes through ``append`` and ``update``; nothing
touches the underlying list directly.
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Literal

from ..logging import get_logger
from .models import AssistantMessage, Message, ReplyState

logger = get_logger(__name__)


@dataclass(frozen=True)
class ConversationEvent:
    """Notification sent to observers after a mutation."""

    kind: Literal["appended", "updated", "cleared"]
    message: Message | None = None
    index: int | None = None


Observer = Callable[[ConversationEvent], None]


class ConversationStore:
    """Append-only (from the outside) sequence of messages.

    At most one assistant message carries ``is_latest_editable`` at any
    time: every append clears the flag on all earlier replies first.

    The store is meant to be mutated from a single event loop; it takes
    no locks.
    """

    def __init__(self) -> None:
        self._messages: list[Message] = []
        self._observers: list[Observer] = []

    @property
    def messages(self) -> tuple[Message, ...]:
        """Snapshot of the conversation in insertion order."""
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(tuple(self._messages))

    def __getitem__(self, index: int) -> Message:
        return self._messages[index]

    def __contains__(self, message: object) -> bool:
        return any(existing is message for existing in self._messages)

    def append(self, message: Message) -> None:
        """Clear the editable flag on earlier replies, then append."""
        for index, existing in enumerate(self._messages):
            if isinstance(existing, AssistantMessage) and existing.is_latest_editable:
                existing.is_latest_editable = False
                self._notify(ConversationEvent("updated", existing, index))

        self._messages.append(message)
        self._notify(ConversationEvent("appended", message, len(self._messages) - 1))

    def update(
        self,
        message: AssistantMessage,
        *,
        text: str | None = None,
        is_latest_editable: bool | None = None,
        state: ReplyState | None = None,
    ) -> None:
        """Mutate a stored reply in place and notify observers.

        Raises:
            TypeError: If the message is not an assistant reply
            KeyError: If the message is not part of this conversation
        """
        if not isinstance(message, AssistantMessage):
            raise TypeError(f"Only assistant messages can be updated, got {message.kind!r}")

        index = self._index_of(message)
        if text is not None:
            message.text = text
        if is_latest_editable is not None:
            message.is_latest_editable = is_latest_editable
        if state is not None:
            message.state = state
        self._notify(ConversationEvent("updated", message, index))

    def clear(self) -> None:
        """Remove every message."""
        self._messages.clear()
        self._notify(ConversationEvent("cleared"))

    def latest_editable(self) -> AssistantMessage | None:
        """Return the reply currently marked editable, if any."""
        for message in reversed(self._messages):
            if isinstance(message, AssistantMessage) and message.is_latest_editable:
                return message
        return None

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register an observer; returns a callable that unsubscribes it."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _index_of(self, message: Message) -> int:
        for index, existing in enumerate(self._messages):
            if existing is message:
                return index
        raise KeyError(f"Message {message.id} is not part of this conversation")

    def _notify(self, event: ConversationEvent) -> None:
        for observer in list(self._observers):
            try:
                observer(event)
            except Exception:
                logger.exception("Conversation observer failed on %s event", event.kind)
