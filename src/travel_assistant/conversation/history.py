"""Append-only conversation history.

The history is owned by one driver run. Messages can be appended at the
tail and read back, but never removed or replaced.
"""

import logging
from typing import Any, Iterable, Iterator

from travel_assistant.conversation.types import Message

logger = logging.getLogger(__name__)


class ConversationHistory:
    """Ordered, append-only sequence of conversation messages."""

    def __init__(self, messages: Iterable[Message] | None = None) -> None:
        """Initialize the history.

        Args:
            messages: Initial messages, copied into a new list so the caller's
                      sequence is never aliased
        """
        self._messages: list[Message] = list(messages or [])

    def append(self, message: Message) -> None:
        """Append a message at the tail of the history.

        Args:
            message: The message to add
        """
        self._messages.append(message)
        logger.debug(
            f"Appended {message.role} message, history length: {len(self._messages)}"
        )

    def copy(self) -> "ConversationHistory":
        """Return an independent history holding the same messages."""
        return ConversationHistory(self._messages)

    def to_wire(self) -> list[dict[str, Any]]:
        """Convert every message to the chat-completions wire format.

        Returns:
            List of message dicts: [{"role": "...", "content": "..."}, ...]
        """
        return [message.to_wire() for message in self._messages]

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(tuple(self._messages))

    def __getitem__(self, index: int) -> Message:
        return self._messages[index]

    def __repr__(self) -> str:
        return f"ConversationHistory(messages={len(self._messages)})"
