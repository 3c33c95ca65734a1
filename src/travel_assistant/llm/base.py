"""Completion provider capability consumed by the conversation driver."""

from typing import Any, Protocol, runtime_checkable

from travel_assistant.conversation.types import AssistantMessage


@runtime_checkable
class CompletionProvider(Protocol):
    """A backend that returns the next assistant message for a history."""

    model: str

    async def complete(
        self,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]],
        tool_choice: str = "auto",
    ) -> AssistantMessage:
        """Request the next assistant message.

        Args:
            messages: Full conversation history in chat-completions format
            tools: Static tool-definition list
            tool_choice: Tool-choice policy, "auto" lets the model decide

        Returns:
            AssistantMessage: The reply, possibly carrying tool calls

        Raises:
            ProviderError: If the request fails
        """
        ...

    async def close(self) -> None:
        """Release any network resources held by the provider."""
        ...
