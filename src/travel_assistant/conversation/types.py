"""Data types for the tool-calling conversation.

This module defines the message dataclasses exchanged with a completion
provider, the ToolCall record carried by assistant messages, and the
conversion of each message to the chat-completions wire format.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ToolCall:
    """A tool invocation requested by the assistant.

    Attributes:
        id: Opaque identifier assigned by the provider
        name: Name of the requested tool
        arguments: Serialized (JSON) argument payload, decoded at dispatch time
    """

    id: str
    name: str
    arguments: str = "{}"

    def to_wire(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": "function",
            "function": {"name": self.name, "arguments": self.arguments},
        }


@dataclass
class UserMessage:
    """A message from the user."""

    role: str = "user"
    content: str = ""

    def __post_init__(self) -> None:
        """Validate role is always 'user'."""
        self.role = "user"

    def to_wire(self) -> dict[str, Any]:
        return {"role": self.role, "content": self.content}


@dataclass
class SystemMessage:
    """A system prompt message."""

    role: str = "system"
    content: str = ""

    def __post_init__(self) -> None:
        """Validate role is always 'system'."""
        self.role = "system"

    def to_wire(self) -> dict[str, Any]:
        return {"role": self.role, "content": self.content}


@dataclass
class AssistantMessage:
    """A response from the LLM assistant."""

    role: str = "assistant"
    content: str | None = None
    tool_calls: list[ToolCall] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate role is always 'assistant'."""
        self.role = "assistant"

    def has_tool_calls(self) -> bool:
        """Check if the assistant requested any tool calls."""
        return bool(self.tool_calls)

    def to_wire(self) -> dict[str, Any]:
        wire: dict[str, Any] = {"role": self.role, "content": self.content}
        if self.tool_calls:
            wire["tool_calls"] = [call.to_wire() for call in self.tool_calls]
        return wire


@dataclass
class ToolMessage:
    """A tool execution result answering one ToolCall."""

    role: str = "tool"
    tool_call_id: str = ""
    tool_name: str = ""
    content: str = ""

    def __post_init__(self) -> None:
        """Validate role is always 'tool'."""
        self.role = "tool"

    def to_wire(self) -> dict[str, Any]:
        # tool_name is local bookkeeping; the endpoint only needs the id
        return {
            "role": self.role,
            "tool_call_id": self.tool_call_id,
            "content": self.content,
        }


# Union type for all message types
Message = UserMessage | SystemMessage | AssistantMessage | ToolMessage
