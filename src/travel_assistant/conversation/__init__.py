"""Conversation messages, history and the tool-calling driver.

The message types and history live here; the driver itself is imported
from travel_assistant.conversation.driver because it depends on the
provider and tool packages, which in turn depend on these types.
"""

from travel_assistant.conversation.history import ConversationHistory
from travel_assistant.conversation.types import (
    AssistantMessage,
    Message,
    SystemMessage,
    ToolCall,
    ToolMessage,
    UserMessage,
)

__all__ = [
    "ConversationHistory",
    # Message types
    "Message",
    "UserMessage",
    "SystemMessage",
    "AssistantMessage",
    "ToolMessage",
    "ToolCall",
]
