"""travel-assistant: a bounded tool-calling loop for LLM travel questions.

This package lets a language model answer a travel question by calling a
small set of local tools (flight schedule, hotel options, currency
conversion) until it produces a final answer or hits an iteration bound.
"""

from travel_assistant.conversation.driver import (
    ConversationDriver,
    DriverOutcome,
    DriverResult,
)

__version__ = "0.1.0"

__all__ = ["ConversationDriver", "DriverOutcome", "DriverResult", "__version__"]
