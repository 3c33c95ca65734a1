"""Tool definitions, handlers and dispatch.

This package provides the canned travel tools the assistant can call, the
static tool-definition list advertised to the provider, and the registry
that turns tool calls into tool results.
"""

from travel_assistant.tools.errors import (
    MalformedArgumentsError,
    ToolError,
    UnknownToolError,
    UnsupportedCurrencyPairError,
)
from travel_assistant.tools.registry import (
    ToolKind,
    ToolRegistry,
    ToolResult,
    ToolSpec,
    decode_arguments,
)
from travel_assistant.tools.travel import (
    TOOL_DEFINITIONS,
    convert_currency,
    get_flight_schedule,
    get_hotel_schedule,
)

__all__ = [
    # Registry
    "ToolKind",
    "ToolRegistry",
    "ToolResult",
    "ToolSpec",
    "decode_arguments",
    # Travel tools
    "TOOL_DEFINITIONS",
    "convert_currency",
    "get_flight_schedule",
    "get_hotel_schedule",
    # Errors
    "ToolError",
    "UnknownToolError",
    "MalformedArgumentsError",
    "UnsupportedCurrencyPairError",
]
