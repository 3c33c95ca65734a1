"""Tool-level error kinds.

These errors never abort a conversation. The registry converts them into
failed tool results that are fed back to the model.
"""

from typing import Any


class ToolError(Exception):
    """Base class for recoverable tool dispatch failures."""

    code = "tool_execution_error"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_payload(self) -> dict[str, Any]:
        """Build the error envelope sent back as tool content."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
            }
        }


class UnknownToolError(ToolError):
    """No handler is registered for the requested tool name."""

    code = "unknown_tool"


class MalformedArgumentsError(ToolError):
    """The tool-call argument payload could not be decoded or validated."""

    code = "malformed_arguments"


class UnsupportedCurrencyPairError(ToolError):
    """No conversion rate is defined for the requested currency pair."""

    code = "unsupported_currency_pair"
