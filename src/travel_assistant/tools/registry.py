"""Tool registry and dispatch.

The registry resolves a tool name to a closed ToolKind, decodes and
validates the argument payload, invokes the handler and serializes the
outcome. Every tool-level failure becomes a ToolResult with success=False
instead of an exception.
"""

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from pydantic import BaseModel, ValidationError

from travel_assistant.conversation.types import ToolCall, ToolMessage
from travel_assistant.tools.errors import (
    MalformedArgumentsError,
    ToolError,
    UnknownToolError,
)
from travel_assistant.tools.travel import (
    TOOL_DEFINITIONS,
    ConvertCurrencyArgs,
    FlightScheduleArgs,
    HotelScheduleArgs,
    convert_currency,
    get_flight_schedule,
    get_hotel_schedule,
)

logger = logging.getLogger(__name__)


class ToolKind(str, Enum):
    """Closed set of tools the assistant can call."""

    FLIGHT_SCHEDULE = "get_flight_schedule"
    HOTEL_SCHEDULE = "get_hotel_schedule"
    CONVERT_CURRENCY = "convert_currency"
    UNKNOWN = "unknown"

    @classmethod
    def from_name(cls, name: str) -> "ToolKind":
        """Resolve a tool name, falling back to UNKNOWN."""
        for kind in cls:
            if kind is not cls.UNKNOWN and kind.value == name:
                return kind
        return cls.UNKNOWN


@dataclass(frozen=True)
class ToolSpec:
    """A registered tool: its argument model and handler."""

    args_model: type[BaseModel]
    handler: Callable[..., dict[str, Any]]


@dataclass
class ToolResult:
    """Outcome of dispatching a single ToolCall."""

    tool_call_id: str
    tool_name: str
    content: str
    success: bool = True
    error_code: str | None = None

    def to_message(self) -> ToolMessage:
        """Build the tool message answering the originating call."""
        return ToolMessage(
            tool_call_id=self.tool_call_id,
            tool_name=self.tool_name,
            content=self.content,
        )


def decode_arguments(raw: str | None) -> dict[str, Any]:
    """Decode a serialized argument payload into a dict.

    An empty payload is treated as an empty object.

    Raises:
        MalformedArgumentsError: If the payload is not a JSON object
    """
    if raw is None or not raw.strip():
        return {}

    try:
        decoded = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedArgumentsError(
            f"Arguments are not valid JSON: {e.msg}",
            details={"arguments": raw},
        ) from e

    if not isinstance(decoded, dict):
        raise MalformedArgumentsError(
            "Arguments must be a JSON object",
            details={"arguments": raw},
        )
    return decoded


class ToolRegistry:
    """Maps tool kinds to handlers and dispatches tool calls."""

    def __init__(
        self,
        tools: dict[ToolKind, ToolSpec] | None = None,
        definitions: list[dict[str, Any]] | None = None,
    ) -> None:
        """Initialize the registry.

        Args:
            tools: Mapping of tool kind to spec (default: the travel tools)
            definitions: Tool definitions advertised to the provider
                         (default: TOOL_DEFINITIONS)
        """
        if tools is None:
            tools = {
                ToolKind.FLIGHT_SCHEDULE: ToolSpec(
                    FlightScheduleArgs, get_flight_schedule
                ),
                ToolKind.HOTEL_SCHEDULE: ToolSpec(HotelScheduleArgs, get_hotel_schedule),
                ToolKind.CONVERT_CURRENCY: ToolSpec(
                    ConvertCurrencyArgs, convert_currency
                ),
            }
        if ToolKind.UNKNOWN in tools:
            raise ValueError("ToolKind.UNKNOWN cannot be registered")

        self._tools = dict(tools)
        self._definitions = list(definitions if definitions is not None else TOOL_DEFINITIONS)

    @property
    def definitions(self) -> list[dict[str, Any]]:
        """Static tool-definition list sent with every request."""
        return list(self._definitions)

    @property
    def names(self) -> list[str]:
        return [kind.value for kind in self._tools]

    def execute(self, name: str, raw_arguments: str | None) -> dict[str, Any]:
        """Resolve, validate and run a tool, returning its raw result.

        Args:
            name: Requested tool name
            raw_arguments: Serialized argument payload

        Returns:
            dict: The handler's result

        Raises:
            UnknownToolError: If no handler is registered for the name
            MalformedArgumentsError: If the arguments fail to decode or validate
            ToolError: Any tool-internal failure
        """
        kind = ToolKind.from_name(name)
        spec = self._tools.get(kind)
        if spec is None:
            raise UnknownToolError(
                f"Unknown tool: {name}",
                details={"tool_name": name, "available_tools": self.names},
            )

        arguments = decode_arguments(raw_arguments)
        try:
            validated = spec.args_model.model_validate(arguments)
        except ValidationError as e:
            raise MalformedArgumentsError(
                f"Invalid arguments for {name}",
                details={
                    "errors": [
                        {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
                        for err in e.errors()
                    ]
                },
            ) from e

        return spec.handler(**validated.model_dump())

    def dispatch(self, tool_call: ToolCall) -> ToolResult:
        """Execute a tool call and serialize its outcome.

        Tool-level failures are returned as a failed ToolResult whose
        content is an error envelope; they are never raised.

        Args:
            tool_call: The call requested by the assistant

        Returns:
            ToolResult answering the call
        """
        logger.info(f"Dispatching tool {tool_call.name} (call {tool_call.id})")

        try:
            result = self.execute(tool_call.name, tool_call.arguments)
        except ToolError as e:
            logger.warning(f"Tool {tool_call.name} failed [{e.code}]: {e.message}")
            return ToolResult(
                tool_call_id=tool_call.id,
                tool_name=tool_call.name,
                content=json.dumps(e.to_payload()),
                success=False,
                error_code=e.code,
            )
        except Exception as e:
            logger.error(f"Error executing tool {tool_call.name}: {e}")
            error = ToolError(f"Tool execution failed: {e}")
            return ToolResult(
                tool_call_id=tool_call.id,
                tool_name=tool_call.name,
                content=json.dumps(error.to_payload()),
                success=False,
                error_code=error.code,
            )

        logger.debug(f"Tool {tool_call.name} returned: {result}")
        return ToolResult(
            tool_call_id=tool_call.id,
            tool_name=tool_call.name,
            content=json.dumps(result),
        )
