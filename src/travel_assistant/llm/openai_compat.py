"""Async client for OpenAI-compatible chat-completions endpoints.

OpenRouter and Gemini both expose the chat-completions API with tool
calling, so a single httpx-based client serves both. The client is meant
to be created once per run and closed when the run ends.
"""

import json
import logging
import uuid
from typing import Any

import httpx

from travel_assistant.conversation.types import AssistantMessage, ToolCall
from travel_assistant.llm.errors import (
    ProviderError,
    ProviderResponseError,
    ProviderTimeoutError,
)

logger = logging.getLogger(__name__)


def _new_call_id() -> str:
    return f"call_{uuid.uuid4().hex[:10]}"


def _parse_content(content: Any) -> str | None:
    """Normalize message content, which may be a string or a list of parts."""
    if content is None or isinstance(content, str):
        return content
    if isinstance(content, list):
        chunks = [part.get("text") or "" for part in content if isinstance(part, dict)]
        return "".join(chunks)
    raise ProviderResponseError(f"Unexpected message content type: {type(content).__name__}")


def _parse_tool_call(raw: Any) -> ToolCall:
    if not isinstance(raw, dict):
        raise ProviderResponseError(f"Unexpected tool call type: {type(raw).__name__}")

    function = raw.get("function") or {}
    if not isinstance(function, dict):
        raise ProviderResponseError("Tool call function must be an object")
    name = function.get("name")
    if not name:
        raise ProviderResponseError("Tool call is missing a function name")

    arguments = function.get("arguments")
    if arguments is None:
        arguments = "{}"
    elif not isinstance(arguments, str):
        # Some gateways return already-decoded arguments
        arguments = json.dumps(arguments)

    return ToolCall(id=raw.get("id") or _new_call_id(), name=name, arguments=arguments)


def parse_assistant_message(body: dict[str, Any]) -> AssistantMessage:
    """Build an AssistantMessage from a chat-completions response body.

    Args:
        body: Decoded JSON response

    Returns:
        AssistantMessage: The first choice's message

    Raises:
        ProviderResponseError: If the body has no usable message
    """
    choices = body.get("choices") or []
    if not isinstance(choices, list) or not choices:
        raise ProviderResponseError("Completion response missing choices")
    if not isinstance(choices[0], dict):
        raise ProviderResponseError("Completion response choice must be an object")

    message = choices[0].get("message")
    if not isinstance(message, dict):
        raise ProviderResponseError("Completion response missing message")

    raw_calls = message.get("tool_calls") or []
    if not isinstance(raw_calls, list):
        raise ProviderResponseError("Completion response tool_calls must be a list")
    return AssistantMessage(
        content=_parse_content(message.get("content")),
        tool_calls=[_parse_tool_call(raw) for raw in raw_calls],
    )


class OpenAICompatibleClient:
    """Async client for a chat-completions endpoint with tool calling.

    Attributes:
        name: Provider name used in logs (e.g., "openrouter")
        model: Model identifier sent with every request
        base_url: Endpoint base URL (e.g., "https://openrouter.ai/api/v1")
    """

    def __init__(
        self,
        *,
        name: str,
        api_key: str,
        base_url: str,
        model: str,
        timeout: float = 60.0,
        default_headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            name: Provider name used in logs
            api_key: Bearer credential for the endpoint
            base_url: Endpoint base URL
            model: Model identifier
            timeout: Per-request timeout in seconds
            default_headers: Extra headers sent with every request
            transport: Optional httpx transport (used by tests)
        """
        self.name = name
        self.model = model
        self.base_url = base_url.rstrip("/")

        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        headers.update(default_headers or {})

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )
        logger.info(f"{name} client initialized with base URL: {self.base_url}")

    async def complete(
        self,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]],
        tool_choice: str = "auto",
    ) -> AssistantMessage:
        """Send one chat-completions request and parse the reply.

        Args:
            messages: Full conversation history in chat-completions format
            tools: Tool definitions advertised to the model
            tool_choice: Tool-choice policy

        Returns:
            AssistantMessage: The reply, possibly carrying tool calls

        Raises:
            ProviderTimeoutError: If the request times out
            ProviderError: If the request fails or returns an error status
            ProviderResponseError: If the response body is unusable
        """
        if not messages:
            raise ProviderError("messages cannot be empty")

        payload: dict[str, Any] = {"model": self.model, "messages": messages}
        if tools:
            payload["tools"] = tools
            payload["tool_choice"] = tool_choice

        logger.debug(
            f"Sending {len(messages)} messages and {len(tools)} tools to {self.name}"
        )

        try:
            response = await self._client.post("/chat/completions", json=payload)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise ProviderTimeoutError(f"{self.name} request timed out: {e}") from e
        except httpx.HTTPStatusError as e:
            raise ProviderError(
                f"{self.name} returned HTTP {e.response.status_code}: {e.response.text}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise ProviderError(f"{self.name} request failed: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise ProviderResponseError(f"{self.name} returned a non-JSON body") from e

        if not isinstance(body, dict):
            raise ProviderResponseError(f"{self.name} returned an unexpected body")

        # Some gateways report upstream failures with a 200 and an error object
        if body.get("error"):
            error = body["error"]
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise ProviderError(f"{self.name} returned an error: {message}")

        assistant_message = parse_assistant_message(body)
        logger.debug(
            f"Received reply with {len(assistant_message.tool_calls)} tool calls"
        )
        return assistant_message

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
        logger.debug(f"{self.name} client closed")
