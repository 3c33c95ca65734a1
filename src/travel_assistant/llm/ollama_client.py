"""Async Ollama client wrapper.

This module provides a completion provider backed by ollama.AsyncClient,
for running the assistant against a local model with tool support.
"""

import json
import logging
import uuid
from typing import Any

import httpx
import ollama

from travel_assistant.conversation.types import AssistantMessage, ToolCall
from travel_assistant.llm.errors import ProviderError, ProviderTimeoutError

logger = logging.getLogger(__name__)


def _get_value(obj: Any, key: str, default: Any = None) -> Any:
    """Read a value from either an object attribute or a dict key."""
    if isinstance(obj, dict):
        return obj.get(key, default)
    if hasattr(obj, key):
        return getattr(obj, key, default)
    return default


def _to_ollama_messages(messages: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Convert chat-completions messages to Ollama format.

    Ollama expects tool-call arguments as objects rather than JSON strings
    and has no tool_call_id field. Tool results are matched to calls by
    tool_name instead, recovered from the preceding assistant tool calls.

    Args:
        messages: Messages in chat-completions format

    Returns:
        List of message dicts in Ollama format
    """
    ollama_messages = []
    call_names: dict[str, str] = {}

    for msg in messages:
        ollama_msg: dict[str, Any] = {
            "role": msg["role"],
            "content": msg.get("content") or "",
        }

        if msg.get("tool_calls"):
            calls = []
            for call in msg["tool_calls"]:
                function = call.get("function", {})
                if call.get("id"):
                    call_names[call["id"]] = function.get("name")
                try:
                    arguments = json.loads(function.get("arguments") or "{}")
                except json.JSONDecodeError:
                    arguments = {}
                calls.append(
                    {"function": {"name": function.get("name"), "arguments": arguments}}
                )
            ollama_msg["tool_calls"] = calls

        if msg["role"] == "tool":
            tool_name = msg.get("tool_name") or call_names.get(msg.get("tool_call_id"))
            if tool_name:
                ollama_msg["tool_name"] = tool_name

        ollama_messages.append(ollama_msg)

    return ollama_messages


class OllamaClient:
    """Async completion provider for a local Ollama server.

    Attributes:
        host: The Ollama server URL (e.g., "http://localhost:11434")
        model: Model name used for every request
        _client: The underlying ollama.AsyncClient instance
    """

    name = "ollama"

    def __init__(self, host: str, model: str, timeout: float = 60.0) -> None:
        """Initialize the Ollama client.

        Args:
            host: The Ollama server URL
            model: Model name (e.g., "llama3.2:latest")
            timeout: Per-request timeout in seconds
        """
        self.host = host
        self.model = model
        self._client = ollama.AsyncClient(host=host, timeout=timeout)
        logger.info(f"OllamaClient initialized with host: {host}")

    async def check_connection(self) -> bool:
        """Check if the Ollama server is reachable.

        Returns:
            bool: True if connection is successful, False otherwise
        """
        try:
            await self._client.list()
            logger.debug("Ollama connection check: successful")
            return True
        except (ollama.ResponseError, httpx.HTTPError, ConnectionError) as e:
            logger.warning(f"Ollama connection check failed: {e}")
            return False

    async def complete(
        self,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]],
        tool_choice: str = "auto",
    ) -> AssistantMessage:
        """Request the next assistant message from Ollama.

        Ollama always lets the model decide whether to call a tool, so only
        the "auto" tool-choice policy is honoured.

        Args:
            messages: Full conversation history in chat-completions format
            tools: Tool definitions advertised to the model
            tool_choice: Tool-choice policy

        Returns:
            AssistantMessage: The reply, possibly carrying tool calls

        Raises:
            ProviderTimeoutError: If the request times out
            ProviderError: If the Ollama API request fails
        """
        if tool_choice != "auto":
            logger.debug(f"Ollama ignores tool_choice={tool_choice!r}")

        logger.debug(f"Sending {len(messages)} messages to Ollama model {self.model}")

        try:
            response = await self._client.chat(
                model=self.model,
                messages=_to_ollama_messages(messages),
                tools=tools or None,
                stream=False,
            )
        except httpx.TimeoutException as e:
            raise ProviderTimeoutError(f"Ollama request timed out: {e}") from e
        except ollama.ResponseError as e:
            raise ProviderError(
                f"Ollama API error: {e.error}", status_code=e.status_code
            ) from e
        except (httpx.HTTPError, ConnectionError) as e:
            raise ProviderError(f"Ollama request failed: {e}") from e

        message = _get_value(response, "message")
        if message is None:
            raise ProviderError("Ollama response missing message")

        tool_calls = []
        for call in _get_value(message, "tool_calls") or []:
            function = _get_value(call, "function")
            arguments = _get_value(function, "arguments") or {}
            tool_calls.append(
                ToolCall(
                    # Ollama does not assign call ids
                    id=f"call_{uuid.uuid4().hex[:10]}",
                    name=_get_value(function, "name", ""),
                    arguments=json.dumps(dict(arguments)),
                )
            )

        return AssistantMessage(
            content=_get_value(message, "content"),
            tool_calls=tool_calls,
        )

    async def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._client.close()
        logger.debug("OllamaClient closed")
