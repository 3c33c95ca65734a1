"""Pytest configuration and shared fixtures for travel-assistant tests.

This module provides common fixtures used across all test modules,
including isolated settings and scripted completion providers.
"""

import copy
import itertools
import json

import pytest

from travel_assistant.config import AssistantSettings
from travel_assistant.conversation.types import AssistantMessage, ToolCall

ENV_VARS = (
    "OPENROUTER_API_KEY",
    "GEMINI_API_KEY",
    "LLM_MODEL_NAME",
    "LLM_PROVIDER",
    "OPENROUTER_BASE_URL",
    "GEMINI_BASE_URL",
    "OLLAMA_HOST",
    "MAX_ITERATIONS",
    "REQUEST_TIMEOUT",
    "LOG_LEVEL",
)


class ScriptedProvider:
    """Completion provider that replays a fixed list of replies.

    Every request is recorded with a deep copy of the messages so tests can
    inspect exactly what was sent on each iteration.
    """

    model = "scripted-model"

    def __init__(self, replies):
        self.replies = list(replies)
        self.requests = []
        self.closed = False

    async def complete(self, messages, tools, tool_choice="auto"):
        self.requests.append(
            {
                "messages": copy.deepcopy(messages),
                "tools": tools,
                "tool_choice": tool_choice,
            }
        )
        if not self.replies:
            raise AssertionError("ScriptedProvider ran out of replies")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def close(self):
        self.closed = True


class LoopingProvider(ScriptedProvider):
    """Completion provider that requests a tool call on every turn."""

    def __init__(self):
        super().__init__([])
        self._ids = itertools.count(1)

    async def complete(self, messages, tools, tool_choice="auto"):
        self.requests.append(
            {"messages": copy.deepcopy(messages), "tools": tools, "tool_choice": tool_choice}
        )
        return tool_call_reply(
            ("get_hotel_schedule", {"city": "Nairobi"}), id_prefix=f"loop{next(self._ids)}"
        )


def tool_call_reply(*calls, content=None, id_prefix="call"):
    """Build an assistant reply requesting the given (name, arguments) calls.

    Arguments may be a dict (serialized to JSON) or a raw string.
    """
    tool_calls = []
    for index, (name, arguments) in enumerate(calls):
        raw = arguments if isinstance(arguments, str) else json.dumps(arguments)
        tool_calls.append(ToolCall(id=f"{id_prefix}_{index}", name=name, arguments=raw))
    return AssistantMessage(content=content, tool_calls=tool_calls)


def text_reply(content):
    """Build an assistant reply without tool calls."""
    return AssistantMessage(content=content)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every environment variable the settings read."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def test_settings(clean_env):
    """Create settings isolated from the environment and any .env file.

    Returns:
        AssistantSettings: Settings instance configured for testing.
    """
    return AssistantSettings(
        _env_file=None,
        openrouter_api_key="test-openrouter-key",
        max_iterations=10,
        request_timeout=5.0,
        log_level="DEBUG",
    )
