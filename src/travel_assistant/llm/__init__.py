"""Completion provider clients and provider selection.

This package provides async clients for OpenAI-compatible endpoints
(OpenRouter, Gemini) and for a local Ollama server, plus the selection
logic that turns settings into a single provider.
"""

from travel_assistant.llm.base import CompletionProvider
from travel_assistant.llm.errors import (
    ConfigurationError,
    ProviderError,
    ProviderResponseError,
    ProviderTimeoutError,
)
from travel_assistant.llm.ollama_client import OllamaClient
from travel_assistant.llm.openai_compat import (
    OpenAICompatibleClient,
    parse_assistant_message,
)
from travel_assistant.llm.providers import resolve_provider_name, select_provider

__all__ = [
    "CompletionProvider",
    "OpenAICompatibleClient",
    "OllamaClient",
    "parse_assistant_message",
    "resolve_provider_name",
    "select_provider",
    "ConfigurationError",
    "ProviderError",
    "ProviderResponseError",
    "ProviderTimeoutError",
]
