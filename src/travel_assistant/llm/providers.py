"""Provider selection.

The settings are resolved once at startup into a single completion
provider. With provider "auto" the precedence is OpenRouter, then Gemini;
if neither credential is present the configuration is rejected.
"""

import logging

from travel_assistant.config import AssistantSettings
from travel_assistant.llm.base import CompletionProvider
from travel_assistant.llm.errors import ConfigurationError
from travel_assistant.llm.ollama_client import OllamaClient
from travel_assistant.llm.openai_compat import OpenAICompatibleClient

logger = logging.getLogger(__name__)

DEFAULT_MODELS: dict[str, str] = {
    "openrouter": "openai/gpt-3.5-turbo",
    "gemini": "gemini-2.0-flash",
    "ollama": "llama3.2:latest",
}

MISSING_CREDENTIALS_MESSAGE = (
    "Either OPENROUTER_API_KEY or GEMINI_API_KEY must be set in .env file"
)


def resolve_provider_name(settings: AssistantSettings) -> str:
    """Decide which provider the settings select.

    Args:
        settings: Application settings

    Returns:
        str: One of "openrouter", "gemini", "ollama"

    Raises:
        ConfigurationError: If no usable provider is configured
    """
    provider = settings.llm_provider

    if provider == "auto":
        if settings.openrouter_api_key:
            return "openrouter"
        if settings.gemini_api_key:
            return "gemini"
        raise ConfigurationError(MISSING_CREDENTIALS_MESSAGE)

    if provider == "openrouter" and not settings.openrouter_api_key:
        raise ConfigurationError("LLM_PROVIDER=openrouter requires OPENROUTER_API_KEY")
    if provider == "gemini" and not settings.gemini_api_key:
        raise ConfigurationError("LLM_PROVIDER=gemini requires GEMINI_API_KEY")

    return provider


def select_provider(settings: AssistantSettings) -> CompletionProvider:
    """Build the completion provider selected by the settings.

    Args:
        settings: Application settings

    Returns:
        CompletionProvider: Ready-to-use provider client

    Raises:
        ConfigurationError: If no usable provider is configured
    """
    name = resolve_provider_name(settings)
    model = settings.llm_model_name or DEFAULT_MODELS[name]
    logger.info(f"Selected provider {name} with model {model}")

    if name == "openrouter":
        return OpenAICompatibleClient(
            name=name,
            api_key=settings.openrouter_api_key or "",
            base_url=settings.openrouter_base_url,
            model=model,
            timeout=settings.request_timeout,
            default_headers={
                "HTTP-Referer": settings.http_referer,
                "X-Title": settings.app_title,
            },
        )

    if name == "gemini":
        return OpenAICompatibleClient(
            name=name,
            api_key=settings.gemini_api_key or "",
            base_url=settings.gemini_base_url,
            model=model,
            timeout=settings.request_timeout,
        )

    return OllamaClient(
        host=settings.ollama_host,
        model=model,
        timeout=settings.request_timeout,
    )
