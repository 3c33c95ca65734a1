"""Configuration module for travel-assistant using pydantic-settings."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ProviderName = Literal["auto", "openrouter", "gemini", "ollama"]


class AssistantSettings(BaseSettings):
    """Main configuration settings for travel-assistant.

    Settings are read from environment variables (and a local .env file)
    without a prefix, so OPENROUTER_API_KEY overrides openrouter_api_key.
    """

    # Credentials
    openrouter_api_key: str | None = None
    gemini_api_key: str | None = None

    # Provider selection
    llm_provider: ProviderName = "auto"
    llm_model_name: str | None = None

    # Endpoints
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta/openai"
    ollama_host: str = "http://localhost:11434"

    # OpenRouter attribution headers
    http_referer: str = "http://localhost:3000"
    app_title: str = "Flight and Hotel Booking Assistant"

    # Conversation loop
    max_iterations: int = Field(default=10, ge=1)
    request_timeout: float = Field(default=60.0, gt=0)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
