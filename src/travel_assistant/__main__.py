"""CLI entry point for travel-assistant.

This module provides the command-line interface for asking the assistant a
question. It can be invoked as `travel-assistant` (via the script entry
point) or `python -m travel_assistant`.
"""

import argparse
import asyncio
import logging
import sys

from pydantic import ValidationError

from travel_assistant import __version__
from travel_assistant.config import AssistantSettings
from travel_assistant.conversation.driver import ConversationDriver, DriverResult
from travel_assistant.conversation.types import Message, SystemMessage, UserMessage
from travel_assistant.llm import (
    ConfigurationError,
    OllamaClient,
    ProviderError,
    select_provider,
)
from travel_assistant.tools import ToolRegistry

logger = logging.getLogger(__name__)

DEFAULT_QUERY = (
    "I'm taking a flight from Lagos to Nairobi for a conference. I would like "
    "to know the total flight time back and forth, and the total cost of "
    "logistics for this conference if I'm staying for three days."
)

NO_ANSWER_MESSAGE = "Could not get a final response after maximum iterations."


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="travel-assistant",
        description="Answer travel questions with an LLM that calls local tools",
    )

    parser.add_argument(
        "query",
        nargs="?",
        default=DEFAULT_QUERY,
        help="Question to ask (default: a Lagos to Nairobi conference trip)",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"travel-assistant {__version__}",
    )

    parser.add_argument(
        "--system-prompt",
        type=str,
        default=None,
        help="Optional system prompt sent before the question",
    )

    parser.add_argument(
        "--provider",
        type=str,
        default=None,
        choices=["auto", "openrouter", "gemini", "ollama"],
        help="Completion provider (default: auto, can be set via LLM_PROVIDER)",
    )

    parser.add_argument(
        "--model",
        type=str,
        default=None,
        help="Model name override (can be set via LLM_MODEL_NAME)",
    )

    parser.add_argument(
        "--max-iterations",
        type=int,
        default=None,
        help="Maximum request/tool cycles (default: 10, can be set via MAX_ITERATIONS)",
    )

    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Per-request timeout in seconds (default: 60, can be set via REQUEST_TIMEOUT)",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING, can be set via LOG_LEVEL)",
    )

    return parser


def build_messages(query: str, system_prompt: str | None = None) -> list[Message]:
    """Build the initial conversation for a question."""
    messages: list[Message] = []
    if system_prompt:
        messages.append(SystemMessage(content=system_prompt))
    messages.append(UserMessage(content=query))
    return messages


async def ask(
    settings: AssistantSettings, query: str, system_prompt: str | None = None
) -> DriverResult:
    """Run one question through the conversation driver.

    Args:
        settings: Application settings
        query: The user's question
        system_prompt: Optional system prompt

    Returns:
        DriverResult: The outcome of the run

    Raises:
        ConfigurationError: If no provider can be selected
        ProviderError: If a provider request fails or a local Ollama server
            is unreachable
    """
    provider = select_provider(settings)
    try:
        if isinstance(provider, OllamaClient) and not await provider.check_connection():
            raise ProviderError(f"Could not connect to Ollama at {provider.host}")

        driver = ConversationDriver(
            provider=provider,
            registry=ToolRegistry(),
            max_iterations=settings.max_iterations,
        )
        return await driver.run(build_messages(query, system_prompt))
    finally:
        await provider.close()


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the travel-assistant CLI.

    Parses command-line arguments, runs the conversation and prints the
    final answer.

    Returns:
        int: Process exit status
    """
    args = build_parser().parse_args(argv)

    # Build settings, CLI args override environment variables
    settings_kwargs: dict[str, object] = {}
    if args.provider is not None:
        settings_kwargs["llm_provider"] = args.provider
    if args.model is not None:
        settings_kwargs["llm_model_name"] = args.model
    if args.max_iterations is not None:
        settings_kwargs["max_iterations"] = args.max_iterations
    if args.timeout is not None:
        settings_kwargs["request_timeout"] = args.timeout
    if args.log_level is not None:
        settings_kwargs["log_level"] = args.log_level

    try:
        settings = AssistantSettings(**settings_kwargs)
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    # stdout carries only the answer
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        result = asyncio.run(ask(settings, args.query, args.system_prompt))
    except ConfigurationError as e:
        print(str(e), file=sys.stderr)
        return 1
    except ProviderError as e:
        logger.debug("Provider failure", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if result.completed and result.content:
        print(result.content)
    else:
        print(NO_ANSWER_MESSAGE)
    return 0


if __name__ == "__main__":
    sys.exit(main())
