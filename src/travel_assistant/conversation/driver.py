"""Bounded tool-calling conversation loop.

The driver sends the full history and tool definitions to a completion
provider, appends each assistant reply, dispatches any requested tool calls
and repeats until the model answers without tool calls or the iteration
bound is reached. Each iteration issues exactly one provider request and
drains every tool call of that turn before the next request.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from travel_assistant.conversation.history import ConversationHistory
from travel_assistant.conversation.types import AssistantMessage, Message
from travel_assistant.llm.base import CompletionProvider
from travel_assistant.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITERATIONS = 10


class DriverState(str, Enum):
    """States of a driver run."""

    AWAITING_RESPONSE = "awaiting_response"
    DISPATCHING_TOOLS = "dispatching_tools"
    DONE_SUCCESS = "done_success"
    DONE_EXHAUSTED = "done_exhausted"


class DriverOutcome(str, Enum):
    """How a driver run ended."""

    COMPLETED = "completed"
    EXHAUSTED = "exhausted"


@dataclass
class DriverResult:
    """Result of one driver run.

    Attributes:
        outcome: COMPLETED with a final answer, or EXHAUSTED without one
        content: Final answer text, None when the run was exhausted
        iterations: Number of provider requests issued
        history: The full conversation accumulated by the run
    """

    outcome: DriverOutcome
    content: str | None
    iterations: int
    history: ConversationHistory

    @property
    def completed(self) -> bool:
        return self.outcome is DriverOutcome.COMPLETED


class ConversationDriver:
    """Drives a bounded request / tool-dispatch cycle to completion."""

    def __init__(
        self,
        provider: CompletionProvider,
        registry: ToolRegistry | None = None,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
    ) -> None:
        """Initialize the driver.

        Args:
            provider: Completion provider queried once per iteration
            registry: Tool registry (default: the travel tools)
            max_iterations: Maximum number of provider requests per run

        Raises:
            ValueError: If max_iterations is less than 1
        """
        if max_iterations < 1:
            raise ValueError(f"max_iterations must be at least 1, got {max_iterations}")

        self.provider = provider
        self.registry = registry or ToolRegistry()
        self.max_iterations = max_iterations
        self.state = DriverState.AWAITING_RESPONSE

    async def run(
        self, messages: ConversationHistory | Iterable[Message]
    ) -> DriverResult:
        """Run the conversation loop.

        Args:
            messages: Initial history, typically a single user message. It is
                      copied, never mutated.

        Returns:
            DriverResult: The final answer or an exhausted outcome

        Raises:
            ProviderError: If the provider request fails
        """
        if isinstance(messages, ConversationHistory):
            history = messages.copy()
        else:
            history = ConversationHistory(messages)

        if len(history) == 0:
            raise ValueError("Conversation history cannot be empty")

        tools = self.registry.definitions
        self.state = DriverState.AWAITING_RESPONSE
        iteration = 0

        while iteration < self.max_iterations:
            iteration += 1
            logger.info(
                f"Iteration {iteration}/{self.max_iterations}: "
                f"sending {len(history)} messages"
            )

            reply = await self.provider.complete(
                history.to_wire(), tools, tool_choice="auto"
            )
            history.append(reply)

            if not reply.has_tool_calls():
                self.state = DriverState.DONE_SUCCESS
                logger.info(f"Final answer received after {iteration} iterations")
                return DriverResult(
                    outcome=DriverOutcome.COMPLETED,
                    content=reply.content or "",
                    iterations=iteration,
                    history=history,
                )

            self.state = DriverState.DISPATCHING_TOOLS
            self._dispatch_tools(reply, history)
            self.state = DriverState.AWAITING_RESPONSE

        self.state = DriverState.DONE_EXHAUSTED
        logger.warning(
            f"No final answer after {self.max_iterations} iterations"
        )
        return DriverResult(
            outcome=DriverOutcome.EXHAUSTED,
            content=None,
            iterations=iteration,
            history=history,
        )

    def _dispatch_tools(
        self, reply: AssistantMessage, history: ConversationHistory
    ) -> None:
        """Answer every tool call of one assistant turn, in order."""
        logger.info(f"Dispatching {len(reply.tool_calls)} tool calls")

        for tool_call in reply.tool_calls:
            result = self.registry.dispatch(tool_call)
            history.append(result.to_message())
