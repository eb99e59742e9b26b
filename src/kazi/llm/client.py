"""LLM client protocol and data types."""

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass
class Message:
    """A message in the conversation."""

    role: str  # "system", "user", "model"
    content: str


@dataclass
class CompletionResponse:
    """Response from LLM completion."""

    content: str
    finish_reason: str = "stop"


class LLMClient(Protocol):
    """Protocol for LLM client implementations.

    Tools are declared to the model so it knows their names and argument
    shapes, but native function calling stays disabled: the model answers in
    plain text carrying one structured JSON message.
    """

    async def complete(
        self,
        messages: list[Message],
        tools: list[dict[str, Any]] | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> CompletionResponse:
        """Generate a completion from the LLM.

        Args:
            messages: Conversation history, optionally led by a system message
            tools: Tool declarations in OpenAI function format
            temperature: Sampling temperature override
            max_tokens: Maximum tokens to generate

        Returns:
            CompletionResponse with the reply text
        """
        ...

    async def close(self) -> None:
        """Release network resources held by the client."""
        ...
