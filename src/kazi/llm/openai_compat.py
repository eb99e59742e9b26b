"""Client for OpenAI-compatible inference servers."""

from typing import Any

from openai import AsyncOpenAI

from kazi.llm.client import CompletionResponse, Message


class OpenAICompatibleClient:
    """LLM client for OpenAI or any OpenAI-compatible inference server.

    OpenAI itself, Ollama, vLLM and llama.cpp all expose
    ``/v1/chat/completions``; only the base URL and key differ.
    """

    def __init__(
        self,
        model: str,
        base_url: str = "https://api.openai.com/v1",
        api_key: str | None = None,
        timeout: int = 120,
        temperature: float = 0.7,
        max_tokens: int | None = None,
    ) -> None:
        """Initialise the client.

        Args:
            model: Model name served by the backend.
            base_url: OpenAI-compatible endpoint (must include ``/v1``).
            api_key: API key (servers without auth ignore it but the SDK requires one).
            timeout: Request timeout in seconds.
            temperature: Default sampling temperature.
            max_tokens: Default max tokens per reply.
        """
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.client = AsyncOpenAI(base_url=base_url, api_key=api_key or "none", timeout=timeout)

    def _convert_messages(self, messages: list[Message]) -> list[dict[str, Any]]:
        """Convert internal Message format to OpenAI format."""
        return [
            {
                "role": "assistant" if msg.role == "model" else msg.role,
                "content": msg.content,
            }
            for msg in messages
        ]

    async def complete(
        self,
        messages: list[Message],
        tools: list[dict[str, Any]] | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> CompletionResponse:
        """Generate a completion.

        Args:
            messages: Conversation history.
            tools: Tool declarations in OpenAI function format.
            temperature: Sampling temperature override.
            max_tokens: Maximum tokens to generate.

        Returns:
            CompletionResponse with the reply text.
        """
        params: dict[str, Any] = {
            "model": self.model,
            "messages": self._convert_messages(messages),
            "temperature": temperature if temperature is not None else self.temperature,
        }

        if tools:
            params["tools"] = tools
            params["tool_choice"] = "none"

        if max_tokens or self.max_tokens:
            params["max_tokens"] = max_tokens or self.max_tokens

        response = await self.client.chat.completions.create(**params)

        choice = response.choices[0]
        return CompletionResponse(
            content=choice.message.content or "",
            finish_reason=choice.finish_reason or "stop",
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.close()
