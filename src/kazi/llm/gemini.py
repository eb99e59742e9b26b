"""Google Gemini LLM client using httpx.

Implements the LLMClient protocol for the Gemini ``generateContent`` REST
endpoint. Uses httpx directly rather than the Google SDK.
"""

import logging
from typing import Any

import httpx

from kazi.llm.client import CompletionResponse, Message

logger = logging.getLogger(__name__)

GEMINI_API_URL = "https://generativelanguage.googleapis.com"
GEMINI_API_VERSION = "v1beta"

_FINISH_REASONS = {
    "STOP": "stop",
    "MAX_TOKENS": "length",
    "SAFETY": "content_filter",
    "RECITATION": "content_filter",
}


def _upper_types(schema: dict[str, Any]) -> dict[str, Any]:
    """Rewrite JSON Schema type names into Gemini's upper-case enum values."""
    converted: dict[str, Any] = {}
    for key, value in schema.items():
        if key == "type" and isinstance(value, str):
            converted[key] = value.upper()
        elif key == "properties" and isinstance(value, dict):
            converted[key] = {name: _upper_types(prop) for name, prop in value.items()}
        elif key == "items" and isinstance(value, dict):
            converted[key] = _upper_types(value)
        else:
            converted[key] = value
    return converted


class GeminiClient:
    """LLM client for the Google Gemini API."""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-1.5-flash",
        base_url: str = GEMINI_API_URL,
        max_tokens: int | None = None,
        timeout: int = 120,
        temperature: float = 0.7,
    ):
        """Initialize Gemini client.

        Args:
            api_key: Google AI Studio API key
            model: Model name (e.g., "gemini-1.5-flash")
            base_url: API root URL
            max_tokens: Default max output tokens (model default if None)
            timeout: Request timeout in seconds
            temperature: Default sampling temperature
        """
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature

        self.client = httpx.AsyncClient(
            base_url=base_url,
            headers={
                "x-goog-api-key": api_key,
                "content-type": "application/json",
            },
            timeout=httpx.Timeout(timeout),
        )

    def _convert_messages(
        self, messages: list[Message]
    ) -> tuple[str | None, list[dict[str, Any]]]:
        """Convert internal Message format to Gemini contents.

        Gemini takes the system instruction separately from the contents
        array, so we extract it. Contents must alternate between user and
        model, so consecutive messages with the same role (a plan followed by
        an action) become parts of one entry.

        Args:
            messages: List of Message objects

        Returns:
            Tuple of (system_instruction, contents)
        """
        system_instruction = None
        contents: list[dict[str, Any]] = []

        for msg in messages:
            if msg.role == "system":
                system_instruction = msg.content
                continue

            role = "model" if msg.role in ("model", "assistant") else "user"
            if contents and contents[-1]["role"] == role:
                contents[-1]["parts"].append({"text": msg.content})
            else:
                contents.append({"role": role, "parts": [{"text": msg.content}]})

        return system_instruction, contents

    def _convert_tools(self, tools: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Convert OpenAI function format to Gemini function declarations.

        Args:
            tools: Tools in OpenAI format

        Returns:
            Gemini ``tools`` entry holding the function declarations
        """
        declarations = []
        for tool in tools:
            func = tool.get("function", tool)
            declaration: dict[str, Any] = {
                "name": func["name"],
                "description": func.get("description", ""),
            }
            parameters = func.get("parameters")
            # Gemini rejects OBJECT schemas without properties
            if parameters and parameters.get("properties"):
                declaration["parameters"] = _upper_types(parameters)
            declarations.append(declaration)
        return [{"functionDeclarations": declarations}]

    def _parse_response(self, data: dict[str, Any]) -> CompletionResponse:
        """Extract reply text and finish reason from a generateContent response."""
        candidates = data.get("candidates") or []
        if not candidates:
            block_reason = data.get("promptFeedback", {}).get("blockReason", "no candidates")
            logger.warning("Gemini returned no candidates: %s", block_reason)
            return CompletionResponse(content="", finish_reason="content_filter")

        candidate = candidates[0]
        parts = candidate.get("content", {}).get("parts", [])
        text = "".join(part.get("text", "") for part in parts)

        finish = candidate.get("finishReason", "STOP")
        return CompletionResponse(
            content=text,
            finish_reason=_FINISH_REASONS.get(finish, finish.lower()),
        )

    async def complete(
        self,
        messages: list[Message],
        tools: list[dict[str, Any]] | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> CompletionResponse:
        """Generate a completion from Gemini.

        Args:
            messages: Conversation history
            tools: Tool declarations in OpenAI function format
            temperature: Sampling temperature override
            max_tokens: Maximum tokens to generate

        Returns:
            CompletionResponse with the reply text
        """
        system_instruction, contents = self._convert_messages(messages)

        generation_config: dict[str, Any] = {
            "temperature": temperature if temperature is not None else self.temperature,
        }
        if max_tokens or self.max_tokens:
            generation_config["maxOutputTokens"] = max_tokens or self.max_tokens

        payload: dict[str, Any] = {
            "contents": contents,
            "generationConfig": generation_config,
        }

        if system_instruction:
            payload["systemInstruction"] = {"parts": [{"text": system_instruction}]}

        if tools:
            payload["tools"] = self._convert_tools(tools)
            # Declared for context only; replies must stay plain text
            payload["toolConfig"] = {"functionCallingConfig": {"mode": "NONE"}}

        url = f"/{GEMINI_API_VERSION}/models/{self.model}:generateContent"
        logger.debug("POST %s with %d content entries", url, len(contents))

        response = await self.client.post(url, json=payload)
        response.raise_for_status()
        return self._parse_response(response.json())

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.aclose()
