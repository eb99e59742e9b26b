"""LLM client implementations."""

from .client import CompletionResponse, LLMClient, Message
from .factory import create_llm_client
from .gemini import GeminiClient
from .openai_compat import OpenAICompatibleClient

__all__ = [
    "CompletionResponse",
    "GeminiClient",
    "LLMClient",
    "Message",
    "OpenAICompatibleClient",
    "create_llm_client",
]
