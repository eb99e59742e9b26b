"""Factory function for creating LLM clients from configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from kazi.llm.gemini import GeminiClient
from kazi.llm.openai_compat import OpenAICompatibleClient

if TYPE_CHECKING:
    from kazi.config.schema import KaziConfig
    from kazi.llm.client import LLMClient


def create_llm_client(config: KaziConfig, api_key: str | None) -> LLMClient:
    """Create an LLM client based on configuration.

    Reads ``config.model.backend`` and returns the matching client,
    configured from the corresponding backend section.

    Args:
        config: Kazi configuration.
        api_key: Provider secret, as returned by ``resolve_api_key``.

    Returns:
        An LLM client for the configured backend.

    Raises:
        ValueError: If the backend is not recognised or needs a missing key.
    """
    backend = config.model.backend

    if backend == "gemini":
        if not api_key:
            raise ValueError("The gemini backend requires an API key")
        return GeminiClient(
            api_key=api_key,
            model=config.model.name,
            base_url=config.gemini.base_url,
            max_tokens=config.model.max_tokens,
            timeout=config.gemini.timeout,
            temperature=config.model.temperature,
        )
    elif backend == "openai":
        return OpenAICompatibleClient(
            model=config.model.name,
            base_url=config.openai.base_url,
            api_key=api_key,
            timeout=config.openai.timeout,
            temperature=config.model.temperature,
            max_tokens=config.model.max_tokens,
        )
    else:
        raise ValueError(f"Unknown model backend: {backend}")
