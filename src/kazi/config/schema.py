"""Pydantic models for kazi.yaml configuration."""

from typing import Literal

from pydantic import BaseModel, Field


class ModelConfig(BaseModel):
    """LLM model configuration."""

    backend: Literal["gemini", "openai"] = Field(
        default="gemini",
        description="Model provider: 'gemini' (Google AI) or 'openai' (any OpenAI-compatible server)",
    )
    name: str = Field(default="gemini-1.5-flash", description="Model name served by the backend")
    temperature: float = Field(default=0.7, description="Sampling temperature", ge=0.0, le=2.0)
    max_tokens: int | None = Field(
        default=None, description="Maximum tokens per reply (backend default if unset)", ge=1
    )


class GeminiConfig(BaseModel):
    """Google Gemini API configuration."""

    base_url: str = Field(
        default="https://generativelanguage.googleapis.com",
        description="Gemini REST endpoint",
    )
    api_key_env: str = Field(
        default="GOOGLE_API_KEY",
        description="Environment variable name containing the API key",
    )
    timeout: int = Field(default=120, description="Request timeout in seconds", ge=1)


class OpenAIConfig(BaseModel):
    """OpenAI-compatible server configuration (OpenAI, Ollama, vLLM, ...)."""

    base_url: str = Field(
        default="https://api.openai.com/v1",
        description="OpenAI-compatible endpoint (must include /v1)",
    )
    api_key_env: str | None = Field(
        default="OPENAI_API_KEY",
        description="Environment variable holding the API key (null for servers without auth)",
    )
    timeout: int = Field(default=120, description="Request timeout in seconds", ge=1)


class AgentConfig(BaseModel):
    """Conversation engine configuration."""

    max_steps: int = Field(
        default=10, description="Maximum model calls per user request", ge=1, le=50
    )
    max_history_tokens: int = Field(
        default=8192,
        description="Token budget for the transcript window sent to the model",
        ge=256,
    )
    strict_dispatch: bool = Field(
        default=False,
        description=(
            "Raise on unknown tools, bad arguments and tool failures instead of "
            "reporting them back to the model as observations"
        ),
    )


class StorageConfig(BaseModel):
    """Todo storage configuration."""

    database: str = Field(
        default="~/.kazi/todos.db",
        description="Path to the SQLite database holding the todo table",
    )


class KaziConfig(BaseModel):
    """Root configuration schema for kazi."""

    model: ModelConfig = Field(default_factory=ModelConfig)
    gemini: GeminiConfig = Field(default_factory=GeminiConfig)
    openai: OpenAIConfig = Field(default_factory=OpenAIConfig)
    agent: AgentConfig = Field(default_factory=AgentConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
