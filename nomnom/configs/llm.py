"""
Language model configuration settings.

Credentials and model identifiers for the embedding and generation services,
plus the per-call timeouts. Decoding parameters are fixed here, never per request.

Dependencies: pydantic, pydantic_settings
System role: Model provider configuration for embedding and generation
"""

from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMSettings(BaseSettings):
    """Embedding and chat model configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LLM_",
        case_sensitive=False,
        extra="ignore",
    )

    provider: Literal["openai", "google"] = Field(
        default="openai",
        description="Model provider: 'openai' or 'google'",
    )
    api_key: SecretStr = Field(description="API key for the model provider")

    chat_model: str = Field(default="gpt-4o", description="Generation model identifier")
    embedding_model: str = Field(
        default="text-embedding-ada-002",
        description="Embedding model identifier (must match the one used to build the index)",
    )
    temperature: float = Field(
        default=0.0,
        description="Sampling temperature, fixed at 0 for reproducible answers",
    )

    embedding_timeout_seconds: float = Field(default=10.0, gt=0)
    first_fragment_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Maximum wait for the first generated fragment",
    )
    idle_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Maximum wait between two generated fragments",
    )

    @field_validator("temperature")
    @classmethod
    def _temperature_is_zero(cls, value: float) -> float:
        if value != 0.0:
            raise ValueError("temperature is fixed at 0 for deterministic answers")
        return value
