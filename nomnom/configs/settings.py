"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules, nomnom.core.exceptions
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field, ValidationError

from nomnom.configs.base import BaseSettings
from nomnom.configs.llm import LLMSettings
from nomnom.configs.retrieval import RetrievalSettings
from nomnom.configs.vector_store import VectorStoreSettings
from nomnom.core.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    vector_store: VectorStoreSettings = Field(default_factory=VectorStoreSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    retrieval: RetrievalSettings = Field(default_factory=RetrievalSettings)


def load_settings() -> Settings:
    """
    Build settings from the environment, failing fast on anything missing.

    Returns:
        Settings: Fully validated settings

    Raises:
        ConfigurationError: If a required setting is absent or invalid
    """
    try:
        return Settings()
    except ValidationError as e:
        problems = [
            f"{e.title}.{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        raise ConfigurationError(
            "Invalid or missing configuration",
            details={"errors": problems},
        ) from e


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from nomnom.configs import get_settings
        settings = get_settings()
    """
    return load_settings()
