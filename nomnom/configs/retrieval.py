"""
Retrieval configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Prompt-size bounds for retrieval and history
"""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RetrievalSettings(BaseSettings):
    """Bounds on how much context reaches the prompt."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RETRIEVAL_",
        case_sensitive=False,
        extra="ignore",
    )

    top_k: int = Field(default=4, ge=1, description="Recipes retrieved per question")
    max_top_k: int = Field(default=20, ge=1, description="Hard upper bound for top_k")
    history_window: int = Field(
        default=10,
        ge=0,
        description="Most recent conversation turns kept in the prompt (0 keeps all)",
    )

    @model_validator(mode="after")
    def _top_k_within_bound(self) -> "RetrievalSettings":
        if self.top_k > self.max_top_k:
            raise ValueError(f"top_k ({self.top_k}) exceeds max_top_k ({self.max_top_k})")
        return self
