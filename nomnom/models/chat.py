"""
Chat domain models and schemas.

Request schema for the recipe question endpoint and the conversation turn model.
Accepts the legacy front-end turn shape ({isOwnerHuman, content}) as well as
the role-tagged one.

Dependencies: pydantic
System role: Chat API contracts
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Role(str, Enum):
    """Author of a conversation turn."""

    HUMAN = "human"
    ASSISTANT = "assistant"


class ConversationTurn(BaseModel):
    """Single prior turn of the conversation."""

    model_config = ConfigDict(frozen=True)

    role: Role = Field(description="Who wrote the turn")
    content: str = Field(description="Turn text")

    @model_validator(mode="before")
    @classmethod
    def _from_owner_flag(cls, data: Any) -> Any:
        if isinstance(data, dict) and "role" not in data and "isOwnerHuman" in data:
            data = dict(data)
            data["role"] = Role.HUMAN if data.pop("isOwnerHuman") else Role.ASSISTANT
        return data


class ChatRequest(BaseModel):
    """Request schema for a recipe question."""

    model_config = ConfigDict(populate_by_name=True)

    query: str = Field(description="User question")
    chat_history: list[ConversationTurn] = Field(
        default_factory=list,
        alias="chatHistory",
        description="Prior turns, oldest first",
    )
