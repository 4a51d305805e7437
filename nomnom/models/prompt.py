"""
Composed prompt model.

Dependencies: pydantic, langchain_core.messages
System role: Immutable prompt handed to the generation model
"""

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from pydantic import BaseModel, ConfigDict


class ComposedPrompt(BaseModel):
    """Instruction sequence for one request: system message then the question."""

    model_config = ConfigDict(frozen=True)

    system_instructions: str
    context_block: str
    history_block: str
    question: str

    def to_messages(self) -> list[BaseMessage]:
        """Render as chat messages: the rendered system message, then the question."""
        return [
            SystemMessage(content=self.system_instructions),
            HumanMessage(content=self.question),
        ]
