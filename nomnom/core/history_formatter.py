"""
Conversation history formatting.

Renders prior turns as a role-tagged transcript, one "<Prefix>: <content>"
line per turn, oldest first.

Dependencies: nomnom.models.chat
System role: History block builder for the prompt
"""

from collections.abc import Sequence

from nomnom.models.chat import ConversationTurn, Role

ROLE_PREFIXES: dict[Role, str] = {
    Role.HUMAN: "Human",
    Role.ASSISTANT: "AI",
}


def recent_turns(turns: Sequence[ConversationTurn], limit: int) -> list[ConversationTurn]:
    """
    Keep the most recent turns.

    Args:
        turns: Full history, oldest first
        limit: Number of turns to keep (0 keeps all)

    Returns:
        list[ConversationTurn]: Trailing window of the history, order unchanged
    """
    if limit > 0:
        return list(turns[-limit:])
    return list(turns)


def format_history(turns: Sequence[ConversationTurn]) -> str:
    """
    Render turns as a transcript.

    Args:
        turns: Turns in chronological order

    Returns:
        str: One line per turn, or an empty string for no turns
    """
    return "\n".join(f"{ROLE_PREFIXES[turn.role]}: {turn.content}" for turn in turns)
