"""
Test suite for conversation history formatting.

System role: Verification of history block builder
"""

from nomnom.core.history_formatter import format_history, recent_turns
from nomnom.models.chat import ConversationTurn, Role


def turn(role: Role, content: str) -> ConversationTurn:
    return ConversationTurn(role=role, content=content)


class TestFormatHistory:
    """Test suite for format_history()."""

    def test_format_history_should_return_empty_for_no_turns(self) -> None:
        """Test empty history yields an empty block."""
        # Act & Assert
        assert format_history([]) == ""

    def test_format_history_should_prefix_roles_in_order(self) -> None:
        """Test one line per turn, oldest first, with role prefixes."""
        # Arrange
        turns = [
            turn(Role.HUMAN, "Something with eggs?"),
            turn(Role.ASSISTANT, "Try egg fried rice."),
            turn(Role.HUMAN, "Anything vegan?"),
        ]

        # Act
        block = format_history(turns)

        # Assert
        assert block == (
            "Human: Something with eggs?\n"
            "AI: Try egg fried rice.\n"
            "Human: Anything vegan?"
        )

    def test_format_history_should_accept_owner_flag_turns(self) -> None:
        """Test turns built from isOwnerHuman render the same prefixes."""
        # Arrange
        turns = [
            ConversationTurn.model_validate({"isOwnerHuman": True, "content": "Hi"}),
            ConversationTurn.model_validate({"isOwnerHuman": False, "content": "Hello!"}),
        ]

        # Act & Assert
        assert format_history(turns) == "Human: Hi\nAI: Hello!"


class TestRecentTurns:
    """Test suite for recent_turns()."""

    def test_recent_turns_should_keep_the_tail(self) -> None:
        """Test only the newest turns are kept, order unchanged."""
        # Arrange
        turns = [turn(Role.HUMAN, str(i)) for i in range(6)]

        # Act
        kept = recent_turns(turns, 3)

        # Assert
        assert [t.content for t in kept] == ["3", "4", "5"]

    def test_recent_turns_should_keep_all_when_limit_is_zero(self) -> None:
        """Test a zero limit disables truncation."""
        # Arrange
        turns = [turn(Role.HUMAN, str(i)) for i in range(4)]

        # Act & Assert
        assert recent_turns(turns, 0) == turns
