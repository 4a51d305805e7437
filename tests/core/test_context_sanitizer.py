"""
Test suite for context sanitization.

Tests the field allow-list, compact serialization and record delimiting
of the grounding context block.

System role: Verification of grounding context builder
"""

import json

from nomnom.core.context_sanitizer import ALLOWED_FIELDS, RECORD_DELIMITER, project, sanitize
from nomnom.models.recipe import RecipeRecord
from stubs import EGG_FRIED_RICE, TOMATO_SOUP


def record(properties: dict, score: float = 0.9) -> RecipeRecord:
    return RecipeRecord.from_node(properties, score=score)


class TestProject:
    """Test suite for per-record field projection."""

    def test_project_should_drop_internal_fields(self) -> None:
        """Test identifiers, vectors, URLs, timestamps and scores never survive."""
        # Arrange
        properties = {**EGG_FRIED_RICE, "embedding": [0.1, 0.2]}

        # Act
        entry = project(record(properties))

        # Assert
        assert set(entry) == {"name", "joined_ingredients", "cleaned_contents"}
        for dropped in ("id", "embedding", "thumbnail_url", "created_at", "updated_at", "score"):
            assert dropped not in entry

    def test_project_should_drop_unknown_properties(self) -> None:
        """Test extra node properties are excluded unless allow-listed."""
        # Arrange
        properties = {"name": "Flatbread", "ownerEmail": "chef@example.com", "cuisine": "Levantine"}

        # Act
        entry = project(record(properties))

        # Assert
        assert entry == {"name": "Flatbread", "cuisine": "Levantine"}

    def test_project_should_apply_to_records_without_contents(self) -> None:
        """Test records lacking cleaned_contents are still projected."""
        # Arrange
        properties = {"name": "Toast", "thumbnailUrl": "https://cdn.example.com/t.jpg"}

        # Act
        entry = project(record(properties))

        # Assert
        assert entry == {"name": "Toast"}

    def test_project_should_skip_null_values(self) -> None:
        """Test allow-listed fields holding None are omitted."""
        # Act
        entry = project(record({"name": "Plain Rice", "joined_ingredients": None}))

        # Assert
        assert entry == {"name": "Plain Rice"}

    def test_allowed_fields_should_exclude_internal_names(self) -> None:
        """Test the allow-list never contains internal bookkeeping fields."""
        # Assert
        assert not ALLOWED_FIELDS & {"id", "embedding", "thumbnail_url", "created_at", "updated_at", "score"}


class TestSanitize:
    """Test suite for sanitize()."""

    def test_sanitize_should_return_empty_string_for_no_records(self) -> None:
        """Test empty input yields an empty block."""
        # Act & Assert
        assert sanitize([]) == ""

    def test_sanitize_should_keep_retrieval_order(self) -> None:
        """Test records appear in the order they were retrieved."""
        # Act
        block = sanitize([record(EGG_FRIED_RICE), record(TOMATO_SOUP)])

        # Assert
        entries = [json.loads(part) for part in block.split(RECORD_DELIMITER)]
        assert [entry["name"] for entry in entries] == ["Egg Fried Rice", "Tomato Soup"]

    def test_sanitize_should_be_deterministic(self) -> None:
        """Test equal inputs give byte-identical output."""
        # Arrange
        records = [record(EGG_FRIED_RICE), record(TOMATO_SOUP)]

        # Act & Assert
        assert sanitize(records) == sanitize(list(records))

    def test_sanitize_should_not_leak_dropped_values(self) -> None:
        """Test no dropped value appears anywhere in the block."""
        # Act
        block = sanitize([record(EGG_FRIED_RICE)])

        # Assert
        assert "cdn.example.com" not in block
        assert "2023-05-01" not in block
        assert "17" not in block

    def test_sanitize_should_keep_delimiter_out_of_records(self) -> None:
        """Test multi-line contents cannot be mistaken for a record boundary."""
        # Arrange
        tricky = {"name": "Layered", "cleaned_contents": "Step one\n---\nStep two"}

        # Act
        block = sanitize([record(tricky), record(TOMATO_SOUP)])

        # Assert
        assert block.count(RECORD_DELIMITER) == 1
        assert json.loads(block.split(RECORD_DELIMITER)[0])["cleaned_contents"] == "Step one\n---\nStep two"

    def test_sanitize_should_keep_non_ascii_text(self) -> None:
        """Test accented ingredient names are written as-is."""
        # Act
        block = sanitize([record({"name": "Crème brûlée"})])

        # Assert
        assert "Crème brûlée" in block
