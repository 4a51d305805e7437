"""
Context sanitization for retrieved recipes.

Projects every retrieved record onto a fixed allow-list of human-readable
fields and serializes the result compactly for the prompt. The decision is
made on field names only, never on values, and applies to every record.

Dependencies: nomnom.models.recipe
System role: Grounding context builder
"""

import json
from collections.abc import Iterable
from typing import Any

from nomnom.models.recipe import RecipeRecord

ALLOWED_FIELDS: frozenset[str] = frozenset({
    "name",
    "joined_ingredients",
    "cleaned_contents",
    "description",
    "cuisine",
    "category",
    "tags",
    "servings",
    "prep_time",
    "cook_time",
})

# JSON encoding escapes raw newlines, so this never occurs inside a serialized record.
RECORD_DELIMITER = "\n---\n"


def project(record: RecipeRecord) -> dict[str, Any]:
    """
    Keep only allow-listed fields of a record.

    Args:
        record: Retrieved recipe record

    Returns:
        dict: Allowed, non-null fields
    """
    return {
        name: value
        for name, value in record.fields().items()
        if name in ALLOWED_FIELDS and value is not None
    }


def serialize(entry: dict[str, Any]) -> str:
    """Serialize a projected record as one compact JSON object."""
    return json.dumps(
        entry,
        sort_keys=True,
        ensure_ascii=False,
        separators=(",", ":"),
        default=str,
    )


def sanitize(records: Iterable[RecipeRecord]) -> str:
    """
    Build the grounding context block from retrieved records.

    Args:
        records: Records in retrieval order

    Returns:
        str: One JSON object per record joined by RECORD_DELIMITER,
            or an empty string when there are no records
    """
    return RECORD_DELIMITER.join(serialize(project(record)) for record in records)
