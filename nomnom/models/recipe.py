"""
Recipe record model.

Typed view of a recipe node returned by the vector index. Node properties
arrive with snake_case names (joined_ingredients) but camelCase aliases
(joinedIngredients) are accepted too. Unknown properties are kept as extras
so the sanitizer can see and drop them.

Dependencies: pydantic
System role: Retrieval result record
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class RecipeRecord(BaseModel):
    """A retrieved recipe node."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    id: str | None = None
    name: str | None = None
    joined_ingredients: str | None = Field(
        default=None,
        validation_alias=AliasChoices("joined_ingredients", "joinedIngredients"),
    )
    cleaned_contents: str | None = Field(
        default=None,
        validation_alias=AliasChoices("cleaned_contents", "cleanedContents"),
    )
    embedding: list[float] | None = None
    thumbnail_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("thumbnail_url", "thumbnailUrl"),
    )
    created_at: Any = Field(
        default=None,
        validation_alias=AliasChoices("created_at", "createdAt"),
    )
    updated_at: Any = Field(
        default=None,
        validation_alias=AliasChoices("updated_at", "updatedAt"),
    )
    ingredients_qty: Any = Field(
        default=None,
        validation_alias=AliasChoices("ingredients_qty", "ingredientsQty"),
    )
    ingredients: Any = None
    score: float | None = Field(default=None, description="Similarity score from the index")

    @classmethod
    def from_node(cls, properties: dict[str, Any], score: float | None = None) -> "RecipeRecord":
        """
        Build a record from raw node properties.

        Args:
            properties: Node property map as returned by the store
            score: Similarity score reported by the index

        Returns:
            RecipeRecord: Typed record
        """
        data = {str(key): value for key, value in properties.items()}
        data.pop("score", None)
        if data.get("id") is not None:
            data["id"] = str(data["id"])
        return cls.model_validate({**data, "score": score})

    def fields(self) -> dict[str, Any]:
        """Return every field, declared and extra, keyed by its canonical name."""
        values = {name: getattr(self, name) for name in type(self).model_fields}
        values.update(self.model_extra or {})
        return values
