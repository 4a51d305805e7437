"""
Vector store configuration settings.

Manages the Neo4j connection and the vector index the recipes were embedded into.
The index itself is built elsewhere; these settings only describe it.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for RAG retrieval
"""

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class VectorStoreSettings(BaseSettings):
    """Neo4j vector index configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="NEO4J_",
        case_sensitive=False,
        extra="ignore",
    )

    uri: str = Field(description="Neo4j bolt/neo4j+s URI")
    username: str = Field(description="Neo4j user")
    password: SecretStr = Field(description="Neo4j password")
    database: str = Field(default="neo4j", description="Neo4j database name")

    index_name: str = Field(description="Name of the vector index, e.g. vectorIndexForRecipes")
    node_label: str = Field(description="Label of the indexed nodes, e.g. Recipe")
    text_node_properties: list[str] = Field(
        description="Node properties that were embedded to build the index",
    )
    embedding_node_property: str = Field(
        description="Node property holding the stored vector",
    )
    embedding_dimension: int = Field(
        default=1536,
        ge=1,
        description="Dimension of the stored vectors (must match the embedding model)",
    )

    timeout_seconds: float = Field(default=10.0, gt=0, description="Vector search timeout")
    verify_index_on_startup: bool = Field(
        default=True,
        description="Check index existence, label and dimension when the app starts",
    )

    @field_validator("uri", "username", "index_name", "node_label", "embedding_node_property")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value.strip()

    @field_validator("text_node_properties")
    @classmethod
    def _properties_not_empty(cls, value: list[str]) -> list[str]:
        cleaned = [prop.strip() for prop in value if prop.strip()]
        if not cleaned:
            raise ValueError("at least one text node property is required")
        return cleaned
