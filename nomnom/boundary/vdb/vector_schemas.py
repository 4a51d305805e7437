"""
Vector database schemas.

Pydantic models for vector operations (queries and results).
Used for type-safe vector store interactions.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from typing import Any

from pydantic import BaseModel, Field


class VectorQuery(BaseModel):
    """Query parameters for vector search."""

    embedding: list[float] = Field(description="Query embedding vector")
    top_k: int = Field(default=4, description="Number of results to return", ge=1, le=100)


class VectorSearchResult(BaseModel):
    """Single node returned by the vector index."""

    properties: dict[str, Any] = Field(description="Node properties")
    score: float = Field(description="Similarity score reported by the index")
