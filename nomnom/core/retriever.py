"""
Retrieval logic over the recipe vector index.

Validates the query vector and k, runs the similarity search and converts
matches to RecipeRecord, keeping the order the index returned.

Dependencies: nomnom.boundary.vdb, nomnom.core.exceptions
System role: RAG retrieval business logic
"""

import logging
import math
from typing import Protocol

from nomnom.boundary.vdb.vector_schemas import VectorSearchResult
from nomnom.core.exceptions import ConfigurationError, QueryValidationError
from nomnom.models.recipe import RecipeRecord

logger = logging.getLogger(__name__)


class VectorIndex(Protocol):
    """Similarity search interface of the vector store."""

    async def query(self, embedding: list[float], k: int) -> list[VectorSearchResult]: ...


class Retriever:
    """Retrieval business logic."""

    def __init__(self, index: VectorIndex, dimension: int, max_k: int = 20) -> None:
        """
        Initialize retriever.

        Args:
            index: Vector index adapter
            dimension: Dimension of the vectors stored in the index
            max_k: Upper bound for k
        """
        self._index = index
        self._dimension = dimension
        self._max_k = max_k

    def validate_vector(self, query_vector: list[float]) -> None:
        """
        Reject vectors the index could not have produced a match for.

        Raises:
            ConfigurationError: On dimension mismatch or non-finite components
        """
        if len(query_vector) != self._dimension:
            raise ConfigurationError(
                "Query vector dimension does not match the index",
                setting="embedding_dimension",
                details={"expected": self._dimension, "actual": len(query_vector)},
            )
        if not all(math.isfinite(value) for value in query_vector):
            raise ConfigurationError(
                "Query vector contains NaN or infinite components",
                setting="embedding_model",
            )

    async def retrieve(self, query_vector: list[float], k: int) -> list[RecipeRecord]:
        """
        Retrieve the k most similar recipes.

        Args:
            query_vector: Query embedding
            k: Number of records wanted (1..max_k)

        Returns:
            list[RecipeRecord]: Between 0 and k records, similarity-descending
        """
        if isinstance(k, bool) or not isinstance(k, int) or not 1 <= k <= self._max_k:
            raise QueryValidationError(
                f"k must be an integer between 1 and {self._max_k}",
                field="k",
                details={"k": k},
            )
        self.validate_vector(query_vector)

        results = await self._index.query(query_vector, k)
        records = [
            RecipeRecord.from_node(result.properties, score=result.score)
            for result in results[:k]
        ]

        if not records:
            logger.info("No recipes matched the query vector", extra={"k": k})
        else:
            logger.info(
                "Retrieved recipes",
                extra={"k": k, "retrieved": len(records)},
            )
        return records
