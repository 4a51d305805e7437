"""
Query embedding client.

Embeds one query per request through a LangChain Embeddings model and
checks that the vector fits the index: right dimension, finite values.

Dependencies: langchain_core.embeddings, nomnom.core.exceptions
System role: Embedding generation adapter
"""

import asyncio
import logging
import math

from langchain_core.embeddings import Embeddings

from nomnom.core.exceptions import (
    ConfigurationError,
    UpstreamTimeoutError,
    UpstreamUnavailableError,
)

logger = logging.getLogger(__name__)

SERVICE = "embedding"


class EmbeddingClient:
    """Embedding generator with a fixed output dimension."""

    def __init__(
        self,
        embeddings: Embeddings,
        dimension: int,
        timeout_seconds: float = 10.0,
    ) -> None:
        """
        Initialize embedding client.

        Args:
            embeddings: LangChain embeddings model
            dimension: Dimension every vector must have
            timeout_seconds: Bound for each embedding call
        """
        self._embeddings = embeddings
        self.dimension = dimension
        self._timeout = timeout_seconds

    async def embed(self, text: str) -> list[float]:
        """
        Generate embedding for query.

        Args:
            text: Query text

        Returns:
            list[float]: Query embedding vector

        Raises:
            UpstreamTimeoutError: If the model does not answer in time
            UpstreamUnavailableError: If the model call fails
            ConfigurationError: If the vector has the wrong dimension or NaN values
        """
        try:
            async with asyncio.timeout(self._timeout):
                vector = await self._embeddings.aembed_query(text)
        except TimeoutError as e:
            logger.warning(
                f"{__name__}:embed - timed out",
                extra={"timeout_seconds": self._timeout},
            )
            raise UpstreamTimeoutError(SERVICE, self._timeout) from e
        except Exception as e:
            logger.error(f"{__name__}:embed - {type(e).__name__}: {e}")
            raise UpstreamUnavailableError(
                f"Embedding call failed: {e}",
                service=SERVICE,
            ) from e

        vector = [float(value) for value in vector]
        if len(vector) != self.dimension:
            raise ConfigurationError(
                "Embedding dimension does not match the vector index",
                setting="embedding_dimension",
                details={"expected": self.dimension, "actual": len(vector)},
            )
        if not all(math.isfinite(value) for value in vector):
            raise ConfigurationError(
                "Embedding model returned NaN or infinite values",
                setting="embedding_model",
            )

        logger.debug(f"{__name__}:embed - OK", extra={"dimension": len(vector)})
        return vector
