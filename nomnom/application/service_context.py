"""
Service context.

Holds the long-lived clients for the three external services. Built once at
startup and injected into request handlers; tests build it from stubs.

Dependencies: nomnom.boundary, nomnom.core.retriever, nomnom.configs
System role: Shared, read-only client container
"""

import logging
from dataclasses import dataclass
from typing import Any

from nomnom.boundary.llm.chat_model import GenerationClient
from nomnom.boundary.llm.embeddings import EmbeddingClient
from nomnom.boundary.llm.model_factory import build_chat_model, build_embeddings
from nomnom.boundary.vdb.neo4j_vector_index import Neo4jVectorIndex
from nomnom.configs.settings import Settings
from nomnom.core.context_sanitizer import ALLOWED_FIELDS
from nomnom.core.exceptions import ConfigurationError
from nomnom.core.retriever import Retriever

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServiceContext:
    """Clients shared by all requests. Nothing here is mutated per request."""

    embedder: EmbeddingClient
    index: Any
    generator: GenerationClient
    retriever: Retriever

    @classmethod
    def from_settings(cls, settings: Settings) -> "ServiceContext":
        """
        Build every client from settings.

        Args:
            settings: Application settings

        Returns:
            ServiceContext: Ready-to-use context
        """
        dimension = settings.vector_store.embedding_dimension

        embedder = EmbeddingClient(
            embeddings=build_embeddings(settings.llm, dimension),
            dimension=dimension,
            timeout_seconds=settings.llm.embedding_timeout_seconds,
        )
        index = Neo4jVectorIndex.from_settings(settings.vector_store)
        generator = GenerationClient(
            chat_model=build_chat_model(settings.llm),
            first_fragment_timeout_seconds=settings.llm.first_fragment_timeout_seconds,
            idle_timeout_seconds=settings.llm.idle_timeout_seconds,
        )
        retriever = Retriever(
            index=index,
            dimension=dimension,
            max_k=settings.retrieval.max_top_k,
        )
        logger.info(f"{__name__}:from_settings - service context built")
        return cls(embedder=embedder, index=index, generator=generator, retriever=retriever)

    async def verify(self, settings: Settings) -> None:
        """
        Run startup checks.

        The text properties must all survive context sanitizing, otherwise the
        model would never see them. The index check is optional.

        Raises:
            ConfigurationError: Unusable text properties or index mismatch
        """
        not_allowed = [
            name for name in settings.vector_store.text_node_properties if name not in ALLOWED_FIELDS
        ]
        if not_allowed:
            logger.error(
                f"{__name__}:verify - text properties dropped by sanitizer",
                extra={"not_allowed": not_allowed},
            )
            raise ConfigurationError(
                "Text node properties must be fields the prompt context keeps",
                setting="text_node_properties",
                details={"not_allowed": not_allowed},
            )

        if settings.vector_store.verify_index_on_startup:
            await self.index.verify_index(settings.vector_store.embedding_dimension)

    async def aclose(self) -> None:
        """Release connection pools."""
        await self.index.close()
        logger.info(f"{__name__}:aclose - service context closed")
