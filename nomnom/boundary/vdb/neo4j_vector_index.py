"""
Neo4j vector index adapter.

Runs nearest-neighbour queries against an existing Neo4j vector index
(CALL db.index.vector.queryNodes) and checks the index definition against
the configured label, property and dimension. Never creates or writes to
the index.

Dependencies: neo4j (async driver), nomnom.configs, nomnom.core.exceptions
System role: Vector store client for recipe retrieval
"""

import asyncio
import logging
from typing import Any

from neo4j import AsyncDriver, AsyncGraphDatabase, RoutingControl
from neo4j.exceptions import ClientError, DriverError, Neo4jError

from nomnom.boundary.vdb.vector_schemas import VectorQuery, VectorSearchResult
from nomnom.configs.vector_store import VectorStoreSettings
from nomnom.core.exceptions import (
    ConfigurationError,
    UpstreamTimeoutError,
    UpstreamUnavailableError,
)

logger = logging.getLogger(__name__)

SERVICE = "vector_index"

SHOW_INDEX_QUERY = """
SHOW INDEXES YIELD name, type, labelsOrTypes, properties, options
WHERE name = $index_name
RETURN type, labelsOrTypes, properties, options
"""


def _quote(identifier: str) -> str:
    """Backtick-quote a Cypher identifier."""
    return "`" + identifier.replace("`", "``") + "`"


class Neo4jVectorIndex:
    """
    Similarity search over a Neo4j vector index.

    The async driver keeps its own connection pool and is safe to share
    across concurrent requests.
    """

    def __init__(
        self,
        driver: AsyncDriver,
        index_name: str,
        node_label: str,
        text_node_properties: list[str],
        embedding_node_property: str,
        database: str = "neo4j",
        timeout_seconds: float = 10.0,
    ) -> None:
        """
        Initialize the adapter.

        Args:
            driver: Neo4j async driver
            index_name: Vector index name
            node_label: Label of indexed nodes
            text_node_properties: Properties embedded to build the index
            embedding_node_property: Property holding the stored vector
            database: Neo4j database name
            timeout_seconds: Bound for each query
        """
        self._driver = driver
        self.index_name = index_name
        self.node_label = node_label
        self.text_node_properties = list(text_node_properties)
        self.embedding_node_property = embedding_node_property
        self._database = database
        self._timeout = timeout_seconds

        # The stored vector is nulled out server-side so it never crosses the wire.
        # Rows keep the order queryNodes yields them in; no re-sorting.
        self._search_query = (
            "CALL db.index.vector.queryNodes($index_name, $k, $embedding) "
            "YIELD node, score "
            f"RETURN node {{.*, {_quote(embedding_node_property)}: null}} AS properties, score"
        )

    @classmethod
    def from_settings(cls, settings: VectorStoreSettings) -> "Neo4jVectorIndex":
        """
        Create the adapter and its driver from settings.

        Args:
            settings: Vector store settings

        Returns:
            Neo4jVectorIndex: Adapter owning a new driver
        """
        driver = AsyncGraphDatabase.driver(
            settings.uri,
            auth=(settings.username, settings.password.get_secret_value()),
        )
        logger.info(
            f"{__name__}:from_settings - Neo4j driver created",
            extra={"uri": settings.uri, "index_name": settings.index_name},
        )
        return cls(
            driver=driver,
            index_name=settings.index_name,
            node_label=settings.node_label,
            text_node_properties=settings.text_node_properties,
            embedding_node_property=settings.embedding_node_property,
            database=settings.database,
            timeout_seconds=settings.timeout_seconds,
        )

    async def _execute(self, query: str, parameters: dict[str, Any], operation: str) -> list[Any]:
        try:
            async with asyncio.timeout(self._timeout):
                records, _, _ = await self._driver.execute_query(
                    query,
                    parameters_=parameters,
                    database_=self._database,
                    routing_=RoutingControl.READ,
                )
        except TimeoutError as e:
            logger.warning(
                f"{__name__}:{operation} - timed out",
                extra={"timeout_seconds": self._timeout, "index_name": self.index_name},
            )
            raise UpstreamTimeoutError(SERVICE, self._timeout, details={"operation": operation}) from e
        except ClientError as e:
            # Authentication failures and unknown indexes are configuration problems.
            logger.error(f"{__name__}:{operation} - rejected by Neo4j: {getattr(e, 'code', None)}")
            raise ConfigurationError(
                f"Neo4j rejected the {operation}: {e}",
                setting="neo4j",
                details={"code": getattr(e, "code", None), "index_name": self.index_name},
            ) from e
        except (Neo4jError, DriverError, OSError) as e:
            logger.error(f"{__name__}:{operation} - {type(e).__name__}: {e}")
            raise UpstreamUnavailableError(
                f"Vector index {operation} failed: {e}",
                service=SERVICE,
                details={"operation": operation},
            ) from e
        return records

    async def query(self, embedding: list[float], k: int) -> list[VectorSearchResult]:
        """
        Find the k nodes nearest to the embedding.

        Args:
            embedding: Query vector
            k: Number of neighbours

        Returns:
            list[VectorSearchResult]: Matches, similarity-descending

        Raises:
            UpstreamUnavailableError: If Neo4j is unreachable or fails
            UpstreamTimeoutError: If the query exceeds its bound
            ConfigurationError: If Neo4j rejects the query (auth, unknown index)
        """
        request = VectorQuery(embedding=embedding, top_k=k)
        records = await self._execute(
            self._search_query,
            {
                "index_name": self.index_name,
                "k": request.top_k,
                "embedding": request.embedding,
            },
            operation="query",
        )
        results = [
            VectorSearchResult(properties=dict(record["properties"]), score=float(record["score"]))
            for record in records
        ]
        logger.info(
            f"{__name__}:query - Found {len(results)} results",
            extra={"k": k, "index_name": self.index_name},
        )
        return results

    async def verify_index(self, expected_dimension: int) -> None:
        """
        Check that the index exists and matches the configuration.

        Args:
            expected_dimension: Dimension produced by the embedding model

        Raises:
            ConfigurationError: If the index is missing or differs from the settings
        """
        records = await self._execute(
            SHOW_INDEX_QUERY,
            {"index_name": self.index_name},
            operation="verify_index",
        )
        if not records:
            raise ConfigurationError(
                f"Vector index '{self.index_name}' does not exist",
                setting="index_name",
            )

        record = records[0]
        if str(record["type"]).upper() != "VECTOR":
            raise ConfigurationError(
                f"Index '{self.index_name}' is not a vector index",
                setting="index_name",
                details={"type": record["type"]},
            )
        if self.node_label not in (record["labelsOrTypes"] or []):
            raise ConfigurationError(
                "Vector index label does not match the configured node label",
                setting="node_label",
                details={"expected": self.node_label, "actual": record["labelsOrTypes"]},
            )
        if self.embedding_node_property not in (record["properties"] or []):
            raise ConfigurationError(
                "Vector index property does not match the configured embedding property",
                setting="embedding_node_property",
                details={
                    "expected": self.embedding_node_property,
                    "actual": record["properties"],
                },
            )

        index_config = (record["options"] or {}).get("indexConfig", {})
        dimension = index_config.get("vector.dimensions")
        if dimension is not None and int(dimension) != expected_dimension:
            raise ConfigurationError(
                "Vector index dimension does not match the embedding dimension",
                setting="embedding_dimension",
                details={"index": int(dimension), "configured": expected_dimension},
            )
        logger.info(
            f"{__name__}:verify_index - Index verified",
            extra={"index_name": self.index_name, "dimension": dimension},
        )

    async def verify_connectivity(self) -> None:
        """
        Check the database is reachable.

        Raises:
            UpstreamUnavailableError: If Neo4j cannot be reached
        """
        try:
            async with asyncio.timeout(self._timeout):
                await self._driver.verify_connectivity()
        except TimeoutError as e:
            raise UpstreamTimeoutError(SERVICE, self._timeout) from e
        except (Neo4jError, DriverError, OSError) as e:
            raise UpstreamUnavailableError(
                f"Neo4j is unreachable: {e}",
                service=SERVICE,
            ) from e

    async def close(self) -> None:
        """Close the driver and its connection pool."""
        await self._driver.close()
