"""
Test suite for the Neo4j vector index adapter.

Uses an AsyncMock in place of the neo4j async driver.

System role: Verification of vector store client
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from neo4j.exceptions import ClientError, ServiceUnavailable

from nomnom.boundary.vdb.neo4j_vector_index import Neo4jVectorIndex
from nomnom.core.exceptions import (
    ConfigurationError,
    UpstreamTimeoutError,
    UpstreamUnavailableError,
)


def make_driver(records: list | None = None) -> MagicMock:
    driver = MagicMock()
    driver.execute_query = AsyncMock(return_value=(records or [], MagicMock(), []))
    driver.verify_connectivity = AsyncMock()
    driver.close = AsyncMock()
    return driver


def make_index(driver: MagicMock, timeout_seconds: float = 5.0) -> Neo4jVectorIndex:
    return Neo4jVectorIndex(
        driver=driver,
        index_name="vectorIndexForRecipes",
        node_label="Recipe",
        text_node_properties=["joined_ingredients", "name", "cleaned_contents"],
        embedding_node_property="embedding",
        timeout_seconds=timeout_seconds,
    )


def index_row(
    index_type: str = "VECTOR",
    labels: list[str] | None = None,
    properties: list[str] | None = None,
    dimension: int | None = 1536,
) -> dict:
    options = {"indexConfig": {"vector.dimensions": dimension}} if dimension is not None else {}
    return {
        "type": index_type,
        "labelsOrTypes": labels if labels is not None else ["Recipe"],
        "properties": properties if properties is not None else ["embedding"],
        "options": options,
    }


class TestQuery:
    """Test suite for Neo4jVectorIndex.query()."""

    @pytest.mark.asyncio
    async def test_query_should_send_parameters_and_map_rows(self) -> None:
        """Test the search is parameterized and rows become results."""
        # Arrange
        driver = make_driver([
            {"properties": {"name": "Egg Fried Rice", "embedding": None}, "score": 0.93},
            {"properties": {"name": "Tomato Soup", "embedding": None}, "score": 0.81},
        ])
        index = make_index(driver)

        # Act
        results = await index.query([0.1, 0.2], 2)

        # Assert
        assert [r.properties["name"] for r in results] == ["Egg Fried Rice", "Tomato Soup"]
        assert results[0].score == pytest.approx(0.93)
        query, = driver.execute_query.await_args.args
        kwargs = driver.execute_query.await_args.kwargs
        assert "db.index.vector.queryNodes" in query
        assert "`embedding`: null" in query
        assert "ORDER BY" not in query
        assert kwargs["parameters_"] == {
            "index_name": "vectorIndexForRecipes",
            "k": 2,
            "embedding": [0.1, 0.2],
        }
        assert kwargs["database_"] == "neo4j"

    @pytest.mark.asyncio
    async def test_query_should_keep_index_order_for_ties(self) -> None:
        """Test equal scores come back in the order the index yielded them."""
        # Arrange
        driver = make_driver([
            {"properties": {"name": "Omelette"}, "score": 0.9},
            {"properties": {"name": "Frittata"}, "score": 0.9},
            {"properties": {"name": "Shakshuka"}, "score": 0.9},
        ])

        # Act
        results = await make_index(driver).query([0.1], 3)

        # Assert
        assert [r.properties["name"] for r in results] == ["Omelette", "Frittata", "Shakshuka"]

    @pytest.mark.asyncio
    async def test_query_should_map_unreachable_database(self) -> None:
        """Test driver connectivity failures become UpstreamUnavailableError."""
        # Arrange
        driver = make_driver()
        driver.execute_query.side_effect = ServiceUnavailable("connection refused")

        # Act & Assert
        with pytest.raises(UpstreamUnavailableError) as exc_info:
            await make_index(driver).query([0.1], 1)
        assert exc_info.value.service == "vector_index"

    @pytest.mark.asyncio
    async def test_query_should_map_rejections_to_configuration_error(self) -> None:
        """Test client errors (bad credentials, unknown index) are configuration errors."""
        # Arrange
        driver = make_driver()
        driver.execute_query.side_effect = ClientError("There is no such vector schema index")

        # Act & Assert
        with pytest.raises(ConfigurationError):
            await make_index(driver).query([0.1], 1)

    @pytest.mark.asyncio
    async def test_query_should_time_out(self) -> None:
        """Test a slow query raises UpstreamTimeoutError."""
        # Arrange
        async def slow_query(*args, **kwargs):
            await asyncio.sleep(1)

        driver = make_driver()
        driver.execute_query.side_effect = slow_query

        # Act & Assert
        with pytest.raises(UpstreamTimeoutError) as exc_info:
            await make_index(driver, timeout_seconds=0.01).query([0.1], 1)
        assert exc_info.value.timeout_seconds == 0.01


class TestVerifyIndex:
    """Test suite for Neo4jVectorIndex.verify_index()."""

    @pytest.mark.asyncio
    async def test_verify_index_should_pass_for_matching_index(self) -> None:
        """Test a matching index passes silently."""
        # Act & Assert
        await make_index(make_driver([index_row()])).verify_index(1536)

    @pytest.mark.asyncio
    async def test_verify_index_should_fail_for_missing_index(self) -> None:
        """Test an absent index fails startup."""
        # Act & Assert
        with pytest.raises(ConfigurationError, match="does not exist"):
            await make_index(make_driver([])).verify_index(1536)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "row, setting",
        [
            (index_row(index_type="RANGE"), "index_name"),
            (index_row(labels=["Ingredient"]), "node_label"),
            (index_row(properties=["vector"]), "embedding_node_property"),
            (index_row(dimension=768), "embedding_dimension"),
        ],
    )
    async def test_verify_index_should_fail_on_mismatch(self, row: dict, setting: str) -> None:
        """Test each mismatch names the offending setting."""
        # Act & Assert
        with pytest.raises(ConfigurationError) as exc_info:
            await make_index(make_driver([row])).verify_index(1536)
        assert exc_info.value.details["setting"] == setting


class TestConnectivity:
    """Test suite for connectivity and shutdown."""

    @pytest.mark.asyncio
    async def test_verify_connectivity_should_map_failures(self) -> None:
        """Test unreachable database raises UpstreamUnavailableError."""
        # Arrange
        driver = make_driver()
        driver.verify_connectivity.side_effect = ServiceUnavailable("down")

        # Act & Assert
        with pytest.raises(UpstreamUnavailableError):
            await make_index(driver).verify_connectivity()

    @pytest.mark.asyncio
    async def test_close_should_close_driver(self) -> None:
        """Test close releases the driver."""
        # Arrange
        driver = make_driver()

        # Act
        await make_index(driver).close()

        # Assert
        driver.close.assert_awaited_once()
