"""
Test suite for health check endpoints and application lifespan.

System role: Verification of health HTTP API and startup wiring
"""

import pytest
from fastapi.testclient import TestClient

from nomnom.api.deps import get_service_context
from nomnom.application.service_context import ServiceContext
from nomnom.core.exceptions import ConfigurationError, UpstreamUnavailableError
from nomnom.main import create_app
from stubs import StubEmbedder, StubGenerator, StubIndex, build_context


class TestHealthEndpoints:
    """Test suite for GET /api/v1/health*."""

    def test_health_check_should_return_healthy(self) -> None:
        """Test basic health check."""
        # Act
        response = TestClient(create_app()).get("/api/v1/health")

        # Assert
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "message": "Server Healthy"}

    def test_vector_store_health_should_report_reachable_index(self) -> None:
        """Test a reachable index reports healthy."""
        # Arrange
        app = create_app()
        context = build_context(StubEmbedder(), StubIndex(), StubGenerator())
        app.dependency_overrides[get_service_context] = lambda: context

        # Act
        response = TestClient(app).get("/api/v1/health/vector-store")

        # Assert
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_vector_store_health_should_report_unreachable_index(self) -> None:
        """Test an unreachable index reports 503."""
        # Arrange
        app = create_app()
        index = StubIndex()
        index.connectivity_error = UpstreamUnavailableError("Neo4j is unreachable", service="vector_index")
        context = build_context(StubEmbedder(), index, StubGenerator())
        app.dependency_overrides[get_service_context] = lambda: context

        # Act
        response = TestClient(app).get("/api/v1/health/vector-store")

        # Assert
        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"

    def test_vector_store_health_should_fail_without_context(self) -> None:
        """Test a missing service context is a configuration error."""
        # Act
        response = TestClient(create_app()).get("/api/v1/health/vector-store")

        # Assert
        assert response.status_code == 500
        assert response.json()["code"] == "CONFIGURATION_ERROR"


class TestLifespan:
    """Test suite for application startup and shutdown."""

    def test_lifespan_should_build_verify_and_close_context(
        self, required_env, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test startup stores a verified context and shutdown closes it."""
        # Arrange
        index = StubIndex()
        context = build_context(StubEmbedder(), index, StubGenerator())
        monkeypatch.setattr(ServiceContext, "from_settings", classmethod(lambda cls, settings: context))
        app = create_app()

        # Act
        with TestClient(app):
            stored = app.state.service_context

        # Assert
        assert stored is context
        assert index.verified_dimension == 1536
        assert index.closed

    def test_lifespan_should_fail_startup_on_bad_index(
        self, required_env, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test an index that fails verification aborts startup."""
        # Arrange
        index = StubIndex()

        async def reject(expected_dimension: int) -> None:
            raise ConfigurationError("Vector index 'vectorIndexForRecipes' does not exist")

        index.verify_index = reject
        context = build_context(StubEmbedder(), index, StubGenerator())
        monkeypatch.setattr(ServiceContext, "from_settings", classmethod(lambda cls, settings: context))

        # Act & Assert
        with pytest.raises(ConfigurationError):
            with TestClient(create_app()):
                pass
        assert index.closed

    def test_lifespan_should_fail_startup_without_settings(self, monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
        """Test missing required environment aborts startup."""
        # Arrange
        monkeypatch.chdir(tmp_path)
        for name in ("NEO4J_URI", "NEO4J_INDEX_NAME", "LLM_API_KEY"):
            monkeypatch.delenv(name, raising=False)
        from nomnom.configs import get_settings

        get_settings.cache_clear()

        # Act & Assert
        with pytest.raises(ConfigurationError):
            with TestClient(create_app()):
                pass
        get_settings.cache_clear()
