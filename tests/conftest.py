"""
Shared test fixtures and configuration for entire test suite.

Provides: stub service context, chat service, required environment for settings
Dependencies: pytest, nomnom
System role: Test infrastructure and fixture management
"""

from collections.abc import Iterator

import pytest

from nomnom.application.service_context import ServiceContext
from nomnom.application.services import ChatService
from nomnom.configs import get_settings
from stubs import EGG_FRIED_RICE, TOMATO_SOUP, StubEmbedder, StubGenerator, StubIndex, build_context

REQUIRED_ENV = {
    "NEO4J_URI": "neo4j://localhost:7687",
    "NEO4J_USERNAME": "neo4j",
    "NEO4J_PASSWORD": "secret",
    "NEO4J_INDEX_NAME": "vectorIndexForRecipes",
    "NEO4J_NODE_LABEL": "Recipe",
    "NEO4J_TEXT_NODE_PROPERTIES": '["joined_ingredients", "name", "cleaned_contents"]',
    "NEO4J_EMBEDDING_NODE_PROPERTY": "embedding",
    "LLM_API_KEY": "test-key",
}


@pytest.fixture
def required_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[dict[str, str]]:
    """
    Set the minimum environment for Settings and isolate from any .env file.

    Yields:
        dict: The variables that were set
    """
    monkeypatch.chdir(tmp_path)
    for key, value in REQUIRED_ENV.items():
        monkeypatch.setenv(key, value)
    get_settings.cache_clear()
    yield dict(REQUIRED_ENV)
    get_settings.cache_clear()


@pytest.fixture
def stub_embedder() -> StubEmbedder:
    """Provide embedder returning a fixed unit vector."""
    return StubEmbedder()


@pytest.fixture
def stub_index() -> StubIndex:
    """Provide index holding two recipes."""
    return StubIndex(nodes=[EGG_FRIED_RICE, TOMATO_SOUP])


@pytest.fixture
def stub_generator() -> StubGenerator:
    """Provide generator with a short scripted answer."""
    return StubGenerator(fragments=["<strong> Egg Fried Rice </strong>", "</br>", "Enjoy!"])


@pytest.fixture
def service_context(
    stub_embedder: StubEmbedder,
    stub_index: StubIndex,
    stub_generator: StubGenerator,
) -> ServiceContext:
    """Provide ServiceContext wired to the stub services."""
    return build_context(stub_embedder, stub_index, stub_generator)


@pytest.fixture
def chat_service(service_context: ServiceContext) -> ChatService:
    """Provide ChatService over the stub context."""
    return ChatService(context=service_context, top_k=4, history_window=10)
