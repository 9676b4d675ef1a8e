"""
API test fixtures.

Provides: FastAPI app with the sink service and OpenSearch client overridden
Dependencies: pytest, fastapi
System role: HTTP/WebSocket test wiring
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from opensearch_sink.api.deps import get_opensearch_client, get_sink_service
from opensearch_sink.api.main import create_app


@pytest.fixture
def mock_opensearch_client() -> MagicMock:
    """Provide mock AsyncOpenSearch answering pings."""
    client = MagicMock()
    client.ping = AsyncMock(return_value=True)
    return client


@pytest.fixture
def app(sink_service, mock_opensearch_client):
    """Provide app wired to the in-memory sink service."""
    app = create_app()
    app.dependency_overrides[get_sink_service] = lambda: sink_service
    app.dependency_overrides[get_opensearch_client] = lambda: mock_opensearch_client
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    """Provide test client; lifespan is not entered so no cluster is contacted."""
    return TestClient(app)


@pytest.fixture
def document_payload(make_document) -> dict:
    """Provide a JSON-ready pipeline document."""
    return make_document().model_dump(mode="json")
