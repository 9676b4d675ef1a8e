"""
Dependency injection container.

Factory functions for FastAPI dependencies. Components are built once per
process from the frozen settings and shared across requests.

Dependencies: opensearch_sink.configs, opensearch_sink.core, opensearch_sink.boundary
System role: DI container for service injection
"""

from opensearchpy import AsyncOpenSearch

from opensearch_sink.application.services import SinkService
from opensearch_sink.configs import Settings, get_settings


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings
        self._client: AsyncOpenSearch | None = None
        self._sink_service: SinkService | None = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def client(self) -> AsyncOpenSearch:
        """Get cached OpenSearch client."""
        if self._client is None:
            from opensearch_sink.boundary.opensearch.client import create_client

            self._client = create_client(self.settings.opensearch, self.settings.batch)
        return self._client

    @property
    def sink_service(self) -> SinkService:
        """Get cached sink service with its full ingestion stack."""
        if self._sink_service is None:
            from opensearch_sink.boundary.opensearch import (
                OpenSearchAdministration,
                OpenSearchBulkClient,
            )
            from opensearch_sink.core.ingestion import (
                BulkWriter,
                IngestionOrchestrator,
                SchemaManager,
            )

            settings = self.settings
            orchestrator = IngestionOrchestrator(
                schema_manager=SchemaManager(OpenSearchAdministration(self.client), settings.knn),
                writer=BulkWriter(OpenSearchBulkClient(self.client), settings.batch),
                stream_settings=settings.stream,
            )
            self._sink_service = SinkService(orchestrator=orchestrator, module=settings.module)
        return self._sink_service

    async def aclose(self) -> None:
        """Close the OpenSearch client and clear cached instances."""
        if self._client is not None:
            await self._client.close()
        self._client = None
        self._sink_service = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_sink_service() -> SinkService:
    """
    Get sink service instance.

    Returns:
        SinkService: Shared sink service
    """
    return get_service_cache().sink_service


def get_opensearch_client() -> AsyncOpenSearch:
    """
    Get the shared OpenSearch client.

    Returns:
        AsyncOpenSearch: Client used by the ingestion stack
    """
    return get_service_cache().client
