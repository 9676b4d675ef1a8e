"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory administration/bulk fakes, sample pipeline documents,
wired orchestrator and sink service
Dependencies: pytest
System role: Test infrastructure and fixture management
"""

import asyncio
from datetime import datetime, timezone
from typing import Sequence

import pytest

from opensearch_sink.application.services import SinkService
from opensearch_sink.boundary.opensearch.schemas import (
    BulkItemResponse,
    BulkOperation,
    BulkResponse,
    IndexSpec,
    IndexStatus,
)
from opensearch_sink.configs import BatchSettings, KnnSettings, ModuleSettings, StreamSettings
from opensearch_sink.core.exceptions import WriteTimeoutError
from opensearch_sink.core.ingestion import BulkWriter, IngestionOrchestrator, SchemaManager
from opensearch_sink.models.pipeline_document import (
    EmbeddingInfo,
    PipelineDocument,
    SemanticChunk,
    SemanticResult,
)


class FakeAdministration:
    """In-memory SearchAdministration: first ensure creates, later ones exist."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.indices: dict[str, IndexSpec] = {}
        self.calls: list[tuple[str, IndexSpec]] = []

    async def ensure_index(self, index_name: str, spec: IndexSpec) -> IndexStatus:
        self.calls.append((index_name, spec))
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        if index_name in self.indices:
            return IndexStatus.EXISTS
        self.indices[index_name] = spec
        return IndexStatus.CREATED


class FakeBulkTransport:
    """
    In-memory BulkTransport.

    Documents listed in item_errors fail individually; a batch containing a
    document listed in timeout_ids raises WriteTimeoutError as a whole.
    """

    def __init__(
        self,
        item_errors: dict[str, str] | None = None,
        timeout_ids: set[str] | None = None,
        delays: dict[str, float] | None = None,
    ) -> None:
        self.item_errors = item_errors or {}
        self.timeout_ids = timeout_ids or set()
        self.delays = delays or {}
        self.calls: list[list[BulkOperation]] = []

    async def bulk(self, operations: Sequence[BulkOperation], timeout_s: float) -> BulkResponse:
        self.calls.append(list(operations))
        await asyncio.sleep(max((self.delays.get(op.doc_id, 0) for op in operations), default=0))
        if any(op.doc_id in self.timeout_ids for op in operations):
            raise WriteTimeoutError(
                f"Bulk request timed out after {timeout_s}s",
                operation_count=len(operations),
            )

        items = []
        for op in operations:
            error = self.item_errors.get(op.doc_id)
            items.append(
                BulkItemResponse(doc_id=op.doc_id, status=400 if error else 201, error=error)
            )
        return BulkResponse(errors=any(item.error for item in items), items=items, took_ms=1)

    @property
    def written_ids(self) -> list[str]:
        return [op.doc_id for call in self.calls for op in call]


def build_document(
    doc_id: str = "doc-1",
    document_type: str = "Article",
    dimension: int | None = 3,
    **overrides,
) -> PipelineDocument:
    """Build a pipeline document with one title-config and one body-config result."""
    semantic_results = []
    if dimension:
        semantic_results = [
            SemanticResult(
                chunk_config_id="title-chunker",
                embedding_config_id="minilm",
                chunks=[
                    SemanticChunk(
                        chunk_id="t-0",
                        embedding_info=EmbeddingInfo(
                            vector=[0.1] * dimension,
                            text_content="A title",
                        ),
                    )
                ],
            ),
            SemanticResult(
                chunk_config_id="sentence-chunker",
                embedding_config_id="minilm",
                chunks=[
                    SemanticChunk(
                        chunk_id="b-0",
                        embedding_info=EmbeddingInfo(
                            vector=[0.2] * dimension,
                            text_content="First sentence.",
                        ),
                    ),
                    SemanticChunk(chunk_id="b-1"),
                ],
            ),
        ]

    fields = {
        "doc_id": doc_id,
        "document_type": document_type,
        "title": "A title",
        "body": "First sentence. Second sentence.",
        "keywords": ["alpha", "beta"],
        "last_modified_at": datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc),
        "semantic_results": semantic_results,
    }
    fields.update(overrides)
    return PipelineDocument(**fields)


@pytest.fixture
def make_document():
    """Provide the pipeline document factory."""
    return build_document


@pytest.fixture
def batch_settings() -> BatchSettings:
    """Provide batch settings with a short time window."""
    return BatchSettings(max_batch_size=100, max_time_window_ms=50)


@pytest.fixture
def knn_settings() -> KnnSettings:
    """Provide default k-NN settings."""
    return KnnSettings()


@pytest.fixture
def fake_admin() -> FakeAdministration:
    """Provide in-memory administration interface."""
    return FakeAdministration()


@pytest.fixture
def fake_transport() -> FakeBulkTransport:
    """Provide in-memory bulk interface."""
    return FakeBulkTransport()


@pytest.fixture
def orchestrator(
    fake_admin: FakeAdministration,
    fake_transport: FakeBulkTransport,
    batch_settings: BatchSettings,
    knn_settings: KnnSettings,
) -> IngestionOrchestrator:
    """Provide orchestrator wired to the in-memory fakes."""
    return IngestionOrchestrator(
        schema_manager=SchemaManager(fake_admin, knn_settings),
        writer=BulkWriter(fake_transport, batch_settings),
        stream_settings=StreamSettings(max_concurrency=8),
    )


@pytest.fixture
def sink_service(orchestrator: IngestionOrchestrator) -> SinkService:
    """Provide sink service over the wired orchestrator."""
    return SinkService(orchestrator=orchestrator, module=ModuleSettings())
