"""Pydantic schemas shared across layers."""

from opensearch_sink.models.bulk import BulkItemResult, BulkResult
from opensearch_sink.models.ingestion import (
    IngestionRequest,
    IngestionResponse,
    ModuleProcessRequest,
    ModuleProcessResponse,
)
from opensearch_sink.models.pipeline_document import (
    EmbeddingInfo,
    PipelineDocument,
    SemanticChunk,
    SemanticResult,
)
from opensearch_sink.models.registration import (
    CapabilityType,
    RegistrationRequest,
    ServiceRegistrationMetadata,
)
from opensearch_sink.models.search_document import Embedding, SearchDocument

__all__ = [
    "BulkItemResult",
    "BulkResult",
    "CapabilityType",
    "Embedding",
    "EmbeddingInfo",
    "IngestionRequest",
    "IngestionResponse",
    "ModuleProcessRequest",
    "ModuleProcessResponse",
    "PipelineDocument",
    "RegistrationRequest",
    "SearchDocument",
    "SemanticChunk",
    "SemanticResult",
    "ServiceRegistrationMetadata",
]
