"""
Ingestion request/response schemas.

IngestionRequest/IngestionResponse are the per-document stream contract;
ModuleProcessRequest/ModuleProcessResponse are the single-document
processing contract.

Dependencies: pydantic
System role: Exposed processing contracts
"""

import uuid

from pydantic import BaseModel, Field

from opensearch_sink.models.pipeline_document import PipelineDocument


class IngestionRequest(BaseModel):
    """One document submitted for indexing."""

    request_id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        description="Caller-supplied correlation ID",
    )
    document: PipelineDocument | None = Field(default=None, description="Document to index")


class IngestionResponse(BaseModel):
    """Outcome for one ingestion request."""

    request_id: str
    document_id: str = ""
    success: bool
    message: str
    retryable: bool = Field(default=False, description="Failure is transient")
    error_kind: str | None = Field(
        default=None,
        description="Failure classification (timeout, connection, index_permanent, ...)",
    )


class ModuleProcessRequest(BaseModel):
    """Single-document processing request."""

    document: PipelineDocument | None = None


class ModuleProcessResponse(BaseModel):
    """Single-document processing response."""

    success: bool
    processor_logs: list[str] = Field(default_factory=list)
    output_doc: PipelineDocument | None = None
