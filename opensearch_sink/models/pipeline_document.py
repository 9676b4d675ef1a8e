"""
Pipeline document schema.

Input shape produced by upstream processing stages: text metadata plus
semantic results, each holding chunks that may carry an embedding vector.
Read-only inside the sink.

Dependencies: pydantic
System role: Inbound data contract
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class EmbeddingInfo(BaseModel):
    """Vector and source text attached to a chunk by the embedding stage."""

    vector: list[float] = Field(default_factory=list, description="Embedding vector")
    text_content: str = Field(default="", description="Text span the vector encodes")


class SemanticChunk(BaseModel):
    """Single chunk produced by a chunk configuration."""

    chunk_id: str = Field(default="", description="Chunk identifier")
    embedding_info: EmbeddingInfo | None = Field(
        default=None,
        description="Embedding for the chunk, absent when not embedded",
    )


class SemanticResult(BaseModel):
    """Chunks produced by one chunk-config/embedding-config pair."""

    result_set_name: str | None = Field(default=None, description="Result set label")
    chunk_config_id: str = Field(description="Chunk configuration identifier")
    embedding_config_id: str = Field(description="Embedding configuration identifier")
    chunks: list[SemanticChunk] = Field(default_factory=list)


class PipelineDocument(BaseModel):
    """Processed document handed to the sink."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "doc_id": "doc-123",
                "document_type": "Article",
                "title": "Gross anatomy of the heart",
                "body": "The heart has four chambers...",
                "keywords": ["anatomy", "cardiology"],
                "last_modified_at": "2025-01-01T12:00:00Z",
                "semantic_results": [
                    {
                        "chunk_config_id": "title-chunker-v1",
                        "embedding_config_id": "minilm-384",
                        "chunks": [
                            {
                                "chunk_id": "c-0",
                                "embedding_info": {
                                    "vector": [0.1, 0.2, 0.3],
                                    "text_content": "Gross anatomy of the heart",
                                },
                            }
                        ],
                    }
                ],
            }
        },
    )

    doc_id: str = Field(description="Document identifier")
    document_type: str = Field(description="Document type, selects the target index")
    title: str | None = Field(default=None, description="Document title")
    body: str | None = Field(default=None, description="Document body text")
    keywords: list[str] | None = Field(default=None, description="Keyword list")
    last_modified_at: datetime = Field(description="Last modification timestamp")
    semantic_results: list[SemanticResult] = Field(default_factory=list)
