"""
OpenSearch boundary schemas.

Field specifications passed to the administration interface and the
request/response shapes of the bulk interface. Rendering to OpenSearch
mapping JSON lives here so the core never builds engine payloads.

Dependencies: pydantic
System role: Type definitions for search engine operations
"""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field


class IndexStatus(str, Enum):
    """Observable outcome of an ensure-index request."""

    CREATED = "created"
    FIELDS_ADDED = "fields_added"
    EXISTS = "exists"


class FieldSpec(BaseModel):
    """Scalar field declaration (text, keyword, date, boolean)."""

    name: str
    type: Literal["text", "keyword", "date", "boolean"]

    def to_mapping(self) -> dict[str, Any]:
        return {"type": self.type}


class VectorFieldSpec(BaseModel):
    """
    Nested embeddings field with a k-NN vector sub-field.

    The sub-record layout mirrors SearchDocument.embeddings; the vector
    sub-field carries the HNSW method definition.
    """

    name: str = "embeddings"
    vector_field: str = "vector"
    dimension: int = Field(ge=1)
    engine: str
    space_type: str
    m: int
    ef_construction: int

    def vector_mapping(self) -> dict[str, Any]:
        return {
            "type": "knn_vector",
            "dimension": self.dimension,
            "method": {
                "name": "hnsw",
                "engine": self.engine,
                "space_type": self.space_type,
                "parameters": {
                    "m": self.m,
                    "ef_construction": self.ef_construction,
                },
            },
        }

    def to_mapping(self) -> dict[str, Any]:
        return {
            "type": "nested",
            "properties": {
                self.vector_field: self.vector_mapping(),
                "sourceText": {"type": "text"},
                "chunkConfigId": {"type": "keyword"},
                "embeddingId": {"type": "keyword"},
                "isPrimary": {"type": "boolean"},
            },
        }


class IndexSpec(BaseModel):
    """Everything the administration interface needs to ensure an index."""

    fields: list[FieldSpec] = Field(default_factory=list)
    vector: VectorFieldSpec | None = None
    ef_search: int = Field(default=100, ge=1, description="index.knn.algo_param.ef_search")

    def properties(self) -> dict[str, Any]:
        """Mapping properties for every declared field."""
        props = {spec.name: spec.to_mapping() for spec in self.fields}
        if self.vector is not None:
            props[self.vector.name] = self.vector.to_mapping()
        return props

    def index_body(self) -> dict[str, Any]:
        """Body for indices.create."""
        return {
            # index.knn is static, so it is enabled at creation even before
            # the first vector field exists.
            "settings": {
                "index": {
                    "knn": True,
                    "knn.algo_param.ef_search": self.ef_search,
                }
            },
            "mappings": {"properties": self.properties()},
        }


class BulkOperation(BaseModel):
    """One index action in a bulk request."""

    index_name: str
    doc_id: str
    source: dict[str, Any]


class BulkItemResponse(BaseModel):
    """Per-item outcome as reported by the bulk API."""

    doc_id: str
    status: int
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.error is None and 200 <= self.status < 300


class BulkResponse(BaseModel):
    """Parsed bulk API response, items in request order."""

    errors: bool
    items: list[BulkItemResponse] = Field(default_factory=list)
    took_ms: int | None = None
