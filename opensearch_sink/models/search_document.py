"""
Search document schema.

Normalized, engine-ready document written to OpenSearch. Field names on the
wire are camelCase (originalDocId, docType, lastModifiedAt, ...).

Dependencies: pydantic
System role: Outbound data contract for indexing
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Embedding(BaseModel):
    """Embedding sub-record stored in the nested embeddings field."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    vector: list[float]
    source_text: str
    chunk_config_id: str
    embedding_id: str
    is_primary: bool


class SearchDocument(BaseModel):
    """Document as indexed in OpenSearch."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    original_doc_id: str
    doc_type: str
    title: str | None = None
    body: str | None = None
    tags: list[str] = Field(default_factory=list)
    last_modified_at: datetime
    embeddings: list[Embedding] = Field(default_factory=list)

    def to_source(self) -> dict[str, Any]:
        """
        Build the OpenSearch `_source` body.

        Unset title/body and an empty tag list are omitted rather than
        written as empty values.

        Returns:
            dict[str, Any]: JSON-compatible source document
        """
        source = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        if not self.tags:
            source.pop("tags", None)
        return source
