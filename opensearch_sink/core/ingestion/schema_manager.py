"""
Schema/index manager.

Derives index names from document types and asks the administration
interface to create the index and missing fields. Existence is re-asserted on
every call; nothing is cached between requests.

Dependencies: opensearch_sink.boundary.opensearch, opensearch_sink.configs
System role: Idempotent index and mapping assurance
"""

import logging

from opensearch_sink.boundary.opensearch.admin_client import SearchAdministration
from opensearch_sink.boundary.opensearch.schemas import (
    FieldSpec,
    IndexSpec,
    IndexStatus,
    VectorFieldSpec,
)
from opensearch_sink.configs.opensearch import KnnSettings

logger = logging.getLogger(__name__)

INDEX_PREFIX = "pipeline-"

BASE_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec(name="originalDocId", type="keyword"),
    FieldSpec(name="docType", type="keyword"),
    FieldSpec(name="title", type="text"),
    FieldSpec(name="body", type="text"),
    FieldSpec(name="tags", type="keyword"),
    FieldSpec(name="lastModifiedAt", type="date"),
)


def index_name_for(document_type: str) -> str:
    """
    Derive the index name for a document type.

    Example:
        >>> index_name_for("Article")
        'pipeline-article'
    """
    return f"{INDEX_PREFIX}{document_type.lower()}"


class SchemaManager:
    """Ensure indices and field mappings exist before writes."""

    def __init__(self, admin: SearchAdministration, knn: KnnSettings) -> None:
        """
        Initialize schema manager.

        Args:
            admin: Administration interface
            knn: k-NN method and HNSW parameters for new vector fields
        """
        self._admin = admin
        self._knn = knn

    def build_spec(self, dimension: int | None = None) -> IndexSpec:
        """
        Field declarations for a pipeline index.

        Args:
            dimension: Vector dimension observed on the current document;
                no vector field is declared when None

        Returns:
            IndexSpec: Text/keyword fields plus the optional vector field
        """
        vector = None
        if dimension:
            vector = VectorFieldSpec(
                dimension=dimension,
                engine=self._knn.engine,
                space_type=self._knn.space_type,
                m=self._knn.m,
                ef_construction=self._knn.ef_construction,
            )
        return IndexSpec(fields=list(BASE_FIELDS), vector=vector, ef_search=self._knn.ef_search)

    async def ensure_index(self, index_name: str, dimension: int | None = None) -> IndexStatus:
        """
        Ensure the index and required fields exist.

        Args:
            index_name: Target index
            dimension: Vector dimension when the document carries embeddings

        Returns:
            IndexStatus: Outcome reported by the administration interface

        Raises:
            TransientIndexError: Retryable administration failure
            PermanentIndexError: Conflicting mapping or rejected request
        """
        status = await self._admin.ensure_index(index_name, self.build_spec(dimension))
        logger.debug(
            f"{__name__}:ensure_index - {status.value}",
            extra={"index_name": index_name, "dimension": dimension},
        )
        return status
