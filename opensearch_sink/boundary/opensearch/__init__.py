"""
OpenSearch boundary layer.

- OpenSearchAdministration: idempotent index/field creation
- OpenSearchBulkClient: bulk writes with per-item results

Dependencies: opensearch-py
System role: Search engine adapters
"""

from opensearch_sink.boundary.opensearch.admin_client import (
    OpenSearchAdministration,
    SearchAdministration,
)
from opensearch_sink.boundary.opensearch.bulk_client import BulkTransport, OpenSearchBulkClient
from opensearch_sink.boundary.opensearch.client import create_client, wait_for_cluster
from opensearch_sink.boundary.opensearch.schemas import (
    BulkItemResponse,
    BulkOperation,
    BulkResponse,
    FieldSpec,
    IndexSpec,
    IndexStatus,
    VectorFieldSpec,
)

__all__ = [
    "BulkItemResponse",
    "BulkOperation",
    "BulkResponse",
    "BulkTransport",
    "FieldSpec",
    "IndexSpec",
    "IndexStatus",
    "OpenSearchAdministration",
    "OpenSearchBulkClient",
    "SearchAdministration",
    "VectorFieldSpec",
    "create_client",
    "wait_for_cluster",
]
