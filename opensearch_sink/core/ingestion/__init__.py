"""
Ingestion pipeline for the OpenSearch sink.

ensure index → convert → bulk write, per request or per stream.

Dependencies: pydantic, opensearch_sink.boundary.opensearch
System role: Ingestion pipeline entrypoint
"""

from .bulk_writer import BulkBuffer, BulkWriter
from .converter import convert, is_primary_chunk_config, observed_dimension
from .orchestrator import IngestionOrchestrator
from .schema_manager import SchemaManager, index_name_for

__all__ = [
    "BulkBuffer",
    "BulkWriter",
    "IngestionOrchestrator",
    "SchemaManager",
    "convert",
    "index_name_for",
    "is_primary_chunk_config",
    "observed_dimension",
]
