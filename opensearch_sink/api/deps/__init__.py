"""API-specific dependencies."""

from .dependencies import (
    get_opensearch_client,
    get_service_cache,
    get_sink_service,
)

__all__ = [
    "get_opensearch_client",
    "get_service_cache",
    "get_sink_service",
]
