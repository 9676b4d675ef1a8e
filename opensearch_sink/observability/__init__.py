"""
Observability module.

Provides structured logging helpers and correlation ID tracking.
"""

from opensearch_sink.observability.correlation import (
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from opensearch_sink.observability.logger import configure_logging

__all__ = [
    "clear_correlation_id",
    "configure_logging",
    "get_correlation_id",
    "set_correlation_id",
]
