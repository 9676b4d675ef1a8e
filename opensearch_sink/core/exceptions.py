"""
Exception hierarchy for the OpenSearch sink.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class SinkException(Exception):
    """Base exception for all OpenSearch sink errors."""

    #: Whether the caller may retry the same request unchanged.
    retryable: bool = False
    #: Short machine-readable classification surfaced in responses.
    kind: str = "error"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class SearchIndexError(SinkException):
    """Base exception for index and mapping assurance failures."""

    kind = "index"

    def __init__(
        self,
        message: str,
        index_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize index error.

        Args:
            message: Error message
            index_name: Index the failed operation targeted
            details: Additional context
        """
        details = details or {}
        if index_name:
            details["index_name"] = index_name
        self.index_name = index_name
        super().__init__(message, details)


class TransientIndexError(SearchIndexError):
    """Administration interface unreachable or temporarily failing."""

    retryable = True
    kind = "index_transient"


class PermanentIndexError(SearchIndexError):
    """Index or mapping request rejected (e.g. conflicting field type)."""

    kind = "index_permanent"


class DimensionMismatchError(PermanentIndexError):
    """Vector field already mapped with a different dimensionality."""

    def __init__(self, index_name: str, expected: int, observed: int) -> None:
        """
        Initialize dimension mismatch error.

        Args:
            index_name: Index holding the vector field
            expected: Dimension already mapped on the index
            observed: Dimension of the incoming document's vectors
        """
        super().__init__(
            f"Vector dimension {observed} does not match mapped dimension {expected}",
            index_name=index_name,
            details={"expected_dimension": expected, "observed_dimension": observed},
        )
        self.expected = expected
        self.observed = observed


class WriteError(SinkException):
    """Base exception for bulk write failures affecting a whole batch."""

    kind = "write"

    def __init__(
        self,
        message: str,
        operation_count: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize write error.

        Args:
            message: Error message
            operation_count: Number of operations in the failed batch
            details: Additional context
        """
        details = details or {}
        if operation_count is not None:
            details["operation_count"] = operation_count
        super().__init__(message, details)


class WriteTimeoutError(WriteError):
    """Bulk request exceeded the configured connect/read timeouts."""

    retryable = True
    kind = "timeout"


class WriteConnectionError(WriteError):
    """Search engine could not be reached for a bulk request."""

    retryable = True
    kind = "connection"


class WriteOverloadedError(WriteError):
    """Bulk request rejected as a whole because the cluster is overloaded (429/5xx)."""

    retryable = True
    kind = "overloaded"


class ClusterUnavailableError(SinkException):
    """OpenSearch did not answer a ping."""

    retryable = True
    kind = "connection"
