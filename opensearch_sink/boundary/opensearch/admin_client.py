"""
OpenSearch administration client.

Implements the ensure-index contract: create the index when absent, add any
missing field mappings, and report created/fields_added/exists. An
"already exists" response from a concurrent creator counts as success, which
is the only coordination between writers racing on a new index.

Dependencies: opensearch-py
System role: Index and mapping administration adapter
"""

import logging
from typing import Any, Protocol

from opensearchpy import AsyncOpenSearch
from opensearchpy.exceptions import (
    ConnectionError as OpenSearchConnectionError,
    TransportError,
)

from opensearch_sink.boundary.opensearch.schemas import IndexSpec, IndexStatus
from opensearch_sink.core.exceptions import (
    DimensionMismatchError,
    PermanentIndexError,
    TransientIndexError,
)

logger = logging.getLogger(__name__)

ALREADY_EXISTS_ERRORS = frozenset(
    {"resource_already_exists_exception", "index_already_exists_exception"}
)
TRANSIENT_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})


class SearchAdministration(Protocol):
    """Narrow contract for index/field creation."""

    async def ensure_index(self, index_name: str, spec: IndexSpec) -> IndexStatus: ...


def _is_already_exists(error: TransportError) -> bool:
    return error.error in ALREADY_EXISTS_ERRORS


def _classify(error: Exception, index_name: str, operation: str) -> Exception:
    """Map an opensearch-py exception to the index error taxonomy."""
    details = {"operation": operation, "error": str(error)}
    if isinstance(error, OpenSearchConnectionError):
        return TransientIndexError(
            f"OpenSearch unreachable during {operation}: {error}",
            index_name=index_name,
            details=details,
        )
    if isinstance(error, TransportError) and error.status_code in TRANSIENT_STATUS_CODES:
        return TransientIndexError(
            f"OpenSearch temporarily failed {operation}: {error.error}",
            index_name=index_name,
            details=details,
        )
    return PermanentIndexError(
        f"OpenSearch rejected {operation}: {getattr(error, 'error', error)}",
        index_name=index_name,
        details=details,
    )


class OpenSearchAdministration:
    """SearchAdministration backed by the OpenSearch indices API."""

    def __init__(self, client: AsyncOpenSearch) -> None:
        self._client = client

    async def ensure_index(self, index_name: str, spec: IndexSpec) -> IndexStatus:
        """
        Create the index and any missing fields.

        Args:
            index_name: Target index
            spec: Required field declarations

        Returns:
            IndexStatus: CREATED, FIELDS_ADDED, or EXISTS

        Raises:
            TransientIndexError: Cluster unreachable or overloaded
            PermanentIndexError: Mapping conflict or rejected request
        """
        operation = "exists"
        try:
            if not await self._client.indices.exists(index=index_name):
                operation = "create"
                if await self._create(index_name, spec):
                    return IndexStatus.CREATED

            operation = "get_mapping"
            properties = await self._current_properties(index_name)
            missing = self._missing_properties(index_name, spec, properties)
            if not missing:
                return IndexStatus.EXISTS

            operation = "put_mapping"
            await self._client.indices.put_mapping(
                index=index_name,
                body={"properties": missing},
            )
            logger.info(
                f"{__name__}:ensure_index - Added fields",
                extra={"index_name": index_name, "fields": sorted(missing)},
            )
            return IndexStatus.FIELDS_ADDED

        except PermanentIndexError:
            raise
        except (OpenSearchConnectionError, TransportError) as e:
            logger.error(
                f"{__name__}:ensure_index - {operation} failed: {e}",
                extra={"index_name": index_name},
            )
            raise _classify(e, index_name, operation) from e

    async def _create(self, index_name: str, spec: IndexSpec) -> bool:
        """Create the index; False when a concurrent creator won the race."""
        try:
            await self._client.indices.create(index=index_name, body=spec.index_body())
        except TransportError as e:
            if _is_already_exists(e):
                logger.info(
                    f"{__name__}:_create - Index created concurrently",
                    extra={"index_name": index_name},
                )
                return False
            raise
        logger.info(f"{__name__}:_create - Created index", extra={"index_name": index_name})
        return True

    async def _current_properties(self, index_name: str) -> dict[str, Any]:
        response = await self._client.indices.get_mapping(index=index_name)
        # Keyed by concrete index name, which differs from index_name for aliases
        mapping = response.get(index_name) or next(iter(response.values()), {})
        return mapping.get("mappings", {}).get("properties", {})

    def _missing_properties(
        self,
        index_name: str,
        spec: IndexSpec,
        properties: dict[str, Any],
    ) -> dict[str, Any]:
        """Return mappings to add, rejecting conflicts with existing ones."""
        missing: dict[str, Any] = {}
        for field in spec.fields:
            existing = properties.get(field.name)
            if existing is None:
                missing[field.name] = field.to_mapping()
            elif existing.get("type", "object") != field.type:
                raise PermanentIndexError(
                    f"Field '{field.name}' is mapped as {existing.get('type', 'object')}, "
                    f"expected {field.type}",
                    index_name=index_name,
                )

        vector = spec.vector
        if vector is None:
            return missing

        existing = properties.get(vector.name)
        if existing is None:
            missing[vector.name] = vector.to_mapping()
            return missing

        if existing.get("type") != "nested":
            raise PermanentIndexError(
                f"Field '{vector.name}' is mapped as {existing.get('type', 'object')}, expected nested",
                index_name=index_name,
            )
        existing_vector = existing.get("properties", {}).get(vector.vector_field)
        if existing_vector is None:
            missing[vector.name] = vector.to_mapping()
        elif existing_vector.get("type") != "knn_vector":
            raise PermanentIndexError(
                f"Field '{vector.name}.{vector.vector_field}' is not a knn_vector",
                index_name=index_name,
            )
        elif existing_vector.get("dimension") != vector.dimension:
            raise DimensionMismatchError(
                index_name=index_name,
                expected=existing_vector.get("dimension"),
                observed=vector.dimension,
            )
        return missing
