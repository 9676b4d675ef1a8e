"""
OpenSearch bulk client.

Sends index actions through the bulk API and parses the per-item outcome.
Timeouts and connection failures are translated into the write error
taxonomy; per-item failures are returned as data.

Dependencies: opensearch-py
System role: Bulk write adapter
"""

import asyncio
import logging
from typing import Any, Protocol, Sequence

from opensearchpy import AsyncOpenSearch
from opensearchpy.exceptions import (
    ConnectionError as OpenSearchConnectionError,
    ConnectionTimeout,
    TransportError,
)

from opensearch_sink.boundary.opensearch.admin_client import TRANSIENT_STATUS_CODES
from opensearch_sink.boundary.opensearch.schemas import (
    BulkItemResponse,
    BulkOperation,
    BulkResponse,
)
from opensearch_sink.core.exceptions import (
    WriteConnectionError,
    WriteError,
    WriteOverloadedError,
    WriteTimeoutError,
)

logger = logging.getLogger(__name__)


class BulkTransport(Protocol):
    """Narrow contract for bulk writes."""

    async def bulk(
        self,
        operations: Sequence[BulkOperation],
        timeout_s: float,
    ) -> BulkResponse: ...


def _format_error(error: Any) -> str:
    if isinstance(error, dict):
        return f"{error.get('type', 'error')}: {error.get('reason', '')}".rstrip(": ")
    return str(error)


def parse_bulk_response(response: dict[str, Any]) -> BulkResponse:
    """
    Parse a raw bulk API response.

    Args:
        response: Decoded bulk response body

    Returns:
        BulkResponse: Items in request order
    """
    items = []
    for entry in response.get("items", []):
        # Each entry is keyed by its action type ("index", "create", ...)
        result = next(iter(entry.values()))
        error = result.get("error")
        items.append(
            BulkItemResponse(
                doc_id=str(result.get("_id", "")),
                status=int(result.get("status", 0)),
                error=_format_error(error) if error is not None else None,
            )
        )
    return BulkResponse(
        errors=bool(response.get("errors", False)),
        items=items,
        took_ms=response.get("took"),
    )


class OpenSearchBulkClient:
    """BulkTransport backed by AsyncOpenSearch.bulk."""

    def __init__(self, client: AsyncOpenSearch) -> None:
        self._client = client

    async def bulk(
        self,
        operations: Sequence[BulkOperation],
        timeout_s: float,
    ) -> BulkResponse:
        """
        Execute one bulk request.

        Args:
            operations: Index actions, one per document
            timeout_s: Overall deadline for the round trip

        Returns:
            BulkResponse: Parsed per-item results

        Raises:
            WriteTimeoutError: Deadline exceeded
            WriteConnectionError: Cluster unreachable
            WriteOverloadedError: Cluster rejected the request with 429/5xx
            WriteError: Bulk request rejected as a whole
        """
        body: list[dict[str, Any]] = []
        for op in operations:
            body.append({"index": {"_index": op.index_name, "_id": op.doc_id}})
            body.append(op.source)

        try:
            raw = await asyncio.wait_for(
                self._client.bulk(body=body, request_timeout=timeout_s),
                timeout=timeout_s,
            )
        except (ConnectionTimeout, asyncio.TimeoutError) as e:
            logger.warning(
                f"{__name__}:bulk - Timed out after {timeout_s}s",
                extra={"operation_count": len(operations)},
            )
            raise WriteTimeoutError(
                f"Bulk request timed out after {timeout_s}s",
                operation_count=len(operations),
            ) from e
        except OpenSearchConnectionError as e:
            logger.error(f"{__name__}:bulk - Connection failed: {e}")
            raise WriteConnectionError(
                f"OpenSearch unreachable: {e}",
                operation_count=len(operations),
            ) from e
        except TransportError as e:
            if e.status_code in TRANSIENT_STATUS_CODES:
                logger.warning(f"{__name__}:bulk - Cluster overloaded: {e}")
                raise WriteOverloadedError(
                    f"Bulk request rejected by overloaded cluster: {e.error}",
                    operation_count=len(operations),
                    details={"status_code": e.status_code},
                ) from e
            logger.error(f"{__name__}:bulk - Request rejected: {e}")
            raise WriteError(
                f"Bulk request rejected: {e.error}",
                operation_count=len(operations),
                details={"status_code": e.status_code},
            ) from e

        return parse_bulk_response(raw)
