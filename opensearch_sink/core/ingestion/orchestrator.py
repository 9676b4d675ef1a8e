"""
Ingestion orchestrator.

Runs each request through ensure-index → convert → write and maps the
outcome to an IngestionResponse. Failures never escape: every request yields
exactly one response. Streams are processed concurrently and answered in
completion order.

Dependencies: core.ingestion tasks, opensearch_sink.observability
System role: Pipeline orchestration (coordinates only)
"""

import asyncio
import logging
from typing import AsyncIterable, AsyncIterator

from opensearch_sink.configs.ingestion import StreamSettings
from opensearch_sink.core.exceptions import SinkException
from opensearch_sink.core.ingestion.bulk_writer import BulkBuffer, BulkWriter
from opensearch_sink.core.ingestion.converter import convert, observed_dimension
from opensearch_sink.core.ingestion.schema_manager import SchemaManager, index_name_for
from opensearch_sink.models.bulk import BulkItemResult
from opensearch_sink.models.ingestion import IngestionRequest, IngestionResponse
from opensearch_sink.models.search_document import SearchDocument
from opensearch_sink.observability.correlation import set_correlation_id
from opensearch_sink.observability.log_utils import log_request_failure

logger = logging.getLogger(__name__)

NO_DOCUMENT_MESSAGE = "IngestionRequest has no document."
SUCCESS_MESSAGE = "Document indexed successfully."

_END_OF_STREAM = object()


def _response(
    request: IngestionRequest,
    success: bool,
    message: str,
    retryable: bool = False,
    error_kind: str | None = None,
) -> IngestionResponse:
    return IngestionResponse(
        request_id=request.request_id,
        document_id=request.document.doc_id if request.document is not None else "",
        success=success,
        message=message,
        retryable=retryable,
        error_kind=error_kind,
    )


class IngestionOrchestrator:
    """Coordinate schema assurance, conversion, and bulk writes per request."""

    def __init__(
        self,
        schema_manager: SchemaManager,
        writer: BulkWriter,
        stream_settings: StreamSettings | None = None,
    ) -> None:
        """
        Initialize orchestrator.

        Args:
            schema_manager: Index/field assurance
            writer: Bulk writer
            stream_settings: Stream concurrency and accumulation (defaults if None)
        """
        self._schema_manager = schema_manager
        self._writer = writer
        self._stream_settings = stream_settings or StreamSettings()

    async def process(
        self,
        request: IngestionRequest,
        buffer: BulkBuffer | None = None,
    ) -> IngestionResponse:
        """
        Index one document.

        Args:
            request: Ingestion request
            buffer: Shared accumulator; the document is written as a
                single-item batch when None

        Returns:
            IngestionResponse: Outcome, correlated by request and document ID
        """
        if request.document is None:
            logger.warning(
                f"{__name__}:process - Request has no document",
                extra={"request_id": request.request_id},
            )
            return _response(request, False, NO_DOCUMENT_MESSAGE, error_kind="request")

        doc = request.document
        try:
            index_name = index_name_for(doc.document_type)
            await self._schema_manager.ensure_index(index_name, observed_dimension(doc))
            search_doc = convert(doc)
            item = await self._write(index_name, search_doc, buffer)
        except SinkException as e:
            log_request_failure(
                logger,
                f"{__name__}:process - Failed to process document {doc.doc_id}: {e}",
                request.request_id,
                e,
                **e.details,
            )
            return _response(
                request,
                False,
                f"Processing failed: {e.message}",
                retryable=e.retryable,
                error_kind=e.kind,
            )
        except Exception as e:
            log_request_failure(
                logger,
                f"{__name__}:process - Unexpected failure for document {doc.doc_id}",
                request.request_id,
                e,
                document_type=doc.document_type,
            )
            return _response(request, False, f"Processing failed: {e}", error_kind="unexpected")

        if not item.success:
            logger.warning(
                f"{__name__}:process - Bulk request had errors for document {doc.doc_id}",
                extra={"request_id": request.request_id, "error": item.error},
            )
            return _response(
                request,
                False,
                f"Bulk operation completed with errors: {item.error}",
                retryable=item.retryable,
                error_kind=item.error_kind,
            )

        logger.info(
            f"{__name__}:process - Successfully indexed document {doc.doc_id}",
            extra={"request_id": request.request_id, "index_name": index_name},
        )
        return _response(request, True, SUCCESS_MESSAGE)

    async def _write(
        self,
        index_name: str,
        search_doc: SearchDocument,
        buffer: BulkBuffer | None,
    ) -> BulkItemResult:
        if buffer is not None:
            return await buffer.submit(index_name, search_doc)
        result = await self._writer.write([(index_name, search_doc)])
        return result.items[0]

    async def stream(
        self,
        requests: AsyncIterable[IngestionRequest],
    ) -> AsyncIterator[IngestionResponse]:
        """
        Process a stream of requests concurrently.

        Responses are yielded as they complete, not in request order. At most
        max_concurrency requests are in flight. One request failing never ends
        the stream; an exception raised by the request source is re-raised
        after in-flight requests have been answered.
        If the consumer stops early, outstanding work is cancelled and the
        source is closed.

        Args:
            requests: Async source of ingestion requests

        Yields:
            IngestionResponse: One per request
        """
        queue: asyncio.Queue = asyncio.Queue()
        semaphore = asyncio.Semaphore(self._stream_settings.max_concurrency)
        buffer = BulkBuffer(self._writer) if self._stream_settings.accumulate else None
        in_flight: set[asyncio.Task] = set()

        async def run(request: IngestionRequest) -> None:
            set_correlation_id(request.request_id)
            try:
                queue.put_nowait(await self.process(request, buffer))
            finally:
                semaphore.release()

        async def feed() -> None:
            try:
                async for request in requests:
                    await semaphore.acquire()
                    task = asyncio.create_task(run(request))
                    in_flight.add(task)
                    task.add_done_callback(in_flight.discard)
            finally:
                if in_flight:
                    await asyncio.gather(*list(in_flight), return_exceptions=True)
                queue.put_nowait(_END_OF_STREAM)

        feeder = asyncio.create_task(feed())
        count = 0
        try:
            while True:
                response = await queue.get()
                if response is _END_OF_STREAM:
                    break
                count += 1
                yield response
            await feeder
        finally:
            feeder.cancel()
            for task in list(in_flight):
                task.cancel()
            await asyncio.gather(feeder, *list(in_flight), return_exceptions=True)
            if buffer is not None:
                await buffer.close()
            # The feeder has stopped, so the source is no longer being iterated
            aclose = getattr(requests, "aclose", None)
            if aclose is not None:
                await aclose()
            logger.info(
                f"{__name__}:stream - Stream finished",
                extra={"responses": count},
            )
