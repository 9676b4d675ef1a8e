"""
Bulk writer and accumulating buffer.

BulkWriter splits a sequence of (index, document) pairs into bulk requests of
at most max_batch_size and maps every response item back to the document that
produced it. BulkBuffer groups documents submitted concurrently (streaming
mode) and flushes on size or time window, whichever comes first.

Dependencies: opensearch_sink.boundary.opensearch, opensearch_sink.configs
System role: Batched writes with per-item outcomes
"""

import asyncio
import logging
from typing import Iterator, Sequence

from opensearch_sink.boundary.opensearch.bulk_client import BulkTransport
from opensearch_sink.boundary.opensearch.schemas import BulkOperation
from opensearch_sink.configs.opensearch import BatchSettings
from opensearch_sink.core.exceptions import WriteError
from opensearch_sink.models.bulk import BulkItemResult, BulkResult
from opensearch_sink.models.search_document import SearchDocument

logger = logging.getLogger(__name__)

WriteOp = tuple[str, SearchDocument]


def _batched(ops: Sequence[WriteOp], size: int) -> Iterator[Sequence[WriteOp]]:
    for start in range(0, len(ops), size):
        yield ops[start : start + size]


class BulkWriter:
    """Write documents through the bulk interface under BatchOptions."""

    def __init__(self, transport: BulkTransport, batch: BatchSettings) -> None:
        """
        Initialize bulk writer.

        Args:
            transport: Bulk interface
            batch: Batch size and timeout policy
        """
        self._transport = transport
        self._batch = batch

    @property
    def batch_settings(self) -> BatchSettings:
        return self._batch

    async def write(self, ops: Sequence[WriteOp]) -> BulkResult:
        """
        Write documents and report one outcome per document.

        A batch that fails as a whole (timeout, connection failure, rejected
        request) marks each of its documents failed with the batch error;
        other batches are unaffected.

        Args:
            ops: (index name, document) pairs in submission order

        Returns:
            BulkResult: Items in submission order
        """
        items: list[BulkItemResult] = []
        for batch in _batched(ops, self._batch.max_batch_size):
            items.extend(await self._write_batch(batch))

        result = BulkResult(items=items)
        if result.has_errors:
            logger.warning(
                f"{__name__}:write - Bulk write completed with errors",
                extra={"submitted": len(items), "failed": len(result.failed)},
            )
        return result

    async def _write_batch(self, batch: Sequence[WriteOp]) -> list[BulkItemResult]:
        operations = [
            BulkOperation(index_name=index_name, doc_id=doc.original_doc_id, source=doc.to_source())
            for index_name, doc in batch
        ]
        try:
            response = await self._transport.bulk(operations, timeout_s=self._batch.total_timeout_s)
        except WriteError as e:
            return [
                BulkItemResult(
                    index_name=op.index_name,
                    doc_id=op.doc_id,
                    success=False,
                    error=e.message,
                    error_kind=e.kind,
                    retryable=e.retryable,
                )
                for op in operations
            ]

        results = []
        for position, op in enumerate(operations):
            if position >= len(response.items):
                results.append(
                    BulkItemResult(
                        index_name=op.index_name,
                        doc_id=op.doc_id,
                        success=False,
                        error="No result reported for item",
                        error_kind="item",
                    )
                )
                continue
            item = response.items[position]
            results.append(
                BulkItemResult(
                    index_name=op.index_name,
                    doc_id=op.doc_id,
                    success=item.success,
                    status=item.status,
                    error=item.error,
                    error_kind=None if item.success else "item",
                    retryable=item.status == 429,
                )
            )
        return results


class BulkBuffer:
    """
    Accumulate concurrent submissions into shared bulk requests.

    Not thread-safe; all callers must share one event loop.
    """

    def __init__(self, writer: BulkWriter) -> None:
        self._writer = writer
        self._max_size = writer.batch_settings.max_batch_size
        self._window_s = writer.batch_settings.max_time_window_ms / 1000
        self._pending: list[tuple[str, SearchDocument, asyncio.Future]] = []
        self._timer: asyncio.TimerHandle | None = None
        self._flushes: set[asyncio.Task] = set()

    async def submit(self, index_name: str, doc: SearchDocument) -> BulkItemResult:
        """
        Queue a document and wait for its own outcome.

        Args:
            index_name: Target index
            doc: Document to write

        Returns:
            BulkItemResult: Outcome for this document
        """
        loop = asyncio.get_running_loop()
        future: asyncio.Future = loop.create_future()
        self._pending.append((index_name, doc, future))

        if len(self._pending) >= self._max_size:
            self._flush_pending()
        elif self._timer is None:
            self._timer = loop.call_later(self._window_s, self._flush_pending)

        return await future

    async def flush(self) -> None:
        """Write everything queued so far and wait for in-flight batches."""
        self._flush_pending()
        if self._flushes:
            await asyncio.gather(*list(self._flushes))

    async def close(self) -> None:
        """Drop queued documents and stop in-flight batches; their submitters are cancelled."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        pending, self._pending = self._pending, []
        for _, _, future in pending:
            future.cancel()

        flushes = list(self._flushes)
        for task in flushes:
            task.cancel()
        if flushes:
            await asyncio.gather(*flushes, return_exceptions=True)

    def _flush_pending(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        pending, self._pending = self._pending, []
        if not pending:
            return
        task = asyncio.ensure_future(self._flush(pending))
        self._flushes.add(task)
        task.add_done_callback(self._flushes.discard)

    async def _flush(self, pending: list[tuple[str, SearchDocument, asyncio.Future]]) -> None:
        live = [entry for entry in pending if not entry[2].done()]
        if not live:
            return
        try:
            result = await self._writer.write([(index_name, doc) for index_name, doc, _ in live])
        except asyncio.CancelledError:
            for _, _, future in live:
                future.cancel()
            raise
        except Exception as e:
            for _, _, future in live:
                if not future.done():
                    future.set_exception(e)
            return

        for (_, _, future), item in zip(live, result.items):
            if not future.done():
                future.set_result(item)
