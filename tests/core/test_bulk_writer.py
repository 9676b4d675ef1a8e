"""
Test suite for BulkWriter and BulkBuffer.

Uses the in-memory bulk transport fake.

System role: Verification of batching and per-item outcomes
"""

import asyncio

import pytest

from opensearch_sink.configs import BatchSettings
from opensearch_sink.core.ingestion.bulk_writer import BulkBuffer, BulkWriter
from opensearch_sink.core.ingestion.converter import convert


@pytest.fixture
def ops(make_document):
    """Provide three write operations for the article index."""
    return [
        ("pipeline-article", convert(make_document(doc_id=f"doc-{n}")))
        for n in (1, 2, 3)
    ]


class TestBulkWriter:
    """Test suite for BulkWriter.write()."""

    @pytest.mark.asyncio
    async def test_write_should_keep_per_item_outcomes(
        self, fake_transport, batch_settings, ops
    ) -> None:
        """Test a failing middle item does not affect its neighbours."""
        fake_transport.item_errors = {"doc-2": "mapper_parsing_exception: failed to parse"}
        writer = BulkWriter(fake_transport, batch_settings)

        result = await writer.write(ops)

        assert [item.doc_id for item in result.items] == ["doc-1", "doc-2", "doc-3"]
        assert [item.success for item in result.items] == [True, False, True]
        assert result.items[1].error == "mapper_parsing_exception: failed to parse"
        assert result.items[1].error_kind == "item"
        assert result.has_errors is True
        assert [item.doc_id for item in result.failed] == ["doc-2"]

    @pytest.mark.asyncio
    async def test_write_should_split_by_max_batch_size(self, fake_transport, ops) -> None:
        """Test documents are sent in chunks of at most max_batch_size."""
        writer = BulkWriter(fake_transport, BatchSettings(max_batch_size=2))

        result = await writer.write(ops)

        assert [len(call) for call in fake_transport.calls] == [2, 1]
        assert all(item.success for item in result.items)

    @pytest.mark.asyncio
    async def test_write_should_mark_batch_timeout_per_item(
        self, fake_transport, ops
    ) -> None:
        """Test a timed out batch fails each of its documents, other batches unaffected."""
        fake_transport.timeout_ids = {"doc-3"}
        writer = BulkWriter(fake_transport, BatchSettings(max_batch_size=2))

        result = await writer.write(ops)

        assert [item.success for item in result.items] == [True, True, False]
        assert result.items[2].error_kind == "timeout"
        assert result.items[2].retryable is True

    @pytest.mark.asyncio
    async def test_write_should_report_missing_items(self, batch_settings, ops) -> None:
        """Test items absent from the bulk response are reported as failures."""
        from opensearch_sink.boundary.opensearch.schemas import BulkItemResponse, BulkResponse

        class ShortTransport:
            async def bulk(self, operations, timeout_s):
                return BulkResponse(
                    errors=False,
                    items=[BulkItemResponse(doc_id=operations[0].doc_id, status=201)],
                )

        result = await BulkWriter(ShortTransport(), batch_settings).write(ops)

        assert [item.success for item in result.items] == [True, False, False]
        assert result.items[1].error == "No result reported for item"


class TestBulkBuffer:
    """Test suite for BulkBuffer."""

    @pytest.mark.asyncio
    async def test_buffer_should_flush_when_full(self, fake_transport, ops) -> None:
        """Test reaching max_batch_size flushes without waiting for the window."""
        writer = BulkWriter(fake_transport, BatchSettings(max_batch_size=3, max_time_window_ms=60000))
        buffer = BulkBuffer(writer)

        items = await asyncio.wait_for(
            asyncio.gather(*(buffer.submit(index, doc) for index, doc in ops)),
            timeout=5,
        )

        assert len(fake_transport.calls) == 1
        assert [item.doc_id for item in items] == ["doc-1", "doc-2", "doc-3"]

    @pytest.mark.asyncio
    async def test_buffer_should_flush_after_time_window(self, fake_transport, ops) -> None:
        """Test a partial batch is written once the time window elapses."""
        writer = BulkWriter(fake_transport, BatchSettings(max_batch_size=100, max_time_window_ms=20))
        buffer = BulkBuffer(writer)

        items = await asyncio.wait_for(
            asyncio.gather(*(buffer.submit(index, doc) for index, doc in ops[:2])),
            timeout=5,
        )

        assert len(fake_transport.calls) == 1
        assert all(item.success for item in items)

    @pytest.mark.asyncio
    async def test_buffer_should_route_failures_to_submitter(self, fake_transport, ops) -> None:
        """Test each submitter receives its own item outcome."""
        fake_transport.item_errors = {"doc-2": "version_conflict_engine_exception"}
        writer = BulkWriter(fake_transport, BatchSettings(max_batch_size=3))
        buffer = BulkBuffer(writer)

        items = await asyncio.gather(*(buffer.submit(index, doc) for index, doc in ops))

        assert {item.doc_id: item.success for item in items} == {
            "doc-1": True,
            "doc-2": False,
            "doc-3": True,
        }

    @pytest.mark.asyncio
    async def test_close_should_cancel_pending_submitters(self, fake_transport, ops) -> None:
        """Test closing the buffer cancels documents not yet flushed."""
        writer = BulkWriter(fake_transport, BatchSettings(max_batch_size=100, max_time_window_ms=60000))
        buffer = BulkBuffer(writer)

        task = asyncio.create_task(buffer.submit(*ops[0]))
        await asyncio.sleep(0)
        await buffer.close()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert fake_transport.calls == []

    @pytest.mark.asyncio
    async def test_close_should_cancel_in_flight_batches(self, fake_transport, ops) -> None:
        """Test closing the buffer stops a batch already sent and cancels its submitter."""
        fake_transport.delays = {"doc-1": 10}
        writer = BulkWriter(fake_transport, BatchSettings(max_batch_size=1, max_time_window_ms=60000))
        buffer = BulkBuffer(writer)

        task = asyncio.create_task(buffer.submit(*ops[0]))
        await asyncio.sleep(0.01)
        await asyncio.wait_for(buffer.close(), timeout=1)

        assert len(fake_transport.calls) == 1
        with pytest.raises(asyncio.CancelledError):
            await task
