"""
Test suite for correlation ID propagation and logging helpers.

System role: Verification of request tracing
"""

import asyncio
import logging

import pytest

from opensearch_sink.observability.correlation import (
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from opensearch_sink.core.exceptions import PermanentIndexError, WriteTimeoutError
from opensearch_sink.observability.log_utils import log_request_failure, summarize
from opensearch_sink.observability.logger import CorrelationIdFilter


class TestCorrelationId:
    """Test suite for correlation ID context functions."""

    def test_set_should_generate_id_when_missing(self) -> None:
        """Test a fresh ID is generated when none is supplied."""
        value = set_correlation_id()

        assert value
        assert get_correlation_id() == value
        clear_correlation_id()
        assert get_correlation_id() == ""

    @pytest.mark.asyncio
    async def test_tasks_should_keep_their_own_ids(self) -> None:
        """Test concurrent tasks do not see each other's IDs."""

        async def worker(request_id: str) -> str:
            set_correlation_id(request_id)
            await asyncio.sleep(0.01)
            return get_correlation_id()

        results = await asyncio.gather(*(worker(f"req-{n}") for n in range(5)))

        assert results == [f"req-{n}" for n in range(5)]

    def test_filter_should_attach_correlation_id(self) -> None:
        """Test log records carry the current ID, or '-' when unset."""
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "msg", None, None)

        clear_correlation_id()
        CorrelationIdFilter().filter(record)
        assert record.correlation_id == "-"

        set_correlation_id("req-7")
        CorrelationIdFilter().filter(record)
        assert record.correlation_id == "req-7"
        clear_correlation_id()


class TestLogUtils:
    """Test suite for request failure logging."""

    def test_summarize_should_report_vector_dimension(self) -> None:
        """Test vectors are logged by dimension, other containers by size."""
        assert summarize([0.1] * 384) == "vector(dim=384)"
        assert summarize(["a", "b"]) == "list(2 items)"
        assert summarize({"a": 1}) == "dict(1 keys)"
        assert summarize(None) == "None"

    def test_summarize_should_truncate(self) -> None:
        """Test long strings are cut short."""
        assert summarize("x" * 20, max_length=5) == "xxxxx... (20 chars)"

    def test_failure_should_log_retryable_error_as_warning(self, caplog) -> None:
        """Test a retryable sink error is a warning carrying its kind and details."""
        logger = logging.getLogger("opensearch_sink.test")
        error = WriteTimeoutError("Bulk request timed out", operation_count=3)

        with caplog.at_level(logging.INFO, logger="opensearch_sink.test"):
            log_request_failure(logger, "failed", "req-1", error, **error.details)

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.request_id == "req-1"
        assert record.error_kind == "timeout"
        assert record.retryable is True
        assert record.operation_count == "3"
        assert record.exc_info is None

    def test_failure_should_log_permanent_error_as_error(self, caplog) -> None:
        """Test a non-retryable sink error is logged at ERROR."""
        logger = logging.getLogger("opensearch_sink.test")

        with caplog.at_level(logging.INFO, logger="opensearch_sink.test"):
            log_request_failure(logger, "failed", "req-1", PermanentIndexError("rejected"))

        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert record.error_kind == "index_permanent"

    def test_failure_should_keep_traceback_for_unexpected_errors(self, caplog) -> None:
        """Test an unclassified exception is logged with its traceback."""
        logger = logging.getLogger("opensearch_sink.test")

        with caplog.at_level(logging.INFO, logger="opensearch_sink.test"):
            log_request_failure(
                logger, "failed", "req-1", ValueError("boom"), embedding=[1.0, 2.0]
            )

        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert record.error_kind == "unexpected"
        assert record.error_type == "ValueError"
        assert record.embedding == "vector(dim=2)"
        assert record.exc_info is not None
