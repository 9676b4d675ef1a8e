"""
Structured logging for per-request ingestion failures.

Context values go into the record's extra fields in a compact form: embedding
vectors become their dimension and long messages are cut short, so a failing
document never floods the log.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from numbers import Number
from typing import Any

MAX_VALUE_LENGTH = 300


def summarize(value: Any, max_length: int = MAX_VALUE_LENGTH) -> str:
    """
    Render a context value for a log record.

    Args:
        value: Value to render
        max_length: Length after which strings are truncated

    Returns:
        str: Compact representation
    """
    if isinstance(value, (list, tuple)):
        if value and all(isinstance(v, Number) for v in value):
            return f"vector(dim={len(value)})"
        return f"{type(value).__name__}({len(value)} items)"
    if isinstance(value, dict):
        return f"dict({len(value)} keys)"

    text = str(value)
    if len(text) > max_length:
        return f"{text[:max_length]}... ({len(text)} chars)"
    return text


def log_request_failure(
    logger: logging.Logger,
    message: str,
    request_id: str,
    exc: BaseException,
    **context,
) -> None:
    """
    Log a request that failed with a classified or unexpected error.

    Sink errors carrying ``kind``/``retryable`` are logged at WARNING when
    retryable and ERROR otherwise. Anything else is logged at ERROR with its
    traceback.

    Args:
        logger: Logger instance
        message: Log message
        request_id: Ingestion request ID
        exc: Failure raised while processing
        **context: Extra fields for the record
    """
    kind = getattr(exc, "kind", None)
    retryable = bool(getattr(exc, "retryable", False))

    extra = {key: summarize(val) for key, val in context.items()}
    extra.update({
        "request_id": request_id,
        "error_type": type(exc).__name__,
        "error_kind": kind or "unexpected",
        "retryable": retryable,
    })

    if kind is None:
        logger.error(message, exc_info=exc, extra=extra)
    else:
        logger.log(logging.WARNING if retryable else logging.ERROR, message, extra=extra)
