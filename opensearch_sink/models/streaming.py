"""
Streaming event schemas for WebSocket ingestion.

Dependencies: pydantic
System role: Streaming protocol schemas
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel


class StreamEventType(str, Enum):
    """Server-to-client event types."""

    CONNECTED = "connected"
    RESULT = "result"
    ERROR = "error"
    COMPLETE = "complete"


class ClientEventType(str, Enum):
    """Client-to-server event types."""

    INGEST = "ingest"
    END = "end"
    PING = "ping"


class StreamEvent(BaseModel):
    """
    Base streaming event model.

    Attributes:
        event: Event type identifier
        data: Event-specific payload
    """

    event: StreamEventType
    data: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {"event": self.event.value, "data": self.data}
