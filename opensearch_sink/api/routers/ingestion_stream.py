"""
WebSocket streaming ingestion endpoint.

Routes: WS /ws/ingest

Dependencies: opensearch_sink.application.services.sink_service
System role: Streaming ingestion HTTP API
"""

import asyncio
import json
import logging
from contextlib import aclosing
from typing import Any, AsyncIterator

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from opensearch_sink.api.deps import get_sink_service
from opensearch_sink.application.services import SinkService
from opensearch_sink.models.ingestion import IngestionRequest
from opensearch_sink.models.streaming import ClientEventType, StreamEvent, StreamEventType

logger = logging.getLogger(__name__)
router = APIRouter(tags=["streaming"])


@router.websocket("/ws/ingest")
async def websocket_ingest(
    websocket: WebSocket,
    sink_service: SinkService = Depends(get_sink_service),
) -> None:
    """
    WebSocket endpoint for streaming ingestion.

    Client sends:
        {"event": "ingest", "data": {"request_id": "...", "document": {...}}}
        {"event": "ping"}
        {"event": "end"}

    Server sends:
        {"event": "connected", "data": {}}
        {"event": "result", "data": {"request_id": "...", "document_id": "...", "success": true, ...}}
        {"event": "error", "data": {"code": "...", "message": "..."}}
        {"event": "complete", "data": {"responses": 3}}

    Results arrive in completion order, one per accepted ingest event.
    Malformed frames produce an error event and the stream continues.

    Args:
        websocket: WebSocket connection
        sink_service: Injected SinkService
    """
    await websocket.accept()
    send_lock = asyncio.Lock()

    async def send(event: StreamEventType, data: dict[str, Any]) -> None:
        async with send_lock:
            await websocket.send_json(StreamEvent(event=event, data=data).to_dict())

    async def requests() -> AsyncIterator[IngestionRequest]:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                logger.info(f"{__name__}:websocket_ingest - Client disconnected while sending")
                return

            raw_data = message.get("text")
            if raw_data is None:
                logger.warning(f"{__name__}:websocket_ingest - Non-text frame received")
                await send(
                    StreamEventType.ERROR,
                    {"code": "INVALID_FRAME", "message": "Only text frames are accepted"},
                )
                continue

            try:
                data = json.loads(raw_data)
            except json.JSONDecodeError as e:
                logger.warning(
                    "Failed to parse JSON",
                    extra={"error_msg": str(e), "raw_data_preview": raw_data[:50]},
                )
                await send(StreamEventType.ERROR, {"code": "INVALID_JSON", "message": "Invalid JSON format"})
                continue

            event_type = data.get("event") if isinstance(data, dict) else None

            if event_type == ClientEventType.PING.value:
                async with send_lock:
                    await websocket.send_json({"event": "pong"})
                continue

            if event_type == ClientEventType.END.value:
                return

            if event_type == ClientEventType.INGEST.value:
                try:
                    yield IngestionRequest.model_validate(data.get("data") or {})
                except ValidationError as e:
                    logger.warning(
                        "Invalid ingestion request",
                        extra={"error_count": e.error_count()},
                    )
                    await send(
                        StreamEventType.ERROR,
                        {"code": "INVALID_REQUEST", "message": str(e)},
                    )
                continue

            logger.warning(
                "Unknown event type received",
                extra={"event_type": str(event_type)},
            )
            await send(
                StreamEventType.ERROR,
                {"code": "UNKNOWN_EVENT", "message": f"Unknown event type: {event_type}"},
            )

    try:
        await send(StreamEventType.CONNECTED, {})
        count = 0
        async with aclosing(sink_service.stream(requests())) as responses:
            async for response in responses:
                count += 1
                await send(StreamEventType.RESULT, response.model_dump())

        await send(StreamEventType.COMPLETE, {"responses": count})
        await websocket.close()
        logger.info(
            f"{__name__}:websocket_ingest - Stream completed",
            extra={"responses": count},
        )

    except WebSocketDisconnect:
        logger.info(f"{__name__}:websocket_ingest - WebSocket client disconnected")
