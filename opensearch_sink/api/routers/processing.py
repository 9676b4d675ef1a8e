"""
Single-document processing endpoints.

Routes: POST /process-data, POST /test-process-data, POST /ingest

Ingestion failures are reported in the body with success=false, never as
5xx responses.

Dependencies: opensearch_sink.application.services.sink_service
System role: Single-document processing HTTP API
"""

from fastapi import APIRouter, Depends

from opensearch_sink.api.deps import get_sink_service
from opensearch_sink.application.services import SinkService
from opensearch_sink.models.ingestion import (
    IngestionRequest,
    IngestionResponse,
    ModuleProcessRequest,
    ModuleProcessResponse,
)

router = APIRouter(tags=["processing"])


@router.post("/process-data", response_model=ModuleProcessResponse)
async def process_data(
    request: ModuleProcessRequest,
    sink_service: SinkService = Depends(get_sink_service),
) -> ModuleProcessResponse:
    """
    Index one pipeline document.

    Returns success flag, processor logs, and the echoed input document.
    """
    return await sink_service.process_data(request)


@router.post("/test-process-data", response_model=ModuleProcessResponse)
async def test_process_data(
    request: ModuleProcessRequest,
    sink_service: SinkService = Depends(get_sink_service),
) -> ModuleProcessResponse:
    """Run a test document through the real processing path."""
    return await sink_service.test_process_data(request)


@router.post("/ingest", response_model=IngestionResponse)
async def ingest(
    request: IngestionRequest,
    sink_service: SinkService = Depends(get_sink_service),
) -> IngestionResponse:
    """Index one document, correlated by request ID."""
    return await sink_service.ingest(request)
