"""
Health check API endpoints.

Routes: GET /health, GET /health/opensearch

Dependencies: opensearch_sink.api.deps
System role: Health check HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Response, status
from opensearchpy import AsyncOpenSearch
from pydantic import BaseModel

from opensearch_sink.api.deps import get_opensearch_client

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/opensearch", response_model=HealthResponse)
async def health_check_opensearch(
    response: Response,
    client: AsyncOpenSearch = Depends(get_opensearch_client),
) -> HealthResponse:
    """OpenSearch cluster health check."""
    if await client.ping():
        return HealthResponse(status="healthy", message="OpenSearch reachable")

    logger.warning(f"{__name__}:health_check_opensearch - Ping failed")
    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return HealthResponse(status="unhealthy", message="OpenSearch unreachable")
