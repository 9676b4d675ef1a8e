"""
Registration endpoints.

Routes: GET /registration, POST /registration

Dependencies: opensearch_sink.application.services.sink_service
System role: Module registration/capability HTTP API
"""

from fastapi import APIRouter, Depends

from opensearch_sink.api.deps import get_sink_service
from opensearch_sink.application.services import SinkService
from opensearch_sink.models.registration import RegistrationRequest, ServiceRegistrationMetadata

router = APIRouter(prefix="/registration", tags=["registration"])


@router.get("", response_model=ServiceRegistrationMetadata)
async def get_registration(
    sink_service: SinkService = Depends(get_sink_service),
) -> ServiceRegistrationMetadata:
    """Static registration metadata without a self-test."""
    return await sink_service.get_service_registration(RegistrationRequest())


@router.post("", response_model=ServiceRegistrationMetadata)
async def register(
    request: RegistrationRequest,
    sink_service: SinkService = Depends(get_sink_service),
) -> ServiceRegistrationMetadata:
    """Registration metadata, running the supplied test request as a health check."""
    return await sink_service.get_service_registration(request)
