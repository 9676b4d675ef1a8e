"""
Sink service façade.

Exposes the ingestion orchestrator as the pipeline-module contract:
single-document processing, test processing, streaming ingestion, and
registration metadata with an optional self-test. The self-test and test
processing run the same path as real traffic.

Dependencies: opensearch_sink.core.ingestion, opensearch_sink.configs
System role: Process-boundary service orchestration
"""

import logging
import platform
import uuid
from datetime import datetime, timezone
from typing import AsyncIterable, AsyncIterator

from opensearch_sink.configs.ingestion import ModuleSettings
from opensearch_sink.core.ingestion.orchestrator import IngestionOrchestrator
from opensearch_sink.models.ingestion import (
    IngestionRequest,
    IngestionResponse,
    ModuleProcessRequest,
    ModuleProcessResponse,
)
from opensearch_sink.models.registration import (
    CapabilityType,
    RegistrationRequest,
    ServiceRegistrationMetadata,
)

logger = logging.getLogger(__name__)

NO_DOCUMENT_LOG = "No document provided in request"
SDK_VERSION = "1.0.0"
REGISTRATION_TAGS = ["opensearch", "sink", "vector", "indexing", "module"]


class SinkService:
    """Pipeline-module façade over the ingestion orchestrator."""

    def __init__(
        self,
        orchestrator: IngestionOrchestrator,
        module: ModuleSettings | None = None,
    ) -> None:
        """
        Initialize sink service.

        Args:
            orchestrator: Ingestion orchestrator
            module: Identity reported at registration (defaults if None)
        """
        self._orchestrator = orchestrator
        self._module = module or ModuleSettings()

    async def ingest(self, request: IngestionRequest) -> IngestionResponse:
        """Index one document."""
        return await self._orchestrator.process(request)

    def stream(
        self,
        requests: AsyncIterable[IngestionRequest],
    ) -> AsyncIterator[IngestionResponse]:
        """Index a stream of documents; responses arrive in completion order."""
        return self._orchestrator.stream(requests)

    async def process_data(self, request: ModuleProcessRequest) -> ModuleProcessResponse:
        """
        Process one pipeline document.

        The input document is echoed back whenever processing was attempted,
        so callers can retry without resupplying it.

        Args:
            request: Module processing request

        Returns:
            ModuleProcessResponse: Success flag, processor logs, echoed document
        """
        if request.document is None:
            logger.info(f"{__name__}:process_data - {NO_DOCUMENT_LOG}")
            return ModuleProcessResponse(success=False, processor_logs=[NO_DOCUMENT_LOG])

        response = await self._orchestrator.process(
            IngestionRequest(request_id=str(uuid.uuid4()), document=request.document)
        )
        return ModuleProcessResponse(
            success=response.success,
            processor_logs=[response.message],
            output_doc=request.document,
        )

    async def test_process_data(self, request: ModuleProcessRequest) -> ModuleProcessResponse:
        """Test processing uses the real processing path."""
        logger.info(f"{__name__}:test_process_data - Test processing requested")
        return await self.process_data(request)

    async def get_service_registration(
        self,
        request: RegistrationRequest,
    ) -> ServiceRegistrationMetadata:
        """
        Build registration metadata, running the self-test when requested.

        Args:
            request: Registration request with optional test document

        Returns:
            ServiceRegistrationMetadata: Module identity and health-check outcome
        """
        logger.info(f"{__name__}:get_service_registration - Registration requested")

        passed = True
        message = "Service is healthy"
        if request.test_request is not None:
            try:
                result = await self.process_data(request.test_request)
            except Exception as e:
                logger.exception(f"{__name__}:get_service_registration - Health check raised")
                passed = False
                message = f"Health check failed with exception: {e}"
            else:
                if result.success:
                    message = f"{self._module.display_name} module is healthy and functioning correctly"
                else:
                    passed = False
                    message = (
                        f"{self._module.display_name} module health check failed: "
                        f"{'; '.join(result.processor_logs)}"
                    )

        return ServiceRegistrationMetadata(
            module_name=self._module.name,
            version=self._module.version,
            display_name=self._module.display_name,
            description=self._module.description,
            owner=self._module.owner,
            tags=list(REGISTRATION_TAGS),
            registration_timestamp=datetime.now(timezone.utc),
            server_info=f"{platform.system()} {platform.release()}",
            sdk_version=SDK_VERSION,
            metadata={
                "implementation_language": "Python",
                "python_version": platform.python_version(),
                "opensearch_client": "opensearch-py",
                "capabilities": "vector-indexing,dynamic-schema",
            },
            capabilities=[CapabilityType.SINK],
            health_check_passed=passed,
            health_check_message=message,
        )
