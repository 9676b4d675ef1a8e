"""
Service registration schemas.

Dependencies: pydantic
System role: Registration/capability contract
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from opensearch_sink.models.ingestion import ModuleProcessRequest


class CapabilityType(str, Enum):
    """Capabilities a pipeline module can declare."""

    SINK = "SINK"


class RegistrationRequest(BaseModel):
    """Registration query, optionally carrying a self-test document."""

    test_request: ModuleProcessRequest | None = None


class ServiceRegistrationMetadata(BaseModel):
    """Static module metadata plus the self-test outcome."""

    module_name: str
    version: str
    display_name: str
    description: str
    owner: str
    tags: list[str] = Field(default_factory=list)
    registration_timestamp: datetime
    server_info: str
    sdk_version: str
    metadata: dict[str, str] = Field(default_factory=dict)
    capabilities: list[CapabilityType] = Field(default_factory=list)
    health_check_passed: bool
    health_check_message: str
