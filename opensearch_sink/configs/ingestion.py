"""
Ingestion stream and module identity settings.

Dependencies: pydantic, pydantic_settings
System role: Orchestrator and registration configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class StreamSettings(BaseSettings):
    """Streaming ingestion concurrency settings."""

    max_concurrency: int = Field(
        default=16,
        ge=1,
        description="Maximum ingestion requests processed concurrently per stream",
    )
    accumulate: bool = Field(
        default=False,
        description="Group concurrent stream writes into shared bulk batches",
    )

    class Config:
        """Pydantic config."""

        env_prefix = "INGEST_STREAM_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"
        frozen = True


class ModuleSettings(BaseSettings):
    """Identity reported through the registration interface."""

    name: str = Field(default="opensearch-sink", description="Module name")
    version: str = Field(default="1.0.0", description="Module version")
    display_name: str = Field(default="OpenSearch Sink", description="Human-readable name")
    description: str = Field(
        default="OpenSearch vector indexing sink with dynamic schema creation",
        description="Module description",
    )
    owner: str = Field(default="Pipeline Team", description="Owning team")

    class Config:
        """Pydantic config."""

        env_prefix = "MODULE_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"
        frozen = True
