"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from opensearch_sink.configs.base import BaseSettings
from opensearch_sink.configs.ingestion import ModuleSettings, StreamSettings
from opensearch_sink.configs.opensearch import (
    BatchSettings,
    KnnSettings,
    OpenSearchSettings,
)


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    opensearch: OpenSearchSettings = Field(default_factory=OpenSearchSettings)
    batch: BatchSettings = Field(default_factory=BatchSettings)
    knn: KnnSettings = Field(default_factory=KnnSettings)
    stream: StreamSettings = Field(default_factory=StreamSettings)
    module: ModuleSettings = Field(default_factory=ModuleSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from opensearch_sink.configs import get_settings
        settings = get_settings()
    """
    return Settings()
