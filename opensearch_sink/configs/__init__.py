"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
All config modules support environment variable mapping with validation.
"""

from opensearch_sink.configs.ingestion import ModuleSettings, StreamSettings
from opensearch_sink.configs.opensearch import BatchSettings, KnnSettings, OpenSearchSettings
from opensearch_sink.configs.settings import Settings, get_settings

__all__ = [
    "BatchSettings",
    "KnnSettings",
    "ModuleSettings",
    "OpenSearchSettings",
    "Settings",
    "StreamSettings",
    "get_settings",
]
