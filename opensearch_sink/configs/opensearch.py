"""
OpenSearch connection, batching, and k-NN configuration.

BatchSettings and KnnSettings are loaded once at startup and never mutated;
they are handed to the bulk writer and schema manager constructors.

Dependencies: pydantic, pydantic_settings
System role: Search engine configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class OpenSearchSettings(BaseSettings):
    """Connection settings for the OpenSearch cluster."""

    model_config = SettingsConfigDict(
        env_prefix="OPENSEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    hosts: list[str] = Field(
        default=["http://localhost:9200"],
        description="OpenSearch node URLs",
    )
    username: str | None = Field(default=None, description="Basic auth username")
    password: str | None = Field(default=None, description="Basic auth password")
    use_ssl: bool = Field(default=False, description="Connect over TLS")
    verify_certs: bool = Field(default=True, description="Verify TLS certificates")
    startup_wait_attempts: int = Field(
        default=10,
        ge=1,
        description="Ping attempts before startup gives up on the cluster",
    )


class BatchSettings(BaseSettings):
    """Bulk write batching and timeout policy (BatchOptions)."""

    model_config = SettingsConfigDict(
        env_prefix="OPENSEARCH_BATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    max_batch_size: int = Field(
        default=100,
        ge=1,
        description="Maximum documents per bulk request",
    )
    max_time_window_ms: int = Field(
        default=1000,
        ge=1,
        description="Maximum time a partially filled batch waits before flushing",
    )
    connect_timeout_s: float = Field(
        default=5.0,
        gt=0,
        description="Connection timeout for bulk requests (seconds)",
    )
    read_timeout_s: float = Field(
        default=30.0,
        gt=0,
        description="Read timeout for bulk requests (seconds)",
    )

    @property
    def total_timeout_s(self) -> float:
        """Upper bound for a single bulk round trip."""
        return self.connect_timeout_s + self.read_timeout_s


class KnnSettings(BaseSettings):
    """k-NN method (engine, space type) and HNSW parameters for vector fields."""

    model_config = SettingsConfigDict(
        env_prefix="OPENSEARCH_KNN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    engine: str = Field(default="lucene", description="Vector engine: lucene, faiss, nmslib")
    space_type: str = Field(
        default="cosinesimil",
        description="Distance metric: cosinesimil, l2, innerproduct",
    )
    m: int = Field(default=16, ge=2, description="HNSW graph degree")
    ef_construction: int = Field(default=128, ge=1, description="HNSW build breadth")
    ef_search: int = Field(default=100, ge=1, description="HNSW query breadth")
