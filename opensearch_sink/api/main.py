"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, opensearch_sink.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

from contextlib import asynccontextmanager
import logging

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from opensearch_sink import __version__
from opensearch_sink.api.deps.dependencies import get_service_cache
from opensearch_sink.boundary.opensearch.client import wait_for_cluster
from opensearch_sink.configs import get_settings
from opensearch_sink.core.exceptions import ClusterUnavailableError
from opensearch_sink.observability.logger import configure_logging
from opensearch_sink.observability.middleware import (
    CorrelationMiddleware,
    RequestLoggingMiddleware,
)
from .routers import (
    health_router,
    ingestion_stream_router,
    processing_router,
    registration_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    cache = get_service_cache()
    configure_logging(cache.settings.log_level)
    logger = logging.getLogger("uvicorn")

    # Startup
    logger.info("Pre-warming service cache...")
    _ = cache.sink_service
    try:
        await wait_for_cluster(cache.client, cache.settings.opensearch.startup_wait_attempts)
    except ClusterUnavailableError:
        # Requests fail per document until the cluster comes up
        logger.warning("OpenSearch unreachable at startup")
    logger.info("Service cache pre-warmed")

    yield

    # Shutdown
    await cache.aclose()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        debug=get_settings().debug,
        title="OpenSearch Sink API",
        description="Indexes pipeline documents and their embeddings into OpenSearch",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(processing_router, prefix="/api/v1")
    app.include_router(ingestion_stream_router, prefix="/api/v1")
    app.include_router(registration_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    load_dotenv()
    uvicorn.run(
        "opensearch_sink.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
