"""API routers."""

from .health import router as health_router
from .ingestion_stream import router as ingestion_stream_router
from .processing import router as processing_router
from .registration import router as registration_router

__all__ = [
    "health_router",
    "ingestion_stream_router",
    "processing_router",
    "registration_router",
]
