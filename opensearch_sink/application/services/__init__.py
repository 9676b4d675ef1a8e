"""Service orchestrators."""

from .sink_service import SinkService

__all__ = ["SinkService"]
