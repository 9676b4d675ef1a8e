"""
API module.

FastAPI application and routers exposing the sink over HTTP and WebSocket.
"""
