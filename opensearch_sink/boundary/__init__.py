"""
Boundary layer for external system integrations.

Handles all interactions with OpenSearch: index administration and bulk
writes. Provides adapters and clients for infrastructure dependencies.
"""
