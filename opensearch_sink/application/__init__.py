"""
Application layer.

Service orchestrators exposed to the API layer.
"""
