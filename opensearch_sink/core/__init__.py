"""
Core ingestion domain.

Conversion, schema assurance, bulk writing, and orchestration, plus the
exception hierarchy shared by all layers.
"""
