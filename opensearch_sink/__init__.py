"""
OpenSearch sink module.

Indexing boundary between the document-processing pipeline and OpenSearch.
"""

__version__ = "1.0.0"
