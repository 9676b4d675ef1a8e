"""
Pipeline document to search document conversion.

Pure functions, no I/O and no shared state.

Dependencies: opensearch_sink.models
System role: Document normalization for indexing
"""

from opensearch_sink.models.pipeline_document import PipelineDocument
from opensearch_sink.models.search_document import Embedding, SearchDocument

PRIMARY_CHUNK_CONFIG_MARKER = "title"


def is_primary_chunk_config(chunk_config_id: str) -> bool:
    """Title-derived chunk configurations provide the primary embedding."""
    return PRIMARY_CHUNK_CONFIG_MARKER in chunk_config_id


def convert(doc: PipelineDocument) -> SearchDocument:
    """
    Convert a pipeline document into its indexed form.

    Title and body are carried only when present; keywords only when
    non-empty. Embeddings follow semantic-result order, then chunk order,
    skipping chunks without a vector.

    Args:
        doc: Upstream pipeline document

    Returns:
        SearchDocument: Engine-ready document
    """
    embeddings = []
    for result in doc.semantic_results:
        primary = is_primary_chunk_config(result.chunk_config_id)
        for chunk in result.chunks:
            info = chunk.embedding_info
            if info is None or not info.vector:
                continue
            embeddings.append(
                Embedding(
                    vector=list(info.vector),
                    source_text=info.text_content,
                    chunk_config_id=result.chunk_config_id,
                    embedding_id=result.embedding_config_id,
                    is_primary=primary,
                )
            )

    return SearchDocument(
        original_doc_id=doc.doc_id,
        doc_type=doc.document_type,
        title=doc.title,
        body=doc.body,
        tags=list(doc.keywords) if doc.keywords else [],
        last_modified_at=doc.last_modified_at,
        embeddings=embeddings,
    )


def observed_dimension(doc: PipelineDocument) -> int | None:
    """
    Length of the first embedding vector in traversal order.

    Returns:
        int | None: Vector dimension, or None when the document has no vectors
    """
    for result in doc.semantic_results:
        for chunk in result.chunks:
            if chunk.embedding_info is not None and chunk.embedding_info.vector:
                return len(chunk.embedding_info.vector)
    return None
