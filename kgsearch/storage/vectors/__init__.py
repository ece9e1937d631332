"""
Vector Storage
==============

Query embeddings with sentence-transformers. Vectors live on graph nodes
and are searched through FalkorDB vector indexes.

Components:
- EmbeddingService: sentence-transformers embedding provider
- get_embeddings: cached provider per supported model name

Example:
    from kgsearch.storage.vectors import get_embeddings

    service = get_embeddings("sentence-transformers/all-MiniLM-L6-v2")
    query_vector = service.encode_query("distributed systems experience")
"""

from kgsearch.storage.vectors.embeddings import (
    EmbeddingService,
    SUPPORTED_MODELS,
    get_embeddings,
)

__all__ = [
    "EmbeddingService",
    "SUPPORTED_MODELS",
    "get_embeddings",
]
