"""
Storage Layer
=============

Collaborators of the hybrid search.

Components:
- graph/: FalkorDB session provider (Cypher, vector and full-text indexes)
- vectors/: sentence-transformers query embeddings

    Query text
        |
        v
    [EmbeddingService] ---- qvec ----+
                                     v
    [FalkorDB] <-- session --> vector index queries
               <-- session --> strategy template queries

The vectors package is not imported here: it loads torch, which only the
embedding step needs.
"""

from kgsearch.storage.graph import FalkorDBClient, FalkorDBConfig, GraphSession

__all__ = [
    "FalkorDBClient",
    "FalkorDBConfig",
    "GraphSession",
]
