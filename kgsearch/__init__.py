"""
kgsearch
========

Hybrid knowledge-graph search for a portfolio assistant.

Each query runs two retrievals concurrently against FalkorDB:

- semantic: vector index similarity over Project/Employment nodes
- graph: one of eight Cypher strategy templates, selected explicitly or
  classified from the query text

The two result sets are fused (additive scores, vector boost), reranked
with Cohere when a credential is configured, and returned as a
JSON-serializable response through the agent tools
``rag_graph_search`` and ``rag_graph_cypher_search``.

Packages:
- kgsearch.search: strategies, retrieval, fusion, reranking, orchestration
- kgsearch.storage: FalkorDB client, embedding service
- kgsearch.tools: BaseTool, ToolRegistry, search tools
- kgsearch.config: settings dataclasses, tools.yaml
"""

__version__ = "0.1.0"

from kgsearch.errors import ErrorReason, GraphSearchError

__all__ = [
    "__version__",
    "ErrorReason",
    "GraphSearchError",
]
