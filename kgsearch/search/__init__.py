"""
Hybrid Search
=============

Vector similarity + templated graph traversal, fused and reranked.

Components:
- strategies: StrategyKey, StrategyRegistry (8 Cypher templates)
- intent: classify_intent (keyword priority classifier)
- models: SearchResult, SearchRequest, SearchResponse, ...
- normalizer: to_number, to_date_string, normalize_record
- vector: embed_query, perform_vector_search
- graph: execute_query
- merger: merge_search_results
- reranker: rerank_results, build_rerank_document
- factory: GraphRagToolConfig, execute_graph_rag_search

Example:
    >>> from kgsearch.search import classify_intent, DEFAULT_REGISTRY
    >>> strategy = DEFAULT_REGISTRY.get(classify_intent("react projects"))
    >>> strategy.key
    <StrategyKey.TECHNOLOGY: 'technology'>
"""

from kgsearch.search.strategies import (
    DEFAULT_REGISTRY,
    StrategyDefinition,
    StrategyKey,
    StrategyRegistry,
)
from kgsearch.search.intent import classify_intent
from kgsearch.search.models import (
    CypherSelection,
    DateRange,
    MatchType,
    SearchRequest,
    SearchResponse,
    SearchResult,
    StrategySearchRequest,
    VectorSearchOptions,
)
from kgsearch.search.normalizer import normalize_record, to_date_string, to_number
from kgsearch.search.vector import build_vector_queries, embed_query, perform_vector_search
from kgsearch.search.graph import execute_query
from kgsearch.search.merger import merge_search_results
from kgsearch.search.reranker import (
    RerankAvailable,
    RerankOptions,
    RerankUnavailable,
    build_rerank_document,
    rerank_results,
    resolve_rerank_capability,
)
from kgsearch.search.factory import GraphRagToolConfig, execute_graph_rag_search

__all__ = [
    # Strategies
    "DEFAULT_REGISTRY",
    "StrategyDefinition",
    "StrategyKey",
    "StrategyRegistry",
    "classify_intent",
    # Models
    "CypherSelection",
    "DateRange",
    "MatchType",
    "SearchRequest",
    "SearchResponse",
    "SearchResult",
    "StrategySearchRequest",
    "VectorSearchOptions",
    # Retrieval
    "normalize_record",
    "to_date_string",
    "to_number",
    "build_vector_queries",
    "embed_query",
    "perform_vector_search",
    "execute_query",
    "merge_search_results",
    # Reranking
    "RerankAvailable",
    "RerankOptions",
    "RerankUnavailable",
    "build_rerank_document",
    "rerank_results",
    "resolve_rerank_capability",
    # Orchestration
    "GraphRagToolConfig",
    "execute_graph_rag_search",
]
