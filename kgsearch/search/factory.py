"""
Graph RAG Orchestrator
======================

Wires strategy selection, concurrent retrieval, fusion and reranking into
one request/response unit.

Flow:
    request -> select_cypher / get_top_k / get_vector_search_options
            -> embed query
            -> +-- vector branch (own session) --+
               +-- graph branch  (own session) --+   asyncio.gather
            -> merge_search_results
            -> rerank_results (top_n = top_k)
            -> SearchResponse

Each branch opens its own graph session and closes it on every exit path.
A failure in either branch propagates to the caller; no partial response
is ever built.
"""

import asyncio
import time
import structlog
from dataclasses import dataclass
from typing import Any, Callable, Optional, Type

from kgsearch.config import RerankConfig, SearchTuning
from kgsearch.search.graph import execute_query
from kgsearch.search.merger import merge_search_results
from kgsearch.search.models import (
    CypherSelection,
    MatchType,
    SearchRequest,
    SearchResponse,
    VectorSearchOptions,
)
from kgsearch.search.reranker import (
    RerankCapability,
    RerankOptions,
    rerank_results,
    resolve_rerank_capability,
)
from kgsearch.search.vector import EmbeddingsFactory, embed_query, perform_vector_search

log = structlog.get_logger()


@dataclass
class GraphRagToolConfig:
    """
    Per-tool wiring of the hybrid search.

    Attributes:
        name: Tool name
        description: Tool description (from tool configuration)
        request_model: Pydantic model validating the tool input
        select_cypher: request -> CypherSelection (template + bound params)
        get_top_k: request -> top_k (default: SearchTuning.default_top_k)
        get_vector_search_options: request -> VectorSearchOptions (default: none)
    """
    name: str
    description: str
    request_model: Type[SearchRequest]
    select_cypher: Callable[[Any], CypherSelection]
    get_top_k: Optional[Callable[[Any], Optional[int]]] = None
    get_vector_search_options: Optional[Callable[[Any], Optional[VectorSearchOptions]]] = None


async def execute_graph_rag_search(
    request: SearchRequest,
    config: GraphRagToolConfig,
    graph_client: Any,
    *,
    embeddings_factory: Optional[EmbeddingsFactory] = None,
    rerank_capability: Optional[RerankCapability] = None,
    rerank_config: Optional[RerankConfig] = None,
    tuning: Optional[SearchTuning] = None
) -> SearchResponse:
    """
    Run one hybrid search.

    Args:
        request: Validated request
        config: Tool wiring
        graph_client: Session provider (``session()`` async context manager)
        embeddings_factory: model name -> embedding provider
        rerank_capability: Reranking capability (default: built from rerank_config)
        rerank_config: Reranking credential and model (default: read from env)
        tuning: Fusion/oversampling parameters

    Returns:
        SearchResponse with at most top_k results once reranking truncates

    Raises:
        GraphSearchError: connection, query or vector search failure
    """
    tuning = tuning or SearchTuning()
    rerank_config = rerank_config or RerankConfig()
    if rerank_capability is None:
        rerank_capability = resolve_rerank_capability(rerank_config)
    started = time.perf_counter()

    top_k = (config.get_top_k(request) if config.get_top_k else None) or tuning.default_top_k
    vector_options = (
        config.get_vector_search_options(request) if config.get_vector_search_options else None
    ) or VectorSearchOptions()
    selection = config.select_cypher(request)

    log.debug(
        f"{config.name} - query='{request.query[:50]}', top_k={top_k}, "
        f"params={sorted(selection.params)}"
    )

    qvec = await embed_query(request.embedding_model_name, request.query, embeddings_factory)

    async def vector_branch():
        async with graph_client.session() as session:
            return await perform_vector_search(session, qvec, top_k, vector_options, tuning)

    async def graph_branch():
        async with graph_client.session() as session:
            return await execute_query(session, selection.query, selection.params, MatchType.GRAPH)

    vector_results, graph_results = await asyncio.gather(vector_branch(), graph_branch())

    merged = merge_search_results(vector_results, graph_results, tuning)
    final_results = await rerank_results(
        request.query,
        merged,
        RerankOptions(top_n=top_k, model=rerank_config.model),
        rerank_capability,
    )

    elapsed_ms = (time.perf_counter() - started) * 1000
    log.info(
        f"{config.name} completed - vector={len(vector_results)}, "
        f"graph={len(graph_results)}, merged={len(merged)}, "
        f"returned={len(final_results)} ({elapsed_ms:.0f}ms)"
    )

    return SearchResponse.from_results(request.query, final_results)
