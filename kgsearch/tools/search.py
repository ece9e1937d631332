"""
Search Tools
=============

The two hybrid search tools exposed to the agent.

Available tools:
- rag_graph_search: graph strategy classified from the query text
  (an explicit ``strategyKey`` overrides the classifier)
- rag_graph_cypher_search: graph strategy chosen explicitly by the agent

Example:
    >>> client = FalkorDBClient()
    >>> registry = ToolRegistry()
    >>> register_search_tools(registry, client)
    >>> result = await registry.execute(
    ...     "rag_graph_search",
    ...     query="What did you build with React?",
    ...     embeddingModelName="intfloat/e5-base-v2",
    ... )
"""

import structlog
from typing import Any

from kgsearch.search.factory import GraphRagToolConfig
from kgsearch.search.intent import classify_intent
from kgsearch.search.models import (
    CypherSelection,
    SearchRequest,
    StrategySearchRequest,
)
from kgsearch.search.strategies import DEFAULT_REGISTRY, StrategyRegistry
from kgsearch.tools.graph_rag import GraphRagTool, create_graph_rag_tool
from kgsearch.tools.registry import ToolRegistry, get_tool_config

log = structlog.get_logger()

RAG_GRAPH_SEARCH = "rag_graph_search"
RAG_GRAPH_CYPHER_SEARCH = "rag_graph_cypher_search"


def _strategy_selection(strategies: StrategyRegistry, key: Any, query: str) -> CypherSelection:
    definition = strategies.get(key)
    return CypherSelection(query=definition.query, params={"query": query})


def rag_graph_search_config(strategies: StrategyRegistry = DEFAULT_REGISTRY) -> GraphRagToolConfig:
    """Wiring of the intent-classified tool."""

    def select_cypher(request: SearchRequest) -> CypherSelection:
        key = request.strategy_key or classify_intent(request.query)
        log.debug(f"{RAG_GRAPH_SEARCH} strategy: {key.value}")
        return _strategy_selection(strategies, key, request.query)

    return GraphRagToolConfig(
        name=RAG_GRAPH_SEARCH,
        description=get_tool_config(RAG_GRAPH_SEARCH).description,
        request_model=SearchRequest,
        select_cypher=select_cypher,
        get_top_k=lambda request: request.top_k,
        get_vector_search_options=lambda request: request.search_options,
    )


def rag_graph_cypher_search_config(strategies: StrategyRegistry = DEFAULT_REGISTRY) -> GraphRagToolConfig:
    """Wiring of the explicit-strategy tool."""

    def select_cypher(request: StrategySearchRequest) -> CypherSelection:
        return _strategy_selection(strategies, request.strategy_key, request.query)

    return GraphRagToolConfig(
        name=RAG_GRAPH_CYPHER_SEARCH,
        description=get_tool_config(RAG_GRAPH_CYPHER_SEARCH).description,
        request_model=StrategySearchRequest,
        select_cypher=select_cypher,
        get_top_k=lambda request: request.top_k,
        get_vector_search_options=lambda request: request.search_options,
    )


def create_rag_graph_search_tool(graph_client: Any, **dependencies) -> GraphRagTool:
    strategies = dependencies.get("strategies", DEFAULT_REGISTRY)
    return create_graph_rag_tool(rag_graph_search_config(strategies), graph_client, **dependencies)


def create_rag_graph_cypher_search_tool(graph_client: Any, **dependencies) -> GraphRagTool:
    strategies = dependencies.get("strategies", DEFAULT_REGISTRY)
    return create_graph_rag_tool(rag_graph_cypher_search_config(strategies), graph_client, **dependencies)


def register_search_tools(registry: ToolRegistry, graph_client: Any, **dependencies) -> None:
    """
    Register both search tools.

    Args:
        registry: Target registry
        graph_client: Session provider shared by both tools
        **dependencies: Forwarded to create_graph_rag_tool
    """
    for factory in (create_rag_graph_search_tool, create_rag_graph_cypher_search_tool):
        tool = factory(graph_client, **dependencies)
        registry.register(tool, category=get_tool_config(tool.name).category)
