"""
Tools Module
============

Agent-facing tools over the hybrid search.

Every tool:
- Implements BaseTool
- Has a JSON schema for LLM function calling
- Is registered in a ToolRegistry

Example:
    >>> from kgsearch.tools import get_tool_registry, register_search_tools
    >>> from kgsearch.storage import FalkorDBClient
    >>>
    >>> registry = get_tool_registry()
    >>> register_search_tools(registry, FalkorDBClient())
    >>> result = await registry.execute(
    ...     "rag_graph_cypher_search",
    ...     query="python",
    ...     embeddingModelName="intfloat/e5-base-v2",
    ...     strategyKey="technology",
    ... )
"""

from kgsearch.tools.base import (
    BaseTool,
    ParameterType,
    ToolParameter,
    ToolResult,
)
from kgsearch.tools.registry import (
    ToolConfig,
    ToolRegistry,
    get_tool_config,
    get_tool_registry,
    register_tool,
)
from kgsearch.tools.graph_rag import GraphRagTool, create_graph_rag_tool
from kgsearch.tools.search import (
    RAG_GRAPH_CYPHER_SEARCH,
    RAG_GRAPH_SEARCH,
    create_rag_graph_cypher_search_tool,
    create_rag_graph_search_tool,
    rag_graph_cypher_search_config,
    rag_graph_search_config,
    register_search_tools,
)

__all__ = [
    # Base classes
    "BaseTool",
    "ParameterType",
    "ToolParameter",
    "ToolResult",
    # Registry
    "ToolConfig",
    "ToolRegistry",
    "get_tool_config",
    "get_tool_registry",
    "register_tool",
    # Graph RAG
    "GraphRagTool",
    "create_graph_rag_tool",
    # Search tools
    "RAG_GRAPH_CYPHER_SEARCH",
    "RAG_GRAPH_SEARCH",
    "create_rag_graph_cypher_search_tool",
    "create_rag_graph_search_tool",
    "rag_graph_cypher_search_config",
    "rag_graph_search_config",
    "register_search_tools",
]
