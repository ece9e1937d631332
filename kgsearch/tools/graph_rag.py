"""
Graph RAG Tool
==============

BaseTool wrapper around ``execute_graph_rag_search``.

    tool(**kwargs) -> request_model.model_validate(kwargs)
                   -> execute_graph_rag_search(...)
                   -> ToolResult.ok(data={query, results, resultCount})

Example:
    >>> tool = create_graph_rag_tool(config, graph_client=FalkorDBClient())
    >>> result = await tool(query="react projects", embeddingModelName="intfloat/e5-base-v2")
    >>> result.data["resultCount"]
"""

import structlog
from typing import Any, List, Optional

from kgsearch.config import RerankConfig, SearchTuning
from kgsearch.search.factory import GraphRagToolConfig, execute_graph_rag_search
from kgsearch.search.reranker import RerankCapability
from kgsearch.search.strategies import DEFAULT_REGISTRY, StrategyRegistry
from kgsearch.search.vector import EmbeddingsFactory
from kgsearch.tools.base import BaseTool, ParameterType, ToolParameter, ToolResult

log = structlog.get_logger()

SEARCH_OPTIONS_SCHEMA = {
    "properties": {
        "includeCode": {
            "type": "boolean",
            "description": "Attach up to three code snippets per project",
        },
        "minComplexity": {
            "type": "number",
            "description": "Minimum project complexity",
        },
        "dateRange": {
            "type": "object",
            "description": "Inclusive completion date range (ISO dates)",
            "properties": {
                "start": {"type": "string"},
                "end": {"type": "string"},
            },
            "required": ["start", "end"],
        },
        "technologies": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Keep projects using at least one of these technologies",
        },
    },
}


class GraphRagTool(BaseTool):
    """
    Hybrid graph + vector search exposed as an agent tool.

    Invalid input (pydantic validation) and retrieval failures surface as
    ``ToolResult.fail``; a successful call always carries the complete
    response payload.
    """

    def __init__(
        self,
        config: GraphRagToolConfig,
        graph_client: Any,
        embeddings_factory: Optional[EmbeddingsFactory] = None,
        rerank_capability: Optional[RerankCapability] = None,
        rerank_config: Optional[RerankConfig] = None,
        tuning: Optional[SearchTuning] = None,
        strategies: StrategyRegistry = DEFAULT_REGISTRY
    ):
        """
        Args:
            config: Tool wiring (name, description, request model, selectors)
            graph_client: Session provider, e.g. FalkorDBClient
            embeddings_factory: model name -> embedding provider
            rerank_capability: Reranking capability (default: resolved per call)
            rerank_config: Reranking credential and model (default: read from env per call)
            tuning: Fusion/oversampling parameters
            strategies: Registry listed in the strategyKey description
        """
        self.name = config.name
        self.description = config.description
        super().__init__()
        self.config = config
        self.graph_client = graph_client
        self.embeddings_factory = embeddings_factory
        self.rerank_capability = rerank_capability
        self.rerank_config = rerank_config
        self.tuning = tuning
        self.strategies = strategies

    @property
    def parameters(self) -> List[ToolParameter]:
        strategy_required = self.config.request_model.model_fields["strategy_key"].is_required()
        return [
            ToolParameter(
                name="query",
                param_type=ParameterType.STRING,
                description="The user's search query",
            ),
            ToolParameter(
                name="embeddingModelName",
                param_type=ParameterType.STRING,
                description="Embedding model name for query embeddings",
            ),
            ToolParameter(
                name="topK",
                param_type=ParameterType.INTEGER,
                description="Number of top results to return",
                required=False,
                default=10,
            ),
            ToolParameter(
                name="strategyKey",
                param_type=ParameterType.STRING,
                description=(
                    "Graph search strategy. Available strategies:\n"
                    f"{self.strategies.describe()}"
                ),
                required=strategy_required,
                enum=[key.value for key in self.strategies],
            ),
            ToolParameter(
                name="searchOptions",
                param_type=ParameterType.OBJECT,
                description="Optional narrowing of the semantic search",
                required=False,
                schema=SEARCH_OPTIONS_SCHEMA,
            ),
        ]

    async def execute(self, **kwargs) -> ToolResult:
        request = self.config.request_model.model_validate(kwargs)

        response = await execute_graph_rag_search(
            request,
            self.config,
            self.graph_client,
            embeddings_factory=self.embeddings_factory,
            rerank_capability=self.rerank_capability,
            rerank_config=self.rerank_config,
            tuning=self.tuning,
        )

        return ToolResult.ok(
            data=response.to_payload(),
            tool_name=self.name,
            result_count=response.result_count,
        )


def create_graph_rag_tool(
    config: GraphRagToolConfig,
    graph_client: Any,
    **dependencies
) -> GraphRagTool:
    """
    Build a GraphRagTool.

    Args:
        config: Tool wiring
        graph_client: Session provider
        **dependencies: embeddings_factory, rerank_capability, rerank_config,
            tuning, strategies

    Returns:
        GraphRagTool ready for registration
    """
    tool = GraphRagTool(config, graph_client, **dependencies)
    log.debug(f"Graph RAG tool created: {tool.name}")
    return tool
