"""
Search Models
=============

Pydantic models for the hybrid search request/response.

Python attributes are snake_case; the serialized payload
(``model_dump(by_alias=True)``) uses camelCase names, e.g. ``resultCount``.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from kgsearch.search.strategies import StrategyKey


class MatchType(str, Enum):
    """Which retrieval path(s) produced a result."""
    SEMANTIC = "semantic"
    GRAPH = "graph"
    HYBRID = "hybrid"
    TEMPLATE = "template"


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class SearchResult(_CamelModel):
    """
    One retrieved entity (project, employment, achievement, ...).

    ``score`` is an opaque ranking signal produced by fusion; it is not a
    probability and is not comparable across requests.
    """
    id: str = ""
    title: str = ""
    description: str = ""
    role: str = ""
    impact: Optional[str] = None
    completed_date: str = ""
    complexity: Optional[float] = None
    file_count: Optional[float] = None
    live_url: Optional[str] = None
    github_url: Optional[str] = None
    technologies: List[str] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    patterns: List[str] = Field(default_factory=list)
    code_snippets: Optional[List[Any]] = None
    company: Optional[str] = None
    position: Optional[str] = None
    achievements: Optional[List[str]] = None
    score: float = 0.0
    match_type: Optional[MatchType] = None
    result_type: str = "project"

    def __repr__(self) -> str:
        match = self.match_type.value if self.match_type else None
        return (
            f"<SearchResult(id={self.id}, type={self.result_type}, "
            f"score={self.score:.3f}, match={match})>"
        )


class DateRange(_CamelModel):
    """Inclusive ISO date range on completion date."""
    start: str
    end: str


class VectorSearchOptions(_CamelModel):
    """Optional narrowing predicates for the similarity search."""
    include_code: bool = False
    min_complexity: Optional[float] = None
    date_range: Optional[DateRange] = None
    technologies: Optional[List[str]] = None


class SearchRequest(_CamelModel):
    """
    Hybrid search request.

    ``strategy_key`` selects a graph strategy explicitly; when omitted the
    strategy is classified from the query text.
    """
    query: str = Field(..., description="The user's search query")
    embedding_model_name: str = Field(..., description="Embedding model name for query embeddings")
    top_k: int = Field(default=10, ge=1, description="Number of top results to return")
    strategy_key: Optional[StrategyKey] = Field(default=None, description="Graph search strategy")
    search_options: Optional[VectorSearchOptions] = None


class StrategySearchRequest(SearchRequest):
    """Request for the explicit-strategy tool: ``strategy_key`` is required."""
    strategy_key: StrategyKey = Field(..., description="Graph search strategy")


class SearchResponse(_CamelModel):
    """Ordered results of one hybrid search."""
    query: str
    results: List[SearchResult] = Field(default_factory=list)
    result_count: int = 0

    @classmethod
    def from_results(cls, query: str, results: List[SearchResult]) -> "SearchResponse":
        return cls(query=query, results=results, result_count=len(results))

    def to_payload(self) -> Dict[str, Any]:
        """Serializable dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self) -> str:
        """Tool output payload."""
        return json.dumps(self.to_payload(), indent=2)


@dataclass
class CypherSelection:
    """
    A graph query template and its bound parameters.

    Attributes:
        query: Parameterized Cypher template
        params: Values bound to the template's $parameters
    """
    query: str
    params: Dict[str, Any] = field(default_factory=dict)
