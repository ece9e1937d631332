"""
Reranker
========

Best-effort relevance reordering of the fused candidates.

Reranking is a quality layer, never a hard dependency:

- disabled, empty list, or len <= top_n  -> list returned unchanged
- no credential configured               -> first top_n, original order
- reranking call fails for any reason    -> first top_n, original order
- success                                -> candidates in reranked order

Whether reranking is available is resolved once per call into a capability
object (RerankAvailable | RerankUnavailable).
"""

import cohere
import httpx
import structlog
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional, Sequence, Union

from kgsearch.config import DEFAULT_RERANK_MODEL, RerankConfig
from kgsearch.errors import describe_error
from kgsearch.search.models import SearchResult

log = structlog.get_logger()

# (query, documents, top_n, model) -> indices into documents, best first
RerankCall = Callable[[str, List[str], int, str], Awaitable[Sequence[int]]]


@dataclass
class RerankOptions:
    """
    Attributes:
        enabled: Skip reranking entirely when False
        top_n: Target result count
        model: Reranking model identifier
    """
    enabled: bool = True
    top_n: int = 10
    model: str = DEFAULT_RERANK_MODEL


@dataclass(frozen=True)
class RerankAvailable:
    """A configured reranking provider."""
    call: RerankCall


@dataclass(frozen=True)
class RerankUnavailable:
    """No reranking provider; results are truncated instead."""
    reason: str = "no reranking credential configured"


RerankCapability = Union[RerankAvailable, RerankUnavailable]


def cohere_rerank_call(api_key: str, timeout: float = 30.0) -> RerankCall:
    """
    Build a RerankCall backed by the Cohere v2 rerank endpoint.

    Each call owns its HTTP connection pool and closes it on return, so a
    capability can be resolved per request without leaking connections.
    """

    async def call(query: str, documents: List[str], top_n: int, model: str) -> List[int]:
        async with httpx.AsyncClient(timeout=timeout) as http:
            client = cohere.AsyncClientV2(api_key=api_key, httpx_client=http)
            response = await client.rerank(
                model=model,
                query=query,
                documents=documents,
                top_n=top_n,
            )
        return [item.index for item in response.results]

    return call


def resolve_rerank_capability(config: Optional[RerankConfig] = None) -> RerankCapability:
    """Resolve the reranking capability from configuration (env by default)."""
    config = config or RerankConfig()
    if not config.has_credential:
        return RerankUnavailable()
    return RerankAvailable(call=cohere_rerank_call(config.api_key))


def build_rerank_document(result: SearchResult) -> str:
    """
    Text representation of a candidate for the reranker.

    Example:
        >>> build_rerank_document(SearchResult(title="Test", description="Desc", role="Dev"))
        'Test | Desc | Dev'
    """
    parts = [
        result.title,
        result.description,
        result.role,
        result.impact,
        f"Technologies: {', '.join(result.technologies)}" if result.technologies else None,
        f"Skills: {', '.join(result.skills)}" if result.skills else None,
        f"Patterns: {', '.join(result.patterns)}" if result.patterns else None,
    ]
    return " | ".join(part for part in parts if part)


async def rerank_results(
    query: str,
    results: List[SearchResult],
    options: Optional[RerankOptions] = None,
    capability: Optional[RerankCapability] = None
) -> List[SearchResult]:
    """
    Rerank fused results to at most ``top_n``.

    The short-circuit branch (disabled, empty, or already within ``top_n``)
    returns the input list itself, untruncated.

    Args:
        query: Original query text
        results: Fused candidates, best first
        options: RerankOptions (default: enabled, top_n=10)
        capability: Resolved capability (default: resolved from env)

    Returns:
        Reranked or truncated list. Never raises for reranking failures.
    """
    options = options or RerankOptions()
    top_n = options.top_n

    if not options.enabled or not results:
        return results

    if len(results) <= top_n:
        return results

    if capability is None:
        capability = resolve_rerank_capability()

    if isinstance(capability, RerankUnavailable):
        log.debug(f"Reranking unavailable ({capability.reason}), truncating to {top_n}")
        return results[:top_n]

    documents = [build_rerank_document(r) for r in results]
    try:
        indices = await capability.call(query, documents, top_n, options.model)
        reranked = []
        for index in indices:
            if not 0 <= index < len(results):
                raise IndexError(f"rerank index {index} out of range")
            reranked.append(results[index])
    except Exception as e:
        log.warning(f"Reranking failed, keeping fused order: {describe_error(e)}")
        return results[:top_n]

    log.debug(f"Reranked {len(results)} candidates -> {len(reranked)}", model=options.model)
    return reranked
