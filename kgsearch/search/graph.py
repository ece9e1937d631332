"""
Graph Retriever
===============

Runs one strategy template with bound parameters and normalizes the rows.
"""

import structlog
from typing import Any, Dict, List, Optional

from kgsearch.errors import ErrorReason, GraphSearchError, describe_error
from kgsearch.search.models import MatchType, SearchResult
from kgsearch.search.normalizer import normalize_record

log = structlog.get_logger()


async def execute_query(
    session: Any,
    query: str,
    params: Optional[Dict[str, Any]] = None,
    match_type: MatchType = MatchType.TEMPLATE
) -> List[SearchResult]:
    """
    Execute a Cypher template and normalize its rows.

    Args:
        session: Graph session (``execute(query, params)``)
        query: Parameterized Cypher template
        params: Bound values (the user query travels here, never in ``query``)
        match_type: Tag applied to every result (usually graph or template)

    Returns:
        Normalized results in row order

    Raises:
        GraphSearchError: reason QUERY_EXECUTION on any backend failure
    """
    try:
        rows = await session.execute(query, params or {})
    except Exception as e:
        log.error(f"Graph query failed: {describe_error(e)}")
        raise GraphSearchError(
            f"Failed to execute query: {describe_error(e)}",
            ErrorReason.QUERY_EXECUTION,
        ) from e

    results = [normalize_record(row, match_type) for row in rows]
    log.debug(f"graph_query returned {len(results)} results", match_type=match_type.value)
    return results
