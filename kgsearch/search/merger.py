"""
Result Merger
=============

Additive score fusion of vector-origin and graph-origin results.

    vector result      -> score * vector_boost, match_type = hybrid
    graph result, seen -> existing.score += graph score, match_type = hybrid
    graph result, new  -> inserted as-is, match_type defaults to graph

Scores are an opaque ranking signal. They are neither averaged nor
normalized and must not be read as probabilities.
"""

from typing import Dict, List, Optional

from kgsearch.config import SearchTuning
from kgsearch.search.models import MatchType, SearchResult


def merge_search_results(
    vector_results: List[SearchResult],
    graph_results: List[SearchResult],
    tuning: Optional[SearchTuning] = None
) -> List[SearchResult]:
    """
    Fuse two result lists by id.

    Args:
        vector_results: Normalized similarity-search results
        graph_results: Normalized graph-template results
        tuning: Provides ``vector_boost`` (default 1.2)

    Returns:
        One entry per id, sorted by score descending (stable on ties).
        Input results are not modified.
    """
    boost = (tuning or SearchTuning()).vector_boost
    merged: Dict[str, SearchResult] = {}

    for result in vector_results:
        merged[result.id] = result.model_copy(update={
            "score": result.score * boost,
            "match_type": MatchType.HYBRID,
        })

    for result in graph_results:
        existing = merged.get(result.id)
        if existing is not None:
            existing.score += result.score
            existing.match_type = MatchType.HYBRID
        else:
            merged[result.id] = result.model_copy(update={
                "match_type": result.match_type or MatchType.GRAPH,
            })

    return sorted(merged.values(), key=lambda r: r.score, reverse=True)
