"""
Tests for result fusion.
"""

import pytest

from kgsearch.config import SearchTuning
from kgsearch.search.merger import merge_search_results
from kgsearch.search.models import MatchType

from tests.helpers import make_result


class TestMergeSearchResults:
    """Tests for merge_search_results."""

    def test_overlap_is_additive(self):
        """vector 1.0 (x1.2) + graph 0.36 = 1.56, hybrid."""
        merged = merge_search_results(
            [make_result("p1", 1.0, match_type=MatchType.SEMANTIC)],
            [make_result("p1", 0.36, match_type=MatchType.GRAPH)],
        )

        assert len(merged) == 1
        assert merged[0].score == pytest.approx(1.56)
        assert merged[0].match_type == MatchType.HYBRID

    def test_vector_only_boosted(self):
        merged = merge_search_results([make_result("p1", 0.5)], [])

        assert merged[0].score == pytest.approx(0.6)
        assert merged[0].match_type == MatchType.HYBRID

    def test_graph_only_keeps_score(self):
        merged = merge_search_results([], [make_result("p2", 0.9)])

        assert merged[0].score == pytest.approx(0.9)
        assert merged[0].match_type == MatchType.GRAPH

    def test_graph_only_keeps_existing_tag(self):
        merged = merge_search_results([], [make_result("p2", 0.9, match_type=MatchType.TEMPLATE)])
        assert merged[0].match_type == MatchType.TEMPLATE

    def test_sorted_descending(self):
        merged = merge_search_results(
            [make_result("a", 0.1), make_result("b", 0.9)],
            [make_result("c", 0.5), make_result("a", 1.0)],
        )

        assert [r.id for r in merged] == ["a", "b", "c"]
        scores = [r.score for r in merged]
        assert scores == sorted(scores, reverse=True)

    def test_one_entry_per_id(self):
        merged = merge_search_results(
            [make_result("a", 0.5), make_result("b", 0.4)],
            [make_result("b", 0.1), make_result("c", 0.2)],
        )
        assert sorted(r.id for r in merged) == ["a", "b", "c"]

    def test_inputs_not_mutated(self):
        vector = [make_result("p1", 1.0, match_type=MatchType.SEMANTIC)]
        graph = [make_result("p1", 0.36, match_type=MatchType.GRAPH)]

        merge_search_results(vector, graph)

        assert vector[0].score == 1.0
        assert vector[0].match_type == MatchType.SEMANTIC
        assert graph[0].score == 0.36

    def test_custom_boost(self):
        merged = merge_search_results([make_result("p1", 1.0)], [], SearchTuning(vector_boost=2.0))
        assert merged[0].score == pytest.approx(2.0)

    def test_empty_inputs(self):
        assert merge_search_results([], []) == []
