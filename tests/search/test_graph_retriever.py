"""
Tests for the graph retriever.
"""

import pytest

from kgsearch.errors import ErrorReason, GraphSearchError
from kgsearch.search.graph import execute_query
from kgsearch.search.models import MatchType
from kgsearch.search.strategies import DEFAULT_REGISTRY, StrategyKey

from tests.helpers import FakeSession, project_row


class TestExecuteQuery:
    """Tests for execute_query."""

    @pytest.mark.asyncio
    async def test_params_bound_and_rows_normalized(self):
        session = FakeSession(lambda query, params: [project_row("p1"), project_row("p2", score=0.5)])
        template = DEFAULT_REGISTRY.get(StrategyKey.TECHNOLOGY).query

        results = await execute_query(session, template, {"query": "react"}, MatchType.GRAPH)

        assert [r.id for r in results] == ["p1", "p2"]
        assert all(r.match_type == MatchType.GRAPH for r in results)
        assert session.calls == [(template, {"query": "react"})]

    @pytest.mark.asyncio
    async def test_user_text_not_in_query(self):
        """User text travels only in the parameters."""
        session = FakeSession(lambda query, params: [])
        template = DEFAULT_REGISTRY.get(StrategyKey.GENERAL).query
        hostile = "x') MATCH (n) DETACH DELETE n //"

        await execute_query(session, template, {"query": hostile})

        sent_query, sent_params = session.calls[0]
        assert hostile not in sent_query
        assert sent_params["query"] == hostile

    @pytest.mark.asyncio
    async def test_default_match_type(self):
        session = FakeSession(lambda query, params: [project_row("p1")])
        results = await execute_query(session, "RETURN 1")
        assert results[0].match_type == MatchType.TEMPLATE

    @pytest.mark.asyncio
    async def test_empty_rows(self):
        results = await execute_query(FakeSession(lambda query, params: []), "RETURN 1")
        assert results == []

    @pytest.mark.asyncio
    async def test_failure_wrapped(self):
        def responder(query, params):
            raise ConnectionError("connection reset")

        with pytest.raises(GraphSearchError) as exc_info:
            await execute_query(FakeSession(responder), "RETURN 1")

        assert exc_info.value.reason == ErrorReason.QUERY_EXECUTION
        assert str(exc_info.value) == "Failed to execute query: connection reset"
