"""
Tests for best-effort reranking.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import cohere
import httpx
import pytest

from kgsearch.config import RerankConfig
from kgsearch.search.models import SearchResult
from kgsearch.search.reranker import (
    RerankAvailable,
    RerankOptions,
    RerankUnavailable,
    build_rerank_document,
    cohere_rerank_call,
    rerank_results,
    resolve_rerank_capability,
)

from tests.helpers import make_result


def candidates(n):
    return [make_result(f"r{i}", float(n - i)) for i in range(n)]


class TestBuildRerankDocument:

    def test_basic_fields(self):
        result = SearchResult(title="Test", description="Desc", role="Dev")
        assert build_rerank_document(result) == "Test | Desc | Dev"

    def test_lists_and_empty_parts(self):
        result = SearchResult(
            title="Shop",
            impact="Doubled conversions",
            technologies=["React", "Node"],
            patterns=["MVC"],
        )
        assert build_rerank_document(result) == (
            "Shop | Doubled conversions | Technologies: React, Node | Patterns: MVC"
        )


class TestResolveRerankCapability:

    def test_no_credential(self):
        capability = resolve_rerank_capability(RerankConfig(api_key=None))
        assert isinstance(capability, RerankUnavailable)

    def test_with_credential(self):
        capability = resolve_rerank_capability(RerankConfig(api_key="secret"))
        assert isinstance(capability, RerankAvailable)
        assert callable(capability.call)

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("COHERE_API_KEY", "")
        assert isinstance(resolve_rerank_capability(), RerankUnavailable)


class TestRerankResults:
    """Tests for rerank_results."""

    @pytest.mark.asyncio
    async def test_unavailable_truncates_in_order(self):
        """Nessuna credenziale, 15 candidati, top_n=5 -> primi 5."""
        results = candidates(15)

        reranked = await rerank_results("q", results, RerankOptions(top_n=5), RerankUnavailable())

        assert reranked == results[:5]

    @pytest.mark.asyncio
    async def test_unavailable_from_env(self, no_rerank_credential):
        results = candidates(15)
        reranked = await rerank_results("q", results, RerankOptions(top_n=5))
        assert [r.id for r in reranked] == ["r0", "r1", "r2", "r3", "r4"]

    @pytest.mark.asyncio
    async def test_short_list_unchanged(self):
        results = candidates(3)
        call = AsyncMock()

        reranked = await rerank_results("q", results, RerankOptions(top_n=5), RerankAvailable(call))

        assert reranked is results
        call.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_disabled_unchanged(self):
        results = candidates(15)
        reranked = await rerank_results(
            "q", results, RerankOptions(enabled=False, top_n=5), RerankUnavailable()
        )
        assert reranked is results

    @pytest.mark.asyncio
    async def test_empty_list(self):
        assert await rerank_results("q", [], RerankOptions(top_n=5), RerankUnavailable()) == []

    @pytest.mark.asyncio
    async def test_provider_order_applied(self):
        results = candidates(6)
        call = AsyncMock(return_value=[4, 0, 2])

        reranked = await rerank_results(
            "react", results, RerankOptions(top_n=3, model="rerank-test"), RerankAvailable(call)
        )

        assert [r.id for r in reranked] == ["r4", "r0", "r2"]
        query, documents, top_n, model = call.await_args.args
        assert query == "react"
        assert len(documents) == 6
        assert top_n == 3
        assert model == "rerank-test"

    @pytest.mark.asyncio
    async def test_provider_failure_falls_back(self):
        results = candidates(8)
        call = AsyncMock(side_effect=RuntimeError("429 Too Many Requests"))

        reranked = await rerank_results("q", results, RerankOptions(top_n=4), RerankAvailable(call))

        assert reranked == results[:4]

    @pytest.mark.asyncio
    async def test_out_of_range_index_falls_back(self):
        results = candidates(8)
        call = AsyncMock(return_value=[1, 99])

        reranked = await rerank_results("q", results, RerankOptions(top_n=2), RerankAvailable(call))

        assert reranked == results[:2]


class FakeCohereClient:
    """Stand-in for cohere.AsyncClientV2 recording constructor and rerank arguments."""

    instances = []

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.rerank_kwargs = None
        FakeCohereClient.instances.append(self)

    async def rerank(self, **kwargs):
        self.rerank_kwargs = kwargs
        return SimpleNamespace(results=[
            SimpleNamespace(index=2, relevance_score=0.9),
            SimpleNamespace(index=0, relevance_score=0.4),
        ])


class TestCohereRerankCall:

    @pytest.fixture
    def fake_client(self, monkeypatch):
        FakeCohereClient.instances = []
        monkeypatch.setattr(cohere, "AsyncClientV2", FakeCohereClient)
        return FakeCohereClient

    @pytest.mark.asyncio
    async def test_request_mapping(self, fake_client):
        call = cohere_rerank_call("secret")

        indices = await call("react", ["a", "b", "c"], 2, "rerank-custom")

        assert indices == [2, 0]
        client = fake_client.instances[0]
        assert client.kwargs["api_key"] == "secret"
        assert client.rerank_kwargs == {
            "model": "rerank-custom",
            "query": "react",
            "documents": ["a", "b", "c"],
            "top_n": 2,
        }

    @pytest.mark.asyncio
    async def test_http_pool_closed_after_call(self, fake_client):
        await cohere_rerank_call("secret")("q", ["a"], 1, "m")

        http = fake_client.instances[0].kwargs["httpx_client"]
        assert isinstance(http, httpx.AsyncClient)
        assert http.is_closed

    @pytest.mark.asyncio
    async def test_http_pool_closed_on_error(self, fake_client, monkeypatch):
        async def failing(self, **kwargs):
            raise RuntimeError("503 Service Unavailable")

        monkeypatch.setattr(FakeCohereClient, "rerank", failing)

        with pytest.raises(RuntimeError):
            await cohere_rerank_call("secret")("q", ["a"], 1, "m")

        assert fake_client.instances[0].kwargs["httpx_client"].is_closed
