"""
Tests for environment-driven settings.
"""

import os
from unittest.mock import patch

import pytest

from kgsearch.config import DEFAULT_RERANK_MODEL, RerankConfig, SearchTuning


class TestRerankConfig:
    """Tests for RerankConfig."""

    def test_defaults_without_env(self, monkeypatch):
        monkeypatch.delenv("COHERE_API_KEY", raising=False)
        monkeypatch.delenv("RERANK_MODEL", raising=False)

        config = RerankConfig()

        assert config.api_key is None
        assert config.has_credential is False
        assert config.model == DEFAULT_RERANK_MODEL == "rerank-english-v3.0"

    def test_from_env(self):
        with patch.dict(os.environ, {"COHERE_API_KEY": "key-123", "RERANK_MODEL": "rerank-v3.5"}):
            config = RerankConfig()

        assert config.api_key == "key-123"
        assert config.has_credential is True
        assert config.model == "rerank-v3.5"


class TestSearchTuning:
    """Tests for SearchTuning."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("KGSEARCH_DEFAULT_TOP_K", raising=False)
        tuning = SearchTuning()

        assert tuning.vector_boost == 1.2
        assert tuning.max_code_snippets == 3
        assert tuning.default_top_k == 10

    @pytest.mark.parametrize("top_k,pool,limit", [
        (1, 100, 50),
        (10, 100, 50),
        (11, 110, 55),
        (30, 300, 150),
    ])
    def test_oversampling(self, top_k, pool, limit):
        tuning = SearchTuning()
        assert tuning.candidate_pool(top_k) == pool
        assert tuning.result_limit(top_k) == limit

    def test_default_top_k_from_env(self):
        with patch.dict(os.environ, {"KGSEARCH_DEFAULT_TOP_K": "25"}):
            assert SearchTuning().default_top_k == 25

    @pytest.mark.parametrize("kwargs,message", [
        ({"candidate_multiplier": 0}, "candidate_multiplier"),
        ({"limit_multiplier": 0}, "limit_multiplier"),
        ({"candidate_floor": 0}, "floors"),
        ({"vector_boost": 0}, "vector_boost"),
        ({"max_code_snippets": -1}, "max_code_snippets"),
        ({"default_top_k": 0}, "default_top_k"),
    ])
    def test_validation(self, kwargs, message):
        with pytest.raises(ValueError, match=message):
            SearchTuning(**kwargs)
