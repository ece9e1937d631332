"""
kgsearch Test Configuration
===========================

Shared fixtures. No test in this suite needs a running FalkorDB,
an embedding model download or a reranking credential.
"""

import pytest

from tests.helpers import FakeEmbeddings


@pytest.fixture
def fake_embeddings():
    return FakeEmbeddings()


@pytest.fixture
def embeddings_factory(fake_embeddings):
    return lambda model_name: fake_embeddings


@pytest.fixture
def no_rerank_credential(monkeypatch):
    """Ensure reranking resolves to unavailable."""
    monkeypatch.delenv("COHERE_API_KEY", raising=False)
