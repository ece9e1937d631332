"""
Tests for EmbeddingService

SentenceTransformer is patched, so no model is downloaded:
- Query prefixes per model family
- Batch encoding
- Lazy loading
- Cached provider per model name, unsupported names rejected
"""

import numpy as np
import pytest
from unittest.mock import MagicMock, patch

from kgsearch.errors import ErrorReason, GraphSearchError
from kgsearch.storage.vectors import embeddings as embeddings_module
from kgsearch.storage.vectors.embeddings import (
    SUPPORTED_MODELS,
    EmbeddingService,
    get_embeddings,
)


@pytest.fixture
def fake_model():
    model = MagicMock()
    model.encode.side_effect = lambda texts, **kwargs: (
        np.ones(4) if isinstance(texts, str) else np.ones((len(texts), 4))
    )
    model.get_sentence_embedding_dimension.return_value = 4
    return model


@pytest.fixture
def patched_transformer(fake_model):
    with patch.object(embeddings_module, "SentenceTransformer", return_value=fake_model) as transformer:
        yield transformer


@pytest.fixture(autouse=True)
def clear_instances():
    embeddings_module._instances.clear()
    yield
    embeddings_module._instances.clear()


class TestEmbeddingService:
    """Tests for EmbeddingService."""

    def test_lazy_loading(self, patched_transformer):
        service = EmbeddingService("intfloat/e5-base-v2", device="cpu")

        assert not service.is_loaded
        patched_transformer.assert_not_called()

        service.encode_query("react")
        assert service.is_loaded
        patched_transformer.assert_called_once_with("intfloat/e5-base-v2", device="cpu")

    def test_query_prefix_e5(self, patched_transformer, fake_model):
        service = EmbeddingService("intfloat/multilingual-e5-large", device="cpu")

        vector = service.encode_query("distributed systems")

        assert vector == [1.0, 1.0, 1.0, 1.0]
        assert fake_model.encode.call_args.args[0] == "query: distributed systems"

    def test_no_prefix_minilm(self, patched_transformer, fake_model):
        service = EmbeddingService("sentence-transformers/all-MiniLM-L6-v2", device="cpu")

        service.encode_query("distributed systems")

        assert fake_model.encode.call_args.args[0] == "distributed systems"

    def test_encode_batch(self, patched_transformer, fake_model):
        service = EmbeddingService("intfloat/e5-base-v2", device="cpu")

        vectors = service.encode_batch(["a", "b"], is_query=False)

        assert len(vectors) == 2
        assert fake_model.encode.call_args.args[0] == ["passage: a", "passage: b"]

    def test_encode_batch_empty(self, patched_transformer):
        assert EmbeddingService("intfloat/e5-base-v2", device="cpu").encode_batch([]) == []

    def test_load_failure(self):
        with patch.object(embeddings_module, "SentenceTransformer", side_effect=OSError("offline")):
            service = EmbeddingService("intfloat/e5-base-v2", device="cpu")
            with pytest.raises(RuntimeError, match="Failed to load embedding model"):
                service.encode_query("q")


class TestGetEmbeddings:
    """Tests for get_embeddings."""

    def test_cached_per_model(self):
        first = get_embeddings("intfloat/e5-base-v2")
        second = get_embeddings("intfloat/e5-base-v2")
        other = get_embeddings("sentence-transformers/all-MiniLM-L6-v2")

        assert first is second
        assert first is not other

    def test_unsupported_model(self):
        with pytest.raises(GraphSearchError) as exc_info:
            get_embeddings("text-embedding-ada-002")

        assert exc_info.value.reason == ErrorReason.EMBEDDING
        assert "Embedding model not supported: text-embedding-ada-002" in exc_info.value.message
        for model_name in SUPPORTED_MODELS:
            assert model_name in exc_info.value.message
