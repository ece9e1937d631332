"""
Embedding Service
=================

Sentence-transformers embedding provider for query vectors.

The vectors stored on Project/Employment nodes were produced by one of the
supported models; the query must be embedded with the same model, which the
caller names in every request (``embeddingModelName``).

Key Features:
- One cached instance per supported model
- Lazy loading (model loaded on first use, not on import)
- Query/passage prefixes for E5-family models
- Batch encoding
- Configurable device (CPU/CUDA)
- Thread-safe initialization

Usage:
    service = get_embeddings("intfloat/multilingual-e5-large")
    vector = service.encode_query("projects with react")
"""

import logging
import os
from typing import Dict, List, Optional
from threading import Lock

try:
    from sentence_transformers import SentenceTransformer
    import torch
except ImportError:
    raise ImportError(
        "sentence-transformers and torch are required for EmbeddingService. "
        "Install with: pip install sentence-transformers torch"
    )

from kgsearch.errors import ErrorReason, GraphSearchError

logger = logging.getLogger(__name__)


# model name -> (query prefix, passage prefix)
SUPPORTED_MODELS: Dict[str, tuple] = {
    "intfloat/multilingual-e5-large": ("query: ", "passage: "),
    "intfloat/e5-base-v2": ("query: ", "passage: "),
    "sentence-transformers/all-MiniLM-L6-v2": ("", ""),
    "sentence-transformers/all-mpnet-base-v2": ("", ""),
}


class EmbeddingService:
    """
    Embedding provider backed by a sentence-transformers model.

    Usage:
        service = EmbeddingService("sentence-transformers/all-MiniLM-L6-v2")

        query_vector = service.encode_query("Which projects used Kubernetes?")
        vectors = service.encode_batch(["text1", "text2"], is_query=False)
    """

    def __init__(
        self,
        model_name: str,
        device: Optional[str] = None,
        batch_size: int = 32,
        normalize_embeddings: bool = True
    ):
        """
        Initialize EmbeddingService.

        Args:
            model_name: Sentence-transformers model name
            device: Device to use ('cpu', 'cuda', or None for auto-detect)
            batch_size: Batch size for encoding
            normalize_embeddings: Whether to normalize embeddings (for cosine similarity)
        """
        self.model_name = model_name
        self.query_prefix, self.passage_prefix = SUPPORTED_MODELS.get(model_name, ("", ""))
        self.device = (
            device or
            os.getenv("EMBEDDING_DEVICE", "cuda" if torch.cuda.is_available() else "cpu")
        )
        self.batch_size = int(os.getenv("EMBEDDING_BATCH_SIZE", str(batch_size)))
        self.normalize_embeddings = (
            os.getenv("EMBEDDING_NORMALIZE", str(normalize_embeddings)).lower() == "true"
        )

        self._model: Optional[SentenceTransformer] = None
        self._lock = Lock()

        logger.info(
            f"EmbeddingService configured",
            extra={
                "model": self.model_name,
                "device": self.device,
                "batch_size": self.batch_size,
                "normalize": self.normalize_embeddings
            }
        )

    def _load_model(self) -> SentenceTransformer:
        """
        Lazy load the sentence-transformers model.

        Downloads the model if not cached.
        """
        if self._model is None:
            with self._lock:
                if self._model is None:
                    logger.info(f"Loading embedding model: {self.model_name} on device: {self.device}")

                    try:
                        self._model = SentenceTransformer(
                            self.model_name,
                            device=self.device
                        )
                        logger.info(f"Model loaded successfully. Embedding dimension: {self._model.get_sentence_embedding_dimension()}")
                    except Exception as e:
                        logger.error(f"Failed to load model: {e}", exc_info=True)
                        raise RuntimeError(f"Failed to load embedding model: {e}")

        return self._model

    @property
    def is_loaded(self) -> bool:
        """Check if model is loaded."""
        return self._model is not None

    def encode_query(self, text: str) -> List[float]:
        """
        Encode a query text (with the model's query prefix).

        Args:
            text: Query text

        Returns:
            Embedding vector as a list of floats
        """
        model = self._load_model()

        logger.debug(f"Encoding query: {text[:100]}...")

        embedding = model.encode(
            f"{self.query_prefix}{text}",
            normalize_embeddings=self.normalize_embeddings,
            convert_to_numpy=True
        )

        return embedding.tolist()

    def encode_batch(
        self,
        texts: List[str],
        is_query: bool = False,
        show_progress_bar: bool = False
    ) -> List[List[float]]:
        """
        Encode a batch of texts with the appropriate prefix.

        Args:
            texts: List of texts to encode
            is_query: If True, use the query prefix; otherwise the passage prefix
            show_progress_bar: Whether to show progress bar

        Returns:
            List of embedding vectors, one per input text
        """
        if not texts:
            return []

        model = self._load_model()

        prefix = self.query_prefix if is_query else self.passage_prefix
        prefixed_texts = [f"{prefix}{text}" for text in texts]

        logger.info(f"Batch encoding {len(texts)} {'queries' if is_query else 'documents'}")

        embeddings = model.encode(
            prefixed_texts,
            batch_size=self.batch_size,
            normalize_embeddings=self.normalize_embeddings,
            show_progress_bar=show_progress_bar,
            convert_to_numpy=True
        )

        return embeddings.tolist()

    def __repr__(self) -> str:
        return (
            f"EmbeddingService("
            f"model={self.model_name}, "
            f"device={self.device}, "
            f"loaded={self.is_loaded})"
        )


_instances: Dict[str, EmbeddingService] = {}
_instances_lock = Lock()


def get_embeddings(model_name: str) -> EmbeddingService:
    """
    Get the cached EmbeddingService for a supported model.

    Raises:
        GraphSearchError: reason EMBEDDING if the model is not supported
    """
    if model_name not in SUPPORTED_MODELS:
        raise GraphSearchError(
            f"Embedding model not supported: {model_name}. "
            f"Supported models: {', '.join(SUPPORTED_MODELS)}",
            ErrorReason.EMBEDDING,
        )

    if model_name not in _instances:
        with _instances_lock:
            if model_name not in _instances:
                _instances[model_name] = EmbeddingService(model_name)
    return _instances[model_name]
