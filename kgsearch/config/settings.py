"""
Search Settings
===============

Configuration dataclasses for the hybrid search pipeline.

Environment Variables:
    COHERE_API_KEY: Reranking credential (reranking disabled when empty)
    RERANK_MODEL: Reranking model (default: rerank-english-v3.0)
    KGSEARCH_DEFAULT_TOP_K: Default number of results (default: 10)

Usage:
    from kgsearch.config import RerankConfig, SearchTuning

    rerank = RerankConfig()          # reads env vars
    tuning = SearchTuning(vector_boost=1.5)
"""

import os
from dataclasses import dataclass, field
from typing import Optional

DEFAULT_RERANK_MODEL = "rerank-english-v3.0"


def _get_env_str(key: str, default: str) -> str:
    """Read env var as string."""
    return os.environ.get(key, default)


def _get_env_int(key: str, default: int) -> int:
    """Read env var as int."""
    return int(os.environ.get(key, default))


@dataclass
class RerankConfig:
    """
    Reranking provider configuration.

    Attributes:
        api_key: Cohere API key; None means no reranking credential
        model: Default reranking model
    """
    api_key: Optional[str] = field(default_factory=lambda: _get_env_str("COHERE_API_KEY", "") or None)
    model: str = field(default_factory=lambda: _get_env_str("RERANK_MODEL", DEFAULT_RERANK_MODEL))

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key)


@dataclass
class SearchTuning:
    """
    Fusion and oversampling parameters.

    The defaults are tunable constants kept for behavioural compatibility
    with the deployed ranking; they are not derived from any calibration.

    Attributes:
        candidate_multiplier: k = max(top_k * candidate_multiplier, candidate_floor)
        candidate_floor: Minimum ANN candidate pool
        limit_multiplier: limit = max(top_k * limit_multiplier, limit_floor)
        limit_floor: Minimum post-filter limit
        vector_boost: Multiplier applied to vector scores before fusion
        max_code_snippets: Code chunks returned per project when requested
        default_top_k: top_k when the request does not resolve one
    """
    candidate_multiplier: int = 10
    candidate_floor: int = 100
    limit_multiplier: int = 5
    limit_floor: int = 50
    vector_boost: float = 1.2
    max_code_snippets: int = 3
    default_top_k: int = field(default_factory=lambda: _get_env_int("KGSEARCH_DEFAULT_TOP_K", 10))

    def __post_init__(self):
        """Validate configuration values."""
        if self.candidate_multiplier < 1:
            raise ValueError(f"candidate_multiplier must be >= 1, got {self.candidate_multiplier}")
        if self.limit_multiplier < 1:
            raise ValueError(f"limit_multiplier must be >= 1, got {self.limit_multiplier}")
        if self.candidate_floor < 1 or self.limit_floor < 1:
            raise ValueError(
                f"floors must be >= 1, got candidate_floor={self.candidate_floor}, "
                f"limit_floor={self.limit_floor}"
            )
        if self.vector_boost <= 0:
            raise ValueError(f"vector_boost must be > 0, got {self.vector_boost}")
        if self.max_code_snippets < 0:
            raise ValueError(f"max_code_snippets must be >= 0, got {self.max_code_snippets}")
        if self.default_top_k < 1:
            raise ValueError(f"default_top_k must be >= 1, got {self.default_top_k}")

    def candidate_pool(self, top_k: int) -> int:
        """Raw ANN candidate count for a requested top_k."""
        return max(top_k * self.candidate_multiplier, self.candidate_floor)

    def result_limit(self, top_k: int) -> int:
        """Post-filter limit for a requested top_k."""
        return max(top_k * self.limit_multiplier, self.limit_floor)
