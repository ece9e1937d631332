"""
Configuration module for kgsearch.
"""

from .settings import (
    DEFAULT_RERANK_MODEL,
    RerankConfig,
    SearchTuning,
)

__all__ = [
    "DEFAULT_RERANK_MODEL",
    "RerankConfig",
    "SearchTuning",
]
