"""
Errors
======

The single domain exception of the hybrid search.

Failures are told apart by the ``reason`` field, not by subclasses:

- CONNECTION_INIT: opening a graph session failed
- QUERY_EXECUTION: running a Cypher template failed
- VECTOR_SEARCH: similarity search failed
- EMBEDDING: embedding model not supported
"""

from enum import Enum
from typing import Optional

UNKNOWN_ERROR = "Unknown error"


class ErrorReason(str, Enum):
    """Where a search failed."""
    CONNECTION_INIT = "connection_init"
    QUERY_EXECUTION = "query_execution"
    VECTOR_SEARCH = "vector_search"
    EMBEDDING = "embedding"


class GraphSearchError(Exception):
    """
    Raised by the retrieval components.

    Attributes:
        message: Readable message (includes the underlying message)
        reason: ErrorReason identifying the failing step
    """

    def __init__(self, message: str, reason: ErrorReason = ErrorReason.QUERY_EXECUTION):
        super().__init__(message)
        self.message = message
        self.reason = reason

    def __repr__(self) -> str:
        return f"GraphSearchError(reason={self.reason.value}, message={self.message!r})"


def describe_error(error: Optional[BaseException]) -> str:
    """
    Message of an exception, or "Unknown error" when it carries none.
    """
    if error is None:
        return UNKNOWN_ERROR
    message = str(error).strip()
    return message or UNKNOWN_ERROR
