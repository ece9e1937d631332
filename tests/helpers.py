"""
Test doubles shared across the suite.
"""

from contextlib import asynccontextmanager
from typing import Any, Callable, Dict, List, Optional

from kgsearch.search.models import SearchResult

Responder = Callable[[str, Dict[str, Any]], List[Dict[str, Any]]]


class FakeSession:
    """
    In-memory GraphSession.

    ``responder(query, params)`` returns the rows for a query, or raises.
    """

    def __init__(self, responder: Responder, session_id: int = 1):
        self.responder = responder
        self.session_id = session_id
        self.calls: List[tuple] = []
        self.closed = False

    async def execute(self, query: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        self.calls.append((query, params or {}))
        return self.responder(query, params or {})

    async def close(self) -> None:
        self.closed = True


class FakeGraphClient:
    """Session provider handing out one FakeSession per ``session()`` block."""

    def __init__(self, responder: Responder):
        self.responder = responder
        self.sessions: List[FakeSession] = []

    @asynccontextmanager
    async def session(self):
        graph_session = FakeSession(self.responder, session_id=len(self.sessions) + 1)
        self.sessions.append(graph_session)
        try:
            yield graph_session
        finally:
            await graph_session.close()


class FakeEmbeddings:
    """Embedding provider returning a fixed vector."""

    def __init__(self, vector: Optional[List[float]] = None):
        self.vector = vector or [0.1, 0.2, 0.3]
        self.queries: List[str] = []

    def encode_query(self, text: str) -> List[float]:
        self.queries.append(text)
        return list(self.vector)


def is_vector_query(query: str) -> bool:
    return "db.idx.vector.queryNodes" in query


def is_employment_vector_query(query: str) -> bool:
    return is_vector_query(query) and "'Employment'" in query


def project_row(id: str, score: float = 1.0, **overrides) -> Dict[str, Any]:
    """Raw row shaped like the project strategy columns."""
    row = {
        "resultType": "project",
        "id": id,
        "title": f"Project {id}",
        "description": f"Description of {id}",
        "role": "Lead Developer",
        "impact": None,
        "completedDate": "2024-03-01",
        "complexity": 7,
        "fileCount": 42,
        "liveUrl": None,
        "githubUrl": f"https://github.com/example/{id}",
        "technologies": ["React", "TypeScript"],
        "skills": ["Frontend"],
        "patterns": ["MVC"],
        "codeSnippets": None,
        "company": None,
        "position": None,
        "achievements": None,
        "score": score,
    }
    row.update(overrides)
    return row


def make_result(id: str, score: float, **fields) -> SearchResult:
    return SearchResult(id=id, title=f"Result {id}", score=score, **fields)
