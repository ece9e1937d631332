"""
FalkorDB Client
===============

Async session provider for the FalkorDB graph database.

FalkorDB runs on the Redis protocol and supports Cypher queries, including
vector and full-text indexes used by the hybrid search.

Every retrieval branch opens its own ``GraphSession`` and releases it on
exit; sessions are never shared across branches or requests.
"""

import structlog
import asyncio
from contextlib import asynccontextmanager
from itertools import count
from typing import Dict, List, Any, Optional, AsyncIterator

from falkordb import FalkorDB

from kgsearch.errors import ErrorReason, GraphSearchError, describe_error
from kgsearch.storage.graph.config import FalkorDBConfig

log = structlog.get_logger()

CONNECTION_INIT_FAILED = "Failed to initialize graph database connection"


def _convert_value(value: Any) -> Any:
    """Convert FalkorDB Node/Edge objects into plain dicts."""
    if hasattr(value, 'properties'):
        return {
            "properties": value.properties,
            "labels": getattr(value, 'labels', []),
            "id": getattr(value, 'id', None),
        }
    return value


class GraphSession:
    """
    One connection to FalkorDB, owned by a single retrieval branch.

    Example:
        session = await client.open_session()
        try:
            rows = await session.execute(
                "MATCH (p:Project {id: $id}) RETURN p.title AS title",
                {"id": "proj-1"}
            )
        finally:
            await session.close()
    """

    def __init__(self, db: Any, graph: Any, session_id: int):
        self._db = db
        self._graph = graph
        self.session_id = session_id
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def execute(
        self,
        cypher: str,
        params: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """
        Execute a Cypher query with bound parameters.

        Args:
            cypher: Cypher query string
            params: Query parameters (never interpolated into the query)

        Returns:
            List of records as dicts keyed by column alias
        """
        if self._closed:
            raise RuntimeError(f"Graph session {self.session_id} is closed")

        # falkordb-py is synchronous
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None,
            self._execute_sync,
            cypher,
            params or {}
        )

    def _execute_sync(self, cypher: str, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Execute query synchronously (called in executor)."""
        try:
            result = self._graph.query(cypher, params)

            records = []
            if result.result_set:
                headers = result.header

                for row in result.result_set:
                    record = {}
                    for i, header in enumerate(headers):
                        # header format is [type, alias]
                        col_name = header[1] if len(header) > 1 else f"col_{i}"
                        record[col_name] = _convert_value(row[i])
                    records.append(record)

            log.debug(
                f"Query executed: {cypher.strip()[:100]}... "
                f"(params={list(params.keys())}) -> {len(records)} records",
                session_id=self.session_id,
            )
            return records

        except Exception as e:
            log.error(f"Query failed: {cypher.strip()[:100]}... Error: {e}")
            raise

    async def close(self) -> None:
        """Release the underlying connection. Safe to call twice."""
        if self._closed:
            return
        self._closed = True

        connection = getattr(self._db, "connection", None)
        if connection is not None:
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(None, connection.close)

        self._db = None
        self._graph = None
        log.debug(f"Graph session {self.session_id} closed")


class FalkorDBClient:
    """
    Session provider for FalkorDB.

    Example:
        client = FalkorDBClient(FalkorDBConfig(graph_name="portfolio_dev"))

        async with client.session() as session:
            rows = await session.execute("MATCH (p:Project) RETURN p.id AS id")
    """

    def __init__(self, config: Optional[FalkorDBConfig] = None):
        self.config = config or FalkorDBConfig()
        self._session_ids = count(1)

        log.info(
            f"FalkorDBClient initialized - "
            f"host={self.config.host}:{self.config.port}, "
            f"graph={self.config.graph_name}"
        )

    async def open_session(self) -> GraphSession:
        """
        Open a new session.

        Raises:
            GraphSearchError: reason CONNECTION_INIT if the connection
                cannot be established
        """
        session_id = next(self._session_ids)
        loop = asyncio.get_running_loop()
        try:
            db, graph = await loop.run_in_executor(None, self._connect_sync)
        except Exception as e:
            message = str(e).strip() or CONNECTION_INIT_FAILED
            log.error(f"Graph session {session_id} failed to open: {message}")
            raise GraphSearchError(message, ErrorReason.CONNECTION_INIT) from e

        log.debug(f"Graph session {session_id} opened on {self.config.graph_name}")
        return GraphSession(db, graph, session_id)

    def _connect_sync(self):
        """Synchronous connection (called in executor)."""
        db = FalkorDB(
            host=self.config.host,
            port=self.config.port,
            password=self.config.password,
            socket_timeout=self.config.timeout_seconds,
            max_connections=self.config.max_connections,
        )
        # the redis pool connects lazily
        db.connection.ping()
        return db, db.select_graph(self.config.graph_name)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[GraphSession]:
        """Scoped session: always closed on exit, success or failure."""
        graph_session = await self.open_session()
        try:
            yield graph_session
        finally:
            await graph_session.close()

    async def health_check(self) -> bool:
        """
        Check if FalkorDB is reachable.

        Returns:
            True if healthy, False otherwise
        """
        try:
            async with self.session() as graph_session:
                await graph_session.execute("RETURN 1")
            return True

        except Exception as e:
            log.error(f"Health check failed: {describe_error(e)}")
            return False
