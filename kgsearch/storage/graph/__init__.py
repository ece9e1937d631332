"""
Graph Storage
=============

FalkorDB session provider (Cypher-compatible, vector and full-text indexes).

Components:
- FalkorDBClient: opens scoped sessions
- GraphSession: execute(query, params) / close()
- FalkorDBConfig: connection configuration
- RelationshipType: relationship types of the portfolio graph

Example:
    from kgsearch.storage.graph import FalkorDBClient, FalkorDBConfig

    client = FalkorDBClient(FalkorDBConfig(graph_name="portfolio_dev"))
    async with client.session() as session:
        rows = await session.execute("MATCH (p:Project) RETURN p.id AS id")
"""

from kgsearch.storage.graph.config import FalkorDBConfig
from kgsearch.storage.graph.client import FalkorDBClient, GraphSession
from kgsearch.storage.graph.schema import NodeLabel, RelationshipType

__all__ = [
    "FalkorDBClient",
    "FalkorDBConfig",
    "GraphSession",
    "NodeLabel",
    "RelationshipType",
]
