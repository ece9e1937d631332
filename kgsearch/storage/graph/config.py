"""
FalkorDB Configuration
======================

Configuration for the FalkorDB session provider.

Supports configuration via environment variables for flexible deploys.

Usage:
    from kgsearch.storage.graph import FalkorDBConfig

    # Default (env vars or default values)
    config = FalkorDBConfig()

    # Explicit override
    config = FalkorDBConfig(host="localhost", port=6380, graph_name="portfolio_prod")

Environment Variables:
    FALKORDB_HOST: Server host (default: localhost)
    FALKORDB_PORT: Server port (default: 6380)
    FALKORDB_GRAPH_NAME: Graph name (default: portfolio_dev)
    FALKORDB_PASSWORD: Password (default: empty)
    FALKORDB_MAX_CONNECTIONS: Max pooled connections per session (default: 10)
    FALKORDB_TIMEOUT_MS: Socket timeout in ms (default: 5000)

Naming convention:
    - portfolio_dev: development graph
    - portfolio_prod: production graph
"""

import os
from dataclasses import dataclass, field
from typing import Optional


def _get_env_str(key: str, default: str) -> str:
    """Read env var as string."""
    return os.environ.get(key, default)


def _get_env_int(key: str, default: int) -> int:
    """Read env var as int."""
    return int(os.environ.get(key, default))


@dataclass
class FalkorDBConfig:
    """
    FalkorDB connection configuration.

    Every field can be overridden from environment variables.

    Attributes:
        host: FalkorDB server host
        port: Server port (6380 for the FalkorDB container)
        graph_name: Graph name (use _dev/_prod per environment)
        max_connections: Max connections in each session's pool
        timeout_ms: Operation timeout in milliseconds
        password: Authentication password (optional)
    """
    host: str = field(default_factory=lambda: _get_env_str("FALKORDB_HOST", "localhost"))
    port: int = field(default_factory=lambda: _get_env_int("FALKORDB_PORT", 6380))
    graph_name: str = field(default_factory=lambda: _get_env_str("FALKORDB_GRAPH_NAME", "portfolio_dev"))
    max_connections: int = field(default_factory=lambda: _get_env_int("FALKORDB_MAX_CONNECTIONS", 10))
    timeout_ms: int = field(default_factory=lambda: _get_env_int("FALKORDB_TIMEOUT_MS", 5000))
    password: Optional[str] = field(default_factory=lambda: _get_env_str("FALKORDB_PASSWORD", "") or None)

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000.0
