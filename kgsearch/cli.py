"""
kgsearch CLI

Run hybrid searches and inspect the strategy catalogue from a terminal.

Example:
    kgsearch search "What did you build with React?" --top-k 5
    kgsearch search "python" --strategy technology
    kgsearch strategies
"""

import asyncio
import json
import sys

import click

from kgsearch import __version__
from kgsearch.log_config import configure_logging
from kgsearch.search.strategies import DEFAULT_REGISTRY
from kgsearch.storage.graph import FalkorDBClient, FalkorDBConfig
from kgsearch.tools import (
    RAG_GRAPH_CYPHER_SEARCH,
    RAG_GRAPH_SEARCH,
    ToolRegistry,
    register_search_tools,
)

DEFAULT_EMBEDDING_MODEL = "intfloat/multilingual-e5-large"


@click.group()
@click.version_option(version=__version__, prog_name='kgsearch')
@click.option('--log-level', default='WARNING', help='Log level (DEBUG, INFO, WARNING, ERROR)')
def cli(log_level):
    """Hybrid knowledge-graph search."""
    configure_logging(log_level)


@cli.command('search')
@click.argument('query')
@click.option('--model', 'embedding_model_name', default=DEFAULT_EMBEDDING_MODEL, help='Embedding model name')
@click.option('--top-k', default=10, type=int, help='Number of results')
@click.option('--strategy', type=click.Choice([k.value for k in DEFAULT_REGISTRY]), help='Explicit graph strategy')
@click.option('--include-code', is_flag=True, help='Attach code snippets to projects')
@click.option('--technology', 'technologies', multiple=True, help='Technology filter (repeatable)')
@click.option('--graph', 'graph_name', default=None, help='Override FALKORDB_GRAPH_NAME')
def search(query, embedding_model_name, top_k, strategy, include_code, technologies, graph_name):
    """Run a hybrid search and print the JSON response.

    Example:
        kgsearch search "leadership experience" --top-k 3
    """
    config = FalkorDBConfig()
    if graph_name:
        config.graph_name = graph_name

    registry = ToolRegistry()
    register_search_tools(registry, FalkorDBClient(config))

    params = {
        "query": query,
        "embeddingModelName": embedding_model_name,
        "topK": top_k,
    }
    if include_code or technologies:
        params["searchOptions"] = {
            "includeCode": include_code,
            "technologies": list(technologies) or None,
        }

    tool_name = RAG_GRAPH_SEARCH
    if strategy:
        tool_name = RAG_GRAPH_CYPHER_SEARCH
        params["strategyKey"] = strategy

    result = asyncio.run(registry.execute(tool_name, **params))

    if not result.success:
        click.echo(f"❌ Search failed: {result.error}", err=True)
        sys.exit(1)

    click.echo(result.to_json())


@cli.command('strategies')
def strategies():
    """List the graph search strategies."""
    click.echo(DEFAULT_REGISTRY.describe())


@cli.command('schema')
def schema():
    """Print the function-calling schemas of the search tools."""
    registry = ToolRegistry()
    register_search_tools(registry, FalkorDBClient())
    click.echo(json.dumps(registry.get_all_schemas(), indent=2))


@cli.command('health')
def health():
    """Check the graph database connection."""
    client = FalkorDBClient()
    healthy = asyncio.run(client.health_check())

    if healthy:
        click.echo(f"✅ FalkorDB reachable ({client.config.host}:{client.config.port})")
    else:
        click.echo(f"❌ FalkorDB unreachable ({client.config.host}:{client.config.port})", err=True)
        sys.exit(1)


if __name__ == '__main__':
    cli()
