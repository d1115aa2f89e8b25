"""
Wikipedia data sources for the graph analyzer.
"""

from typing import Callable, Dict

from wikigraph.config import WikigraphConfig
from .base import WikipediaClient
from .live import LiveWikipediaClient
from .memory import InMemoryWikipediaClient
from .sqlite import SqliteWikipediaClient


def _live_client(config: WikigraphConfig) -> WikipediaClient:
    return LiveWikipediaClient(
        language=config.language,
        max_concurrent_requests=config.max_concurrent_requests,
        timeout=config.request_timeout,
    )


def _sqlite_client(config: WikigraphConfig) -> WikipediaClient:
    return SqliteWikipediaClient(db_path=config.db_path)


def _file_client(config: WikigraphConfig) -> WikipediaClient:
    if not config.graph_file:
        raise ValueError("The 'file' source requires a graph file (WIKIGRAPH_GRAPH_FILE or --graph-file)")
    return InMemoryWikipediaClient.from_json(config.graph_file)


# Builders for every value accepted by WikigraphConfig.source
SOURCES: Dict[str, Callable[[WikigraphConfig], WikipediaClient]] = {
    "live": _live_client,
    "sqlite": _sqlite_client,
    "file": _file_client,
}


def create_client(config: WikigraphConfig) -> WikipediaClient:
    """
    Create the data source selected by `config.source`.

    Raises:
        ValueError: If the `file` source is selected without a graph file.
    """
    return SOURCES[config.source](config)


__all__ = [
    "WikipediaClient",
    "LiveWikipediaClient",
    "InMemoryWikipediaClient",
    "SqliteWikipediaClient",
    "SOURCES",
    "create_client",
]
