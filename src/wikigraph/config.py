import os
from typing import Literal, Optional
from pydantic import BaseModel, Field
from dotenv import load_dotenv

DEFAULT_MAX_DEPTH = 50


class WikigraphConfig(BaseModel):
    """Configuration for the graph analyzer and its data source."""

    # Data source settings
    source: Literal["live", "sqlite", "file"] = "live"
    language: str = "en"
    db_path: str = "database/wiki_graph.sqlite"
    graph_file: Optional[str] = None

    # Search settings
    max_depth: int = Field(DEFAULT_MAX_DEPTH, ge=0)

    # Live API settings
    max_concurrent_requests: int = Field(8, gt=0)
    request_timeout: float = Field(10.0, gt=0)

    log_level: str = "INFO"
    search_log_level: Optional[str] = None

    @classmethod
    def from_env(cls) -> "WikigraphConfig":
        """Create config from environment variables (and a .env file, if present)."""
        load_dotenv()
        return cls(
            source=os.getenv("WIKIGRAPH_SOURCE", "live").lower(),
            language=os.getenv("WIKIGRAPH_LANGUAGE", "en"),
            db_path=os.getenv("WIKIGRAPH_DB_PATH", "database/wiki_graph.sqlite"),
            graph_file=os.getenv("WIKIGRAPH_GRAPH_FILE") or None,
            max_depth=int(os.getenv("WIKIGRAPH_MAX_DEPTH", str(DEFAULT_MAX_DEPTH))),
            max_concurrent_requests=int(os.getenv("WIKIGRAPH_MAX_CONCURRENT_REQUESTS", "8")),
            request_timeout=float(os.getenv("WIKIGRAPH_REQUEST_TIMEOUT", "10.0")),
            log_level=os.getenv("WIKIGRAPH_LOG_LEVEL", "INFO").upper(),
            search_log_level=(os.getenv("WIKIGRAPH_SEARCH_LOG_LEVEL") or "").upper() or None,
        )
