import asyncio
import logging
from typing import Callable, List, Optional, TypeVar

import typer
from rich.console import Console
from rich.table import Table

from wikigraph.analyzer import Wikigraph
from wikigraph.clients import WikipediaClient, create_client
from wikigraph.config import WikigraphConfig
from wikigraph.logging_config import setup_logging
from wikigraph.result import DomainFailure, Outcome, Success, WikiResult

T = TypeVar("T")

EXIT_DOMAIN_FAILURE = 1
EXIT_SYSTEM_FAILURE = 2

app = typer.Typer(help="Explore the Wikipedia article link graph.")
console = Console()
logger = logging.getLogger(__name__)


@app.callback()
def configure(
    ctx: typer.Context,
    source: Optional[str] = typer.Option(None, "--source", help="Data source: live, sqlite or file."),
    db_path: Optional[str] = typer.Option(None, "--db-path", help="Link-graph database for the sqlite source."),
    graph_file: Optional[str] = typer.Option(None, "--graph-file", help="JSON graph for the file source."),
    language: Optional[str] = typer.Option(None, "--language", "-l", help="Wikipedia language edition."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)."),
    search_log_level: Optional[str] = typer.Option(
        None, "--search-log-level", help="Log level of the search progress, defaults to --log-level."
    ),
):
    """
    Options given on the command line override the WIKIGRAPH_* environment.
    """
    overrides = {
        "source": source,
        "db_path": db_path,
        "graph_file": graph_file,
        "language": language,
        "log_level": log_level.upper() if log_level else None,
        "search_log_level": search_log_level.upper() if search_log_level else None,
    }
    try:
        config = WikigraphConfig.from_env()
        config = WikigraphConfig(**{**config.model_dump(), **{k: v for k, v in overrides.items() if v is not None}})
    except ValueError as e:
        console.print(f"[red]Invalid configuration:[/red] {e}")
        raise typer.Exit(code=EXIT_SYSTEM_FAILURE)
    setup_logging(level=config.log_level, search_level=config.search_log_level)
    ctx.obj = config


@app.command()
def links(ctx: typer.Context, title: str = typer.Argument(..., help="Title of the article.")):
    """
    Print the titles of the articles linked from TITLE.
    """
    def analysis(graph: Wikigraph) -> WikiResult[List[str]]:
        return graph.client.search_id(title).flat_map(graph.named_links).map(sorted)

    names = _run(ctx.obj, analysis)
    for name in names:
        console.print(name)


@app.command()
def distance(
    ctx: typer.Context,
    start: str = typer.Argument(..., help="Title of the start article."),
    target: str = typer.Argument(..., help="Title of the target article."),
    max_depth: Optional[int] = typer.Option(None, "--max-depth", "-d", min=0, help="Largest distance to search."),
):
    """
    Print the number of links to follow from START to reach TARGET.
    """
    config: WikigraphConfig = ctx.obj
    depth = config.max_depth if max_depth is None else max_depth

    def analysis(graph: Wikigraph) -> WikiResult[Optional[int]]:
        return (
            graph.client.search_id(start)
            .zip(graph.client.search_id(target))
            .flat_map(lambda ids: graph.breadth_first_search(ids[0], ids[1], depth))
        )

    result = _run(config, analysis)
    if result is None:
        console.print(f"No path from '{start}' to '{target}' within {depth} links")
    else:
        console.print(f"'{start}' -> '{target}': {result}")


@app.command()
def matrix(
    ctx: typer.Context,
    titles: List[str] = typer.Argument(..., help="Titles of the articles."),
    max_depth: Optional[int] = typer.Option(None, "--max-depth", "-d", min=0, help="Largest distance to search."),
):
    """
    Print the distances between every ordered pair of TITLES.
    """
    config: WikigraphConfig = ctx.obj
    depth = config.max_depth if max_depth is None else max_depth

    entries = _run(config, lambda graph: graph.distance_matrix(titles, depth))

    table = Table(title=f"Distances (max depth {depth})")
    table.add_column("From")
    table.add_column("To")
    table.add_column("Distance", justify="right")
    for entry in entries:
        table.add_row(entry.from_title, entry.to_title, "-" if entry.distance is None else str(entry.distance))
    console.print(table)


def _run(config: WikigraphConfig, analysis: Callable[[Wikigraph], WikiResult[T]]) -> T:
    """Run an analysis against the configured source and exit on failure."""
    try:
        outcome = asyncio.run(_run_async(config, analysis))
    except (ValueError, OSError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=EXIT_SYSTEM_FAILURE)

    if isinstance(outcome, Success):
        return outcome.value
    if isinstance(outcome, DomainFailure):
        for error in outcome.errors:
            console.print(f"[yellow]Not found:[/yellow] {error.message}")
        raise typer.Exit(code=EXIT_DOMAIN_FAILURE)
    logger.error(f"Analysis failed: {outcome.exception}", exc_info=outcome.exception)
    console.print(f"[red]System failure:[/red] {outcome.exception}")
    raise typer.Exit(code=EXIT_SYSTEM_FAILURE)


async def _run_async(config: WikigraphConfig, analysis: Callable[[Wikigraph], WikiResult[T]]) -> Outcome[T]:
    client: WikipediaClient = create_client(config)
    async with client:
        return await analysis(Wikigraph(client))


if __name__ == "__main__":
    app()
