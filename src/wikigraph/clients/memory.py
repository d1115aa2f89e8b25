"""
In-memory Wikipedia data source backed by plain dictionaries.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, FrozenSet, Hashable, Iterable, List, Mapping, Optional, Set, Tuple, Union

from wikigraph.clients.base import WikipediaClient
from wikigraph.exceptions import WikiServiceUnavailableException
from wikigraph.models import ArticleId, ArticleNotFound, LinksNotFound, Title, TitleNotFound
from wikigraph.result import DomainFailure, Outcome, Success, WikiResult

logger = logging.getLogger(__name__)


class InMemoryWikipediaClient(WikipediaClient):
    """
    A deterministic link graph held in memory.

    Useful for tests and for analysing small exported graphs. Failures of the
    real services can be simulated: any lookup whose argument (an id or a
    title) is listed in `failing_ids` raises a WikiServiceUnavailableException,
    which surfaces as a SystemFailure.

    Every lookup is recorded in `calls` as an (operation, argument) pair.
    """

    def __init__(
        self,
        links: Mapping[ArticleId, Iterable[ArticleId]],
        titles: Optional[Mapping[ArticleId, Title]] = None,
        failing_ids: Iterable[ArticleId] = (),
        delay: Union[float, Mapping[ArticleId, float]] = 0.0,
    ):
        self.links: Dict[ArticleId, FrozenSet[ArticleId]] = {
            article_id: frozenset(targets) for article_id, targets in links.items()
        }
        self.titles: Dict[ArticleId, Title] = dict(titles or {})
        self.failing_ids: Set[ArticleId] = set(failing_ids)
        self.delay = delay
        self.calls: List[Tuple[str, Hashable]] = []

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "InMemoryWikipediaClient":
        """
        Load a graph from a JSON file of the form
        {"titles": {"1": "Philosophy", ...}, "links": {"1": [2, 3], ...}}.

        Keys are converted back to integers when they look like integers.
        """
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)

        titles = {_parse_id(key): title for key, title in data.get("titles", {}).items()}
        links = {
            _parse_id(key): [_parse_id(target) for target in targets]
            for key, targets in data.get("links", {}).items()
        }
        logger.info(f"Loaded in-memory graph from {path}: {len(titles)} titles, {len(links)} link lists")
        return cls(links=links, titles=titles)

    def links_from(self, article_id: ArticleId) -> WikiResult[FrozenSet[ArticleId]]:
        return WikiResult(lambda: self._links_from(article_id))

    def name_of_article(self, article_id: ArticleId) -> WikiResult[Title]:
        return WikiResult(lambda: self._name_of_article(article_id))

    def search_id(self, title: Title) -> WikiResult[ArticleId]:
        return WikiResult(lambda: self._search_id(title))

    async def _links_from(self, article_id: ArticleId) -> Outcome[FrozenSet[ArticleId]]:
        await self._simulate_call("links_from", article_id)
        if article_id in self.links:
            return Success(self.links[article_id])
        if article_id in self.titles:
            return DomainFailure((LinksNotFound(article_id=article_id),))
        return DomainFailure((ArticleNotFound(article_id=article_id),))

    async def _name_of_article(self, article_id: ArticleId) -> Outcome[Title]:
        await self._simulate_call("name_of_article", article_id)
        if article_id in self.titles:
            return Success(self.titles[article_id])
        return DomainFailure((ArticleNotFound(article_id=article_id),))

    async def _search_id(self, title: Title) -> Outcome[ArticleId]:
        await self._simulate_call("search_id", title)
        wanted = title.strip().casefold()
        for article_id, candidate in self.titles.items():
            if candidate.casefold() == wanted:
                return Success(article_id)
        return DomainFailure((TitleNotFound(title=title),))

    async def _simulate_call(self, operation: str, argument: Any) -> None:
        self.calls.append((operation, argument))
        delay = self.delay.get(argument, 0.0) if isinstance(self.delay, Mapping) else self.delay
        # Yield to the event loop even without a delay so concurrent lookups interleave
        await asyncio.sleep(delay)
        if argument in self.failing_ids:
            raise WikiServiceUnavailableException(f"Simulated outage while calling {operation}({argument!r})")

    def call_count(self, operation: Optional[str] = None) -> int:
        """Number of recorded lookups, optionally restricted to one operation."""
        if operation is None:
            return len(self.calls)
        return sum(1 for name, _ in self.calls if name == operation)


def _parse_id(raw: Any) -> ArticleId:
    if isinstance(raw, str) and raw.lstrip("-").isdigit():
        return int(raw)
    return raw
