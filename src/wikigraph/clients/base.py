"""
Base interface for Wikipedia data sources.

A data source exposes the three primitive lookups the graph analyzer is built
on. Each returns a WikiResult: lookups for data that does not exist end in a
DomainFailure, infrastructure problems end in a SystemFailure.
"""

from abc import ABC, abstractmethod
from typing import FrozenSet

from wikigraph.models import ArticleId, Title
from wikigraph.result import WikiResult


class WikipediaClient(ABC):
    """Abstract access to the Wikipedia article link graph."""

    @abstractmethod
    def links_from(self, article_id: ArticleId) -> WikiResult[FrozenSet[ArticleId]]:
        """Ids of the articles linked from `article_id`."""
        pass

    @abstractmethod
    def name_of_article(self, article_id: ArticleId) -> WikiResult[Title]:
        """Title of the article `article_id`."""
        pass

    @abstractmethod
    def search_id(self, title: Title) -> WikiResult[ArticleId]:
        """Id of the article best matching `title`."""
        pass

    async def aclose(self) -> None:
        """Release any resources held by the client."""
        pass

    async def __aenter__(self) -> "WikipediaClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
