"""
LiveWikipediaClient - Wikipedia data source backed by the live MediaWiki API.
"""

import asyncio
import logging
from typing import Any, Dict, FrozenSet, Optional, Set

import httpx

from wikigraph.clients.base import WikipediaClient
from wikigraph.exceptions import WikiServiceUnavailableException
from wikigraph.models import ArticleId, ArticleNotFound, Title, TitleNotFound
from wikigraph.result import DomainFailure, Outcome, Success, WikiResult

USER_AGENT = "wikigraph/0.1 (article link graph analysis)"


class LiveWikipediaClient(WikipediaClient):
    """
    Service for interacting directly with the live Wikipedia API.

    Articles are identified by their integer page id. The number of requests
    in flight is bounded by `max_concurrent_requests`; one underlying
    httpx.AsyncClient is shared by all lookups and closed by `aclose()`.
    """

    def __init__(
        self,
        language: str = "en",
        max_concurrent_requests: int = 8,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.language = language
        self.base_url = f"https://{language}.wikipedia.org/w/api.php"
        self.timeout = timeout
        self.logger = logging.getLogger(__name__)
        self._transport = transport
        self._semaphore = asyncio.Semaphore(max_concurrent_requests)
        self._client: Optional[httpx.AsyncClient] = None

    def links_from(self, article_id: ArticleId) -> WikiResult[FrozenSet[ArticleId]]:
        return WikiResult(lambda: self._links_from(article_id))

    def name_of_article(self, article_id: ArticleId) -> WikiResult[Title]:
        return WikiResult(lambda: self._name_of_article(article_id))

    def search_id(self, title: Title) -> WikiResult[ArticleId]:
        return WikiResult(lambda: self._search_id(title))

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
                headers={"User-Agent": USER_AGENT},
            )
        return self._client

    async def _query(self, params: Dict[str, str]) -> Dict[str, Any]:
        """Run one API query and return the decoded payload."""
        params = {"action": "query", "format": "json", "formatversion": "2", **params}
        async with self._semaphore:
            try:
                response = await self._get_client().get(self.base_url, params=params)
                response.raise_for_status()
                data = response.json()
            except (httpx.HTTPError, ValueError) as e:
                self.logger.error(f"Wikipedia API request failed ({params}): {e}")
                raise WikiServiceUnavailableException(f"Wikipedia API request failed: {e}") from e

        if "error" in data:
            info = data["error"].get("info", data["error"])
            self.logger.error(f"Wikipedia API error: {info}")
            raise WikiServiceUnavailableException(f"Wikipedia API error: {info}")
        return data

    async def _links_from(self, article_id: ArticleId) -> Outcome[FrozenSet[ArticleId]]:
        """Fetch the ids of all namespace-0 pages linked from a page, following pagination."""
        linked_ids: Set[int] = set()
        continuation: Dict[str, str] = {}

        while True:
            data = await self._query({
                "pageids": str(article_id),
                "generator": "links",
                "gplnamespace": "0",
                "gpllimit": "max",
                **continuation,
            })
            query = data.get("query")
            if query is None and not linked_ids and not continuation:
                # The generator yields nothing for unknown pages, check whether the page exists
                return await self._missing_or_empty(article_id)

            for page in (query or {}).get("pages", []):
                if "pageid" in page and not page.get("missing"):
                    linked_ids.add(page["pageid"])

            if "continue" in data:
                continuation = {key: str(value) for key, value in data["continue"].items()}
            else:
                break

        self.logger.debug(f"Fetched {len(linked_ids)} links from page {article_id}")
        return Success(frozenset(linked_ids))

    async def _missing_or_empty(self, article_id: ArticleId) -> Outcome[FrozenSet[ArticleId]]:
        outcome = await self._name_of_article(article_id)
        if isinstance(outcome, Success):
            return Success(frozenset())
        return outcome

    async def _name_of_article(self, article_id: ArticleId) -> Outcome[Title]:
        data = await self._query({"pageids": str(article_id)})
        pages = data.get("query", {}).get("pages", [])
        if not pages or pages[0].get("missing") or pages[0].get("invalid"):
            self.logger.debug(f"Page id does not exist: {article_id}")
            return DomainFailure((ArticleNotFound(article_id=article_id),))
        return Success(pages[0]["title"])

    async def _search_id(self, title: Title) -> Outcome[ArticleId]:
        data = await self._query({
            "list": "search",
            "srsearch": title,
            "srnamespace": "0",
            "srlimit": "1",
        })
        hits = data.get("query", {}).get("search", [])
        if not hits:
            self.logger.debug(f"No search hit for '{title}'")
            return DomainFailure((TitleNotFound(title=title),))
        return Success(hits[0]["pageid"])
