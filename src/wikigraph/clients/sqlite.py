"""
SqliteWikipediaClient - read-only access to a Wikipedia link-graph database.

The database holds three tables:
- pages(id, title, is_redirect, namespace): titles are stored sanitized
  (see wikigraph.utils.wiki_helpers)
- links(id, outgoing_links): pipe-separated ids of the linked pages
- redirects(source_id, target_id)
"""

import logging
from pathlib import Path
from typing import FrozenSet, Optional, Union

import aiosqlite

from wikigraph.clients.base import WikipediaClient
from wikigraph.models import ArticleId, ArticleNotFound, LinksNotFound, Title, TitleNotFound
from wikigraph.result import DomainFailure, Outcome, Success, WikiResult
from wikigraph.utils.wiki_helpers import (
    get_readable_page_title,
    get_sanitized_page_title,
    validate_page_id,
    validate_page_title,
)

logger = logging.getLogger(__name__)


class SqliteWikipediaClient(WikipediaClient):
    """
    Wikipedia data source reading a local link-graph SQLite database.

    Lookups of ids or titles that are absent (or invalid) end in a
    DomainFailure; any database error ends in a SystemFailure.
    """

    def __init__(self, db_path: Union[str, Path] = "database/wiki_graph.sqlite", namespace: int = 0):
        self.db_path = Path(db_path)
        self.namespace = namespace
        if not self.db_path.exists():
            logger.error(f"Database file not found at {self.db_path.resolve()}")

    def links_from(self, article_id: ArticleId) -> WikiResult[FrozenSet[ArticleId]]:
        return WikiResult(lambda: self._links_from(article_id))

    def name_of_article(self, article_id: ArticleId) -> WikiResult[Title]:
        return WikiResult(lambda: self._name_of_article(article_id))

    def search_id(self, title: Title) -> WikiResult[ArticleId]:
        return WikiResult(lambda: self._search_id(title))

    def _connect(self) -> aiosqlite.Connection:
        if not self.db_path.exists():
            raise FileNotFoundError(f"Database file not found: {self.db_path}")
        return aiosqlite.connect(self.db_path)

    async def _links_from(self, article_id: ArticleId) -> Outcome[FrozenSet[ArticleId]]:
        try:
            validate_page_id(article_id)
        except ValueError as e:
            logger.warning(str(e))
            return DomainFailure((ArticleNotFound(article_id=article_id),))

        async with self._connect() as db:
            async with db.execute("SELECT 1 FROM pages WHERE id = ?", (article_id,)) as cursor:
                if await cursor.fetchone() is None:
                    return DomainFailure((ArticleNotFound(article_id=article_id),))

            async with db.execute("SELECT outgoing_links FROM links WHERE id = ?", (article_id,)) as cursor:
                row = await cursor.fetchone()

        if row is None:
            logger.debug(f"No links row for page {article_id}")
            return DomainFailure((LinksNotFound(article_id=article_id),))
        outgoing = row[0] or ""
        return Success(frozenset(int(target_id) for target_id in outgoing.split("|") if target_id))

    async def _name_of_article(self, article_id: ArticleId) -> Outcome[Title]:
        try:
            validate_page_id(article_id)
        except ValueError as e:
            logger.warning(str(e))
            return DomainFailure((ArticleNotFound(article_id=article_id),))

        async with self._connect() as db:
            async with db.execute("SELECT title FROM pages WHERE id = ?", (article_id,)) as cursor:
                row = await cursor.fetchone()

        if row is None:
            return DomainFailure((ArticleNotFound(article_id=article_id),))
        return Success(get_readable_page_title(row[0]))

    async def _search_id(self, title: Title) -> Outcome[ArticleId]:
        try:
            validate_page_title(title)
        except ValueError as e:
            logger.warning(str(e))
            return DomainFailure((TitleNotFound(title=title),))

        page_id = await self._resolve_title(title)
        if page_id is None:
            return DomainFailure((TitleNotFound(title=title),))
        return Success(page_id)

    async def _resolve_title(self, title: Title) -> Optional[int]:
        """Resolve a title to a page id, case-insensitively, following redirects."""
        sanitized_title = get_sanitized_page_title(title)
        query = """
            SELECT id, title, is_redirect
            FROM pages
            WHERE title = ? COLLATE NOCASE AND namespace = ?
        """

        async with self._connect() as db:
            async with db.execute(query, (sanitized_title, self.namespace)) as cursor:
                results = await cursor.fetchall()

            if not results:
                logger.info(f"No page found for title: '{title}' (sanitized: '{sanitized_title}')")
                return None

            # Exact match first, then any case-insensitive match that is not a redirect
            for page_id, db_title, is_redirect in results:
                if db_title == sanitized_title and not is_redirect:
                    return page_id
            for page_id, db_title, is_redirect in results:
                if not is_redirect:
                    return page_id

            first_result_id = results[0][0]
            async with db.execute(
                "SELECT target_id FROM redirects WHERE source_id = ?", (first_result_id,)
            ) as cursor:
                redirect_row = await cursor.fetchone()

        if redirect_row is None:
            logger.warning(f"Page '{title}' is a redirect but no target found for ID {first_result_id}.")
            return None
        return redirect_row[0]
