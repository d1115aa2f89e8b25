"""
Integration tests for SqliteWikipediaClient against a small generated database.
"""

import sqlite3

import pytest

from wikigraph import Wikigraph
from wikigraph.clients import SqliteWikipediaClient
from wikigraph.models import ArticleNotFound, LinksNotFound, TitleNotFound
from wikigraph.result import DomainFailure, Success, SystemFailure

pytestmark = pytest.mark.integration

PAGES = [
    # id, sanitized title, is_redirect, namespace
    (1, "Philosophy", 0, 0),
    (2, "Logic", 0, 0),
    (3, "Farmers\\'_market", 0, 0),
    (4, "Ethics", 0, 0),
    (5, "Moral_philosophy", 1, 0),
    (6, "Orphan", 0, 0),
    (7, "Talk_page", 0, 1),
]
LINKS = [
    (1, "2|4"),
    (2, "3"),
    (3, ""),
    (4, "1"),
]
REDIRECTS = [(5, 4)]


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "wiki_graph.sqlite"
    with sqlite3.connect(path) as db:
        db.execute("CREATE TABLE pages (id INTEGER PRIMARY KEY, title TEXT, is_redirect INTEGER, namespace INTEGER)")
        db.execute("CREATE TABLE links (id INTEGER PRIMARY KEY, outgoing_links TEXT)")
        db.execute("CREATE TABLE redirects (source_id INTEGER PRIMARY KEY, target_id INTEGER)")
        db.executemany("INSERT INTO pages VALUES (?, ?, ?, ?)", PAGES)
        db.executemany("INSERT INTO links VALUES (?, ?)", LINKS)
        db.executemany("INSERT INTO redirects VALUES (?, ?)", REDIRECTS)
    return path


@pytest.fixture
def client(db_path) -> SqliteWikipediaClient:
    return SqliteWikipediaClient(db_path)


class TestSqliteWikipediaClient:

    @pytest.mark.asyncio
    async def test_links_from(self, client: SqliteWikipediaClient):
        assert await client.links_from(1) == Success(frozenset({2, 4}))
        assert await client.links_from(3) == Success(frozenset())

    @pytest.mark.asyncio
    async def test_links_from_missing_data(self, client: SqliteWikipediaClient):
        assert await client.links_from(6) == DomainFailure((LinksNotFound(article_id=6),))
        assert await client.links_from(999) == DomainFailure((ArticleNotFound(article_id=999),))
        assert await client.links_from(0) == DomainFailure((ArticleNotFound(article_id=0),))

    @pytest.mark.asyncio
    async def test_name_of_article_is_readable(self, client: SqliteWikipediaClient):
        assert await client.name_of_article(3) == Success("Farmers' market")
        assert await client.name_of_article(999) == DomainFailure((ArticleNotFound(article_id=999),))

    @pytest.mark.asyncio
    async def test_search_id(self, client: SqliteWikipediaClient):
        assert await client.search_id("Logic") == Success(2)
        assert await client.search_id("LOGIC") == Success(2)
        assert await client.search_id("Farmers' market") == Success(3)

    @pytest.mark.asyncio
    async def test_search_id_follows_redirects(self, client: SqliteWikipediaClient):
        assert await client.search_id("Moral philosophy") == Success(4)

    @pytest.mark.asyncio
    async def test_search_id_only_in_namespace(self, client: SqliteWikipediaClient):
        assert await client.search_id("Talk page") == DomainFailure((TitleNotFound(title="Talk page"),))

    @pytest.mark.asyncio
    async def test_search_id_not_found(self, client: SqliteWikipediaClient):
        assert await client.search_id("Physics") == DomainFailure((TitleNotFound(title="Physics"),))
        assert await client.search_id("  ") == DomainFailure((TitleNotFound(title="  "),))

    @pytest.mark.asyncio
    async def test_missing_database_is_system_failure(self, tmp_path):
        client = SqliteWikipediaClient(tmp_path / "missing.sqlite")
        outcome = await client.links_from(1)
        assert isinstance(outcome, SystemFailure)
        assert isinstance(outcome.exception, FileNotFoundError)

    @pytest.mark.asyncio
    async def test_broken_schema_is_system_failure(self, tmp_path):
        path = tmp_path / "broken.sqlite"
        with sqlite3.connect(path) as db:
            db.execute("CREATE TABLE unrelated (id INTEGER)")
        outcome = await SqliteWikipediaClient(path).name_of_article(1)
        assert isinstance(outcome, SystemFailure)
        assert isinstance(outcome.exception, sqlite3.OperationalError)

    @pytest.mark.asyncio
    async def test_distance_over_database(self, client: SqliteWikipediaClient):
        graph = Wikigraph(client)
        outcome = await graph.distance_matrix(["Philosophy", "Farmers' market", "Moral philosophy"], max_depth=5)
        distances = {(e.from_title, e.to_title): e.distance for e in outcome.unwrap()}

        assert distances[("Philosophy", "Farmers' market")] == 2
        assert distances[("Moral philosophy", "Farmers' market")] == 3
        assert distances[("Farmers' market", "Philosophy")] is None
        assert len(distances) == 6
