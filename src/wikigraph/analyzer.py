"""
Wikigraph - analysis of the Wikipedia article link graph.

The graph is never loaded as a whole: adjacency is discovered lazily, one
`links_from` lookup per expanded article, through a WikipediaClient.
"""

import logging
from collections import deque
from typing import Deque, FrozenSet, List, Optional, Sequence, Set, Tuple

from wikigraph.clients.base import WikipediaClient
from wikigraph.config import DEFAULT_MAX_DEPTH
from wikigraph.models import ArticleId, DistanceEntry, Title
from wikigraph.result import Outcome, Success, WikiResult

logger = logging.getLogger(__name__)


class Wikigraph:
    """Analyze the graph of Wikipedia articles exposed by a client."""

    def __init__(self, client: WikipediaClient):
        self.client = client

    def named_links(self, of: ArticleId) -> WikiResult[Set[Title]]:
        """
        Titles of the articles linked from `of`.

        Fails with the first failing lookup's error: an unknown article, a link
        whose title cannot be resolved, or any system failure.
        """
        return (
            self.client.links_from(of)
            .flat_map(lambda article_ids: WikiResult.traverse(_ordered(article_ids), self.client.name_of_article))
            .map(set)
        )

    def breadth_first_search(self, start: ArticleId, target: ArticleId, max_depth: int) -> WikiResult[Optional[int]]:
        """
        Compute the distance from `start` to `target` using breadth first search.

        Args:
            start: compute the distance from this article to `target`
            target: compute the distance from `start` to this article
            max_depth: the largest distance the search will report

        Returns:
            The number of links to follow from `start` to reach `target`, or
            None when `target` cannot be reached within `max_depth` links.

        An article whose links cannot be fetched because of a domain error is
        skipped and the search goes on. A system failure ends the search with
        that failure.
        """
        if max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {max_depth}")
        if start == target:
            return WikiResult.successful(0)

        async def search() -> Outcome[Optional[int]]:
            # State owned by this search only, never shared with another run.
            # `visited` holds every article ever enqueued.
            visited: Set[ArticleId] = {start}
            frontier: Deque[Tuple[int, ArticleId]] = deque([(0, start)])
            expanded = 0
            depth = 0

            while frontier:
                distance, article = frontier.popleft()
                if distance > max_depth:
                    logger.debug(f"Depth {max_depth} exceeded after expanding {expanded} articles")
                    return Success(None)
                if distance > depth:
                    depth = distance
                    logger.debug(f"Searching depth {depth}: {len(frontier) + 1} articles queued, {len(visited)} seen")
                if article == target:
                    logger.debug(f"Found {target!r} at distance {distance} after expanding {expanded} articles")
                    return Success(distance)

                expanded += 1
                outcome = await (
                    self.client.links_from(article)
                    .map(lambda neighbors: _unvisited(neighbors, visited))
                    .fallback_to(lambda: _skip(article))
                )
                if not isinstance(outcome, Success):
                    return outcome
                # Marked when enqueued, so every article is expanded at most once
                visited.update(outcome.value)
                frontier.extend((distance + 1, neighbor) for neighbor in outcome.value)

            logger.debug(f"{target!r} is unreachable from {start!r}, expanded {expanded} articles")
            return Success(None)

        return WikiResult(search)

    def distance_matrix(self, titles: Sequence[Title], max_depth: int = DEFAULT_MAX_DEPTH) -> WikiResult[List[DistanceEntry]]:
        """
        Compute the distances between every ordered pair of distinct articles.

        Args:
            titles: names of the articles, resolved with `search_id`
            max_depth: the largest distance any search will report

        Returns:
            One DistanceEntry per ordered pair, in the order the pairs are
            generated. A failure of any title lookup or search fails the whole
            matrix.
        """
        if max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {max_depth}")

        def resolve(title: Title) -> WikiResult[Tuple[Title, ArticleId]]:
            return self.client.search_id(title).map(lambda article_id: (title, article_id))

        def distance_between(pair) -> WikiResult[DistanceEntry]:
            (from_title, from_id), (to_title, to_id) = pair
            return self.breadth_first_search(from_id, to_id, max_depth).map(
                lambda distance: DistanceEntry(from_title, to_title, distance)
            )

        def log_matrix(entries: List[DistanceEntry]) -> List[DistanceEntry]:
            logger.info(f"Computed {len(entries)} distances between {len(titles)} articles")
            return entries

        return (
            WikiResult.traverse(titles, resolve)
            .map(_distinct_pairs)
            .flat_map(lambda pairs: WikiResult.traverse(pairs, distance_between))
            .map(log_matrix)
        )


def _unvisited(neighbors: FrozenSet[ArticleId], visited: Set[ArticleId]) -> List[ArticleId]:
    return [neighbor for neighbor in _ordered(neighbors) if neighbor not in visited]


def _skip(article: ArticleId) -> WikiResult[List[ArticleId]]:
    logger.info(f"Skipping article {article!r}: its links are unavailable")
    return WikiResult.successful([])


def _distinct_pairs(entries: List[Tuple[Title, ArticleId]]):
    """All ordered pairs of different (title, id) entries. Repeated entries are kept, but never paired with themselves."""
    return [
        (first, second)
        for first in entries
        for second in entries
        if first != second
    ]


def _ordered(article_ids) -> list:
    """Deterministic iteration order over a set of ids."""
    try:
        return sorted(article_ids)
    except TypeError:
        return sorted(article_ids, key=repr)
