"""
Pytest configuration and shared fixtures.
"""

import logging

import pytest

from wikigraph import Wikigraph
from wikigraph.clients import InMemoryWikipediaClient

# Configure logging for tests
logging.basicConfig(level=logging.INFO)

CHAIN_TITLES = {1: "Alpha", 2: "Bravo", 3: "Charlie", 4: "Delta"}


@pytest.fixture
def chain_client() -> InMemoryWikipediaClient:
    """A -> B -> C -> D, with D linking nowhere."""
    return InMemoryWikipediaClient(
        links={1: [2], 2: [3], 3: [4], 4: []},
        titles=CHAIN_TITLES,
    )


@pytest.fixture
def chain_graph(chain_client: InMemoryWikipediaClient) -> Wikigraph:
    return Wikigraph(chain_client)


@pytest.fixture
def diamond_client() -> InMemoryWikipediaClient:
    """
    Two routes from Start to Goal: a short one through Left (which cannot be
    expanded in some tests) and a longer one through Right and Middle.

        Start -> Left -> Goal
        Start -> Right -> Middle -> Goal
        Goal -> Start
    """
    return InMemoryWikipediaClient(
        links={10: [11, 12], 11: [14], 12: [13], 13: [14], 14: [10]},
        titles={10: "Start", 11: "Left", 12: "Right", 13: "Middle", 14: "Goal"},
    )


@pytest.fixture
def diamond_graph(diamond_client: InMemoryWikipediaClient) -> Wikigraph:
    return Wikigraph(diamond_client)
