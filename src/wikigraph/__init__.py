"""
Wikigraph - Core Library

Asynchronous analysis of the Wikipedia article link graph: lazily discovered
adjacency, breadth first search and all-pairs distance matrices, built on
WikiResult, a composable result type for lookups that fail in two ways.
"""

from .analyzer import Wikigraph
from .models import ArticleNotFound, DistanceEntry, LinksNotFound, TitleNotFound, WikiError
from .result import DomainFailure, Outcome, Success, SystemFailure, WikiResult

__all__ = [
    'Wikigraph',
    'WikiResult',
    'Outcome',
    'Success',
    'DomainFailure',
    'SystemFailure',
    'WikiError',
    'ArticleNotFound',
    'LinksNotFound',
    'TitleNotFound',
    'DistanceEntry',
]
