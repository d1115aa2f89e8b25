"""
Data models shared across the wikigraph package.
"""

from typing import Hashable, NamedTuple, Optional
from pydantic import BaseModel, ConfigDict, Field

ArticleId = Hashable
Title = str


# --- Domain errors ---

class WikiError(BaseModel):
    """An expected, data-level failure reported by a Wikipedia data source."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @property
    def message(self) -> str:
        return "Unknown Wikipedia error"


class ArticleNotFound(WikiError):
    """No article exists for the requested id."""
    article_id: ArticleId = Field(..., description="The id that could not be resolved")

    @property
    def message(self) -> str:
        return f"Article not found: {self.article_id!r}"


class LinksNotFound(WikiError):
    """The article exists but the source holds no outgoing links for it."""
    article_id: ArticleId = Field(..., description="The id whose links are unavailable")

    @property
    def message(self) -> str:
        return f"No outgoing links available for article {self.article_id!r}"


class TitleNotFound(WikiError):
    """A title search produced no hit."""
    title: Title = Field(..., description="The title that was searched for")

    @property
    def message(self) -> str:
        return f"No article matches title: {self.title!r}"


# --- Analyzer output ---

class DistanceEntry(NamedTuple):
    """One cell of a distance matrix. `distance` is None when no path was found within the depth bound."""
    from_title: Title
    to_title: Title
    distance: Optional[int]
