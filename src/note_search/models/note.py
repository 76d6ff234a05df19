"""Domain models for notes and search."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from note_search.markup import escape_html


@dataclass(frozen=True)
class Note:
    """A single note, as owned by the persistence layer."""

    id: str
    title: str | None = None
    content: str = ""
    categories: tuple[str, ...] = ()
    hashtags: tuple[str, ...] = ()
    created_at: datetime | None = None
    updated_at: datetime | None = None
    video_urls: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Serialize back to the export format."""
        return {
            "id": self.id,
            "title": self.title or "",
            "content": self.content,
            "categories": list(self.categories),
            "hashtags": list(self.hashtags),
            "videoUrls": list(self.video_urls),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass(frozen=True)
class SearchResult:
    """A note paired with its relevance score and the terms that produced it."""

    note: Note
    score: float
    terms: tuple[str, ...] = ()

    @property
    def relevance_score(self) -> float:
        return self.score


def _optional_int(value: Any) -> int | None:
    """Coerce a loosely typed count (e.g. "5" from a query string); unusable values give None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class SearchOptions:
    """Field toggles and pre-filters for a search."""

    search_in_title: bool = True
    search_in_content: bool = True
    search_in_categories: bool = True
    search_in_hashtags: bool = True
    filter_by_category: str | None = None
    only_recent_notes: bool = False
    limit: int | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SearchOptions":
        """Build options from the camelCase option record used by the web app."""
        return cls(
            search_in_title=bool(data.get("searchInTitle", True)),
            search_in_content=bool(data.get("searchInContent", True)),
            search_in_categories=bool(data.get("searchInCategories", True)),
            search_in_hashtags=bool(data.get("searchInHashtags", True)),
            filter_by_category=data.get("filterByCategory"),
            only_recent_notes=bool(data.get("onlyRecentNotes", False)),
            limit=_optional_int(data.get("limit")),
        )


@dataclass(frozen=True)
class CategoryNode:
    """One segment of the hierarchical category tree."""

    name: str
    path: str
    children: tuple["CategoryNode", ...] = ()


@dataclass(frozen=True)
class RevisitSection:
    """Notes created on one target date, for the revisit surface."""

    key: str
    label: str
    day: date
    notes: tuple[Note, ...] = ()
    visible_count: int = 3

    @property
    def visible(self) -> tuple[Note, ...]:
        return self.notes[: self.visible_count]

    @property
    def has_more(self) -> bool:
        return len(self.notes) > self.visible_count


@dataclass(frozen=True)
class HighlightedTag:
    """A category or hashtag chip with highlighting that can be toggled off."""

    original: str
    markup: str
    matched_terms: tuple[str, ...] = field(default=())

    @property
    def changed(self) -> bool:
        return bool(self.matched_terms)

    def render(self, *, enabled: bool = True) -> str:
        """Return highlighted markup, or the escaped original text when disabled."""
        if enabled:
            return self.markup
        return escape_html(self.original)
