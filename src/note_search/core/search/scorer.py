"""Relevance scoring of a note against a free-text query."""

import math
from collections.abc import Iterable
from datetime import UTC, datetime

from note_search.config import (
    CATEGORY_EXACT_WEIGHT,
    CATEGORY_TERM_WEIGHT,
    CONTENT_CONTAINS_WEIGHT,
    CONTENT_OCCURRENCE_WEIGHT,
    HASHTAG_EXACT_WEIGHT,
    HASHTAG_TERM_WEIGHT,
    RECENCY_MAX_BONUS,
    RECENCY_WINDOW_DAYS,
    TITLE_CONTAINS_WEIGHT,
    TITLE_EXACT_WEIGHT,
    TITLE_PREFIX_WEIGHT,
    TITLE_TERM_WEIGHT,
)
from note_search.core.importer.json_reader import ensure_utc
from note_search.core.search.normalizer import normalize
from note_search.models.note import Note


def _unique_normalized(values: Iterable[str]) -> list[str]:
    """Normalize tag-like values, dropping empties and duplicates (first wins)."""
    seen: dict[str, None] = {}
    for value in values:
        if not isinstance(value, str):
            continue
        cleaned = normalize(value)
        if cleaned:
            seen.setdefault(cleaned, None)
    return list(seen)


def _title_score(title: str, cleaned_query: str, terms: list[str]) -> float:
    score = 0.0
    if title == cleaned_query:
        score += TITLE_EXACT_WEIGHT
    elif title.startswith(cleaned_query):
        score += TITLE_PREFIX_WEIGHT
    elif cleaned_query in title:
        score += TITLE_CONTAINS_WEIGHT
    score += TITLE_TERM_WEIGHT * sum(1 for term in terms if term in title)
    return score


def _content_score(content: str, cleaned_query: str, terms: list[str]) -> float:
    score = 0.0
    if cleaned_query in content:
        score += CONTENT_CONTAINS_WEIGHT
    # str.count is non-overlapping, same as len(content.split(term)) - 1
    score += CONTENT_OCCURRENCE_WEIGHT * sum(content.count(term) for term in terms)
    return score


def _tags_score(
    tags: list[str], cleaned_query: str, terms: list[str], *, exact: int, per_term: int
) -> float:
    score = 0.0
    for tag in tags:
        if tag == cleaned_query:
            score += exact
        score += per_term * sum(1 for term in terms if term in tag)
    return score


def days_since(moment: datetime, now: datetime) -> int:
    """Whole days elapsed from ``moment`` to ``now``; future moments count as 0."""
    elapsed = (ensure_utc(now) - ensure_utc(moment)).total_seconds() / 86400
    return max(0, math.floor(elapsed))


def recency_bonus(updated_at: datetime | None, now: datetime) -> float:
    """Bonus for notes updated within the last week: 5, 5, 4, 4, 3, 3, 2."""
    if updated_at is None:
        return 0.0
    days = days_since(updated_at, now)
    if days >= RECENCY_WINDOW_DAYS:
        return 0.0
    return float(max(0, RECENCY_MAX_BONUS - days // 2))


def score_note(note: Note, query: str | None, *, now: datetime | None = None) -> float:
    """Compute the relevance score of ``note`` for ``query``.

    Title, content, categories and hashtags contribute weighted points; notes
    updated in the last week get a small recency bonus. A query with no
    usable terms scores 0. Missing fields contribute nothing.

    Args:
        note: The note to score. Never modified.
        query: Raw user query.
        now: Reference time for the recency bonus (defaults to current UTC time).

    Returns:
        Non-negative score, uncapped.
    """
    cleaned_query = normalize(query)
    terms = [term for term in cleaned_query.split(" ") if term]
    if not terms:
        return 0.0

    score = 0.0

    if note.title:
        score += _title_score(normalize(note.title), cleaned_query, terms)

    if note.content:
        score += _content_score(normalize(note.content), cleaned_query, terms)

    score += _tags_score(
        _unique_normalized(note.categories),
        cleaned_query,
        terms,
        exact=CATEGORY_EXACT_WEIGHT,
        per_term=CATEGORY_TERM_WEIGHT,
    )
    score += _tags_score(
        _unique_normalized(note.hashtags),
        cleaned_query,
        terms,
        exact=HASHTAG_EXACT_WEIGHT,
        per_term=HASHTAG_TERM_WEIGHT,
    )

    score += recency_bonus(note.updated_at, now or datetime.now(UTC))
    return score
