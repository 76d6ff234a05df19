"""In-memory note search: filtered relevance ranking and strict-then-fuzzy lookup."""

from collections.abc import Iterable
from datetime import UTC, datetime, timedelta
from typing import Any

from loguru import logger

from note_search.config import (
    FUZZY_DISTANCE_PENALTY,
    FUZZY_FIELD_WEIGHT,
    FUZZY_MAX_DISTANCE,
    FUZZY_TITLE_WEIGHT,
    RECENT_NOTES_DAYS,
    STRICT_FIELD_WEIGHT,
    STRICT_TITLE_WEIGHT,
)
from note_search.core.importer.json_reader import coerce_note, ensure_utc
from note_search.core.search.distance import levenshtein_distance
from note_search.core.search.normalizer import normalize, split_terms
from note_search.core.search.scorer import score_note
from note_search.models.note import Note, SearchOptions, SearchResult


def _snapshot(notes: Iterable[Any]) -> list[Note]:
    """Materialize the caller's collection as Notes, skipping unusable entries.

    A non-iterable collection raises TypeError.
    """
    snapshot: list[Note] = []
    for item in notes:
        note = coerce_note(item)
        if note is not None:
            snapshot.append(note)
    return snapshot


def _rank(results: list[SearchResult]) -> list[SearchResult]:
    # sorted() is stable: equal scores keep snapshot order
    return sorted(results, key=lambda r: r.score, reverse=True)


def _is_recent(note: Note, now: datetime) -> bool:
    if note.created_at is None:
        return False
    return ensure_utc(note.created_at) >= ensure_utc(now) - timedelta(days=RECENT_NOTES_DAYS)


def _matches_enabled_field(note: Note, terms: list[str], options: SearchOptions) -> bool:
    """True if any enabled field contains at least one search term."""
    haystacks: list[str] = []
    if options.search_in_title and note.title:
        haystacks.append(normalize(note.title))
    if options.search_in_content and note.content:
        haystacks.append(normalize(note.content))
    if options.search_in_categories:
        haystacks.extend(normalize(c) for c in note.categories)
    if options.search_in_hashtags:
        haystacks.extend(normalize(h) for h in note.hashtags)
    return any(term in haystack for haystack in haystacks for term in terms)


def search(
    notes: Iterable[Any],
    query: str | None,
    options: SearchOptions | None = None,
    *,
    now: datetime | None = None,
) -> list[SearchResult]:
    """Rank notes by relevance to ``query``.

    Filtering and scoring are separate phases. Category and recency
    pre-filters run first, then a note must contain at least one search term
    in a field enabled by ``options``. Survivors are scored over *all* fields
    with the full query, so a disabled field still adds to the score of a
    note that qualified through another field.

    Args:
        notes: Snapshot of notes (Note objects or raw mappings). Not modified.
        query: Raw user query.
        options: Field toggles, pre-filters and result limit.
        now: Reference time for recency filtering and bonus.

    Returns:
        Results with score > 0, highest score first, at most ``options.limit``.
    """
    options = options or SearchOptions()
    now = now or datetime.now(UTC)
    snapshot = _snapshot(notes)
    terms = split_terms(query)
    if not terms or not snapshot:
        return []

    candidates = snapshot
    if options.filter_by_category is not None:
        candidates = [n for n in candidates if options.filter_by_category in n.categories]
    if options.only_recent_notes:
        candidates = [n for n in candidates if _is_recent(n, now)]
    candidates = [n for n in candidates if _matches_enabled_field(n, terms, options)]

    results: list[SearchResult] = []
    for note in candidates:
        score = score_note(note, query, now=now)
        if score > 0:
            results.append(SearchResult(note=note, score=score, terms=tuple(terms)))

    ranked = _rank(results)
    if options.limit is not None:
        ranked = ranked[: max(0, options.limit)]

    logger.debug(
        "search {!r}: {} notes, {} candidates, {} results",
        query, len(snapshot), len(candidates), len(ranked),
    )
    return ranked


def search_notes(
    notes: Iterable[Any],
    query: str | None,
    options: SearchOptions | None = None,
    *,
    now: datetime | None = None,
) -> list[Note]:
    """Like :func:`search`, returning only the notes."""
    return [r.note for r in search(notes, query, options, now=now)]


def strict_search(cleaned_query: str, notes: list[Note]) -> list[SearchResult]:
    """Whole-query containment across title, content, hashtags and categories."""
    terms = tuple(t for t in cleaned_query.split(" ") if t)
    results: list[SearchResult] = []
    for note in notes:
        score = 0.0
        if cleaned_query in normalize(note.title):
            score += STRICT_TITLE_WEIGHT
        if cleaned_query in normalize(note.content):
            score += STRICT_FIELD_WEIGHT
        for tag in (*note.hashtags, *note.categories):
            cleaned_tag = normalize(tag)
            if cleaned_tag and (cleaned_query in cleaned_tag or cleaned_tag in cleaned_query):
                score += STRICT_FIELD_WEIGHT
        if score > 0:
            results.append(SearchResult(note=note, score=score, terms=terms))
    return results


def _fuzzy_points(word: str, candidates: Iterable[str], weight: float) -> float:
    points = 0.0
    for candidate in candidates:
        distance = levenshtein_distance(word, candidate)
        if distance <= FUZZY_MAX_DISTANCE:
            points += weight - distance * FUZZY_DISTANCE_PENALTY
    return points


def fuzzy_search(cleaned_query: str, notes: list[Note]) -> list[SearchResult]:
    """Word-level Levenshtein matching; closer words score higher.

    Query words of one character are ignored. Title words weigh 3, content
    words 2; hashtags and categories are compared as whole values, weight 2.
    """
    words = [w for w in cleaned_query.split(" ") if len(w) > 1]
    results: list[SearchResult] = []
    for note in notes:
        title_words = normalize(note.title).split()
        content_words = normalize(note.content).split()
        tags = [normalize(t) for t in (*note.hashtags, *note.categories)]
        score = 0.0
        for word in words:
            score += _fuzzy_points(word, title_words, FUZZY_TITLE_WEIGHT)
            score += _fuzzy_points(word, content_words, FUZZY_FIELD_WEIGHT)
            score += _fuzzy_points(word, tags, FUZZY_FIELD_WEIGHT)
        if score > 0:
            results.append(SearchResult(note=note, score=score, terms=tuple(words)))
    return results


def perform_search(notes: Iterable[Any], query: str | None) -> list[SearchResult]:
    """Strict search, falling back to fuzzy search only when strict finds nothing.

    The two result sets are never merged.
    """
    snapshot = _snapshot(notes)
    cleaned_query = normalize(query)
    if not cleaned_query or not snapshot:
        return []

    results = strict_search(cleaned_query, snapshot)
    mode = "strict"
    if not results:
        results = fuzzy_search(cleaned_query, snapshot)
        mode = "fuzzy"

    ranked = _rank(results)
    logger.debug("perform_search {!r}: {} {} results", query, len(ranked), mode)
    return ranked
