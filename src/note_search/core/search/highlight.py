"""Highlight search terms in note text and tag labels as HTML markup."""

from collections.abc import Iterable, Sequence

from note_search.config import EXCERPT_LENGTH, HIGHLIGHT_CLASS
from note_search.core.notes.content import strip_directives
from note_search.core.search.normalizer import fold_with_positions, normalize
from note_search.markup import escape_html
from note_search.models.note import HighlightedTag


def _highlightable_terms(terms: Iterable[str]) -> list[str]:
    """Normalize terms, skipping empties and single letters (too noisy to mark)."""
    usable: list[str] = []
    for term in terms:
        cleaned = normalize(term)
        if not cleaned or (len(cleaned) == 1 and cleaned.isalpha()):
            continue
        if cleaned not in usable:
            usable.append(cleaned)
    return usable


def _match_spans(text: str, terms: Sequence[str]) -> tuple[list[tuple[int, int]], list[str]]:
    """Locate every occurrence of every term in the original text.

    Matching is case- and accent-insensitive. Overlapping spans are merged.

    Returns:
        Tuple of (merged (start, end) spans in ``text``, terms that matched).
    """
    folded, positions = fold_with_positions(text)
    spans: list[tuple[int, int]] = []
    matched: list[str] = []
    for term in terms:
        start = folded.find(term)
        if start != -1:
            matched.append(term)
        while start != -1:
            end = start + len(term)
            spans.append((positions[start], positions[end - 1] + 1))
            start = folded.find(term, end)

    merged: list[tuple[int, int]] = []
    for start, end in sorted(spans):
        if merged and start < merged[-1][1]:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
        else:
            merged.append((start, end))
    return merged, matched


def _render(text: str, spans: list[tuple[int, int]]) -> str:
    out: list[str] = []
    cursor = 0
    for start, end in spans:
        out.append(escape_html(text[cursor:start]))
        out.append(f'<span class="{HIGHLIGHT_CLASS}">{escape_html(text[start:end])}</span>')
        cursor = end
    out.append(escape_html(text[cursor:]))
    return "".join(out)


def highlight(text: str | None, terms: Iterable[str] | None) -> str:
    """Escape ``text`` and wrap every occurrence of ``terms`` in a highlight span.

    Spans are computed against the original text and rendered in one pass, so
    markup inserted for one term can never be matched by another.
    """
    if not text:
        return ""
    usable = _highlightable_terms(terms or ())
    if not usable:
        return escape_html(text)
    spans, _matched = _match_spans(text, usable)
    return _render(text, spans)


def highlight_tags(labels: Iterable[str], terms: Iterable[str] | None) -> tuple[HighlightedTag, ...]:
    """Highlight category/hashtag chips, keeping each original label for restoring."""
    usable = _highlightable_terms(terms or ())
    tags: list[HighlightedTag] = []
    for label in labels:
        if not isinstance(label, str):
            continue
        spans, matched = _match_spans(label, usable)
        tags.append(
            HighlightedTag(original=label, markup=_render(label, spans), matched_terms=tuple(matched))
        )
    return tuple(tags)


def excerpt(content: str | None, limit: int = EXCERPT_LENGTH) -> str:
    """Display text for a result card: directives removed, truncated with '...'."""
    text = strip_directives(content or "").strip()
    if len(text) > limit:
        return text[:limit] + "..."
    return text
