"""Search and relevance ranking for personal notes."""

from note_search.core.search.distance import levenshtein_distance
from note_search.core.search.highlight import highlight, highlight_tags
from note_search.core.search.normalizer import normalize
from note_search.core.search.scorer import score_note
from note_search.core.search.searcher import perform_search, search, search_notes
from note_search.models.note import Note, SearchOptions, SearchResult

__all__ = [
    "Note",
    "SearchOptions",
    "SearchResult",
    "highlight",
    "highlight_tags",
    "levenshtein_distance",
    "normalize",
    "perform_search",
    "score_note",
    "search",
    "search_notes",
]
