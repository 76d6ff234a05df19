"""Configuration constants for note-search."""

import os
from pathlib import Path

# Notes export file. First file found is used.
NOTES_FILES: list[Path] = [
    Path("~/.local/share/note-search/notes.json").expanduser(),
    Path("~/.config/note-search/notes.json").expanduser(),
    Path("~/notes.json").expanduser(),
]

# Supabase anon/service key location, when SUPABASE_KEY is not set.
SUPABASE_KEY_FILES: list[Path] = [
    Path("~/.config/note-search-supabase-key.txt").expanduser(),
    Path("~/.config/secret/note-search-supabase-key.txt").expanduser(),
]

SUPABASE_NOTES_TABLE: str = "notes"

# Relevance scorer weights.
TITLE_EXACT_WEIGHT = 50
TITLE_PREFIX_WEIGHT = 30
TITLE_CONTAINS_WEIGHT = 20
TITLE_TERM_WEIGHT = 5
CONTENT_CONTAINS_WEIGHT = 10
CONTENT_OCCURRENCE_WEIGHT = 2
CATEGORY_EXACT_WEIGHT = 30
CATEGORY_TERM_WEIGHT = 10
HASHTAG_EXACT_WEIGHT = 20
HASHTAG_TERM_WEIGHT = 8
RECENCY_WINDOW_DAYS = 7
RECENCY_MAX_BONUS = 5

# Strict pass (whole query containment).
STRICT_TITLE_WEIGHT = 3
STRICT_FIELD_WEIGHT = 2

# Fuzzy pass (Levenshtein on words).
FUZZY_MAX_DISTANCE = 2
FUZZY_TITLE_WEIGHT = 3
FUZZY_FIELD_WEIGHT = 2
FUZZY_DISTANCE_PENALTY = 0.5

# "Only recent notes" search filter.
RECENT_NOTES_DAYS = 30

# Revisit sections: notes created N days ago.
REVISIT_SECTION1_DAYS = 7
REVISIT_SECTION2_DAYS = 14
REVISIT_VISIBLE_COUNT = 3

HIGHLIGHT_CLASS = "highlighted-term"
EXCERPT_LENGTH = 100


def resolve_notes_file() -> Path | None:
    """Return the notes export file from the environment or the first existing candidate."""
    env_path = os.environ.get("NOTE_SEARCH_NOTES_FILE")
    if env_path:
        return Path(env_path).expanduser()
    for candidate in NOTES_FILES:
        if candidate.is_file():
            return candidate
    return None
