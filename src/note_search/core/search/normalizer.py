"""Text normalization shared by scoring, matching and highlighting."""

import re
import unicodedata
from typing import Any

_WHITESPACE_RE = re.compile(r"\s+")


def _strip_marks(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(c for c in decomposed if unicodedata.category(c) != "Mn")


def fold_with_positions(text: str) -> tuple[str, list[int]]:
    """Fold ``text`` like :func:`normalize` (without whitespace collapsing).

    Returns the folded text and, for each folded character, the index of the
    source character it came from.

    The whole string is lowercased at once so context-dependent mappings
    (Greek final sigma) agree with :func:`normalize`. Each source character
    lowercases to the same number of code points alone or in context, so the
    whole-string result is sliced back per character.
    """
    lowered = text.lower()
    folded: list[str] = []
    positions: list[int] = []
    offset = 0
    for i, ch in enumerate(text):
        width = len(ch.lower())
        for folded_ch in _strip_marks(lowered[offset : offset + width]):
            folded.append(folded_ch)
            positions.append(i)
        offset += width
    return "".join(folded), positions


def normalize(text: Any) -> str:
    """Case-fold, strip diacritics, collapse whitespace.

    ``None`` yields ``""``; other non-strings are stringified first.
    """
    if text is None:
        return ""
    if not isinstance(text, str):
        text = str(text)
    return _WHITESPACE_RE.sub(" ", _strip_marks(text.lower())).strip()


def split_terms(query: Any) -> list[str]:
    """Split a query into normalized, non-empty search terms (duplicates kept)."""
    return [term for term in normalize(query).split(" ") if term]
