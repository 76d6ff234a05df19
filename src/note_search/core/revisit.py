"""Revisit surface: notes created today and a fixed number of days ago."""

from collections.abc import Iterable
from datetime import UTC, date, datetime, timedelta

from note_search.config import (
    REVISIT_SECTION1_DAYS,
    REVISIT_SECTION2_DAYS,
    REVISIT_VISIBLE_COUNT,
)
from note_search.core.importer.json_reader import ensure_utc
from note_search.models.note import Note, RevisitSection


def notes_for_date(notes: Iterable[Note], day: date) -> list[Note]:
    """Notes whose creation date (UTC calendar day) is ``day``."""
    return [n for n in notes if n.created_at is not None and ensure_utc(n.created_at).date() == day]


def revisit_sections(
    notes: Iterable[Note],
    *,
    today: date | None = None,
    section1: int = REVISIT_SECTION1_DAYS,
    section2: int = REVISIT_SECTION2_DAYS,
    visible_count: int = REVISIT_VISIBLE_COUNT,
) -> tuple[RevisitSection, ...]:
    """Build the "today", "N days ago" and "M days ago" sections.

    Args:
        notes: Notes snapshot.
        today: Reference day (defaults to the current UTC date).
        section1: Days back for the first section.
        section2: Days back for the second section.
        visible_count: Notes shown before "show more".
    """
    if section1 < 0 or section2 < 0:
        msg = f"Revisit offsets must be non-negative, got {section1!r} and {section2!r}"
        raise ValueError(msg)

    snapshot = list(notes)
    today = today or datetime.now(UTC).date()
    targets = [
        ("today", "Today", today),
        ("section1", f"{section1} days ago", today - timedelta(days=section1)),
        ("section2", f"{section2} days ago", today - timedelta(days=section2)),
    ]
    return tuple(
        RevisitSection(
            key=key,
            label=label,
            day=day,
            notes=tuple(notes_for_date(snapshot, day)),
            visible_count=visible_count,
        )
        for key, label, day in targets
    )
