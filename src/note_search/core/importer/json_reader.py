"""Parse raw note records (web export or remote table rows) into domain models."""

import json
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from loguru import logger

from note_search.core.notes.content import extract_hashtags, extract_youtube_urls
from note_search.models.note import Note


def ensure_utc(moment: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    return moment if moment.tzinfo else moment.replace(tzinfo=UTC)


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO 8601 string, epoch milliseconds or datetime into an aware datetime.

    Returns None for anything that cannot be interpreted.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, int | float):
        try:
            return datetime.fromtimestamp(value / 1000, tz=UTC)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str) and value.strip():
        raw = value.strip()
        if raw.endswith(("Z", "z")):
            raw = raw[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(raw)
        except ValueError:
            return None
        return ensure_utc(parsed)
    return None


def _string_list(value: Any) -> tuple[str, ...]:
    """Coerce a list-ish field to a tuple of unique strings, keeping first occurrences.

    Remote rows may store lists as JSON-encoded strings.
    """
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            return (value,) if value.strip() else ()
    if not isinstance(value, list | tuple):
        return ()
    unique: dict[str, None] = {}
    for item in value:
        if isinstance(item, str) and item:
            unique.setdefault(item, None)
    return tuple(unique)


def _first(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None


def parse_note_data(data: Mapping[str, Any]) -> Note:
    """Parse a single note record.

    Accepts both the camelCase export format (``createdAt``, ``videoUrls``)
    and snake_case table rows (``created_at``). Missing or malformed fields
    fall back to empty values instead of raising. Records without a
    ``hashtags`` or ``videoUrls`` field get them extracted from the content.
    """
    raw_id = data.get("id")
    title = data.get("title")
    content = data.get("content")
    if not isinstance(content, str):
        content = ""
    raw_hashtags = data.get("hashtags")
    raw_videos = _first(data, "videoUrls", "video_urls")
    return Note(
        id="" if raw_id is None else str(raw_id),
        title=title if isinstance(title, str) else None,
        content=content,
        categories=_string_list(data.get("categories")),
        hashtags=_string_list(extract_hashtags(content) if raw_hashtags is None else raw_hashtags),
        created_at=parse_timestamp(_first(data, "createdAt", "created_at")),
        updated_at=parse_timestamp(_first(data, "updatedAt", "updated_at")),
        video_urls=_string_list(extract_youtube_urls(content) if raw_videos is None else raw_videos),
    )


def coerce_note(item: Any) -> Note | None:
    """Return ``item`` as a Note, parsing mappings; None for anything else."""
    if isinstance(item, Note):
        return item
    if isinstance(item, Mapping):
        return parse_note_data(item)
    logger.debug("Skipping non-note entry of type {}", type(item).__name__)
    return None
