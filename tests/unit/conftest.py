"""Shared test fixtures."""

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pytest

from note_search.core.importer.json_reader import parse_note_data
from note_search.models.note import Note

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=UTC)

SAMPLE_NOTES: list[dict[str, Any]] = [
    {
        "id": "1",
        "title": "Recette de pâtes",
        "content": "de l'ail et du beurre",
        "categories": ["cuisine/italienne"],
        "hashtags": ["recette"],
        "createdAt": "2026-10-18T09:00:00Z",
    },
    {
        "id": "2",
        "title": "Shopping",
        "content": "buy milk",
        "categories": ["home/groceries"],
        "hashtags": ["urgent"],
        "createdAt": "2026-10-11T10:00:00Z",
        "updatedAt": "2026-10-11T10:00:00Z",
    },
    {
        "id": "3",
        "title": "Python tips",
        "content": "Use python type hints. Python is great. [[https://i.imgur.com/abc.jpg]]",
        "categories": ["work/dev", "work"],
        "hashtags": ["python", "dev"],
        "createdAt": "2026-08-01T08:00:00Z",
        "updatedAt": "2026-10-17T12:00:00Z",
    },
    {
        "id": "4",
        "title": "Conference notes",
        "content": "",
        "categories": [],
        "hashtags": [],
        "createdAt": "2026-10-04T15:00:00Z",
    },
]


@pytest.fixture
def notes() -> list[Note]:
    """Return the sample notes as domain models."""
    return [parse_note_data(data) for data in SAMPLE_NOTES]


@pytest.fixture
def notes_file(tmp_path: Path) -> Path:
    """Write the sample notes as a JSON export and return its path."""
    path = tmp_path / "notes.json"
    path.write_text(json.dumps(SAMPLE_NOTES, ensure_ascii=False), encoding="utf-8")
    return path
