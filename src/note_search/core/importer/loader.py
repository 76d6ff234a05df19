"""Load notes snapshots from JSON export files."""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from loguru import logger

from note_search.core.importer.json_reader import parse_note_data
from note_search.models.note import Note


@dataclass(frozen=True)
class MergeStats:
    """Summary of merging an imported export into existing notes."""

    new_count: int
    updated_count: int


def parse_notes(data: Any, *, source: str = "<data>") -> list[Note]:
    """Parse an export payload (a JSON array of note objects).

    Raises:
        ValueError: If the payload is not a list.
    """
    if not isinstance(data, list):
        msg = f"Invalid notes export {source}: expected a list, got {type(data).__name__}"
        raise ValueError(msg)

    notes: list[Note] = []
    skipped = 0
    for entry in data:
        if not isinstance(entry, dict):
            skipped += 1
            continue
        notes.append(parse_note_data(entry))

    if skipped:
        logger.warning("Skipped {} malformed entries in {}", skipped, source)
    logger.debug("Loaded {} notes from {}", len(notes), source)
    return notes


def load_notes_file(path: Path) -> list[Note]:
    """Read and parse a notes export file."""
    if not path.exists():
        msg = f"Notes file not found: {path}"
        raise FileNotFoundError(msg)
    data = json.loads(path.read_text(encoding="utf-8"))
    return parse_notes(data, source=str(path))


def merge_notes(existing: list[Note], imported: list[Note]) -> tuple[list[Note], MergeStats]:
    """Merge imported notes into existing ones: same id replaces, new ids are appended."""
    merged = list(existing)
    index_by_id = {note.id: i for i, note in enumerate(merged)}
    new_count = 0
    updated_count = 0

    for note in imported:
        if note.id in index_by_id:
            merged[index_by_id[note.id]] = note
            updated_count += 1
        else:
            index_by_id[note.id] = len(merged)
            merged.append(note)
            new_count += 1

    logger.info("Merged notes: {} new, {} updated", new_count, updated_count)
    return merged, MergeStats(new_count=new_count, updated_count=updated_count)


def save_notes_file(path: Path, notes: list[Note]) -> None:
    """Write notes in the export format."""
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = [note.to_dict() for note in notes]
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


class JsonNoteStore:
    """Note source backed by a JSON export file; re-read on every load."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load_notes(self) -> list[Note]:
        return load_notes_file(self.path)
