"""Protocols for the collaborators that supply notes snapshots."""

from typing import Protocol, runtime_checkable

from note_search.models.note import Note


@runtime_checkable
class NoteSourceProtocol(Protocol):
    """Anything that can produce the current notes snapshot."""

    def load_notes(self) -> list[Note]:
        """Return all notes; called fresh for every search."""
        ...
