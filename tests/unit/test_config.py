"""Tests for notes file resolution."""

from pathlib import Path

import pytest

from note_search.config import resolve_notes_file


def test_resolve_notes_file_prefers_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NOTE_SEARCH_NOTES_FILE", str(tmp_path / "env.json"))
    assert resolve_notes_file() == tmp_path / "env.json"


def test_resolve_notes_file_first_existing_candidate(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    second = tmp_path / "second.json"
    second.write_text("[]")
    monkeypatch.delenv("NOTE_SEARCH_NOTES_FILE", raising=False)
    monkeypatch.setattr("note_search.config.NOTES_FILES", [tmp_path / "first.json", second])
    assert resolve_notes_file() == second


def test_resolve_notes_file_none(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("NOTE_SEARCH_NOTES_FILE", raising=False)
    monkeypatch.setattr("note_search.config.NOTES_FILES", [tmp_path / "missing.json"])
    assert resolve_notes_file() is None
