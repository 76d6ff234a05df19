"""Tests for MCP tool core functions."""

from datetime import date

from note_search.mcp.server import (
    ServerContext,
    _load,
    notes_list_categories,
    notes_list_hashtags,
    notes_read,
    notes_revisit,
    notes_search,
)
from note_search.models.note import Note
from tests.unit.fakes import FakeNoteSource

MARK = '<span class="highlighted-term">'


def test_notes_search_returns_results_with_metadata(notes: list[Note]) -> None:
    result = notes_search(notes, query="python")
    assert result["count"] == 1
    assert result["total"] == 1
    assert result["terms"] == ["python"]
    first = result["results"][0]
    assert first["note_id"] == "3"
    assert first["score"] > 0
    assert first["highlighted_title"] == f"{MARK}Python</span> tips"
    assert "[[" not in first["excerpt"]
    assert f"{MARK}python</span>" in first["highlighted_tags"]


def test_notes_search_without_highlights(notes: list[Note]) -> None:
    result = notes_search(notes, query="python", include_highlights=False)
    assert "highlighted_title" not in result["results"][0]


def test_notes_search_empty_query(notes: list[Note]) -> None:
    result = notes_search(notes, query="  ")
    assert "error" in result
    assert result["results"] == []


def test_notes_search_unknown_field(notes: list[Note]) -> None:
    result = notes_search(notes, query="python", fields=["title", "body"])
    assert "Unknown fields" in result["error"]


def test_notes_search_restricted_fields(notes: list[Note]) -> None:
    assert notes_search(notes, query="milk", fields=["title"])["count"] == 0
    assert notes_search(notes, query="milk", fields=["content"])["count"] == 1


def test_notes_search_category_filter(notes: list[Note]) -> None:
    result = notes_search(notes, query="e", category="home/groceries")
    assert [r["note_id"] for r in result["results"]] == ["2"]


def test_notes_search_limit_is_clamped(notes: list[Note]) -> None:
    result = notes_search(notes, query="e", limit=0)
    assert result["count"] == 1
    assert result["total"] > 1


def test_notes_search_quick_tolerates_typos(notes: list[Note]) -> None:
    result = notes_search(notes, query="pyhton", quick=True)
    assert result["results"][0]["note_id"] == "3"
    assert result["terms"] == ["pyhton"]


def test_notes_revisit_sections(notes: list[Note]) -> None:
    result = notes_revisit(notes, today=date(2026, 10, 18))
    sections = result["sections"]
    assert [s["key"] for s in sections] == ["today", "section1", "section2"]
    assert [s["date"] for s in sections] == ["2026-10-18", "2026-10-11", "2026-10-04"]
    assert [[n["note_id"] for n in s["notes"]] for s in sections] == [["1"], ["2"], ["4"]]
    assert not any(s["has_more"] for s in sections)


def test_notes_revisit_rejects_negative_offsets(notes: list[Note]) -> None:
    assert "error" in notes_revisit(notes, section1=-3)


def test_notes_list_categories(notes: list[Note]) -> None:
    result = notes_list_categories(notes)
    assert result["count"] == 4
    assert [c["path"] for c in result["categories"]] == [
        "cuisine/italienne",
        "home/groceries",
        "work",
        "work/dev",
    ]
    assert result["tree"].startswith("- cuisine (0, 1 with subcategories)\n")


def test_notes_list_hashtags_sorted_by_usage() -> None:
    notes = [
        Note(id="1", hashtags=("b", "a")),
        Note(id="2", hashtags=("b",)),
        Note(id="3", hashtags=("c",)),
    ]
    result = notes_list_hashtags(notes)
    assert result["hashtags"] == [
        {"tag": "b", "count": 2},
        {"tag": "a", "count": 1},
        {"tag": "c", "count": 1},
    ]


def test_notes_read_returns_full_content(notes: list[Note]) -> None:
    result = notes_read(notes, note_id="3")
    assert "[[https://i.imgur.com/abc.jpg]]" in result["content"]
    assert result["title"] == "Python tips"
    assert result["video_urls"] == []


def test_notes_read_missing(notes: list[Note]) -> None:
    assert "not found" in notes_read(notes, note_id="nope")["error"]


def test_load_reads_fresh_snapshot(notes: list[Note]) -> None:
    source = FakeNoteSource(notes)
    ctx = ServerContext(source=source)
    assert _load(ctx) == notes
    assert _load(ctx) == notes
    assert source.loads == 2


def test_load_reports_errors() -> None:
    assert _load(ServerContext(source=None)) == {"error": "No notes source configured."}
    failing = ServerContext(source=FakeNoteSource(error=OSError("disk gone")))
    assert _load(failing) == {"error": "Loading notes failed: disk gone"}
